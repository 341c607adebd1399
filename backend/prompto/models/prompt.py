"""Prompt model - a reusable prompt card inside a project."""
from sqlalchemy import String, Text, Integer, Boolean, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column
from prompto.models.base import Base, IdMixin, TimestampMixin


class Prompt(Base, IdMixin, TimestampMixin):
    __tablename__ = "prompts"

    project_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False
    )
    category_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("categories.id", ondelete="SET NULL"), nullable=True
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    archived: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    __table_args__ = (
        Index("idx_prompts_project_position", "project_id", "archived", "position"),
        Index("idx_prompts_category", "category_id"),
    )
