"""Project model - a kanban column that owns prompts."""
from sqlalchemy import String, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship
from prompto.models.base import Base, IdMixin, TimestampMixin

DEFAULT_PROJECT_COLOR = "#3B82F6"


class Project(Base, IdMixin, TimestampMixin):
    __tablename__ = "projects"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    color: Mapped[str] = mapped_column(String(20), default=DEFAULT_PROJECT_COLOR)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Prompts go with their project; the FK does the work in the database
    prompts = relationship(
        "Prompt",
        cascade="all, delete-orphan", passive_deletes=True,
    )
