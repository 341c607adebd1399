"""Category model - optional prompt grouping, independent of projects."""
from sqlalchemy import String, Integer
from sqlalchemy.orm import Mapped, mapped_column
from prompto.models.base import Base, IdMixin, TimestampMixin

DEFAULT_CATEGORY_COLOR = "#6B7280"


class Category(Base, IdMixin, TimestampMixin):
    __tablename__ = "categories"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    color: Mapped[str] = mapped_column(String(20), default=DEFAULT_CATEGORY_COLOR)
    icon: Mapped[str] = mapped_column(String(50), default="Tag")
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
