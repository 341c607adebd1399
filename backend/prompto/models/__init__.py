"""Import all models so SQLAlchemy metadata knows about them."""
from prompto.models.base import Base
from prompto.models.project import Project
from prompto.models.category import Category
from prompto.models.prompt import Prompt
from prompto.models.setting import Setting

__all__ = ["Base", "Project", "Category", "Prompt", "Setting"]
