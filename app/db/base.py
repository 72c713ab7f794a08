"""SQLAlchemy Base class with every model registered."""
from app.models import Base  # noqa: F401  (imports all models)

__all__ = ["Base"]
