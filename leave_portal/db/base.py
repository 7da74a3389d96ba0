"""SQLAlchemy Base class with every model registered on its metadata."""
from leave_portal.models import Base, Leave, User, UserSession  # noqa: F401

__all__ = ["Base"]
