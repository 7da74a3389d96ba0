from leave_portal.repositories.base.base_repository import BaseRepository
from leave_portal.repositories.base.filtering import Filter, FilterEngine, FilterOperator

__all__ = ["BaseRepository", "Filter", "FilterEngine", "FilterOperator"]
