"""
Common schema building blocks.
"""

from leave_portal.schemas.common.base import BaseQuerySchema, BaseResponseSchema, BaseSchema
from leave_portal.schemas.common.pagination import PaginatedResponse, PaginationMeta

__all__ = [
    "BaseSchema",
    "BaseResponseSchema",
    "BaseQuerySchema",
    "PaginatedResponse",
    "PaginationMeta",
]
