"""
Filtering engine with composable criteria.

Filters name either a column of the repository's model or an extra
column registered under an alias (for example a joined table's column).
All filters in a list are combined with AND.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Type

from sqlalchemy import and_
from sqlalchemy.orm import Query

from leave_portal.config.logging import get_logger
from leave_portal.models.base import BaseModel

logger = get_logger(__name__)


class FilterOperator(str, Enum):
    """Filter operation types."""
    EQUALS = "eq"
    NOT_EQUALS = "ne"
    GREATER_THAN = "gt"
    GREATER_THAN_EQUAL = "gte"
    LESS_THAN = "lt"
    LESS_THAN_EQUAL = "lte"
    CONTAINS = "contains"  # case-insensitive substring


class Filter:
    """Single filter condition."""

    def __init__(self, field: str, operator: FilterOperator, value: Any):
        self.field = field
        self.operator = operator
        self.value = value

    def to_dict(self) -> Dict[str, Any]:
        return {
            "field": self.field,
            "operator": self.operator.value,
            "value": self.value,
        }

    def __repr__(self) -> str:
        return f"Filter({self.field} {self.operator.value} {self.value!r})"


class FilterEngine:
    """
    Translate Filter objects into SQLAlchemy criteria.
    """

    def __init__(self, model: Type[BaseModel], aliases: Optional[Dict[str, Any]] = None):
        self.model = model
        self.aliases = aliases or {}
        self._operator_map = {
            FilterOperator.EQUALS: lambda col, v: col == v,
            FilterOperator.NOT_EQUALS: lambda col, v: col != v,
            FilterOperator.GREATER_THAN: lambda col, v: col > v,
            FilterOperator.GREATER_THAN_EQUAL: lambda col, v: col >= v,
            FilterOperator.LESS_THAN: lambda col, v: col < v,
            FilterOperator.LESS_THAN_EQUAL: lambda col, v: col <= v,
            FilterOperator.CONTAINS: lambda col, v: col.icontains(v, autoescape=True),
        }

    def _column(self, field: str):
        if field in self.aliases:
            return self.aliases[field]
        column = getattr(self.model, field, None)
        if column is None:
            raise ValueError(f"Unknown filter field: {field}")
        return column

    def build(self, filters: List[Filter]):
        """Build a single AND clause, or None when there is nothing to filter."""
        clauses = [
            self._operator_map[f.operator](self._column(f.field), f.value)
            for f in filters
        ]
        if not clauses:
            return None
        return and_(*clauses)

    def apply(self, query: Query, filters: List[Filter]) -> Query:
        clause = self.build(filters)
        if clause is None:
            return query
        logger.debug(f"Applying filters: {filters}")
        return query.filter(clause)
