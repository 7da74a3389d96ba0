"""
Change event definitions published when store rows are written.
"""
import enum
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict


class ChangeType(str, enum.Enum):
    """Kind of write that produced an event."""
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


@dataclass(frozen=True)
class ChangeEvent:
    """A row-level change on a store table."""

    table: str
    change: ChangeType
    record: Dict[str, Any] = field(default_factory=dict)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def event_type(self) -> str:
        return f"{self.table}:{self.change.value}"

    def __str__(self) -> str:
        return f"ChangeEvent({self.event_type})"
