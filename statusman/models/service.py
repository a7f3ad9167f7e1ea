"""
Monitored service model — ``services`` table.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class Service:
    """
    A monitored entity belonging to one organization.

    ``metric_url`` is stored as entered; it is never fetched here.
    """

    id: Any
    service_id: str
    name: str
    metric_url: str
    organization_id: Any = None
    user_id: str | None = None
    created_at: str | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Service":
        return cls(
            id=row.get("id"),
            service_id=row["service_id"],
            name=row["name"],
            metric_url=row["metric_url"],
            organization_id=row.get("organization_id"),
            user_id=row.get("user_id"),
            created_at=row.get("created_at"),
        )

    @property
    def created_date(self) -> str:
        """Creation date for display (``YYYY-MM-DD``), or '' if unknown."""
        if not self.created_at:
            return ""
        try:
            # Backend timestamps are ISO 8601, sometimes with a 'Z' suffix.
            return datetime.fromisoformat(
                self.created_at.replace("Z", "+00:00")
            ).date().isoformat()
        except ValueError:
            return self.created_at
