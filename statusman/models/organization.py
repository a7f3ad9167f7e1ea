"""
Tenant models — ``organizations`` and ``profiles`` tables.

An organization is the tenant scoping unit; a profile links exactly
one authenticated user to exactly one organization and is what every
service query is scoped by.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Organization:
    """
    A tenant.  Created once, immutable in this application.

    ``org_id`` is the human-readable identifier (``org-<uuid>``);
    ``id`` is the backend's internal key referenced by other tables.
    """

    id: Any
    name: str
    org_id: str
    created_at: str | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Organization":
        return cls(
            id=row.get("id"),
            name=row["name"],
            org_id=row["org_id"],
            created_at=row.get("created_at"),
        )


@dataclass(frozen=True)
class Profile:
    """
    The link between a user and their organization.

    ``organization`` is populated when the profile was loaded with the
    embedded organization columns (dashboard lookup).
    """

    organization_id: Any
    user_id: str | None = None
    email: str | None = None
    organization: Organization | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Profile":
        """
        Build a profile from a ``profiles`` row, with or without the
        embedded ``organizations`` object.
        """
        embedded = row.get("organizations")
        organization = None
        if embedded:
            organization = Organization(
                id=row["organization_id"],
                name=embedded["name"],
                org_id=embedded["org_id"],
            )
        return cls(
            organization_id=row["organization_id"],
            user_id=row.get("user_id"),
            email=row.get("email"),
            organization=organization,
        )

    def __repr__(self) -> str:
        return f"<Profile user={self.user_id} org={self.organization_id}>"
