"""
Monitor service — list and register the services an organization
monitors.

Every query is scoped to the caller's profile organization.  There are
no update or delete operations.
"""

import logging
import uuid

from statusman.extensions import supabase
from statusman.models import AuthUser, Profile, Service

logger = logging.getLogger(__name__)


def generate_service_id() -> str:
    """Return a fresh human-readable service identifier."""
    return f"service-{uuid.uuid4()}"


def list_services(profile: Profile) -> list[Service]:
    """
    Return the services of the profile's organization, newest first.

    Raises:
        BackendError: If the query fails.
    """
    rows = supabase.gateway.list_services(profile.organization_id)
    return [Service.from_row(row) for row in rows]


def create_service(
    user: AuthUser,
    profile: Profile,
    name: str,
    metric_url: str,
) -> Service:
    """
    Register a new service for the profile's organization.

    Args:
        user:       The signed-in user (recorded as the creator).
        profile:    The user's profile; supplies the organization scope.
        name:       Service name, trimmed and non-empty.
        metric_url: Metric endpoint URL, already shape-checked.

    Returns:
        The created Service.

    Raises:
        BackendError: If the insert fails.
    """
    row = supabase.gateway.insert_service(
        {
            "service_id": generate_service_id(),
            "name": name,
            "metric_url": metric_url,
            "user_id": user.id,
            "organization_id": profile.organization_id,
        }
    )
    service = Service.from_row(row)
    logger.info(
        "Created service %s (%s) in organization %s",
        service.service_id,
        name,
        profile.organization_id,
    )
    return service
