"""
Organization service — create a tenant and link the creator to it.

Creation is two sequential inserts: the organization row, then the
profile row that references it.  The second insert runs only if the
first succeeded.  A failed profile insert leaves the organization row
in place; it is logged so an operator can remove the orphan.
"""

import logging
import uuid

from statusman.extensions import supabase
from statusman.models import AuthUser, Organization, Profile
from statusman.services.backend_client import BackendError

logger = logging.getLogger(__name__)


def generate_org_id() -> str:
    """Return a fresh human-readable organization identifier."""
    return f"org-{uuid.uuid4()}"


def create_organization(user: AuthUser, name: str) -> tuple[Organization, Profile]:
    """
    Create an organization and the current user's profile within it.

    Args:
        user: The signed-in user who becomes the organization's member.
        name: Display name, already trimmed and validated as non-empty.

    Returns:
        The created (Organization, Profile) pair.

    Raises:
        BackendError: If either insert fails.  When the profile insert
                      fails the organization has already been created.
    """
    gateway = supabase.gateway
    org_id = generate_org_id()

    org_row = gateway.insert_organization(name=name, org_id=org_id)
    organization = Organization.from_row(org_row)
    logger.info("Created organization %s (%s)", organization.org_id, name)

    try:
        profile_row = gateway.insert_profile(
            user_id=user.id,
            organization_id=organization.id,
            email=user.email,
        )
    except BackendError:
        logger.warning(
            "Profile insert failed for user %s; organization %s is orphaned",
            user.id,
            organization.org_id,
        )
        raise

    profile = Profile.from_row(profile_row)
    logger.info("Linked user %s to organization %s", user.id, organization.org_id)
    return organization, profile
