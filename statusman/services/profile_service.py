"""
Profile service — look up the link between a user and an organization.
"""

import logging

from statusman.extensions import supabase
from statusman.models import AuthUser, Profile

logger = logging.getLogger(__name__)


def get_profile(user: AuthUser) -> Profile | None:
    """
    Return the user's profile joined with its organization.

    Args:
        user: The signed-in user.

    Returns:
        The Profile, or None if the user has not created an
        organization yet.

    Raises:
        BackendError: If the lookup fails.
    """
    row = supabase.gateway.get_profile(user.id)
    if row is None:
        logger.info("No profile found for user %s", user.id)
        return None
    return Profile.from_row(row)
