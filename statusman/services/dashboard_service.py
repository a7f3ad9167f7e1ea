"""
Dashboard service — assemble everything the dashboard renders.

Loading walks three phases:

    LOADING_PROFILE -> LOADING_SERVICES -> READY

A user without a profile stops in ``LOADING_PROFILE`` with
``needs_organization`` set; the route redirects them to the
organization creator and no service query is made.  A failed query
records a notification and moves straight to ``READY`` with whatever
was loaded so far.  Nothing is retried.
"""

import enum
import logging
from dataclasses import dataclass, field

from statusman.models import AuthUser, Profile, Service
from statusman.services import monitor_service, profile_service
from statusman.services.backend_client import BackendError

logger = logging.getLogger(__name__)


class DashboardPhase(enum.Enum):
    LOADING_PROFILE = "loading_profile"
    LOADING_SERVICES = "loading_services"
    READY = "ready"


@dataclass
class DashboardState:
    """Result of ``load_dashboard``."""

    phase: DashboardPhase = DashboardPhase.LOADING_PROFILE
    profile: Profile | None = None
    services: list[Service] = field(default_factory=list)
    needs_organization: bool = False
    # (title, message) pairs to flash as danger notifications.
    errors: list[tuple[str, str]] = field(default_factory=list)


def load_dashboard(user: AuthUser) -> DashboardState:
    """
    Load the user's profile and, if present, their organization's
    services.

    Args:
        user: The signed-in user.

    Returns:
        A DashboardState.  Backend failures are captured in ``errors``
        rather than raised.
    """
    state = DashboardState()

    try:
        state.profile = profile_service.get_profile(user)
    except BackendError as exc:
        state.errors.append(("Error loading profile", exc.message))
        state.phase = DashboardPhase.READY
        return state

    if state.profile is None:
        state.needs_organization = True
        return state

    state.phase = DashboardPhase.LOADING_SERVICES
    state.services = _load_services(state)
    state.phase = DashboardPhase.READY
    logger.debug(
        "Dashboard ready for user %s: %d service(s)", user.id, len(state.services)
    )
    return state


def _load_services(state: DashboardState) -> list[Service]:
    try:
        return monitor_service.list_services(state.profile)
    except BackendError as exc:
        state.errors.append(("Error loading services", exc.message))
        return []
