"""
Backend client — the only module that talks to the hosted Supabase
backend.

Wraps a ``supabase.Client`` with typed helpers for the three tables the
application uses (``organizations``, ``profiles``, ``services``) and for
the auth provider (sign in, sign up, sign out, session restore).

Every SDK failure is translated into a single ``BackendError`` carrying
the backend's message text.  Services and routes never import the SDK
directly; they catch ``BackendError`` and surface ``message`` to the
user.

Usage inside a Flask request::

    from statusman.extensions import supabase

    gateway = supabase.gateway
    rows = gateway.list_services(organization_id)
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator

import httpx
from postgrest.exceptions import APIError
from supabase import AuthError, Client

logger = logging.getLogger(__name__)

# Column list for the dashboard's profile lookup (embedded organization).
_PROFILE_WITH_ORGANIZATION = "organization_id, email, organizations (name, org_id)"


class BackendError(Exception):
    """
    A failed call to the hosted backend.

    All backend failures share this type.  ``message`` is the text
    shown to the user.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


@contextmanager
def _translate_errors(action: str) -> Iterator[None]:
    """Convert SDK and transport exceptions into ``BackendError``."""
    try:
        yield
    except APIError as exc:
        message = exc.message or str(exc)
        logger.error("Backend %s failed: %s", action, message)
        raise BackendError(message) from exc
    except AuthError as exc:
        logger.warning("Backend auth %s failed: %s", action, exc.message)
        raise BackendError(exc.message) from exc
    except httpx.HTTPError as exc:
        logger.error("Backend %s unreachable: %s", action, exc)
        raise BackendError(str(exc) or "Backend is unreachable.") from exc


class BackendClient:
    """
    Thin wrapper providing typed helpers around the Supabase tables
    and auth provider.

    One instance is built per request by the ``Supabase`` extension so
    that user tokens never leak between requests.
    """

    def __init__(self, client: Client) -> None:
        self._client = client

    # ------------------------------------------------------------------ #
    # Auth provider

    def restore_session(self, access_token: str, refresh_token: str) -> dict[str, str]:
        """
        Install a user's tokens so table queries run as that user.

        Args:
            access_token:  JWT issued at sign-in.
            refresh_token: Refresh token issued at sign-in.

        Returns:
            The (possibly refreshed) token pair.

        Raises:
            BackendError: If the tokens are invalid and cannot be refreshed.
        """
        with _translate_errors("session restore"):
            response = self._client.auth.set_session(access_token, refresh_token)
        if response.session is None:
            raise BackendError("Your session has expired. Please sign in again.")
        return _tokens_from_session(response.session)

    def sign_in(self, email: str, password: str) -> dict[str, Any]:
        """
        Authenticate with email and password.

        Returns:
            ``{"user": {"id", "email"}, "tokens": {...}}``.
        """
        with _translate_errors("sign-in"):
            response = self._client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        if response.user is None or response.session is None:
            raise BackendError("Invalid login credentials")
        return {
            "user": {"id": response.user.id, "email": response.user.email},
            "tokens": _tokens_from_session(response.session),
        }

    def sign_up(self, email: str, password: str) -> dict[str, Any]:
        """
        Register a new account.

        ``tokens`` is None when the provider requires email confirmation
        before issuing a session.
        """
        with _translate_errors("sign-up"):
            response = self._client.auth.sign_up(
                {"email": email, "password": password}
            )
        if response.user is None:
            raise BackendError("Sign up did not return a user.")
        tokens = (
            _tokens_from_session(response.session) if response.session else None
        )
        return {
            "user": {"id": response.user.id, "email": response.user.email},
            "tokens": tokens,
        }

    def sign_out(self) -> None:
        """Revoke the current session with the auth provider."""
        with _translate_errors("sign-out"):
            self._client.auth.sign_out()

    # ------------------------------------------------------------------ #
    # Organizations & profiles

    def insert_organization(self, name: str, org_id: str) -> dict[str, Any]:
        """Insert an organization row and return it as stored."""
        with _translate_errors("organization insert"):
            response = (
                self._client.table("organizations")
                .insert({"name": name, "org_id": org_id})
                .execute()
            )
        return _single_row(response.data, "organizations")

    def insert_profile(
        self, user_id: str, organization_id: Any, email: str | None
    ) -> dict[str, Any]:
        """Insert the profile row linking a user to an organization."""
        with _translate_errors("profile insert"):
            response = (
                self._client.table("profiles")
                .insert(
                    {
                        "user_id": user_id,
                        "organization_id": organization_id,
                        "email": email,
                    }
                )
                .execute()
            )
        return _single_row(response.data, "profiles")

    def get_profile(self, user_id: str) -> dict[str, Any] | None:
        """
        Return the user's profile joined with its organization, or None
        if the user has not created an organization yet.
        """
        with _translate_errors("profile lookup"):
            response = (
                self._client.table("profiles")
                .select(_PROFILE_WITH_ORGANIZATION)
                .eq("user_id", user_id)
                .maybe_single()
                .execute()
            )
        # No row comes back as None; more than one row is an APIError.
        if response is None or not response.data:
            return None
        return response.data

    # ------------------------------------------------------------------ #
    # Services

    def list_services(self, organization_id: Any) -> list[dict[str, Any]]:
        """Return an organization's services, newest first."""
        with _translate_errors("service list"):
            response = (
                self._client.table("services")
                .select("*")
                .eq("organization_id", organization_id)
                .order("created_at", desc=True)
                .execute()
            )
        return response.data or []

    def insert_service(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Insert a service row and return it as stored."""
        with _translate_errors("service insert"):
            response = self._client.table("services").insert(payload).execute()
        return _single_row(response.data, "services")

    # ------------------------------------------------------------------ #
    # Diagnostics

    def ping(self) -> None:
        """Run a trivial query; raises ``BackendError`` if it fails."""
        with _translate_errors("ping"):
            self._client.table("organizations").select("id").limit(1).execute()


def _tokens_from_session(session) -> dict[str, str]:
    return {
        "access_token": session.access_token,
        "refresh_token": session.refresh_token,
    }


def _single_row(data: list[dict[str, Any]] | None, table: str) -> dict[str, Any]:
    """Return the one row an insert produced."""
    if not data:
        raise BackendError(f"Insert into {table} returned no data.")
    return data[0]
