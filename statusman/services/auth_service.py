"""
Auth service — sign-in, sign-up and sign-out against the hosted
backend's auth provider.

The provider issues the tokens; this module keeps the identity and the
token pair in the signed Flask session so that each request's backend
client can act on the user's behalf.
"""

import logging

from flask import session

from statusman.extensions import SESSION_TOKENS_KEY, SESSION_USER_KEY, supabase
from statusman.models import AuthUser
from statusman.services.backend_client import BackendError

logger = logging.getLogger(__name__)


def sign_in(email: str, password: str) -> AuthUser:
    """
    Authenticate with email and password and start a session.

    Args:
        email:    Account email address.
        password: Account password.

    Returns:
        The signed-in AuthUser, ready for ``login_user``.

    Raises:
        BackendError: If the credentials are rejected or the provider
                      is unreachable.
    """
    result = supabase.gateway.sign_in(email=email, password=password)
    user = AuthUser(id=result["user"]["id"], email=result["user"]["email"])
    _store_session(user, result["tokens"])
    logger.info("User %s signed in", user.email)
    return user


def sign_up(email: str, password: str) -> AuthUser | None:
    """
    Register a new account.

    Returns:
        The signed-in AuthUser when the provider issued a session
        immediately, or None when the address must be confirmed first.

    Raises:
        BackendError: If registration fails.
    """
    result = supabase.gateway.sign_up(email=email, password=password)
    if result["tokens"] is None:
        logger.info("User %s registered; awaiting email confirmation", email)
        return None

    user = AuthUser(id=result["user"]["id"], email=result["user"]["email"])
    _store_session(user, result["tokens"])
    logger.info("User %s registered and signed in", user.email)
    return user


def sign_out() -> None:
    """
    Revoke the provider session and clear the local one.

    The local session is always cleared; a provider failure is logged.
    """
    try:
        supabase.gateway.sign_out()
    except BackendError as exc:
        logger.warning("Provider sign-out failed: %s", exc.message)
    finally:
        clear_session()


def load_user(user_id: str) -> AuthUser | None:
    """
    Rebuild the signed-in user from the Flask session.

    Used as the Flask-Login user loader.  Returns None when the session
    does not belong to ``user_id``.
    """
    data = session.get(SESSION_USER_KEY)
    if not data or data.get("id") != user_id:
        return None
    return AuthUser.from_session(data)


def clear_session() -> None:
    """Remove application-specific keys from the Flask session on logout."""
    for key in (SESSION_USER_KEY, SESSION_TOKENS_KEY):
        session.pop(key, None)


def _store_session(user: AuthUser, tokens: dict[str, str]) -> None:
    session[SESSION_USER_KEY] = user.to_session()
    session[SESSION_TOKENS_KEY] = tokens
