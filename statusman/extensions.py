"""
Flask extension instances.

Extensions are created here without binding to an application so that
the application factory can call ``init_app()`` on each one during
``create_app()``.  This avoids circular imports and follows the
standard Flask extension pattern.
"""

import logging

from flask import Flask, current_app, flash, g, has_request_context, session
from flask_login import LoginManager, logout_user
from flask_wtf.csrf import CSRFProtect
from supabase import ClientOptions, create_client

from statusman.services.backend_client import BackendClient, BackendError

logger = logging.getLogger(__name__)

# Flask session key holding the backend access/refresh token pair.
SESSION_TOKENS_KEY = "backend_tokens"

# Flask session key holding the serialized AuthUser.
SESSION_USER_KEY = "auth_user"


class Supabase:
    """
    Binds the hosted Supabase backend to a Flask application.

    A fresh SDK client is built for every application context and
    cached on ``flask.g``.  When the signed-in user's tokens are present
    in the Flask session they are installed on the client so row-level
    security applies to that user.  Tokens that can no longer be
    restored end the local session before the view runs, so
    login-protected routes send the user back to sign-in.
    """

    def __init__(self, app: Flask | None = None) -> None:
        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask) -> None:
        """Register the extension, its session restore and teardown."""
        app.extensions["supabase"] = self
        app.before_request(self._restore_user_session)
        app.teardown_appcontext(self._teardown)

    @property
    def gateway(self) -> BackendClient:
        """The ``BackendClient`` for the current application context."""
        if "backend_gateway" not in g:
            g.backend_gateway = self.build_gateway()
        return g.backend_gateway

    def build_gateway(self) -> BackendClient:
        """
        Create a ``BackendClient`` for one request.

        Raises:
            BackendError: If stored user tokens can no longer be restored.
        """
        client = create_client(
            current_app.config["SUPABASE_URL"],
            current_app.config["SUPABASE_ANON_KEY"],
            options=ClientOptions(
                auto_refresh_token=False,
                persist_session=False,
                postgrest_client_timeout=current_app.config[
                    "SUPABASE_TIMEOUT_SECONDS"
                ],
            ),
        )
        gateway = BackendClient(client)

        tokens = session.get(SESSION_TOKENS_KEY) if has_request_context() else None
        if tokens:
            refreshed = gateway.restore_session(
                tokens["access_token"], tokens["refresh_token"]
            )
            if refreshed != tokens:
                logger.debug("Backend tokens refreshed for the current session")
                session[SESSION_TOKENS_KEY] = refreshed
        return gateway

    def _restore_user_session(self) -> None:
        """Build the signed-in user's gateway, or sign them out locally."""
        if SESSION_TOKENS_KEY not in session:
            return
        try:
            self.gateway  # pylint: disable=pointless-statement
        except BackendError as exc:
            logger.info("Stored backend session rejected: %s", exc.message)
            session.pop(SESSION_TOKENS_KEY, None)
            session.pop(SESSION_USER_KEY, None)
            logout_user()
            flash("Your session has expired. Please sign in again.", "warning")

    @staticmethod
    def _teardown(exc: BaseException | None) -> None:  # pylint: disable=unused-argument
        g.pop("backend_gateway", None)


# -- Hosted backend (database + auth provider) -----------------------------
# The ``supabase`` instance is imported by services throughout the app.
supabase = Supabase()

# -- Session-based authentication ------------------------------------------
login_manager = LoginManager()
# Redirect unauthenticated users to the sign-in page.
login_manager.login_view = "auth.login"
login_manager.login_message = "Please sign in to access this page."
login_manager.login_message_category = "warning"

# -- CSRF protection for form submissions ---------------------------------
csrf = CSRFProtect()
