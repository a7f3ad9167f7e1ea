"""
Application configuration classes.

Each class represents a deployment environment. The factory function
``create_app`` in ``statusman/__init__.py`` selects the appropriate
config based on the FLASK_ENV environment variable.

Persistence and authentication live in a hosted Supabase project; the
application only needs its URL and the public (anon) API key.  Row-level
security in the backend scopes every query to the signed-in user.
"""

import logging
import os

# Module-level logger for startup warnings emitted by config classes.
_logger = logging.getLogger(__name__)

# =========================================================================
# Sentinel for detecting unset SECRET_KEY in production.
# =========================================================================
_DEFAULT_SECRET_KEY = "dev-secret-change-me"


class BaseConfig:
    """
    Shared configuration values inherited by all environments.

    Secrets and connection settings are loaded from environment
    variables so they never appear in source control.
    """

    # -- Flask core --------------------------------------------------------
    SECRET_KEY: str = os.environ.get("SECRET_KEY", _DEFAULT_SECRET_KEY)

    # -- Session cookie hardening ------------------------------------------
    # The session carries the backend access and refresh tokens.
    SESSION_COOKIE_HTTPONLY: bool = True
    SESSION_COOKIE_SAMESITE: str = "Lax"

    # Secure flag is False by default so http://localhost works in dev.
    # ProductionConfig overrides this to True (requires HTTPS).
    SESSION_COOKIE_SECURE: bool = False

    PERMANENT_SESSION_LIFETIME: int = int(
        os.environ.get("PERMANENT_SESSION_LIFETIME", "3600")
    )

    # -- Supabase ----------------------------------------------------------
    SUPABASE_URL: str = os.environ.get("SUPABASE_URL", "http://localhost:54321")
    SUPABASE_ANON_KEY: str = os.environ.get("SUPABASE_ANON_KEY", "")

    # Timeout for table queries; the SDK does not retry.
    SUPABASE_TIMEOUT_SECONDS: int = int(
        os.environ.get("SUPABASE_TIMEOUT_SECONDS", "10")
    )

    # -- Logging -----------------------------------------------------------
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")

    # =====================================================================
    # Production validation helpers
    # =====================================================================

    @classmethod
    def validate_production_secrets(cls, app_config: dict) -> None:
        """
        Verify that all required secrets are set for production.

        Called by ``create_app()`` when ``config_name == 'production'``.
        Raises ``RuntimeError`` for hard requirements and logs warnings
        for soft requirements.

        Args:
            app_config: The ``app.config`` dict after loading the
                        config class.

        Raises:
            RuntimeError: If any critical secret is missing or still
                          set to its insecure default value.
        """
        errors: list[str] = []

        # -- SECRET_KEY (hard fail) ----------------------------------------
        if app_config.get("SECRET_KEY") == _DEFAULT_SECRET_KEY:
            errors.append(
                "SECRET_KEY is still the insecure default. "
                "Generate one with: python -c "
                '"import secrets; print(secrets.token_hex(32))"'
            )

        # -- Supabase credentials (hard fail) ------------------------------
        missing = [
            key for key in ("SUPABASE_URL", "SUPABASE_ANON_KEY") if not app_config.get(key)
        ]
        if missing:
            errors.append(
                f"Supabase settings missing: {', '.join(missing)}. "
                "Nothing can be loaded or saved without these."
            )

        # -- SUPABASE_URL must be HTTPS (hard fail) ------------------------
        supabase_url = app_config.get("SUPABASE_URL", "")
        if supabase_url and not supabase_url.startswith("https://"):
            errors.append(
                f"SUPABASE_URL ({supabase_url}) must use HTTPS in production "
                "to protect user access tokens."
            )

        # -- Raise all hard failures at once -------------------------------
        if errors:
            combined = "\n  - ".join(errors)
            raise RuntimeError(f"Production configuration errors:\n  - {combined}")

        # -- LOG_LEVEL sanity check (soft warning) -------------------------
        if app_config.get("LOG_LEVEL", "").upper() == "DEBUG":
            _logger.warning(
                "LOG_LEVEL=DEBUG is not recommended in production — "
                "request details may appear in logs. Consider INFO or WARNING."
            )


class DevelopmentConfig(BaseConfig):
    """Development environment: verbose logging against a local stack."""

    DEBUG: bool = True
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "DEBUG")


class TestingConfig(BaseConfig):
    """
    Testing environment.

    WTF_CSRF_ENABLED is disabled so form submissions in tests don't
    need CSRF tokens.  Tests replace the backend client, so the
    Supabase settings are placeholders.
    """

    TESTING: bool = True
    WTF_CSRF_ENABLED: bool = False
    SECRET_KEY: str = "testing-secret"

    SUPABASE_URL: str = "http://localhost:54321"
    SUPABASE_ANON_KEY: str = "test-anon-key"
    LOG_LEVEL: str = "DEBUG"


class ProductionConfig(BaseConfig):
    """
    Production environment: strict settings, no debug output.

    All secrets must be set via environment variables. The application
    factory calls ``validate_production_secrets()`` at startup and will
    refuse to launch if critical values are missing.
    """

    DEBUG: bool = False
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "WARNING")

    # -- Session cookie: require HTTPS in production -----------------------
    SESSION_COOKIE_SECURE: bool = True

    # No localhost fallback in production.
    SUPABASE_URL: str = os.environ.get("SUPABASE_URL", "")


# Lookup dict used by the application factory.
config_by_name: dict[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}
