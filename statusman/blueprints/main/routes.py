"""
Routes for the main blueprint — dashboard, service creation and
health check.

The dashboard is the landing page after sign-in.  Users without a
profile are redirected to the organization creator before any service
query is made.
"""

import logging
from urllib.parse import urlparse

from flask import flash, redirect, render_template, request, url_for
from flask_login import current_user, login_required

from statusman.blueprints.main import bp
from statusman.extensions import supabase
from statusman.services import dashboard_service, monitor_service, profile_service
from statusman.services.backend_client import BackendError

logger = logging.getLogger(__name__)


def _is_metric_url(value: str) -> bool:
    """Basic URL shape check: http(s) scheme and a host."""
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def _render_dashboard(state, dialog_open: bool = False, form_data=None):
    """Flash any load errors and render the dashboard page."""
    for title, message in state.errors:
        flash(f"{title}: {message}", "danger")
    return render_template(
        "main/dashboard.html",
        profile=state.profile,
        services=state.services,
        dialog_open=dialog_open,
        form_data=form_data or {},
    )


@bp.route("/")
@login_required
def index():
    """Send signed-in users to their dashboard."""
    return redirect(url_for("main.dashboard"))


@bp.route("/dashboard")
@login_required
def dashboard():
    """
    Main dashboard listing the organization's services, newest first.

    Redirects to the organization creator when the user has no profile.
    """
    state = dashboard_service.load_dashboard(current_user)
    if state.needs_organization:
        return redirect(url_for("organization.create_organization"))
    return _render_dashboard(state, dialog_open=request.args.get("new") == "1")


@bp.route("/dashboard/services", methods=["POST"])
@login_required
def service_create():
    """
    Register a new service for the user's organization.

    On success the browser is redirected back to the dashboard, which
    closes the dialog, clears the form and re-fetches the list.  On
    failure the dashboard is re-rendered with the dialog open and the
    entered values kept.
    """
    service_name = request.form.get("service_name", "").strip()
    metric_url = request.form.get("metric_url", "").strip()

    # Validate input.
    errors = []
    if not service_name:
        errors.append("Service name is required.")
    if not metric_url:
        errors.append("Metric URL is required.")
    elif not _is_metric_url(metric_url):
        errors.append("Metric URL must be a valid http(s) URL.")

    if not errors:
        try:
            profile = profile_service.get_profile(current_user)
            if profile is None:
                return redirect(url_for("organization.create_organization"))
            monitor_service.create_service(
                current_user, profile, service_name, metric_url
            )
            flash(f"Service created! Successfully created {service_name}", "success")
            return redirect(url_for("main.dashboard"))
        except BackendError as exc:
            errors.append(f"Failed to create service: {exc.message}")

    for error in errors:
        flash(error, "danger")
    state = dashboard_service.load_dashboard(current_user)
    if state.needs_organization:
        return redirect(url_for("organization.create_organization"))
    return _render_dashboard(state, dialog_open=True, form_data=request.form)


@bp.route("/health")
def health_check():
    """
    Health check endpoint for monitoring and load balancers.

    Returns 200 if the app is running and the backend answers a query.
    """
    try:
        supabase.gateway.ping()
        return {"status": "healthy", "backend": "connected"}, 200
    except BackendError as exc:
        logger.warning("Health check failed: %s", exc.message)
        return {"status": "unhealthy", "backend": "disconnected"}, 503
