"""
Routes for the organization blueprint — first-run organization creator.

A signed-in user without a profile lands here (the dashboard redirects
them).  Submitting the form creates the organization and the user's
profile, then sends them to the dashboard.  Users who already have a
profile are sent straight to the dashboard.
"""

from flask import flash, redirect, render_template, request, url_for
from flask_login import current_user, login_required

from statusman.blueprints.organization import bp
from statusman.services import organization_service, profile_service
from statusman.services.backend_client import BackendError


@bp.route("/create-organization", methods=["GET", "POST"])
@login_required
def create_organization():
    """Show the organization form and create the organization on POST."""
    # One profile per user: never create a second organization.
    try:
        if profile_service.get_profile(current_user) is not None:
            return redirect(url_for("main.dashboard"))
    except BackendError as exc:
        flash(f"Error loading profile: {exc.message}", "danger")
        return render_template("organization/create.html", form_data=request.form)

    if request.method == "POST":
        org_name = request.form.get("org_name", "").strip()

        if not org_name:
            flash("Organization name is required.", "danger")
            return render_template(
                "organization/create.html", form_data=request.form
            )

        try:
            organization_service.create_organization(current_user, org_name)
        except BackendError as exc:
            flash(f"Failed to create organization: {exc.message}", "danger")
            return render_template(
                "organization/create.html", form_data=request.form
            )

        flash(f"Organization created! Successfully created {org_name}", "success")
        return redirect(url_for("main.dashboard"))

    return render_template("organization/create.html", form_data={})
