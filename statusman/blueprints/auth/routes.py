"""
Routes for the auth blueprint — sign in, sign up, sign out.

Credentials are checked by the hosted backend's auth provider.  On
success the identity and token pair are stored in the signed session
by ``auth_service`` and the user is logged in via Flask-Login.
"""

from flask import flash, redirect, render_template, request, url_for
from flask_login import current_user, login_required, login_user, logout_user

from statusman.blueprints.auth import bp
from statusman.services import auth_service
from statusman.services.backend_client import BackendError


def _read_credentials() -> tuple[str, str, list[str]]:
    """Pull email and password from the submitted form."""
    email = request.form.get("email", "").strip()
    password = request.form.get("password", "")

    errors = []
    if not email:
        errors.append("Email is required.")
    if not password:
        errors.append("Password is required.")
    return email, password, errors


@bp.route("/login", methods=["GET", "POST"])
def login():
    """Render the sign-in page and authenticate on POST."""
    if current_user.is_authenticated:
        return redirect(url_for("main.dashboard"))

    if request.method == "POST":
        email, password, errors = _read_credentials()
        if errors:
            for error in errors:
                flash(error, "danger")
            return render_template("auth/login.html", form_data=request.form)

        try:
            user = auth_service.sign_in(email, password)
        except BackendError as exc:
            flash(f"Sign in failed: {exc.message}", "danger")
            return render_template("auth/login.html", form_data=request.form)

        login_user(user)
        flash(f"Welcome back, {user.email}!", "success")
        return redirect(url_for("main.dashboard"))

    return render_template("auth/login.html", form_data={})


@bp.route("/signup", methods=["POST"])
def signup():
    """Register a new account from the sign-up tab of the login page."""
    if current_user.is_authenticated:
        return redirect(url_for("main.dashboard"))

    email, password, errors = _read_credentials()
    if errors:
        for error in errors:
            flash(error, "danger")
        return render_template(
            "auth/login.html", form_data=request.form, mode="signup"
        )

    try:
        user = auth_service.sign_up(email, password)
    except BackendError as exc:
        flash(f"Sign up failed: {exc.message}", "danger")
        return render_template(
            "auth/login.html", form_data=request.form, mode="signup"
        )

    if user is None:
        flash("Account created. Check your email to confirm it, then sign in.", "info")
        return redirect(url_for("auth.login"))

    login_user(user)
    flash("Account created!", "success")
    # A new account never has a profile yet.
    return redirect(url_for("organization.create_organization"))


@bp.route("/logout", methods=["POST"])
@login_required
def logout():
    """
    Sign the user out with the auth provider and locally, then
    redirect to the sign-in page.
    """
    auth_service.sign_out()
    logout_user()
    flash("Signed out. You have been successfully signed out.", "info")
    return redirect(url_for("auth.login"))
