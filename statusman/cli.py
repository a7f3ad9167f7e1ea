"""
Custom Flask CLI commands.

These commands are registered with the app via ``register_commands()``
in the application factory. Run them with ``flask <command_name>``.

Usage::

    flask backend-check      # Verify Supabase settings and connectivity
"""

import click
from flask import current_app
from flask.cli import with_appcontext

from statusman.extensions import supabase
from statusman.services.backend_client import BackendError


@click.command("backend-check")
@with_appcontext
def backend_check_command():
    """
    Verify the hosted backend is configured and answering queries.

    Shows the configured project URL, then runs a trivial query against
    the ``organizations`` table with the anon key.  Row-level security
    may hide every row; an empty result still counts as connected.
    """
    click.echo("=" * 60)
    click.echo("  StatusMan — Backend Connectivity Check")
    click.echo("=" * 60)

    url = current_app.config["SUPABASE_URL"]
    click.echo(f"\n  Supabase URL: {url}\n")

    # -- Step 1: Settings --------------------------------------------------
    click.echo("[1/2] Checking settings...")
    if not url or not current_app.config["SUPABASE_ANON_KEY"]:
        click.secho("      ✗ SUPABASE_URL and SUPABASE_ANON_KEY must both be set.", fg="red")
        raise SystemExit(1)
    click.secho("      ✓ Settings present.", fg="green")

    # -- Step 2: Connectivity ----------------------------------------------
    click.echo("[2/2] Querying organizations...")
    try:
        supabase.gateway.ping()
    except BackendError as exc:
        click.secho(f"      ✗ Query failed: {exc.message}", fg="red")
        click.echo("\n  Troubleshooting tips:")
        click.echo("    - Is the Supabase project (or local stack) running?")
        click.echo("    - Does SUPABASE_ANON_KEY belong to this project?")
        click.echo("    - Has the organizations table been created?")
        raise SystemExit(1)
    click.secho("      ✓ Backend answered.", fg="green")

    click.echo("\n" + "=" * 60)
    click.secho("  All checks passed. Backend is ready.", fg="green", bold=True)
    click.echo("=" * 60)


def register_commands(app):
    """Register all custom CLI commands with the Flask application."""
    app.cli.add_command(backend_check_command)
