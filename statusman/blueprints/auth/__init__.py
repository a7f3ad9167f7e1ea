"""
Auth blueprint — email/password sign-in, sign-up and sign-out.
"""

from flask import Blueprint

bp = Blueprint("auth", __name__)

# Import routes after blueprint creation to avoid circular imports.
from statusman.blueprints.auth import routes  # noqa: E402, F401
