"""
Organization blueprint — create the signed-in user's organization.
"""

from flask import Blueprint

bp = Blueprint("organization", __name__)

from statusman.blueprints.organization import routes  # noqa: E402, F401
