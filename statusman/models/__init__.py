"""
Model package — plain dataclasses built from backend rows.

The schema itself lives in the hosted backend; these types only give
the rows names and attributes for the services and templates:
  - organization.py -> organizations, profiles
  - service.py      -> services
  - user.py         -> the authenticated identity (Flask-Login)
"""

from statusman.models.organization import Organization, Profile  # noqa: F401
from statusman.models.service import Service  # noqa: F401
from statusman.models.user import AuthUser  # noqa: F401
