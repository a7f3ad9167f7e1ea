"""
Authenticated identity model.

Authentication is handled entirely by the hosted backend's auth
provider.  No passwords or user rows are stored here; the identity the
provider returns at sign-in is kept in the signed Flask session and
rebuilt on each request by the Flask-Login user loader.
"""

from dataclasses import dataclass

from flask_login import UserMixin


@dataclass
class AuthUser(UserMixin):
    """
    The signed-in user as reported by the auth provider.

    Inherits from ``UserMixin`` to satisfy Flask-Login requirements
    (``is_authenticated``, ``is_active``, ``get_id``).
    """

    id: str
    email: str | None = None

    def to_session(self) -> dict[str, str | None]:
        """Serialize for storage in the Flask session."""
        return {"id": self.id, "email": self.email}

    @classmethod
    def from_session(cls, data: dict) -> "AuthUser":
        return cls(id=data["id"], email=data.get("email"))

    def __repr__(self) -> str:
        return f"<AuthUser {self.email}>"
