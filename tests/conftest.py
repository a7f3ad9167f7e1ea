"""
Pytest configuration and shared fixtures.

Provides a test application, an in-memory stand-in for the hosted
backend, a test client and a signed-in test client.  The ``testing``
configuration disables CSRF; the backend stand-in replaces the
Supabase extension's gateway factory so no network calls are made.
"""

import pytest

from statusman import create_app
from statusman.extensions import SESSION_TOKENS_KEY, supabase
from statusman.services.auth_service import SESSION_USER_KEY
from statusman.services.backend_client import BackendError

TEST_USER_ID = "user-1"
TEST_USER_EMAIL = "owner@example.com"


class RecordingBackend:
    """
    Stand-in for ``BackendClient`` that records every call.

    Set ``profile`` / ``services`` to control what lookups return and
    ``failures[method_name] = message`` to make a call raise
    ``BackendError``.
    """

    def __init__(self):
        self.calls = []
        self.failures = {}
        self.profile = None
        self.services = []
        self.signup_issues_session = True

    def _record(self, call_name, **kwargs):
        self.calls.append((call_name, kwargs))
        if call_name in self.failures:
            raise BackendError(self.failures[call_name])

    def call_names(self):
        return [name for name, _ in self.calls]

    def calls_to(self, call_name):
        return [kwargs for recorded, kwargs in self.calls if recorded == call_name]

    # -- Auth provider -----------------------------------------------------

    def sign_in(self, email, password):
        self._record("sign_in", email=email, password=password)
        return {
            "user": {"id": TEST_USER_ID, "email": email},
            "tokens": {"access_token": "access", "refresh_token": "refresh"},
        }

    def sign_up(self, email, password):
        self._record("sign_up", email=email, password=password)
        tokens = None
        if self.signup_issues_session:
            tokens = {"access_token": "access", "refresh_token": "refresh"}
        return {"user": {"id": "user-new", "email": email}, "tokens": tokens}

    def sign_out(self):
        self._record("sign_out")

    # -- Tables ------------------------------------------------------------

    def insert_organization(self, name, org_id):
        self._record("insert_organization", name=name, org_id=org_id)
        return {"id": 42, "name": name, "org_id": org_id}

    def insert_profile(self, user_id, organization_id, email):
        self._record(
            "insert_profile",
            user_id=user_id,
            organization_id=organization_id,
            email=email,
        )
        return {"user_id": user_id, "organization_id": organization_id, "email": email}

    def get_profile(self, user_id):
        self._record("get_profile", user_id=user_id)
        return self.profile

    def list_services(self, organization_id):
        self._record("list_services", organization_id=organization_id)
        return list(self.services)

    def insert_service(self, payload):
        self._record("insert_service", payload=payload)
        row = dict(payload, id=len(self.services) + 1, created_at="2026-10-17T09:30:00Z")
        self.services.insert(0, row)
        return row

    def ping(self):
        self._record("ping")


def profile_row(organization_id=7, name="Acme Corp", org_id="org-acme"):
    """A ``profiles`` row with the embedded organization, as the backend returns it."""
    return {
        "organization_id": organization_id,
        "email": TEST_USER_EMAIL,
        "organizations": {"name": name, "org_id": org_id},
    }


@pytest.fixture()
def app():
    """Create a Flask application configured for testing."""
    return create_app("testing")


@pytest.fixture()
def backend(app, monkeypatch):  # pylint: disable=redefined-outer-name,unused-argument
    """
    Replace the hosted backend with a ``RecordingBackend``.

    Usage in tests::

        def test_something(auth_client, backend):
            backend.failures["insert_organization"] = "duplicate key"
    """
    fake = RecordingBackend()
    monkeypatch.setattr(supabase, "build_gateway", lambda: fake)
    return fake


@pytest.fixture()
def client(app, backend):  # pylint: disable=redefined-outer-name,unused-argument
    """
    Provide a Flask test client for making HTTP requests.

    Usage in tests::

        def test_health(client):
            response = client.get("/health")
            assert response.status_code == 200
    """
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture()
def auth_client(client):  # pylint: disable=redefined-outer-name
    """A test client whose session belongs to a signed-in user."""
    with client.session_transaction() as sess:
        sess["_user_id"] = TEST_USER_ID
        sess["_fresh"] = True
        sess[SESSION_USER_KEY] = {"id": TEST_USER_ID, "email": TEST_USER_EMAIL}
        sess[SESSION_TOKENS_KEY] = {"access_token": "access", "refresh_token": "refresh"}
    return client


@pytest.fixture()
def request_ctx(app, backend):  # pylint: disable=redefined-outer-name,unused-argument
    """Push a request context for calling services directly."""
    with app.test_request_context():
        yield
