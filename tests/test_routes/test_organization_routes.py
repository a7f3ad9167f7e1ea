"""
Route tests for the organization creator.
"""

from tests.conftest import TEST_USER_ID, profile_row


def _flashes(client):
    with client.session_transaction() as sess:
        return sess.get("_flashes", [])


class TestCreateOrganizationPage:
    def test_requires_sign_in(self, client):
        response = client.get("/create-organization")
        assert response.status_code == 302
        assert "/auth/login" in response.headers["Location"]

    def test_renders_form(self, auth_client):
        response = auth_client.get("/create-organization")
        assert response.status_code == 200
        assert b"Organization Name" in response.data
        assert b"Creating Organization..." in response.data


class TestCreateOrganizationSubmit:
    def test_success_redirects_to_dashboard(self, auth_client, backend):
        response = auth_client.post(
            "/create-organization", data={"org_name": "  Acme Corp  "}
        )

        assert response.status_code == 302
        assert response.headers["Location"].endswith("/dashboard")
        assert backend.call_names() == [
            "get_profile",
            "insert_organization",
            "insert_profile",
        ]
        assert backend.calls_to("insert_organization")[0]["name"] == "Acme Corp"
        assert backend.calls_to("insert_profile")[0]["user_id"] == TEST_USER_ID
        assert (
            "success",
            "Organization created! Successfully created Acme Corp",
        ) in _flashes(auth_client)

    def test_blank_name_is_rejected_without_inserts(self, auth_client, backend):
        response = auth_client.post("/create-organization", data={"org_name": "   "})

        assert response.status_code == 200
        assert b"Organization name is required." in response.data
        assert backend.call_names() == ["get_profile"]

    def test_organization_failure_shows_error_and_skips_profile(
        self, auth_client, backend
    ):
        backend.failures["insert_organization"] = "duplicate key value"

        response = auth_client.post(
            "/create-organization", data={"org_name": "Acme Corp"}
        )

        assert response.status_code == 200
        assert b"Failed to create organization: duplicate key value" in response.data
        assert "insert_profile" not in backend.call_names()
        # The entered name is kept for a manual retry.
        assert b'value="Acme Corp"' in response.data

    def test_profile_failure_shows_error(self, auth_client, backend):
        backend.failures["insert_profile"] = "permission denied for table profiles"

        response = auth_client.post(
            "/create-organization", data={"org_name": "Acme Corp"}
        )

        assert response.status_code == 200
        assert (
            b"Failed to create organization: permission denied for table profiles"
            in response.data
        )
        assert backend.call_names() == [
            "get_profile",
            "insert_organization",
            "insert_profile",
        ]


class TestExistingProfile:
    """Users who already belong to an organization cannot create another."""

    def test_form_redirects_to_dashboard(self, auth_client, backend):
        backend.profile = profile_row()

        response = auth_client.get("/create-organization")

        assert response.status_code == 302
        assert response.headers["Location"].endswith("/dashboard")

    def test_submit_creates_nothing(self, auth_client, backend):
        backend.profile = profile_row()

        response = auth_client.post(
            "/create-organization", data={"org_name": "Second Org"}
        )

        assert response.status_code == 302
        assert response.headers["Location"].endswith("/dashboard")
        assert backend.call_names() == ["get_profile"]

    def test_profile_lookup_failure_blocks_creation(self, auth_client, backend):
        backend.failures["get_profile"] = "JWT expired"

        response = auth_client.post(
            "/create-organization", data={"org_name": "Acme Corp"}
        )

        assert response.status_code == 200
        assert b"Error loading profile: JWT expired" in response.data
        assert "insert_organization" not in backend.call_names()
