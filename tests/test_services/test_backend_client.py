"""
Tests for BackendClient — the query shapes sent through the Supabase
SDK and the translation of SDK failures into BackendError.
"""

from types import SimpleNamespace
from unittest.mock import MagicMock

import httpx
import pytest
from postgrest.exceptions import APIError

from statusman.services.backend_client import BackendClient, BackendError


def _client_returning(data):
    """A mock SDK client whose query builder chains and returns ``data``."""
    client = MagicMock()
    query = client.table.return_value
    for method in ("select", "insert", "eq", "order", "limit", "maybe_single"):
        getattr(query, method).return_value = query
    query.execute.return_value = SimpleNamespace(data=data)
    return client, query


class TestQueries:
    def test_list_services_filters_and_orders_newest_first(self):
        client, query = _client_returning([{"id": 1}])

        rows = BackendClient(client).list_services(7)

        client.table.assert_called_once_with("services")
        query.eq.assert_called_once_with("organization_id", 7)
        query.order.assert_called_once_with("created_at", desc=True)
        assert rows == [{"id": 1}]

    def test_get_profile_embeds_organization(self):
        row = {"organization_id": 7, "organizations": {"name": "Acme", "org_id": "org-1"}}
        client, query = _client_returning(row)

        result = BackendClient(client).get_profile("user-1")

        client.table.assert_called_once_with("profiles")
        assert "organizations (name, org_id)" in query.select.call_args.args[0]
        query.eq.assert_called_once_with("user_id", "user-1")
        query.maybe_single.assert_called_once_with()
        assert result == row

    def test_get_profile_returns_none_without_row(self):
        client, query = _client_returning(None)
        query.execute.return_value = None

        assert BackendClient(client).get_profile("user-1") is None

    def test_duplicate_profiles_are_an_error(self):
        client, query = _client_returning(None)
        query.execute.side_effect = APIError(
            {
                "message": "JSON object requested, multiple (or no) rows returned",
                "code": "PGRST116",
            }
        )

        with pytest.raises(BackendError, match=r"multiple \(or no\) rows"):
            BackendClient(client).get_profile("user-1")

    def test_insert_organization_returns_stored_row(self):
        client, query = _client_returning([{"id": 42, "name": "Acme", "org_id": "org-1"}])

        row = BackendClient(client).insert_organization(name="Acme", org_id="org-1")

        query.insert.assert_called_once_with({"name": "Acme", "org_id": "org-1"})
        assert row["id"] == 42

    def test_insert_without_returned_row_is_an_error(self):
        client, _ = _client_returning([])

        with pytest.raises(BackendError, match="returned no data"):
            BackendClient(client).insert_service({"name": "x"})


class TestErrorTranslation:
    def test_postgrest_error_message_is_kept(self):
        client, query = _client_returning([])
        query.execute.side_effect = APIError(
            {"message": "permission denied for table services", "code": "42501"}
        )

        with pytest.raises(BackendError) as excinfo:
            BackendClient(client).list_services(7)

        assert excinfo.value.message == "permission denied for table services"

    def test_transport_error_becomes_backend_error(self):
        client, query = _client_returning([])
        query.execute.side_effect = httpx.ConnectError("connection refused")

        with pytest.raises(BackendError, match="connection refused"):
            BackendClient(client).ping()


class TestAuth:
    def test_sign_in_returns_identity_and_tokens(self):
        client = MagicMock()
        client.auth.sign_in_with_password.return_value = SimpleNamespace(
            user=SimpleNamespace(id="user-1", email="owner@example.com"),
            session=SimpleNamespace(access_token="at", refresh_token="rt"),
        )

        result = BackendClient(client).sign_in("owner@example.com", "secret")

        client.auth.sign_in_with_password.assert_called_once_with(
            {"email": "owner@example.com", "password": "secret"}
        )
        assert result == {
            "user": {"id": "user-1", "email": "owner@example.com"},
            "tokens": {"access_token": "at", "refresh_token": "rt"},
        }

    def test_sign_up_without_session_has_no_tokens(self):
        client = MagicMock()
        client.auth.sign_up.return_value = SimpleNamespace(
            user=SimpleNamespace(id="user-2", email="new@example.com"),
            session=None,
        )

        result = BackendClient(client).sign_up("new@example.com", "secret")

        assert result["tokens"] is None

    def test_restore_session_without_session_is_an_error(self):
        client = MagicMock()
        client.auth.set_session.return_value = SimpleNamespace(session=None, user=None)

        with pytest.raises(BackendError, match="session has expired"):
            BackendClient(client).restore_session("at", "rt")
