"""Tests for the HTTP procedures of the address namespace."""

from unittest.mock import AsyncMock, patch

import httpx
import pytest
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy import insert
from sqlalchemy.exc import OperationalError

from address_service.api.app import create_app
from address_service.api.auth import require_authenticated_caller
from address_service.api.dependencies import get_address_repository
from address_service.config.settings import settings
from address_service.models.tables import AddressRow
from address_service.repositories.base import AddressRepository
from address_service.repositories.connection import DatabaseConnectionManager


MAIN_ST = {"id": "a1", "street": "Main St", "country": "US"}


def has_error_detail(response_data) -> bool:
    return set(response_data) == {"detail"} and isinstance(response_data["detail"], str)


class TestCreateAddress:

    @pytest.mark.asyncio
    async def test_create_then_list(self, app_client, auth_headers):
        response = await app_client.post("/address/createAddress", json=MAIN_ST, headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"data": {**MAIN_ST, "city": None}}

        listing = await app_client.get("/address/getAddresses")

        assert listing.status_code == 200
        assert listing.json() == {
            "data": [{"id": "a1", "street": "Main St", "city": None, "country": "US"}]
        }

    @pytest.mark.asyncio
    async def test_duplicate_id_reports_internal_error(self, app_client, auth_headers):
        await app_client.post("/address/createAddress", json=MAIN_ST, headers=auth_headers)

        response = await app_client.post(
            "/address/createAddress",
            json={**MAIN_ST, "street": "Other St"},
            headers=auth_headers,
        )

        assert response.status_code == 500
        assert response.json() == {"detail": "Failed to create address"}

    @pytest.mark.asyncio
    async def test_requires_token(self, app_client, auth_headers):
        response = await app_client.post("/address/createAddress", json=MAIN_ST)

        assert response.status_code == 401
        assert has_error_detail(response.json())
        assert response.headers["WWW-Authenticate"] == "Bearer"

        listing = await app_client.get("/address/getAddresses")
        assert listing.json() == {"data": []}

    @pytest.mark.asyncio
    async def test_rejects_unknown_token(self, app_client, auth_headers):
        response = await app_client.post(
            "/address/createAddress",
            json=MAIN_ST,
            headers={"Authorization": "Bearer not-the-token"},
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_rejects_every_token_when_none_configured(self, app_client, monkeypatch):
        monkeypatch.setattr(settings, "api_tokens", "")

        response = await app_client.post(
            "/address/createAddress",
            json=MAIN_ST,
            headers={"Authorization": "Bearer anything"},
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [
        {"street": "Main St", "country": "US"},
        {"id": "a1", "country": "US"},
        {"id": "a1", "street": "Main St"},
        {"id": "a1", "street": "Main St", "country": "US", "city": 7},
        {"id": "", "street": "Main St", "country": "US"},
    ])
    async def test_malformed_input_is_rejected(self, app_client, auth_headers, payload):
        response = await app_client.post("/address/createAddress", json=payload, headers=auth_headers)

        assert response.status_code == 422

        listing = await app_client.get("/address/getAddresses")
        assert listing.json() == {"data": []}


class TestGetAddresses:

    @pytest.mark.asyncio
    async def test_empty_table(self, app_client):
        response = await app_client.get("/address/getAddresses")

        assert response.status_code == 200
        assert response.json() == {"data": []}

    @pytest.mark.asyncio
    async def test_store_failure_reports_internal_error(self):
        mock_repo = AsyncMock(spec=AddressRepository)
        mock_repo.select_all.side_effect = OperationalError("SELECT", {}, Exception("no such table"))

        app = create_app()
        app.dependency_overrides[get_address_repository] = lambda: mock_repo

        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
            response = await client.get("/address/getAddresses")

        assert response.status_code == 500
        assert response.json() == {"detail": "Failed to fetch addresses"}


class TestGetAddressById:

    @pytest.mark.asyncio
    async def test_missing_id_returns_empty_list(self, app_client):
        response = await app_client.get("/address/getAddressById", params={"id": "missing"})

        assert response.status_code == 200
        assert response.json() == {"data": []}

    @pytest.mark.asyncio
    async def test_existing_id_returns_single_row(self, app_client, auth_headers):
        await app_client.post(
            "/address/createAddress",
            json={**MAIN_ST, "city": "Springfield"},
            headers=auth_headers,
        )

        response = await app_client.get("/address/getAddressById", params={"id": "a1"})

        assert response.json() == {
            "data": [{"id": "a1", "street": "Main St", "city": "Springfield", "country": "US"}]
        }

    @pytest.mark.asyncio
    async def test_id_is_required(self, app_client):
        response = await app_client.get("/address/getAddressById")

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_no_token_needed(self, app_client, monkeypatch):
        monkeypatch.setattr(settings, "api_tokens", "")

        response = await app_client.get("/address/getAddressById", params={"id": "a1"})

        assert response.status_code == 200


class TestUpdateAddress:

    @pytest.mark.asyncio
    async def test_update_existing(self, app_client, auth_headers):
        await app_client.post(
            "/address/createAddress",
            json={**MAIN_ST, "city": "Springfield"},
            headers=auth_headers,
        )

        response = await app_client.post(
            "/address/updateAddress",
            json={"id": "a1", "street": "Elm St", "country": "CA"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json() == {
            "message": "Address successfully updated",
            "data": {"id": "a1", "street": "Elm St", "city": None, "country": "CA"},
        }

        lookup = await app_client.get("/address/getAddressById", params={"id": "a1"})
        assert lookup.json()["data"] == [{"id": "a1", "street": "Elm St", "city": None, "country": "CA"}]

    @pytest.mark.asyncio
    async def test_update_missing_reports_not_found(self, app_client, auth_headers):
        response = await app_client.post(
            "/address/updateAddress",
            json={"id": "missing", "street": "X", "country": "Y"},
            headers=auth_headers,
        )

        assert response.status_code == 404
        assert response.json() == {"detail": "Address not found"}

    @pytest.mark.asyncio
    async def test_requires_token(self, app_client, auth_headers):
        await app_client.post("/address/createAddress", json=MAIN_ST, headers=auth_headers)

        response = await app_client.post(
            "/address/updateAddress",
            json={"id": "a1", "street": "Elm St", "country": "CA"},
        )

        assert response.status_code == 401

        lookup = await app_client.get("/address/getAddressById", params={"id": "a1"})
        assert lookup.json()["data"][0]["street"] == "Main St"


class TestDeleteAddress:

    @pytest.mark.asyncio
    async def test_delete_then_repeat(self, app_client, auth_headers):
        await app_client.post("/address/createAddress", json=MAIN_ST, headers=auth_headers)

        response = await app_client.post("/address/deleteAddress", json={"id": "a1"})

        assert response.status_code == 200
        assert response.json() == {"message": "Address successfully deleted"}

        listing = await app_client.get("/address/getAddresses")
        assert listing.json() == {"data": []}

        repeat = await app_client.post("/address/deleteAddress", json={"id": "a1"})
        assert repeat.status_code == 404
        assert repeat.json() == {"detail": "Address not found"}

    @pytest.mark.asyncio
    async def test_no_token_needed(self, app_client, auth_headers):
        await app_client.post("/address/createAddress", json=MAIN_ST, headers=auth_headers)

        response = await app_client.post("/address/deleteAddress", json={"id": "a1"})

        assert response.status_code == 200


class TestInfrastructure:

    @pytest.mark.asyncio
    async def test_correlation_id_is_echoed(self, app_client):
        response = await app_client.get(
            "/address/getAddresses",
            headers={"X-Correlation-ID": "trace-123"},
        )

        assert response.headers["X-Correlation-ID"] == "trace-123"

    @pytest.mark.asyncio
    async def test_correlation_id_is_generated(self, app_client):
        response = await app_client.get("/address/getAddresses")

        assert response.headers["X-Correlation-ID"]

    @pytest.mark.asyncio
    async def test_uncaught_store_error_becomes_503(self):
        """Lookup errors are not caught by the service; the middleware answers."""
        mock_repo = AsyncMock(spec=AddressRepository)
        mock_repo.select_by_id.side_effect = OperationalError("SELECT", {}, Exception("unable to open database"))

        app = create_app()
        app.dependency_overrides[get_address_repository] = lambda: mock_repo

        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
            response = await client.get("/address/getAddressById", params={"id": "a1"})

        assert response.status_code == 503
        assert response.json()["error"] == "Service Unavailable"

    @pytest.mark.asyncio
    async def test_unreadable_stored_row_is_a_server_error(self, app_client, db_manager):
        """A row that fails record validation is reported as 500, never as a client error."""
        session_factory = await db_manager.get_session_factory()
        async with session_factory() as session:
            async with session.begin():
                await session.execute(
                    insert(AddressRow.__table__).values(id="a1", street="", country="US")
                )

        response = await app_client.get("/address/getAddressById", params={"id": "a1"})

        assert response.status_code == 500
        assert response.json()["error"] == "Internal Server Error"

    @pytest.mark.asyncio
    async def test_health_reports_database_status(self, app_client):
        with patch("address_service.api.app.database_manager") as mock_manager:
            mock_manager.health_check = AsyncMock(return_value=True)
            healthy = await app_client.get("/health")

            mock_manager.health_check = AsyncMock(return_value=False)
            degraded = await app_client.get("/health")

        assert healthy.status_code == 200
        assert healthy.json()["status"] == "healthy"
        assert healthy.json()["database_connected"] is True
        assert degraded.json()["status"] == "degraded"
        assert degraded.json()["database_connected"] is False


class TestUnreachableDatabase:
    """Requests served through the shared connection manager while its database cannot be opened."""

    @pytest.fixture
    async def unreachable_client(self, monkeypatch, tmp_path):
        manager = DatabaseConnectionManager(f"sqlite+aiosqlite:///{tmp_path}/missing/addresses.db")
        monkeypatch.setattr("address_service.api.dependencies.database_manager", manager)

        transport = httpx.ASGITransport(app=create_app())
        async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
            yield client

        await manager.close()

    @pytest.mark.asyncio
    async def test_create_reports_internal_error(self, unreachable_client, auth_headers):
        response = await unreachable_client.post("/address/createAddress", json=MAIN_ST, headers=auth_headers)

        assert response.status_code == 500
        assert response.json() == {"detail": "Failed to create address"}

    @pytest.mark.asyncio
    async def test_list_reports_internal_error(self, unreachable_client):
        response = await unreachable_client.get("/address/getAddresses")

        assert response.status_code == 500
        assert response.json() == {"detail": "Failed to fetch addresses"}

    @pytest.mark.asyncio
    async def test_lookup_reports_service_unavailable(self, unreachable_client):
        response = await unreachable_client.get("/address/getAddressById", params={"id": "a1"})

        assert response.status_code == 503
        assert response.json()["error"] == "Service Unavailable"


class TestRequireAuthenticatedCaller:

    def test_accepted_token_passes_without_value(self, auth_headers):
        credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials="test-token")

        assert require_authenticated_caller(credentials) is None

    @pytest.mark.parametrize("credentials", [
        None,
        HTTPAuthorizationCredentials(scheme="Bearer", credentials="not-the-token"),
    ])
    def test_rejection_carries_bearer_challenge(self, auth_headers, credentials):
        with pytest.raises(HTTPException) as exc_info:
            require_authenticated_caller(credentials)

        assert exc_info.value.status_code == 401
        assert exc_info.value.headers == {"WWW-Authenticate": "Bearer"}
