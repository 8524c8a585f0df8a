"""Tests for warranty HTTP API."""

from collections.abc import Callable
from typing import Any

import pytest
from httpx import AsyncClient

from services.warranty.registry import WarrantyRegistry
from shared.ledger import MockClock


T0 = 1704067200
DAY = 86400
YEAR = 31536000

OWNER_A = "GAOWNERA"
OWNER_B = "GBOWNERB"

Headers = Callable[[str], dict[str, str]]


def registration(owner: str = OWNER_A, **overrides: Any) -> dict[str, Any]:
    payload = {
        "owner": owner,
        "product_name": "Laptop",
        "serial_number": "SN123456",
        "manufacturer": "TechCorp",
        "purchase_date": T0,
        "expiration_date": T0 + YEAR,
    }
    payload.update(overrides)
    return payload


class TestWarrantyRoutes:
    """Tests for /api/v1/warranties endpoints."""

    @pytest.mark.asyncio
    async def test_register(self, warranty_client: AsyncClient, auth_headers: Headers) -> None:
        response = await warranty_client.post(
            "/api/v1/warranties",
            json=registration(),
            headers=auth_headers(OWNER_A),
        )

        assert response.status_code == 201
        body = response.json()
        assert body["id"] == 1
        assert body["warranty"]["owner"] == OWNER_A
        assert body["warranty"]["status"] == "Active"
        assert body["warranty"]["created_at"] == T0 + DAY
        assert body["warranty"]["is_expired"] is False

    @pytest.mark.asyncio
    async def test_register_requires_token(self, warranty_client: AsyncClient) -> None:
        response = await warranty_client.post("/api/v1/warranties", json=registration())

        assert response.status_code == 401
        assert response.json()["success"] is False

    @pytest.mark.asyncio
    async def test_register_rejects_bad_token(self, warranty_client: AsyncClient) -> None:
        response = await warranty_client.post(
            "/api/v1/warranties",
            json=registration(),
            headers={"Authorization": "Bearer not-a-jwt"},
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_register_for_someone_else(
        self, warranty_client: AsyncClient, auth_headers: Headers
    ) -> None:
        response = await warranty_client.post(
            "/api/v1/warranties",
            json=registration(owner=OWNER_A),
            headers=auth_headers(OWNER_B),
        )

        assert response.status_code == 403
        assert response.json()["error_code"] == "Unauthorized"

    @pytest.mark.asyncio
    async def test_register_invalid_range(
        self, warranty_client: AsyncClient, auth_headers: Headers
    ) -> None:
        response = await warranty_client.post(
            "/api/v1/warranties",
            json=registration(purchase_date=T0 + 2 * DAY, expiration_date=T0 + DAY),
            headers=auth_headers(OWNER_A),
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "InvalidDateRange"

    @pytest.mark.asyncio
    async def test_register_future_dated(
        self, warranty_client: AsyncClient, auth_headers: Headers
    ) -> None:
        response = await warranty_client.post(
            "/api/v1/warranties",
            json=registration(purchase_date=T0 + 5 * DAY, expiration_date=T0 + YEAR),
            headers=auth_headers(OWNER_A),
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "FutureDated"

    @pytest.mark.asyncio
    async def test_get_missing(self, warranty_client: AsyncClient) -> None:
        response = await warranty_client.get("/api/v1/warranties/1")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_count(
        self,
        warranty_client: AsyncClient,
        registry: WarrantyRegistry,
    ) -> None:
        assert (await warranty_client.get("/api/v1/warranties/count")).json() == {"count": 0}

        registry.register(OWNER_A, OWNER_A, "Laptop", "SN1", "TechCorp", T0, T0 + YEAR)

        assert (await warranty_client.get("/api/v1/warranties/count")).json() == {"count": 1}

    @pytest.mark.asyncio
    async def test_update_status(
        self,
        warranty_client: AsyncClient,
        registry: WarrantyRegistry,
        auth_headers: Headers,
    ) -> None:
        registry.register(OWNER_A, OWNER_A, "Laptop", "SN1", "TechCorp", T0, T0 + YEAR)

        response = await warranty_client.put(
            "/api/v1/warranties/1/status",
            json={"status": "Expired"},
            headers=auth_headers(OWNER_A),
        )

        assert response.status_code == 200
        assert response.json()["status"] == "Expired"

    @pytest.mark.asyncio
    async def test_update_status_unknown_value(
        self,
        warranty_client: AsyncClient,
        registry: WarrantyRegistry,
        auth_headers: Headers,
    ) -> None:
        registry.register(OWNER_A, OWNER_A, "Laptop", "SN1", "TechCorp", T0, T0 + YEAR)

        response = await warranty_client.put(
            "/api/v1/warranties/1/status",
            json={"status": "Suspended"},
            headers=auth_headers(OWNER_A),
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_update_status_uninitialized(
        self, warranty_client: AsyncClient, auth_headers: Headers
    ) -> None:
        response = await warranty_client.put(
            "/api/v1/warranties/1/status",
            json={"status": "Revoked"},
            headers=auth_headers(OWNER_A),
        )

        assert response.status_code == 404
        assert response.json()["error_code"] == "StorageUninitialized"

    @pytest.mark.asyncio
    async def test_transfer_and_owner_lists(
        self,
        warranty_client: AsyncClient,
        registry: WarrantyRegistry,
        auth_headers: Headers,
    ) -> None:
        registry.register(OWNER_A, OWNER_A, "Laptop", "SN1", "TechCorp", T0, T0 + YEAR)

        response = await warranty_client.post(
            "/api/v1/warranties/1/transfer",
            json={"new_owner": OWNER_B},
            headers=auth_headers(OWNER_A),
        )

        assert response.status_code == 200
        assert response.json()["owner"] == OWNER_B

        owner_a = await warranty_client.get(f"/api/v1/owners/{OWNER_A}/warranties")
        owner_b = await warranty_client.get(f"/api/v1/owners/{OWNER_B}/warranties")
        assert owner_a.json() == {"owner": OWNER_A, "warranty_ids": []}
        assert owner_b.json() == {"owner": OWNER_B, "warranty_ids": [1]}

    @pytest.mark.asyncio
    async def test_transfer_revoked(
        self,
        warranty_client: AsyncClient,
        registry: WarrantyRegistry,
        auth_headers: Headers,
    ) -> None:
        registry.register(OWNER_A, OWNER_A, "Laptop", "SN1", "TechCorp", T0, T0 + YEAR)

        revoke = await warranty_client.post(
            "/api/v1/warranties/1/revoke",
            headers=auth_headers(OWNER_A),
        )
        assert revoke.status_code == 200
        assert revoke.json()["status"] == "Revoked"

        response = await warranty_client.post(
            "/api/v1/warranties/1/transfer",
            json={"new_owner": OWNER_B},
            headers=auth_headers(OWNER_A),
        )

        assert response.status_code == 409
        body = response.json()
        assert body["error_code"] == "InvalidTransfer"
        assert body["details"] == {"warranty_id": 1}
        assert registry.list_by_owner(OWNER_A) == [1]

    @pytest.mark.asyncio
    async def test_revoke_not_owner(
        self,
        warranty_client: AsyncClient,
        registry: WarrantyRegistry,
        auth_headers: Headers,
    ) -> None:
        registry.register(OWNER_A, OWNER_A, "Laptop", "SN1", "TechCorp", T0, T0 + YEAR)

        response = await warranty_client.post(
            "/api/v1/warranties/1/revoke",
            headers=auth_headers(OWNER_B),
        )

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_expired_check(
        self,
        warranty_client: AsyncClient,
        registry: WarrantyRegistry,
        clock: MockClock,
    ) -> None:
        registry.register(OWNER_A, OWNER_A, "Laptop", "SN1", "TechCorp", T0, T0 + 2 * DAY)

        fresh = await warranty_client.get("/api/v1/warranties/1/expired")
        assert fresh.json() == {"id": 1, "is_expired": False, "checked_at": T0 + DAY}

        clock.advance(YEAR)
        later = await warranty_client.get("/api/v1/warranties/1/expired")
        assert later.json()["is_expired"] is True

        record = await warranty_client.get("/api/v1/warranties/1")
        assert record.json()["status"] == "Active"
        assert record.json()["is_expired"] is True

    @pytest.mark.asyncio
    async def test_expired_check_unknown(
        self,
        warranty_client: AsyncClient,
        registry: WarrantyRegistry,
    ) -> None:
        registry.register(OWNER_A, OWNER_A, "Laptop", "SN1", "TechCorp", T0, T0 + YEAR)

        response = await warranty_client.get("/api/v1/warranties/2/expired")

        assert response.status_code == 404
        assert response.json()["error_code"] == "NotFound"


class TestOwnerRoutes:
    """Tests for /api/v1/owners endpoints."""

    @pytest.mark.asyncio
    async def test_unknown_owner(self, warranty_client: AsyncClient) -> None:
        response = await warranty_client.get("/api/v1/owners/GNOBODY/warranties")

        assert response.status_code == 200
        assert response.json()["warranty_ids"] == []

    @pytest.mark.asyncio
    async def test_owner_details(
        self,
        warranty_client: AsyncClient,
        registry: WarrantyRegistry,
    ) -> None:
        registry.register(OWNER_A, OWNER_A, "Product1", "SN1", "Maker1", T0, T0 + YEAR)
        registry.register(OWNER_A, OWNER_A, "Product2", "SN2", "Maker2", T0, T0 + YEAR)
        registry.register(OWNER_B, OWNER_B, "Product3", "SN3", "Maker3", T0, T0 + YEAR)

        response = await warranty_client.get(f"/api/v1/owners/{OWNER_A}/warranties/details")

        assert response.status_code == 200
        warranties = response.json()["warranties"]
        assert [w["id"] for w in warranties] == [1, 2]
        assert [w["product_name"] for w in warranties] == ["Product1", "Product2"]


class TestHealth:
    """Tests for service health endpoints."""

    @pytest.mark.asyncio
    async def test_health(
        self,
        warranty_client: AsyncClient,
        registry: WarrantyRegistry,
    ) -> None:
        registry.register(OWNER_A, OWNER_A, "Laptop", "SN1", "TechCorp", T0, T0 + YEAR)

        response = await warranty_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["components"]["registry"]["warranties"] == 1
        assert body["components"]["registry"]["issued_ids"] == 1
        assert body["components"]["ledger"]["mode"] == "mock"
        assert body["components"]["ledger"]["commits"] == 1
