"""End-to-end tests for the /api/v1/components action endpoints."""

from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import text

from ims.application.interfaces import CatalogSource
from ims.application.services import CatalogService
from ims.domain.entities import ComponentType
from ims.domain.identity_generator import matches_identifier_shape
from ims.infrastructure.catalog import JsonFileCatalogSource
from ims.infrastructure.database.session import get_db_session
from ims.infrastructure.dependencies import get_catalog_service
from ims.main import app

CATALOG_DIR = Path(__file__).resolve().parents[2] / "data" / "catalogs"
FILE_MAP = {ct.value: f"{ct.value}.json" for ct in ComponentType}
URL = "/api/v1/components"


@pytest_asyncio.fixture
async def client(session_factory):
    async def override_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_session
    app.dependency_overrides[get_catalog_service] = lambda: CatalogService(
        JsonFileCatalogSource(CATALOG_DIR, FILE_MAP)
    )
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


async def _add(client: AsyncClient, component_type: str, **data):
    return await client.post(URL, json={"action": "add", "type": component_type, "data": data})


def _assert_envelope(response, status_code: int) -> dict:
    body = response.json()
    assert response.status_code == status_code
    assert body["status_code"] == status_code
    assert body["success"] is (status_code < 300)
    return body


@pytest.mark.asyncio
async def test_list_empty(client: AsyncClient):
    response = await client.get(URL, params={"action": "list", "type": "cpu"})
    body = _assert_envelope(response, 200)

    assert body["data"]["records"] == []
    assert body["data"]["total"] == 0
    assert body["data"]["has_more"] is False
    assert body["data"]["status_summary"]["available"] == 0


@pytest.mark.asyncio
async def test_invalid_type_and_action(client: AsyncClient):
    response = await client.get(URL, params={"action": "list", "type": "gpu"})
    assert _assert_envelope(response, 400)["message"] == "Invalid component type: gpu"

    response = await client.get(URL, params={"action": "explode", "type": "cpu"})
    assert _assert_envelope(response, 400)["message"] == "Invalid operation"

    response = await client.get(URL, params={"action": "add", "type": "cpu"})
    assert _assert_envelope(response, 400)["message"] == "Invalid request method"

    response = await client.post(URL, json={"action": "list", "type": "cpu"})
    assert _assert_envelope(response, 400)["message"] == "Invalid request method"


@pytest.mark.asyncio
async def test_malformed_body_is_a_400_envelope(client: AsyncClient):
    response = await client.post(URL, json={"type": "cpu"})
    body = _assert_envelope(response, 400)
    assert "action" in body["message"]


@pytest.mark.asyncio
async def test_options_progressive_narrowing(client: AsyncClient):
    response = await client.get(URL, params={"action": "options", "type": "cpu"})
    data = _assert_envelope(response, 200)["data"]
    assert data["brands"] == ["Intel", "AMD"]
    assert data["models"] is None

    response = await client.get(
        URL, params={"action": "options", "type": "cpu", "brand": "Intel", "series": "Xeon"}
    )
    data = _assert_envelope(response, 200)["data"]
    assert data["series"] == ["Xeon"]
    assert [m["model"] for m in data["models"]] == ["Platinum 8480+", "Gold 6430"]
    assert all(m["brand"] == "Intel" and m["series"] == "Xeon" for m in data["models"])
    assert data["models"][0]["identifier"] == "0b9a6e2c-5d41-4f0e-9c7a-2e8d1b3f6a10"
    assert matches_identifier_shape(data["models"][1]["identifier"])


@pytest.mark.asyncio
async def test_options_for_custom_specification_types(client: AsyncClient):
    response = await client.get(URL, params={"action": "options", "type": "storage"})
    data = _assert_envelope(response, 200)["data"]
    assert data["catalog_available"] is True
    assert data["custom_specification"]["type"] == ["HDD", "SSD"]


@pytest.mark.asyncio
async def test_add_get_update_delete_flow(client: AsyncClient):
    options = await client.get(
        URL, params={"action": "options", "type": "cpu", "brand": "Intel", "series": "Xeon"}
    )
    gold = options.json()["data"]["models"][1]

    response = await _add(client, "cpu", serial_number="CPU-100", identifier=gold["identifier"])
    added = _assert_envelope(response, 201)["data"]
    assert added["identifier"] == gold["identifier"]
    record_id = added["id"]

    response = await client.get(URL, params={"action": "get", "type": "cpu", "id": record_id})
    record = _assert_envelope(response, 200)["data"]
    assert record["serial_number"] == "CPU-100"
    assert record["status"] == "available"
    assert "mac_address" not in record
    assert record["catalog_details"]["model"] == "Gold 6430"
    assert record["catalog_details"]["attributes"]["cores"] == 32

    response = await client.post(
        URL,
        json={
            "action": "update",
            "type": "cpu",
            "id": record_id,
            "data": {"status": "in_use", "server_identifier": "SRV-7"},
        },
    )
    body = _assert_envelope(response, 200)
    assert body["message"] == "Component updated successfully"
    assert sorted(body["data"]["updated_fields"]) == ["server_identifier", "status"]

    response = await client.post(
        URL,
        json={"action": "update", "type": "cpu", "id": record_id, "data": {"status": "in_use"}},
    )
    body = _assert_envelope(response, 200)
    assert body["message"] == "No changes detected"
    assert body["data"]["updated_fields"] == []

    response = await client.post(URL, json={"action": "delete", "type": "cpu", "id": record_id})
    _assert_envelope(response, 200)

    response = await client.get(URL, params={"action": "get", "type": "cpu", "id": record_id})
    assert _assert_envelope(response, 404)["message"] == "Component not found"


@pytest.mark.asyncio
async def test_duplicate_serial_is_409(client: AsyncClient):
    _assert_envelope(await _add(client, "ram", serial_number="RAM-T1"), 201)
    response = await _add(client, "ram", serial_number="RAM-T1")
    body = _assert_envelope(response, 409)
    assert body["message"] == "Component with this serial number already exists"


@pytest.mark.asyncio
async def test_in_use_without_server_is_rejected(client: AsyncClient):
    response = await _add(client, "motherboard", serial_number="MB-1", status="in_use")
    body = _assert_envelope(response, 400)
    assert body["message"] == "Server identifier is required when status is 'in_use'"

    listing = await client.get(URL, params={"action": "list", "type": "motherboard"})
    assert listing.json()["data"]["total"] == 0


@pytest.mark.asyncio
async def test_nic_listing_with_status_filter(client: AsyncClient):
    for i in range(3):
        await _add(client, "nic", serial_number=f"NIC-F{i}", status="failed", mac_address=f"00:00:00:00:00:0{i}")
    for i in range(2):
        await _add(client, "nic", serial_number=f"NIC-A{i}")

    response = await client.get(
        URL, params={"action": "list", "type": "nic", "status": "failed", "limit": 10, "offset": 0}
    )
    data = _assert_envelope(response, 200)["data"]
    assert len(data["records"]) == 3
    assert {r["status"] for r in data["records"]} == {"failed"}
    assert "mac_address" in data["records"][0]
    assert data["has_more"] is False
    assert data["status_summary"]["available"] == 2


@pytest.mark.asyncio
async def test_add_ram_with_custom_specification(client: AsyncClient):
    response = await _add(
        client,
        "ram",
        serial_number="RAM-C1",
        specification={"type": "DDR5", "ecc": "No", "size": "64GB"},
    )
    added = _assert_envelope(response, 201)["data"]
    assert matches_identifier_shape(added["identifier"])

    response = await client.get(URL, params={"action": "get", "type": "ram", "id": added["id"]})
    record = _assert_envelope(response, 200)["data"]
    assert record["notes"] == "Type: DDR5, ECC: No, Size: 64GB"
    assert record["catalog_details"] is None


@pytest.mark.asyncio
async def test_update_rejects_immutable_fields(client: AsyncClient):
    added = (await _add(client, "caddy", serial_number="CD-1")).json()["data"]
    response = await client.post(
        URL,
        json={
            "action": "update",
            "type": "caddy",
            "id": added["id"],
            "data": {"serial_number": "CD-2"},
        },
    )
    assert "serial_number" in _assert_envelope(response, 400)["message"]


@pytest.mark.asyncio
@pytest.mark.parametrize("bad_id", ["abc", "0", "-4", ""])
async def test_get_requires_valid_id(client: AsyncClient, bad_id: str):
    response = await client.get(URL, params={"action": "get", "type": "cpu", "id": bad_id})
    assert _assert_envelope(response, 400)["message"] == "Valid component ID required"


@pytest.mark.asyncio
async def test_list_with_status_all_returns_every_record(client: AsyncClient):
    await _add(client, "cpu", serial_number="CPU-ALL-1")
    await _add(client, "cpu", serial_number="CPU-ALL-2", status="failed")

    response = await client.get(URL, params={"action": "list", "type": "cpu", "status": "all"})
    assert _assert_envelope(response, 200)["data"]["total"] == 2


@pytest.mark.asyncio
async def test_delete_in_use_component_needs_force(client: AsyncClient):
    added = (
        await _add(client, "storage", serial_number="ST-U", status="in_use", server_identifier="SRV-3")
    ).json()["data"]

    response = await client.post(URL, json={"action": "delete", "type": "storage", "id": added["id"]})
    body = _assert_envelope(response, 403)
    assert body["message"].startswith("Cannot delete component that is currently in use")

    response = await client.post(
        URL, json={"action": "delete", "type": "storage", "id": added["id"], "force": True}
    )
    assert _assert_envelope(response, 200)["data"]["serial_number"] == "ST-U"


@pytest.mark.asyncio
async def test_bulk_update_action(client: AsyncClient):
    first = (await _add(client, "nic", serial_number="NIC-B1")).json()["data"]["id"]
    second = (await _add(client, "nic", serial_number="NIC-B2")).json()["data"]["id"]

    response = await client.post(
        URL,
        json={
            "action": "bulk_update",
            "type": "nic",
            "ids": [first, second, 4040],
            "data": {"status": "maintenance", "location": "Lab"},
        },
    )
    body = _assert_envelope(response, 200)
    assert body["message"] == "2 components updated successfully"
    assert (body["data"]["updated"], body["data"]["failed"]) == (2, 1)
    assert body["data"]["failures"] == [{"id": 4040, "reason": "Component not found"}]

    listing = await client.get(
        URL, params={"action": "list", "type": "nic", "status": "maintenance"}
    )
    records = listing.json()["data"]["records"]
    assert {r["location"] for r in records} == {"Lab"}
    assert len(records) == 2


@pytest.mark.asyncio
async def test_bulk_update_rejects_oversized_batches(client: AsyncClient):
    response = await client.post(
        URL,
        json={
            "action": "bulk_update",
            "type": "cpu",
            "ids": list(range(1, 102)),
            "data": {"flag": "x"},
        },
    )
    body = _assert_envelope(response, 400)
    assert body["message"] == "Maximum 100 components can be updated at once"

    response = await client.post(
        URL, json={"action": "bulk_update", "type": "cpu", "data": {"flag": "x"}}
    )
    assert _assert_envelope(response, 400)["message"] == "Component IDs array required"


@pytest.mark.asyncio
async def test_store_failure_is_a_generic_500(client: AsyncClient, engine):
    async with engine.begin() as conn:
        await conn.execute(text("DROP TABLE cpu_inventory"))

    response = await client.get(URL, params={"action": "list", "type": "cpu"})
    body = _assert_envelope(response, 500)
    assert body["message"] == "An unexpected error occurred"
    assert "cpu_inventory" not in response.text
    assert body["data"] is None


class _BrokenCatalogSource(CatalogSource):
    def load(self, component_type):
        raise RuntimeError("disk on fire")


@pytest.mark.asyncio
async def test_unexpected_error_is_a_500_envelope(client: AsyncClient):
    app.dependency_overrides[get_catalog_service] = lambda: CatalogService(_BrokenCatalogSource())
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as raw_client:
        response = await raw_client.get(URL, params={"action": "options", "type": "cpu"})

    body = _assert_envelope(response, 500)
    assert body["message"] == "An unexpected error occurred"
    assert "disk on fire" not in response.text


@pytest.mark.asyncio
async def test_deeply_nested_catalog_gives_empty_options(client: AsyncClient, tmp_path: Path):
    depth = 100_000
    (tmp_path / "motherboard.json").write_text("[" * depth + "]" * depth, encoding="utf-8")
    app.dependency_overrides[get_catalog_service] = lambda: CatalogService(
        JsonFileCatalogSource(tmp_path, FILE_MAP)
    )

    response = await client.get(URL, params={"action": "options", "type": "motherboard"})
    data = _assert_envelope(response, 200)["data"]
    assert data["catalog_available"] is False
    assert data["brands"] == []
