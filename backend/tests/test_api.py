"""Tests for the HTTP endpoints of the administration service."""

import uuid

import httpx
import pytest
import pytest_asyncio

from autonomic_admin.database import get_db
from autonomic_admin.main import create_app
from autonomic_admin.services.cluster_management import get_administration_service


@pytest_asyncio.fixture
async def client(session_factory, service):
    app = create_app()

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_administration_service] = lambda: service

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


class TestHealth:
    @pytest.mark.asyncio
    async def test_liveness(self, client):
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    @pytest.mark.asyncio
    async def test_readiness(self, client):
        response = await client.get("/health/ready")
        assert response.status_code == 200
        assert response.json() == {"status": "ready", "checks": {"database": True}}


class TestClusters:
    @pytest.mark.asyncio
    async def test_register_and_list(self, client):
        response = await client.post("/v1/clusters", json={"name": "compute-a", "api_server": "https://a:6443"})
        assert response.status_code == 201
        created = response.json()
        assert created["administration_status"] == "NotProcessed"
        assert created["last_administration"] is None

        response = await client.get("/v1/clusters")
        assert response.status_code == 200
        assert [c["name"] for c in response.json()] == ["compute-a"]

    @pytest.mark.asyncio
    async def test_duplicate_name_conflicts(self, client):
        await client.post("/v1/clusters", json={"name": "compute-a"})
        response = await client.post("/v1/clusters", json={"name": "compute-a"})
        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_get_reflects_administration_state(self, client, service, clock):
        created = (await client.post("/v1/clusters", json={"name": "compute-b"})).json()
        cluster_id = uuid.UUID(created["id"])

        await service.mark_in_progress(cluster_id)
        response = await client.get(f"/v1/clusters/{cluster_id}")
        assert response.json()["administration_status"] == "InProgress"

        await service.mark_done(cluster_id)
        body = (await client.get(f"/v1/clusters/{cluster_id}")).json()
        assert body["administration_status"] == "Done"
        assert body["last_administration"] == clock.now.isoformat()

    @pytest.mark.asyncio
    async def test_unknown_cluster_is_404(self, client):
        response = await client.get(f"/v1/clusters/{uuid.uuid4()}")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_malformed_id_is_422(self, client):
        response = await client.get("/v1/clusters/not-a-uuid")
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_delete_removes_from_inventory(self, client):
        created = (await client.post("/v1/clusters", json={"name": "compute-c"})).json()

        response = await client.delete(f"/v1/clusters/{created['id']}")
        assert response.status_code == 200
        assert (await client.get(f"/v1/clusters/{created['id']}")).status_code == 404
        assert (await client.get("/v1/clusters")).json() == []


class TestSweepEndpoint:
    @pytest.mark.asyncio
    async def test_sweep_reclaims_stuck_cluster(self, client, service):
        stuck = (await client.post("/v1/clusters", json={"name": "stuck"})).json()
        await client.post("/v1/clusters", json={"name": "idle"})
        await service.mark_in_progress(uuid.UUID(stuck["id"]))

        response = await client.post("/v1/administration/sweep")
        assert response.status_code == 200
        assert response.json() == {"reclaimed": [stuck["id"]]}

        response = await client.post("/v1/administration/sweep")
        assert response.json() == {"reclaimed": []}
