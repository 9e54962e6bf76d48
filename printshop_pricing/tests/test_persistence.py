"""
Tests: Store backends (memory, MongoDB, console HTTP API).

MongoDB and the HTTP API are faked: a dict-backed collection stands in for
pymongo and httpx.MockTransport answers the HTTP calls.

Run with:
    pytest printshop_pricing/tests/test_persistence.py -v
"""

import asyncio
import json
from types import SimpleNamespace
from typing import Any

import httpx
import pytest
from pymongo.errors import ServerSelectionTimeoutError

from printshop_pricing.errors import StoreError
from printshop_pricing.models.schemas import AgentService, PricingConfig
from printshop_pricing.persistence import InMemoryServiceRepository, get_store
from printshop_pricing.persistence.agent_service_api import AgentServiceApiClient
from printshop_pricing.persistence.mongo_repository import MongoServiceRepository
from printshop_pricing.pricing import scaffold


def _config() -> PricingConfig:
    return scaffold(AgentService(id="svc-1", supports_color=True))


class TestWireFormat:
    def test_camel_case_round_trip(self):
        service = AgentService.model_validate({
            "id": "svc-1",
            "isActive": True,
            "supportsColor": True,
            "subCategory": {"id": "s", "categoryId": "c", "name": "Bond Paper", "pricingType": "UNIT_ONLY"},
            "pricingConfig": {
                "baseConfigurations": [{"id": "a4", "name": "A4", "type": "PRESET", "unitPrice": 0.6}],
                "options": [{"id": "bw", "name": "B&W", "enabled": True, "default": True, "priceModifier": 0}],
            },
        })

        assert service.is_active and service.supports_color
        assert service.pricing_config.options[0].is_default is True
        assert service.pricing_config.custom_specifications == []

        wire = service.to_wire()
        assert wire["pricingConfig"]["options"][0]["default"] is True
        assert wire["pricingConfig"]["baseConfigurations"][0]["unitPrice"] == 0.6
        assert wire["subCategory"]["pricingType"] == "UNIT_ONLY"


class TestInMemoryRepository:
    def test_persist_and_activate(self):
        repo = InMemoryServiceRepository([AgentService(id="svc-1")])
        config = _config()

        async def flow():
            await repo.persist_config("svc-1", config)
            await repo.set_active("svc-1", True)
            return await repo.get_service("svc-1")

        service = asyncio.run(flow())
        assert service.is_active is True
        assert service.pricing_config == config

    def test_reads_are_copies(self):
        repo = InMemoryServiceRepository([AgentService(id="svc-1")])
        service = asyncio.run(repo.get_service("svc-1"))
        service.is_active = True

        again = asyncio.run(repo.get_service("svc-1"))
        assert again.is_active is False

    def test_missing_service(self):
        repo = InMemoryServiceRepository()
        assert asyncio.run(repo.get_service("nope")) is None
        with pytest.raises(StoreError):
            asyncio.run(repo.set_active("nope", True))


class FakeCollection:
    def __init__(self, docs: list[dict[str, Any]] | None = None, broken: bool = False):
        self.docs = {d["_id"]: d for d in docs or []}
        self.broken = broken

    def find_one(self, query: dict[str, Any]):
        if self.broken:
            raise ServerSelectionTimeoutError("no servers")
        doc = self.docs.get(query["_id"])
        return dict(doc) if doc else None

    def update_one(self, query: dict[str, Any], update: dict[str, Any]):
        if self.broken:
            raise ServerSelectionTimeoutError("no servers")
        doc = self.docs.get(query["_id"])
        if doc is not None:
            doc.update(update["$set"])
        return SimpleNamespace(matched_count=1 if doc is not None else 0)


class FakeMongoClient:
    def __init__(self, collection: FakeCollection):
        self.collection = collection
        self.closed = False

    def get_database(self):
        return {"agent_services": self.collection}

    def close(self):
        self.closed = True


class TestMongoRepository:
    def _repo(self, collection: FakeCollection) -> MongoServiceRepository:
        return MongoServiceRepository(client=FakeMongoClient(collection), collection="agent_services")

    def test_persist_and_activate(self):
        collection = FakeCollection([{"_id": "svc-1", "isActive": False}])
        repo = self._repo(collection)
        config = _config()

        async def flow():
            await repo.persist_config("svc-1", config)
            await repo.set_active("svc-1", True)
            return await repo.get_service("svc-1")

        service = asyncio.run(flow())
        assert collection.docs["svc-1"]["pricingConfig"] == config.to_wire()
        assert service.id == "svc-1"
        assert service.is_active is True
        assert service.pricing_config == config

    def test_unknown_service(self):
        repo = self._repo(FakeCollection())
        assert asyncio.run(repo.get_service("ghost")) is None
        with pytest.raises(StoreError, match="not found"):
            asyncio.run(repo.persist_config("ghost", _config()))

    def test_driver_errors_become_store_errors(self):
        repo = self._repo(FakeCollection([{"_id": "svc-1"}], broken=True))
        with pytest.raises(StoreError, match="no servers"):
            asyncio.run(repo.set_active("svc-1", True))

    def test_close(self):
        client = FakeMongoClient(FakeCollection())
        asyncio.run(MongoServiceRepository(client=client).close())
        assert client.closed


class TestAgentServiceApiClient:
    def _client(self, handler) -> AgentServiceApiClient:
        return AgentServiceApiClient(
            base_url="http://console.test/api",
            api_token="secret",
            transport=httpx.MockTransport(handler),
        )

    def test_persist_config_request(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"data": {"id": "svc-1"}})

        config = _config()
        asyncio.run(self._client(handler).persist_config("svc-1", config))

        request = seen[0]
        assert request.method == "PUT"
        assert request.url.path == "/api/agent-services/svc-1/pricing-config"
        assert request.headers["Authorization"] == "Bearer secret"
        assert json.loads(request.content) == {"pricingConfig": config.to_wire()}

    def test_set_active_request(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={})

        asyncio.run(self._client(handler).set_active("svc-1", True))
        assert seen[0].url.path == "/api/agent-services/svc-1"
        assert json.loads(seen[0].content) == {"isActive": True}

    def test_error_response_raises_store_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, json={"message": "Internal error"})

        with pytest.raises(StoreError, match="Internal error"):
            asyncio.run(self._client(handler).set_active("svc-1", True))

    def test_transport_error_raises_store_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(StoreError, match="connection refused"):
            asyncio.run(self._client(handler).persist_config("svc-1", _config()))

    def test_get_service_unwraps_envelope(self):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path.endswith("/svc-1"):
                return httpx.Response(200, json={"data": {"id": "svc-1", "isActive": True}})
            return httpx.Response(404, json={"message": "Not found"})

        async def flow():
            client = self._client(handler)
            try:
                return await client.get_service("svc-1"), await client.get_service("svc-2")
            finally:
                await client.close()

        found, missing = asyncio.run(flow())
        assert found.id == "svc-1" and found.is_active
        assert missing is None


class TestGetStore:
    def test_backends(self):
        assert isinstance(get_store("memory"), InMemoryServiceRepository)
        assert isinstance(get_store("http"), AgentServiceApiClient)
        assert isinstance(get_store("mongo"), MongoServiceRepository)

    def test_unknown_backend(self):
        with pytest.raises(ValueError, match="Unknown storage backend"):
            get_store("redis")
