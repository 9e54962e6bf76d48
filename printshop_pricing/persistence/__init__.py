"""Persistence — PricingStore and its memory, MongoDB and HTTP backends."""

from printshop_pricing.config import get_settings
from printshop_pricing.persistence.base import PricingStore
from printshop_pricing.persistence.memory_repository import InMemoryServiceRepository

__all__ = ["PricingStore", "InMemoryServiceRepository", "get_store"]


def get_store(backend: str | None = None) -> PricingStore:
    """Build the store selected by STORAGE_BACKEND."""
    backend = (backend or get_settings().storage_backend).lower()
    if backend == "memory":
        return InMemoryServiceRepository()
    if backend == "mongo":
        from printshop_pricing.persistence.mongo_repository import MongoServiceRepository

        return MongoServiceRepository()
    if backend == "http":
        from printshop_pricing.persistence.agent_service_api import AgentServiceApiClient

        return AgentServiceApiClient()
    raise ValueError(f"Unknown storage backend: {backend}")
