"""
MongoDB-backed service repository.

Agent services are documents keyed by ``_id`` with camelCase fields, the
same shape the console API serves. pymongo is synchronous, so each call is
pushed to a worker thread.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

from pymongo.errors import PyMongoError

from printshop_pricing.config import get_settings
from printshop_pricing.errors import StoreError
from printshop_pricing.models.schemas import AgentService, PricingConfig
from printshop_pricing.persistence.base import PricingStore
from printshop_pricing.persistence.mongo_client import MongoClient

logger = logging.getLogger(__name__)


class MongoServiceRepository(PricingStore):
    def __init__(self, client: Optional[MongoClient] = None, collection: Optional[str] = None):
        self._client = client or MongoClient()
        self._collection_name = collection or get_settings().agent_services_collection

    @property
    def collection(self) -> Any:
        return self._client.get_database()[self._collection_name]

    async def get_service(self, service_id: str) -> Optional[AgentService]:
        try:
            doc = await asyncio.to_thread(self.collection.find_one, {"_id": service_id})
        except PyMongoError as e:
            raise StoreError(f"Failed loading agent service {service_id}: {e}") from e
        if doc is None:
            return None
        doc["id"] = str(doc.pop("_id"))
        return AgentService.model_validate(doc)

    async def _set(self, service_id: str, fields: dict[str, Any]) -> None:
        try:
            result = await asyncio.to_thread(
                self.collection.update_one, {"_id": service_id}, {"$set": fields}
            )
        except PyMongoError as e:
            raise StoreError(f"MongoDB write failed for {service_id}: {e}") from e
        if result.matched_count == 0:
            raise StoreError(f"Agent service {service_id} not found")

    async def persist_config(self, service_id: str, config: PricingConfig) -> None:
        await self._set(service_id, {"pricingConfig": config.to_wire()})
        logger.info(f"Saved pricing config for {service_id} in MongoDB")

    async def set_active(self, service_id: str, is_active: bool) -> None:
        await self._set(service_id, {"isActive": is_active})
        logger.info(f"Set isActive={is_active} for {service_id} in MongoDB")

    async def close(self) -> None:
        self._client.close()
