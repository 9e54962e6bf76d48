"""
In-memory service repository.
Used for local runs and tests; state lives for the lifetime of the process.
"""

from __future__ import annotations

import logging
from copy import deepcopy
from typing import Any, Optional

from printshop_pricing.errors import StoreError
from printshop_pricing.models.schemas import AgentService, PricingConfig
from printshop_pricing.persistence.base import PricingStore

logger = logging.getLogger(__name__)


class InMemoryServiceRepository(PricingStore):
    """
    Agent services keyed by id, stored as wire dicts.
    Every read and write copies, so callers never share state with the store.
    """

    def __init__(self, services: Optional[list[AgentService]] = None):
        self._memory_store: dict[str, dict[str, Any]] = {}
        for service in services or []:
            self.add_service(service)

    def add_service(self, service: AgentService) -> None:
        self._memory_store[service.id] = deepcopy(service.to_wire())

    def _record(self, service_id: str) -> dict[str, Any]:
        record = self._memory_store.get(service_id)
        if record is None:
            raise StoreError(f"Agent service {service_id} not found")
        return record

    async def get_service(self, service_id: str) -> Optional[AgentService]:
        record = self._memory_store.get(service_id)
        if record is None:
            return None
        return AgentService.model_validate(deepcopy(record))

    async def persist_config(self, service_id: str, config: PricingConfig) -> None:
        record = self._record(service_id)
        record["pricingConfig"] = deepcopy(config.to_wire())
        logger.info(f"Saved pricing config for {service_id}")

    async def set_active(self, service_id: str, is_active: bool) -> None:
        record = self._record(service_id)
        record["isActive"] = is_active
        logger.info(f"Set isActive={is_active} for {service_id}")
