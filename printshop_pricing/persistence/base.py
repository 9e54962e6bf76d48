"""
Pricing store — the two operations the lifecycle controller calls on the
outside world, plus a read used by the HTTP layer.

Backends raise StoreError when a call does not go through; the lifecycle
controller decides whether that is a persistence or an activation failure.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from printshop_pricing.models.schemas import AgentService, PricingConfig


class PricingStore(ABC):
    """Async boundary between the pricing engine and wherever services live."""

    @abstractmethod
    async def get_service(self, service_id: str) -> Optional[AgentService]:
        """Return the service, or None if it does not exist."""

    @abstractmethod
    async def persist_config(self, service_id: str, config: PricingConfig) -> None:
        """Replace the service's current pricing config."""

    @abstractmethod
    async def set_active(self, service_id: str, is_active: bool) -> None:
        """Set the service's active flag."""

    async def close(self) -> None:
        return None
