"""
Lifecycle — moves a service between UNCONFIGURED, DRAFT and ACTIVE.

    UNCONFIGURED ──save_draft──────────▶ DRAFT
    UNCONFIGURED ──save_and_activate───▶ ACTIVE
    DRAFT        ──save_and_activate───▶ ACTIVE

Calls to the store are strictly sequential: set_active only runs after
persist_config has returned, and never if it failed. There are no retries.
The engine only ever sets the active flag to true.
"""

from __future__ import annotations

import asyncio
import logging

from printshop_pricing.errors import (
    ActivationFailure,
    PersistenceFailure,
    StoreError,
    ValidationFailure,
)
from printshop_pricing.models.enums import ServiceState
from printshop_pricing.models.schemas import AgentService, PricingConfig, SaveOutcome
from printshop_pricing.persistence.base import PricingStore
from printshop_pricing.pricing.validator import validate

logger = logging.getLogger(__name__)

SAVED_AS_DRAFT = "Pricing configuration saved as draft"
SAVED_AND_ACTIVATED = "Pricing configuration saved and activated"


def lifecycle_state(service: AgentService) -> ServiceState:
    """Derive the pricing state of a service from its stored config and flag."""
    config = service.pricing_config
    if config is None or not validate(config).valid:
        return ServiceState.UNCONFIGURED
    return ServiceState.ACTIVE if service.is_active else ServiceState.DRAFT


class PricingLifecycle:
    """Validate, persist and (optionally) activate a service's pricing config."""

    def __init__(self, store: PricingStore):
        self.store = store

    def _check(self, service: AgentService, config: PricingConfig) -> None:
        result = validate(config)
        if not result.valid:
            logger.info(f"[{service.id}] Pricing config rejected: {result.reasons}")
            raise ValidationFailure(result.reasons)

    async def _persist(self, service: AgentService, config: PricingConfig) -> None:
        try:
            await self.store.persist_config(service.id, config)
        except StoreError as e:
            logger.error(f"[{service.id}] Saving pricing config failed: {e}")
            raise PersistenceFailure(service.id, str(e)) from e
        except asyncio.CancelledError as e:
            # a cancelled save is reported like any other failed save
            logger.error(f"[{service.id}] Saving pricing config was cancelled")
            raise PersistenceFailure(service.id, "cancelled") from e

    async def save_draft(self, service: AgentService, config: PricingConfig) -> SaveOutcome:
        """
        Validate and persist. The active flag is left as it is, so an
        unconfigured service becomes a draft and an active one stays active.
        """
        self._check(service, config)
        await self._persist(service, config)

        state = ServiceState.ACTIVE if service.is_active else ServiceState.DRAFT
        logger.info(f"[{service.id}] {SAVED_AS_DRAFT} (state={state.value})")
        return SaveOutcome(service_id=service.id, state=state, config=config, message=SAVED_AS_DRAFT)

    async def save_and_activate(self, service: AgentService, config: PricingConfig) -> SaveOutcome:
        """
        Validate, persist, then activate.
        Raises ActivationFailure when the config was saved but activation was not.
        """
        self._check(service, config)
        await self._persist(service, config)

        try:
            await self.store.set_active(service.id, True)
        except StoreError as e:
            logger.error(f"[{service.id}] Config saved but activation failed: {e}")
            raise ActivationFailure(service.id, str(e), config) from e
        except asyncio.CancelledError as e:
            logger.error(f"[{service.id}] Config saved but activation was cancelled")
            raise ActivationFailure(service.id, "cancelled", config) from e

        logger.info(f"[{service.id}] {SAVED_AND_ACTIVATED}")
        return SaveOutcome(
            service_id=service.id,
            state=ServiceState.ACTIVE,
            config=config,
            message=SAVED_AND_ACTIVATED,
        )
