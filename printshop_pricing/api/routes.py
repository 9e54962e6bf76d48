"""
API routes — thin HTTP layer over the pricing engine.

Routes:
  GET    /health
  GET    /api/agent-services/{id}/pricing-config                  → stored config or a scaffold
  POST   /api/agent-services/{id}/pricing-config/validate         → ValidationResult
  POST   /api/agent-services/{id}/pricing-config/preview          → PreviewReport
  POST   /api/agent-services/{id}/pricing-config/quote            → Quote
  POST   /api/agent-services/{id}/pricing-config/{collection}     → config with entity appended
  PATCH  /api/agent-services/{id}/pricing-config/{collection}/{i} → config with entity i updated
  DELETE /api/agent-services/{id}/pricing-config/{collection}/{i} → config with entity i removed
  PUT    /api/agent-services/{id}/pricing-config?activate=bool    → save draft / save and activate

Mutation routes work on the config sent in the body and do not persist;
the editor saves with PUT when the operator is done.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import ValidationError

from printshop_pricing.errors import (
    ActivationFailure,
    OutOfRange,
    PersistenceFailure,
    StoreError,
    UnknownField,
    UnknownIdentifier,
    ValidationFailure,
)
from printshop_pricing.models.enums import PricingCollection, ServiceState
from printshop_pricing.models.schemas import (
    AgentService,
    PreviewReport,
    PricingConfig,
    Quote,
    SaveOutcome,
    ValidationResult,
    WireModel,
)
from printshop_pricing.persistence.base import PricingStore
from printshop_pricing.pricing import (
    PricingLifecycle,
    compute_preview,
    lifecycle_state,
    needs_scaffold,
    quote,
    scaffold,
    validate,
)
from printshop_pricing.pricing.mutations import (
    add_entity,
    build_entity,
    remove_entity,
    update_entity,
)

logger = logging.getLogger(__name__)

# ── Routers ──────────────────────────────────────────────
health_router = APIRouter()
pricing_router = APIRouter()


# ── Request / response schemas ───────────────────────────


class PricingConfigResponse(WireModel):
    service_id: str
    state: ServiceState
    scaffolded: bool = False
    pricing_config: PricingConfig


class AddEntityRequest(WireModel):
    pricing_config: PricingConfig
    entity: dict[str, Any]


class UpdateEntityRequest(WireModel):
    pricing_config: PricingConfig
    changes: dict[str, Any]


class RemoveEntityRequest(WireModel):
    pricing_config: PricingConfig


class QuoteRequest(WireModel):
    pricing_config: PricingConfig
    base_configuration_id: str
    quantity: int = 1
    option_ids: Optional[list[str]] = None
    custom_specification_ids: list[str] = []


# ── Dependencies ─────────────────────────────────────────


def get_pricing_store(request: Request) -> PricingStore:
    return request.app.state.store


async def _load_service(service_id: str, store: PricingStore) -> AgentService:
    try:
        service = await store.get_service(service_id)
    except StoreError as e:
        raise HTTPException(status_code=502, detail=str(e))
    if service is None:
        raise HTTPException(status_code=404, detail=f"Agent service {service_id} not found")
    return service


# ── Health ───────────────────────────────────────────────


@health_router.get("/health")
async def health_check():
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


# ── Read ─────────────────────────────────────────────────


@pricing_router.get("/{service_id}/pricing-config", response_model=PricingConfigResponse)
async def get_pricing_config(service_id: str, store: PricingStore = Depends(get_pricing_store)):
    service = await _load_service(service_id, store)
    return PricingConfigResponse(
        service_id=service.id,
        state=lifecycle_state(service),
        scaffolded=needs_scaffold(service),
        pricing_config=scaffold(service),
    )


# ── Pure computations ────────────────────────────────────


@pricing_router.post("/{service_id}/pricing-config/validate", response_model=ValidationResult)
async def validate_pricing_config(
    service_id: str,
    config: PricingConfig,
    store: PricingStore = Depends(get_pricing_store),
):
    await _load_service(service_id, store)
    return validate(config)


@pricing_router.post("/{service_id}/pricing-config/preview", response_model=PreviewReport)
async def preview_pricing_config(
    service_id: str,
    config: PricingConfig,
    store: PricingStore = Depends(get_pricing_store),
):
    await _load_service(service_id, store)
    return compute_preview(config)


@pricing_router.post("/{service_id}/pricing-config/quote", response_model=Quote)
async def quote_pricing_config(
    service_id: str,
    body: QuoteRequest,
    store: PricingStore = Depends(get_pricing_store),
):
    await _load_service(service_id, store)
    try:
        return quote(
            body.pricing_config,
            body.base_configuration_id,
            body.quantity,
            option_ids=body.option_ids,
            custom_specification_ids=body.custom_specification_ids,
        )
    except UnknownIdentifier as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


# ── Editing ──────────────────────────────────────────────


@pricing_router.post("/{service_id}/pricing-config/{collection}", response_model=PricingConfig)
async def add_pricing_entity(
    service_id: str,
    collection: PricingCollection,
    body: AddEntityRequest,
    store: PricingStore = Depends(get_pricing_store),
):
    await _load_service(service_id, store)
    try:
        entity = build_entity(collection, body.entity)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False))
    return add_entity(body.pricing_config, collection, entity)


@pricing_router.patch("/{service_id}/pricing-config/{collection}/{index}", response_model=PricingConfig)
async def update_pricing_entity(
    service_id: str,
    collection: PricingCollection,
    index: int,
    body: UpdateEntityRequest,
    store: PricingStore = Depends(get_pricing_store),
):
    await _load_service(service_id, store)
    try:
        return update_entity(body.pricing_config, collection, index, body.changes)
    except OutOfRange as e:
        raise HTTPException(status_code=404, detail=str(e))
    except UnknownField as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@pricing_router.delete("/{service_id}/pricing-config/{collection}/{index}", response_model=PricingConfig)
async def remove_pricing_entity(
    service_id: str,
    collection: PricingCollection,
    index: int,
    body: RemoveEntityRequest,
    store: PricingStore = Depends(get_pricing_store),
):
    await _load_service(service_id, store)
    try:
        return remove_entity(body.pricing_config, collection, index)
    except OutOfRange as e:
        raise HTTPException(status_code=404, detail=str(e))


# ── Save ─────────────────────────────────────────────────


@pricing_router.put("/{service_id}/pricing-config", response_model=SaveOutcome)
async def save_pricing_config(
    service_id: str,
    config: PricingConfig,
    activate: bool = False,
    store: PricingStore = Depends(get_pricing_store),
):
    service = await _load_service(service_id, store)
    lifecycle = PricingLifecycle(store)

    try:
        if activate:
            return await lifecycle.save_and_activate(service, config)
        return await lifecycle.save_draft(service, config)
    except ValidationFailure as e:
        raise HTTPException(status_code=422, detail={"reasons": e.reasons})
    except ActivationFailure as e:
        raise HTTPException(
            status_code=502,
            detail={"message": str(e), "state": e.state.value, "reason": e.reason},
        )
    except PersistenceFailure as e:
        raise HTTPException(status_code=502, detail={"message": str(e), "reason": e.reason})
