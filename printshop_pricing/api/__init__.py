"""
FastAPI application factory and API package.

Run with:
    uvicorn printshop_pricing.api:app --reload --port 8000

Or via main.py:
    python -m printshop_pricing --serve
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from printshop_pricing.config import get_settings
from printshop_pricing.api.routes import health_router, pricing_router
from printshop_pricing.persistence import PricingStore, get_store

logger = logging.getLogger(__name__)


def create_app(store: Optional[PricingStore] = None) -> FastAPI:
    """Application factory — create and configure the FastAPI instance."""
    settings = get_settings()

    application = FastAPI(
        title="Print Shop Pricing API",
        description="Pricing configuration engine for print-shop agent services",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # CORS: allow the operator console (adjust origins in production)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.state.store = store if store is not None else get_store()

    application.include_router(health_router, tags=["Health"])
    application.include_router(pricing_router, prefix="/api/agent-services", tags=["Pricing"])

    @application.on_event("startup")
    async def startup():
        logger.info(f"Starting {settings.app_name} API (storage={settings.storage_backend})")

    @application.on_event("shutdown")
    async def shutdown():
        await application.state.store.close()

    return application


# Module-level instance for `uvicorn printshop_pricing.api:app`
app = create_app()
