"""
Console backend client — persists pricing through the operator API.

    GET /agent-services/{id}
    PUT /agent-services/{id}/pricing-config   {"pricingConfig": {...}}
    PUT /agent-services/{id}                  {"isActive": true}

Responses may be wrapped in a ``{"data": ...}`` envelope.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from printshop_pricing.config import get_settings
from printshop_pricing.errors import StoreError
from printshop_pricing.models.schemas import AgentService, PricingConfig
from printshop_pricing.persistence.base import PricingStore

logger = logging.getLogger(__name__)


def _unwrap(payload: Any) -> Any:
    if isinstance(payload, dict) and payload.get("data") is not None:
        return payload["data"]
    return payload


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict):
        return str(body.get("message") or body.get("error") or body)
    return str(body)


class AgentServiceApiClient(PricingStore):
    def __init__(
        self,
        base_url: Optional[str] = None,
        api_token: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        settings = get_settings()
        self._base_url = (base_url or settings.api_base_url).rstrip("/")
        self._api_token = api_token if api_token is not None else settings.api_token
        self._timeout = timeout_seconds or settings.http_timeout_seconds
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            headers=self._build_headers(),
            transport=transport,
        )

    def _build_headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._api_token:
            headers["Authorization"] = f"Bearer {self._api_token}"
        return headers

    async def close(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, json: Optional[dict[str, Any]] = None) -> httpx.Response:
        try:
            response = await self._client.request(method, path, json=json)
        except httpx.HTTPError as e:
            raise StoreError(f"{method} {path} failed: {e}") from e
        return response

    async def get_service(self, service_id: str) -> Optional[AgentService]:
        response = await self._request("GET", f"/agent-services/{service_id}")
        if response.status_code == 404:
            return None
        if response.is_error:
            raise StoreError(_error_message(response))
        return AgentService.model_validate(_unwrap(response.json()))

    async def persist_config(self, service_id: str, config: PricingConfig) -> None:
        path = f"/agent-services/{service_id}/pricing-config"
        logger.info(f"PUT {path}")
        response = await self._request("PUT", path, json={"pricingConfig": config.to_wire()})
        if response.is_error:
            raise StoreError(_error_message(response))

    async def set_active(self, service_id: str, is_active: bool) -> None:
        path = f"/agent-services/{service_id}"
        logger.info(f"PUT {path} isActive={is_active}")
        response = await self._request("PUT", path, json={"isActive": is_active})
        if response.is_error:
            raise StoreError(_error_message(response))
