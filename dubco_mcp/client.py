"""
Thin async client for the Dub.co REST API.

Every request carries the workspace API key as a bearer token. Non-2xx
responses raise httpx.HTTPStatusError; callers decide whether a failure
becomes a tool result or a protocol error (see tools.py).
"""

import logging
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import quote

import httpx

from .config import API_BASE_URL, ConfigurationError
from .models import Domain, Link

logger = logging.getLogger("dubco-mcp.client")


def _link_path(link_id: str) -> str:
    # Encode "/", "?" and "#" so the ID stays a single path segment.
    return f"/links/{quote(link_id, safe='')}"


class DubcoClient:
    """Client for the Dub.co links and domains endpoints."""

    def __init__(
        self,
        api_key: str,
        base_url: str = API_BASE_URL,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not api_key:
            raise ConfigurationError("api_key is required")
        self.base_url = base_url
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            transport=transport,
        )

    async def close(self):
        await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def _request(self, method: str, path: str, json: Optional[Dict[str, Any]] = None) -> httpx.Response:
        logger.debug(f"{method} {path}")
        response = await self._client.request(method, path, json=json)
        response.raise_for_status()
        return response

    async def list_domains(self) -> List[Domain]:
        response = await self._request("GET", "/domains")
        return [Domain.from_dict(item) for item in response.json()]

    async def create_link(self, payload: Dict[str, str]) -> Link:
        response = await self._request("POST", "/links", json=payload)
        return Link.from_dict(response.json())

    async def update_link(self, link_id: str, payload: Dict[str, str]) -> Link:
        response = await self._request("PATCH", _link_path(link_id), json=payload)
        return Link.from_dict(response.json())

    async def upsert_link(self, payload: Dict[str, str]) -> Link:
        response = await self._request("PUT", "/links/upsert", json=payload)
        return Link.from_dict(response.json())

    async def delete_link(self, link_id: str) -> None:
        await self._request("DELETE", _link_path(link_id))


def describe_http_error(error: Exception) -> Tuple[Optional[int], str]:
    """
    Extract (status code, message) from a failed API call.

    With an HTTP response the message is the body's ``error`` field (Dub.co
    nests it as ``{"error": {"message": ...}}``), else its ``message`` field,
    else the httpx exception text. Without a response the status is None.
    """
    if not isinstance(error, httpx.HTTPStatusError):
        return None, str(error)

    response = error.response
    message = None
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        detail = body.get("error")
        if isinstance(detail, dict):
            detail = detail.get("message")
        message = detail or body.get("message")

    return response.status_code, str(message or error)


def format_failure(action: str, error: Exception) -> str:
    """Render a failure as ``Error <action>: <status> - <message>``."""
    status, message = describe_http_error(error)
    if status is None:
        return f"Error {action}: {message}"
    return f"Error {action}: {status} - {message}"
