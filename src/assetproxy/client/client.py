"""
HTTP client for the manager proxy server
"""
from typing import Any, Dict, Optional

import httpx

from assetproxy.exceptions import ManagerProxyError, error_for_kind
from assetproxy.managers import InfoDictionary
from assetproxy.server.constants import (
    DESTROY_URL,
    GET_DISPLAY_NAME_URL,
    GET_IDENTIFIER_URL,
    INITIALIZE_URL,
    INSTANTIATE_URL,
    LIST_IDENTIFIERS_URL,
)
from assetproxy.shared.logging import get_logger

logger = get_logger(__name__)


class ManagerProxyClient:
    """
    Async client driving manager instances hosted by a proxy server.

    Failed calls raise the same ManagerProxyError subclasses the server
    reported them as, e.g. InvalidHandle for an unknown handle.

    Usage:
        async with ManagerProxyClient("http://localhost:50051") as client:
            handle = await client.instantiate("org.example.manager")
            name = await client.get_display_name(handle)
            await client.destroy(handle)
    """

    def __init__(
            self,
            base_url: str,
            timeout: float = 30.0,
            transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Args:
            base_url: URL of the proxy server, e.g. "http://localhost:50051"
            timeout: Per-call timeout in seconds
            transport: Optional transport, e.g. httpx.ASGITransport for in-process use
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport
        self.client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "ManagerProxyClient":
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(self.timeout),
            transport=self.transport
        )
        logger.debug(f"Manager proxy client connected to {self.base_url}")
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        if self.client:
            await self.client.aclose()
            self.client = None

    async def list_identifiers(self) -> list[str]:
        """Get identifiers of the manager implementations the server can instantiate"""
        result = await self._call(LIST_IDENTIFIERS_URL, {})
        return list(result.get("identifiers", []))

    async def instantiate(self, identifier: str) -> str:
        """Create a manager instance and return its handle"""
        result = await self._call(INSTANTIATE_URL, {"identifier": identifier})
        return result["handle"]

    async def destroy(self, handle: str) -> None:
        """Release the manager instance referenced by a handle"""
        await self._call(DESTROY_URL, {"handle": handle})

    async def get_identifier(self, handle: str) -> str:
        result = await self._call(GET_IDENTIFIER_URL, {"handle": handle})
        return result["identifier"]

    async def get_display_name(self, handle: str) -> str:
        result = await self._call(GET_DISPLAY_NAME_URL, {"handle": handle})
        return result["displayName"]

    async def initialize(
            self,
            handle: str,
            settings: Optional[InfoDictionary] = None,
            host_id: str = ""
    ) -> None:
        """
        Apply settings to a manager instance on behalf of a host

        Args:
            handle: Handle of the manager instance
            settings: Manager settings, primitive values only
            host_id: Identifier of the calling host, used to attribute
                diagnostics emitted by the manager
        """
        await self._call(INITIALIZE_URL, {
            "handle": handle,
            "settings": dict(settings or {}),
            "hostSession": {"id": host_id}
        })

    async def _call(self, url: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        if self.client is None:
            raise RuntimeError("ManagerProxyClient is not connected, use it as an async context manager")

        response = await self.client.post(url, json=payload)
        if response.is_success:
            return response.json()

        raise self._error_from_response(response)

    @staticmethod
    def _error_from_response(response: httpx.Response) -> ManagerProxyError:
        try:
            body = response.json()
        except ValueError:
            body = None
        detail = body.get("detail") if isinstance(body, dict) else None

        if isinstance(detail, dict) and "kind" in detail:
            return error_for_kind(detail.get("kind"), detail.get("error", ""))
        return ManagerProxyError(f"Call failed with status {response.status_code}: {detail or response.text}")
