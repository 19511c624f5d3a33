"""HTTP client for the record store gateway."""

import logging
from typing import Any, Dict, Optional

import httpx

from ..config import Settings, get_settings
from ..errors import RemoteError
from ..models.task import RecordId

logger = logging.getLogger(__name__)


class RecordStoreClient:
    """Async client for the record store's collection API.

    Every call returns the decoded JSON envelope. Failures of any kind
    (transport, HTTP status, ``success: false``) raise RemoteError, except
    ``delete`` which reports the store's ``success`` flag as-is.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or get_settings()
        self.base_url = self.settings.store_url.rstrip("/")
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self.settings.http_timeout,
                headers={
                    "X-Project-Id": self.settings.project_id,
                    "X-Api-Key": self.settings.public_key,
                },
                transport=self._transport,
            )
        return self._client

    async def close(self):
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    def _url(self, collection: str, *parts: str) -> str:
        return "/".join([self.base_url, "collections", collection, "records", *parts])

    async def _request(
        self,
        method: str,
        url: str,
        json: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        client = await self._get_client()
        logger.debug(f"{method} {url}")

        try:
            response = await client.request(method, url, json=json)
        except httpx.HTTPError as e:
            logger.error(f"Record store request {method} {url} failed: {e}")
            raise RemoteError(f"Record store unreachable: {e}") from e

        if response.status_code >= 400:
            logger.error(f"Record store {method} {url} returned {response.status_code}")
            raise RemoteError(
                f"Record store returned {response.status_code}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise RemoteError("Record store returned a non-JSON body", status_code=response.status_code) from e
        if not isinstance(payload, dict):
            raise RemoteError("Record store returned an unexpected body", status_code=response.status_code)
        return payload

    @staticmethod
    def _check(payload: Dict[str, Any]) -> Dict[str, Any]:
        if payload.get("success") is False:
            raise RemoteError(payload.get("message") or "Record store reported a failure")
        for result in payload.get("results") or []:
            if isinstance(result, dict) and result.get("success") is False:
                raise RemoteError(result.get("message") or "Record store rejected a record")
        return payload

    async def fetch(self, collection: str, params: Dict[str, Any]) -> Dict[str, Any]:
        """Query a collection.

        Args:
            collection: Collection name
            params: ``fields``, ``where``, ``whereGroups`` and ``orderBy``

        Returns:
            Envelope with the matching records under ``data``
        """
        payload = await self._request("POST", self._url(collection, "query"), json=params)
        return self._check(payload)

    async def get_by_id(self, collection: str, record_id: RecordId) -> Dict[str, Any]:
        """Fetch a single record; the record is under ``data``."""
        payload = await self._request("GET", self._url(collection, str(record_id)))
        return self._check(payload)

    async def create(self, collection: str, params: Dict[str, Any]) -> Dict[str, Any]:
        """Create records. ``params`` is ``{"records": [fields, ...]}``."""
        payload = await self._request("POST", self._url(collection), json=params)
        return self._check(payload)

    async def update(self, collection: str, params: Dict[str, Any]) -> Dict[str, Any]:
        """Update records. Each record must carry its ``Id``."""
        payload = await self._request("PUT", self._url(collection), json=params)
        return self._check(payload)

    async def delete(self, collection: str, params: Dict[str, Any]) -> Dict[str, Any]:
        """Delete records. ``params`` is ``{"RecordIds": [id, ...]}``.

        Returns:
            Envelope whose ``success`` flag tells whether deletion happened
        """
        payload = await self._request("DELETE", self._url(collection), json=params)
        if payload.get("success") is False:
            logger.warning(f"Record store refused to delete {params.get('RecordIds')}: {payload.get('message')}")
        return payload


# Global client instance
_record_store_client: Optional[RecordStoreClient] = None


def get_record_store_client() -> RecordStoreClient:
    """Get the global record store client instance."""
    global _record_store_client
    if _record_store_client is None:
        _record_store_client = RecordStoreClient()
    return _record_store_client


async def close_record_store_client():
    """Close the global record store client."""
    global _record_store_client
    if _record_store_client:
        await _record_store_client.close()
        _record_store_client = None
