"""
HTTP Backend for BotDesk.

Implements the ApiBackend protocol against the real REST server using httpx.
"""

import logging
from typing import Any, Optional

import httpx

from botdesk.storage.protocol import ApiError, BackendOffline

logger = logging.getLogger(__name__)


class HttpBackend:
    """
    REST backend talking JSON to the bot server.

    Uploads are sent as multipart when `data` is a dict carrying a
    'file' tuple of (name, bytes, content_type).
    """

    def __init__(self, base_url: str, timeout: float = 10.0, client: Optional[httpx.AsyncClient] = None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self._client = client

    @property
    def backend_type(self) -> str:
        return "http"

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout)
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def request(self, method: str, endpoint: str, data: Optional[Any] = None) -> Any:
        client = self._get_client()
        kwargs = {}
        if isinstance(data, dict) and isinstance(data.get('file'), tuple):
            kwargs['files'] = {'file': data['file']}
        elif data is not None and method in ('POST', 'PUT'):
            kwargs['json'] = data

        try:
            response = await client.request(method, endpoint, **kwargs)
        except httpx.TransportError as e:
            raise BackendOffline(f"Backend unreachable: {e}", method=method, endpoint=endpoint) from e

        return self._handle_response(response, method, endpoint)

    @staticmethod
    def _handle_response(response: httpx.Response, method: str, endpoint: str) -> Any:
        if not response.is_success:
            message = None
            try:
                body = response.json()
                if isinstance(body, dict):
                    message = body.get('message')
            except ValueError:
                pass
            if not message:
                message = f"API Error: {response.status_code} {response.reason_phrase}"
            logger.warning(f"{method} {endpoint} failed: {message}")
            raise ApiError(message, response.status_code, method=method, endpoint=endpoint)

        if response.status_code == 204 or not response.content:
            return None
        return response.json()
