"""
API client with offline fallback.

Every request goes to the primary backend first. When the primary cannot be
reached and a fallback backend is configured, the request is served by the
fallback instead, so the dashboard stays usable with the server down.
"""

import logging
from typing import Any, Optional

from botdesk.storage.protocol import ApiBackend, BackendOffline

logger = logging.getLogger(__name__)


class ApiClient:
    """REST-style facade used by every service."""

    def __init__(self, primary: ApiBackend, fallback: Optional[ApiBackend] = None, base_url: str = ""):
        self.primary = primary
        self.fallback = fallback
        self.base_url = base_url.rstrip('/')

    @property
    def backend_type(self) -> str:
        if self.fallback is not None:
            return f"{self.primary.backend_type}+{self.fallback.backend_type}"
        return self.primary.backend_type

    async def request(self, method: str, endpoint: str, data: Optional[Any] = None) -> Any:
        try:
            return await self.primary.request(method, endpoint, data)
        except BackendOffline as e:
            if self.fallback is None:
                raise
            logger.warning(f"{method} {endpoint}: {e}; serving from {self.fallback.backend_type} backend")
            return await self.fallback.request(method, endpoint, data)

    async def get(self, endpoint: str) -> Any:
        return await self.request('GET', endpoint)

    async def post(self, endpoint: str, data: Any = None) -> Any:
        return await self.request('POST', endpoint, data)

    async def put(self, endpoint: str, data: Any = None) -> Any:
        return await self.request('PUT', endpoint, data)

    async def delete(self, endpoint: str) -> Any:
        return await self.request('DELETE', endpoint)

    async def aclose(self) -> None:
        for backend in (self.primary, self.fallback):
            close = getattr(backend, 'aclose', None)
            if close is not None:
                await close()
