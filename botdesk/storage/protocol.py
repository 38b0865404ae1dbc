"""
ApiBackend Protocol Definition.

This module defines the abstract interface that all transport backends must implement.
Both HttpBackend (REST server) and MockBackend (local JSON database) conform to this protocol.
"""

from typing import Protocol, Any, Optional, runtime_checkable


class BackendError(Exception):
    """Base error for anything that goes wrong talking to a backend."""
    def __init__(self, message: str, method: str = "", endpoint: str = ""):
        self.method = method
        self.endpoint = endpoint
        super().__init__(message)


class BackendOffline(BackendError):
    """The backend could not be reached (connection refused, timeout, DNS)."""


class ApiError(BackendError):
    """The backend answered with a non-2xx status."""
    def __init__(self, message: str, status_code: int, method: str = "", endpoint: str = ""):
        self.status_code = status_code
        super().__init__(message, method=method, endpoint=endpoint)


@runtime_checkable
class ApiBackend(Protocol):
    """
    Abstract protocol for transport backends.

    A backend answers REST-style requests addressed by method and endpoint path.
    """

    @property
    def backend_type(self) -> str:
        """Return the backend type identifier ('http' or 'mock')."""
        ...

    async def request(self, method: str, endpoint: str, data: Optional[Any] = None) -> Any:
        """
        Perform a request.

        Args:
            method: 'GET', 'POST', 'PUT' or 'DELETE'
            endpoint: Path starting with '/', e.g. '/bots/b1/flow'
            data: JSON-serializable body, or a dict with a 'file' tuple for uploads

        Returns:
            Decoded JSON response, or None for empty responses

        Raises:
            BackendOffline: transport failure
            ApiError: non-2xx response
        """
        ...
