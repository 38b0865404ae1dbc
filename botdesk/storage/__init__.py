"""
Storage backend abstraction for BotDesk.

Supports multiple transport backends:
- HttpBackend: The real REST server (default)
- MockBackend: Local JSON database used while the server is offline
"""

from botdesk.storage.protocol import ApiBackend, BackendError, BackendOffline, ApiError
from botdesk.storage.http_backend import HttpBackend
from botdesk.storage.mock_backend import MockBackend
from botdesk.storage.client import ApiClient
from botdesk.storage.factory import create_client

__all__ = [
    'ApiBackend',
    'BackendError',
    'BackendOffline',
    'ApiError',
    'HttpBackend',
    'MockBackend',
    'ApiClient',
    'create_client',
]
