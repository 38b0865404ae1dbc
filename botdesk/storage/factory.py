"""
Backend Factory for BotDesk.

Creates the API client based on the resolved configuration.
Handles instantiating HttpBackend, MockBackend, or both chained together.
"""

import logging
from typing import Optional

from botdesk.config import AppConfig, get_app_config
from botdesk.storage.client import ApiClient
from botdesk.storage.http_backend import HttpBackend
from botdesk.storage.mock_backend import MockBackend

logger = logging.getLogger(__name__)


def create_client(config: Optional[AppConfig] = None, force_backend: Optional[str] = None) -> ApiClient:
    """
    Create an API client.

    Args:
        config: Resolved configuration (loaded from config.json/env when None)
        force_backend: Override the configured mode ('auto', 'http' or 'mock')

    Returns:
        ApiClient wired for the selected mode:
        - 'http': real server only, transport failures raise BackendOffline
        - 'mock': local JSON database only
        - 'auto': real server, local JSON database when the server is unreachable
    """
    if config is None:
        config = get_app_config()

    backend_type = force_backend or config.storage_backend

    if backend_type == "mock":
        logger.info(f"Using mock backend at {config.mock_db_path}")
        return ApiClient(MockBackend(config.mock_db_path, latency=config.mock_latency), base_url=config.api_url)

    http = HttpBackend(config.api_url, timeout=config.request_timeout)
    if backend_type == "http":
        logger.info(f"Using HTTP backend at {config.api_url}")
        return ApiClient(http, base_url=config.api_url)

    logger.info(f"Using HTTP backend at {config.api_url} with mock fallback at {config.mock_db_path}")
    return ApiClient(
        http,
        fallback=MockBackend(config.mock_db_path, latency=config.mock_latency),
        base_url=config.api_url,
    )
