"""
Configuration management for BotDesk.

Handles persistent configuration including:
- Backend API url and storage mode (http / mock / auto)
- Local mock database location and simulated latency

Config is stored in config.json next to the executable/project root.
Environment variables take priority over the file.
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from botdesk.paths import get_config_path, get_default_mock_db_path

DEFAULT_API_URL = "http://localhost:3001"
DEFAULT_STORAGE_BACKEND = "auto"
DEFAULT_MOCK_LATENCY = 0.6
DEFAULT_REQUEST_TIMEOUT = 10.0

STORAGE_BACKENDS = ("auto", "http", "mock")

ENV_API_URL = "BOTDESK_API_URL"
ENV_STORAGE_BACKEND = "BOTDESK_STORAGE_BACKEND"


@dataclass
class AppConfig:
    """Resolved runtime configuration."""
    api_url: str = DEFAULT_API_URL
    storage_backend: str = DEFAULT_STORAGE_BACKEND
    mock_db_path: str = ""
    mock_latency: float = DEFAULT_MOCK_LATENCY
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT


def load_config(config_path: Optional[Union[str, Path]] = None) -> dict:
    """Load configuration from config.json."""
    config_path = Path(config_path) if config_path else get_config_path()
    if config_path.exists():
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
                return data if isinstance(data, dict) else {}
        except (json.JSONDecodeError, IOError):
            return {}
    return {}


def save_config(config: dict, config_path: Optional[Union[str, Path]] = None) -> None:
    """Save configuration to config.json."""
    config_path = Path(config_path) if config_path else get_config_path()
    with open(config_path, 'w', encoding='utf-8') as f:
        json.dump(config, f, indent=2)


def get_api_url(config: Optional[dict] = None) -> str:
    """
    Get the backend base url.

    Priority:
    1. Environment variable BOTDESK_API_URL
    2. Stored in config.json
    3. http://localhost:3001
    """
    env_url = os.environ.get(ENV_API_URL)
    if env_url:
        return env_url.rstrip('/')

    if config is None:
        config = load_config()
    return (config.get("api_url") or DEFAULT_API_URL).rstrip('/')


def get_storage_backend(config: Optional[dict] = None) -> str:
    """Get the storage mode ('auto', 'http' or 'mock'). Unknown values fall back to 'auto'."""
    backend = os.environ.get(ENV_STORAGE_BACKEND)
    if not backend:
        if config is None:
            config = load_config()
        backend = config.get("storage_backend", DEFAULT_STORAGE_BACKEND)
    backend = str(backend).strip().lower()
    return backend if backend in STORAGE_BACKENDS else DEFAULT_STORAGE_BACKEND


def set_api_url(api_url: str, config_path: Optional[Union[str, Path]] = None) -> None:
    """Save the backend url to config.json."""
    config = load_config(config_path)
    config["api_url"] = api_url
    save_config(config, config_path)


def get_app_config(config_path: Optional[Union[str, Path]] = None) -> AppConfig:
    """Merge defaults, config.json and environment into an AppConfig."""
    config = load_config(config_path)

    def _float(key: str, default: float) -> float:
        try:
            return float(config.get(key, default))
        except (TypeError, ValueError):
            return default

    return AppConfig(
        api_url=get_api_url(config),
        storage_backend=get_storage_backend(config),
        mock_db_path=config.get("mock_db_path") or str(get_default_mock_db_path()),
        mock_latency=_float("mock_latency", DEFAULT_MOCK_LATENCY),
        request_timeout=_float("request_timeout", DEFAULT_REQUEST_TIMEOUT),
    )
