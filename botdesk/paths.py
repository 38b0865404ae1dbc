"""
Filesystem locations for BotDesk's local data.

The mock database (db/) and config.json sit beside the project checkout, or
beside the executable in a PyInstaller build. BOTDESK_HOME moves both
elsewhere, which the tests and multi-instance setups use.
"""

import os
import sys
from pathlib import Path

ENV_HOME = "BOTDESK_HOME"

DB_DIRNAME = "db"
CONFIG_FILENAME = "config.json"
MOCK_DB_FILENAME = "mock_db.json"


def get_app_dir() -> Path:
    """Directory that holds db/ and config.json."""
    home = os.environ.get(ENV_HOME)
    if home:
        return Path(home).expanduser()
    if getattr(sys, 'frozen', False):
        return Path(sys.executable).parent
    return Path(__file__).resolve().parent.parent


def get_db_dir() -> Path:
    return get_app_dir() / DB_DIRNAME


def get_config_path() -> Path:
    return get_app_dir() / CONFIG_FILENAME


def get_default_mock_db_path() -> Path:
    return get_db_dir() / MOCK_DB_FILENAME


def ensure_db_dir() -> Path:
    """Create db/ if missing and return it."""
    db_dir = get_db_dir()
    db_dir.mkdir(parents=True, exist_ok=True)
    return db_dir
