"""
Main NiceGUI application for BotDesk.

Wires configuration, the API client (real server with local mock fallback)
and the services into the dashboard pages, then starts the UI server.
"""

import logging
import os
import sys

from dotenv import load_dotenv
from nicegui import app, ui

load_dotenv()

from botdesk.config import get_app_config
from botdesk.pages import register_pages
from botdesk.paths import ensure_db_dir
from botdesk.services import Services
from botdesk.storage import create_client

logging.basicConfig(
    level=os.environ.get('BOTDESK_LOG_LEVEL', 'INFO').upper(),
    format='%(asctime)s %(levelname)s %(name)s: %(message)s',
)
logger = logging.getLogger(__name__)

# Ensure required directories exist on startup
ensure_db_dir()

config = get_app_config()
client = create_client(config)
services = Services.create(client)
logger.info(f"BotDesk backend: {client.backend_type} ({config.api_url})")

# Global Styles
ui.add_head_html('''
    <style>
        ::-webkit-scrollbar {
            width: 8px;
            height: 8px;
        }
        ::-webkit-scrollbar-track {
            background: transparent;
        }
        ::-webkit-scrollbar-thumb {
            background: #475569; /* slate-600 */
            border-radius: 9999px;
        }
        ::-webkit-scrollbar-thumb:hover {
            background: #334155; /* slate-700 */
        }
    </style>
''', shared=True)

register_pages(services)


async def _close_client():
    await client.aclose()

app.on_shutdown(_close_client)


if __name__ in {"__main__", "__mp_main__"}:
    ui.run(
        title='BotDesk',
        port=int(os.environ.get('BOTDESK_PORT', 8081)),
        reload=not getattr(sys, 'frozen', False),
        dark=True,
    )
