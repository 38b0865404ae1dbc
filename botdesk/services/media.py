"""
Media library service.

The server is inconsistent about media records (field names, grouping and
mime types vary), so every item goes through normalize_item.
"""

import logging
import re
import uuid
from typing import Any, List

from botdesk.models import MediaItem
from botdesk.storage.client import ApiClient
from botdesk.storage.protocol import BackendError

logger = logging.getLogger(__name__)

IMAGE_EXT = re.compile(r'\.(jpg|jpeg|png|gif|webp|svg|bmp)$', re.IGNORECASE)
AUDIO_EXT = re.compile(r'\.(mp3|wav|ogg|m4a|aac|wma)$', re.IGNORECASE)

NAME_KEYS = ('name', 'fileName', 'filename', 'originalName', 'title')
URL_KEYS = ('url', 'uri', 'src', 'path')


def _first(item: dict, keys) -> str:
    for key in keys:
        value = item.get(key)
        if value:
            return str(value)
    return ''


def normalize_item(item: Any, base_url: str = '') -> MediaItem:
    """Map a raw media record onto MediaItem, inferring the type from mime or extension."""
    if not isinstance(item, dict):
        item = {}

    name = _first(item, NAME_KEYS) or 'Sem Nome'
    url = _first(item, URL_KEYS)
    if url.startswith('/'):
        url = f"{base_url.rstrip('/')}{url}"

    mime = str(item.get('type') or item.get('mime_type') or '').lower()
    if 'image' in mime or IMAGE_EXT.search(name) or IMAGE_EXT.search(url):
        media_type = 'image'
    elif 'audio' in mime or AUDIO_EXT.search(name) or AUDIO_EXT.search(url):
        media_type = 'audio'
    else:
        media_type = 'file'

    item_id = item.get('id')
    return MediaItem(
        id=str(item_id) if item_id else uuid.uuid4().hex,
        name=name,
        type=media_type,
        url=url,
    )


class MediaService:
    def __init__(self, client: ApiClient):
        self.client = client

    async def get_all(self) -> List[MediaItem]:
        """List media. Accepts a plain list or {images, audio, files}; never raises."""
        try:
            response = await self.client.get('/media-api')
        except BackendError as e:
            logger.error(f"Failed to load media: {e}")
            return []

        if isinstance(response, list):
            raw = response
        elif isinstance(response, dict):
            raw = []
            for key in ('images', 'audio', 'files'):
                group = response.get(key)
                if isinstance(group, list):
                    raw.extend(group)
        else:
            raw = []

        return [normalize_item(item, self.client.base_url) for item in raw]

    async def upload(self, name: str, content: bytes, content_type: str = 'application/octet-stream') -> MediaItem:
        response = await self.client.post('/media/upload', {'file': (name, content, content_type)})
        return normalize_item(response, self.client.base_url)

    async def delete(self, media_id: str) -> None:
        await self.client.delete(f'/media/{media_id}')
