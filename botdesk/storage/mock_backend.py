"""
Mock Backend for BotDesk.

Implements the ApiBackend protocol on top of a single local JSON file so the
dashboard keeps working while the real server is offline.

Only the routes the dashboard writes through (bots, flows, products, media)
are emulated; every other route answers None.
"""

import asyncio
import copy
import json
import logging
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


DEFAULT_DB: Dict[str, Any] = {
    "bots": [
        {"id": "b1", "name": "Atendimento Geral", "phoneNumber": "5511999990001", "status": "ONLINE",
         "stats": {"conversations": 1240, "sales": 45, "revenue": 4500.00}},
        {"id": "b2", "name": "Recuperação de Carrinho", "phoneNumber": "5511999990002", "status": "PAUSADO",
         "stats": {"conversations": 85, "sales": 12, "revenue": 1200.00}},
    ],
    "products": [
        {"id": "p1", "name": "E-book Master", "description": "Guia completo", "price": 97.90, "type": "PRINCIPAL"},
        {"id": "p2", "name": "Mentoria Express", "description": "Call de 30min", "price": 197.00, "type": "UPSELL"},
    ],
    "media": [],
    "flows": {},  # bot_id -> list of wire nodes
}


def _new_id() -> str:
    return uuid.uuid4().hex[:9]


class MockBackend:
    """
    Local file-based stand-in for the REST server.

    Structure:
    - {db_path}: one JSON document with 'bots', 'products', 'media' and 'flows'
    """

    def __init__(self, db_path: str, latency: float = 0.0):
        self.db_path = Path(db_path)
        self.latency = latency
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    @property
    def backend_type(self) -> str:
        return "mock"

    # --- File I/O ---

    def load_db(self) -> Dict[str, Any]:
        """Load the database, falling back to the seed data when missing or corrupt."""
        if self.db_path.exists():
            try:
                with open(self.db_path, "r", encoding="utf-8") as f:
                    data = json.load(f)
                if isinstance(data, dict):
                    for key, default in DEFAULT_DB.items():
                        if key not in data:
                            data[key] = copy.deepcopy(default)
                        elif not isinstance(data[key], type(default)):
                            logger.warning(f"Mock DB key '{key}' has the wrong type, resetting it")
                            data[key] = copy.deepcopy(default)
                    return data
                logger.warning(f"Mock DB {self.db_path} is not an object, using seed data")
            except Exception as e:
                logger.warning(f"Mock DB corrupted ({self.db_path}): {e}")
        return copy.deepcopy(DEFAULT_DB)

    def save_db(self, db: Dict[str, Any]) -> None:
        with open(self.db_path, "w", encoding="utf-8") as f:
            json.dump(db, f, indent=2, ensure_ascii=False)

    # --- Routing ---

    async def request(self, method: str, endpoint: str, data: Optional[Any] = None) -> Any:
        logger.warning(f"[Mock API] Serving {method} {endpoint} (Backend Offline)")
        if self.latency > 0:
            await asyncio.sleep(self.latency)

        db = self.load_db()
        path = [p for p in endpoint.split('?')[0].strip('/').split('/') if p]
        if not path:
            return None

        if path[0] == 'bots':
            return self._bots(db, method, path, data)
        if path[0] == 'products':
            return self._products(db, method, path, data)
        if path[0] in ('media', 'media-api'):
            return self._media(db, method, path, data)
        return None

    def _bots(self, db: Dict[str, Any], method: str, path: List[str], data: Any) -> Any:
        bots = db["bots"]

        if len(path) == 1:
            if method == 'GET':
                return bots
            if method == 'POST':
                new_bot = dict(data or {})
                new_bot.update({
                    "id": _new_id(),
                    "status": "OFFLINE",
                    "stats": {"conversations": 0, "sales": 0, "revenue": 0},
                })
                bots.append(new_bot)
                self.save_db(db)
                return new_bot
            return None

        bot_id = path[1]
        bot = next((b for b in bots if b.get("id") == bot_id), None)

        if len(path) == 2:
            if method == 'GET':
                return bot
            if method == 'PUT':
                if bot is None:
                    return None
                bot.update(data or {})
                self.save_db(db)
                return bot
            if method == 'DELETE':
                db["bots"] = [b for b in bots if b.get("id") != bot_id]
                self.save_db(db)
                return None
            return None

        if len(path) == 3 and path[2] == 'status' and method == 'PUT':
            if bot is not None:
                bot["status"] = (data or {}).get("status", bot.get("status"))
                self.save_db(db)
            return None

        if len(path) == 3 and path[2] == 'flow':
            if method == 'GET':
                return db["flows"].get(bot_id, [])
            if method == 'POST':
                db["flows"][bot_id] = (data or {}).get("nodes", [])
                self.save_db(db)
                return None

        return None

    def _products(self, db: Dict[str, Any], method: str, path: List[str], data: Any) -> Any:
        products = db["products"]

        if len(path) == 1:
            if method == 'GET':
                return products
            if method == 'POST':
                new_product = dict(data or {})
                new_product["id"] = _new_id()
                products.append(new_product)
                self.save_db(db)
                return new_product
            return None

        product_id = path[1]
        if len(path) == 2 and method == 'GET':
            return next((p for p in products if p.get("id") == product_id), None)

        if len(path) == 2 and method == 'PUT':
            for product in products:
                if product.get("id") == product_id:
                    product.update(data or {})
                    self.save_db(db)
                    return product
            return None

        if len(path) == 2 and method == 'DELETE':
            db["products"] = [p for p in products if p.get("id") != product_id]
            self.save_db(db)
        return None

    def _media(self, db: Dict[str, Any], method: str, path: List[str], data: Any) -> Any:
        if len(path) == 1 and method == 'GET':
            return db["media"]

        if len(path) == 2 and path[1] == 'upload' and method == 'POST':
            name = 'Uploaded File'
            if isinstance(data, dict) and isinstance(data.get('file'), tuple):
                name = data['file'][0] or name
            new_media = {
                "id": _new_id(),
                "url": "https://via.placeholder.com/150",
                "type": "image",
                "name": name,
            }
            db["media"].append(new_media)
            self.save_db(db)
            return new_media

        if len(path) == 2 and method == 'DELETE':
            db["media"] = [m for m in db["media"] if m.get("id") != path[1]]
            self.save_db(db)
        return None
