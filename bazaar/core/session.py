"""
Per-visitor session state.

Cart, wishlist, language and the admin flag never touch the database. The
signed session cookie (Starlette ``SessionMiddleware``) only carries a random
session id; the values themselves live server-side in a ``SessionStore``
bucket under that id, as JSON text under a fixed set of keys. Every write
replaces the whole value under its key in one assignment.
"""
import json
import logging
import secrets
import threading
import time
from enum import Enum
from typing import Any, Dict, List, MutableMapping, Optional, Tuple

from pydantic import ValidationError

from bazaar.core.config import SESSION_MAX_AGE
from bazaar.i18n import DEFAULT_LANGUAGE, LANGUAGES
from bazaar.models.schemas import CartLine

logger = logging.getLogger("bazaar.session")
logger.setLevel(logging.INFO)

SESSION_ID = "sid"


class SessionStore:
    """In-process buckets of session values keyed by session id.

    A bucket idle for longer than ``max_age`` seconds is dropped the next time
    its id is presented.
    """

    def __init__(self, max_age: int = SESSION_MAX_AGE):
        self.max_age = max_age
        self._buckets: Dict[str, Tuple[float, Dict[str, str]]] = {}
        self._lock = threading.Lock()

    def bucket(self, sid: str, now: Optional[float] = None) -> Dict[str, str]:
        now = time.time() if now is None else now
        with self._lock:
            entry = self._buckets.get(sid)
            if entry is None or now - entry[0] > self.max_age:
                if entry is not None:
                    logger.info("Dropping idle session bucket")
                values: Dict[str, str] = {}
            else:
                values = entry[1]
            self._buckets[sid] = (now, values)
            return values


store = SessionStore()


def session_for(cookie: MutableMapping[str, Any], backing: Optional[SessionStore] = None) -> "SessionState":
    """Resolve the cookie's session id to its server-side bucket, issuing an id if needed."""
    sid = cookie.get(SESSION_ID)
    if not isinstance(sid, str) or not sid:
        sid = secrets.token_urlsafe(24)
        cookie[SESSION_ID] = sid
    return SessionState((store if backing is None else backing).bucket(sid))


class SessionKey(str, Enum):
    CART = "cart"
    WISHLIST = "wishlist"
    LANGUAGE = "language"
    ADMIN_AUTH = "admin_auth"


class SessionState:
    def __init__(self, storage: MutableMapping[str, Any]):
        self.storage = storage

    def get(self, key: SessionKey) -> Optional[Any]:
        raw = self.storage.get(key.value)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (TypeError, ValueError):
            logger.warning(f"Discarding unreadable session value for {key.value}")
            return None

    def set(self, key: SessionKey, value: Any) -> None:
        self.storage[key.value] = json.dumps(value, ensure_ascii=False)

    def clear(self, key: SessionKey) -> None:
        self.storage.pop(key.value, None)

    # --- typed helpers ---

    def cart_lines(self) -> List[CartLine]:
        lines = []
        stored = self.get(SessionKey.CART)
        if not isinstance(stored, list):
            return []
        for raw in stored:
            try:
                lines.append(CartLine.model_validate(raw))
            except ValidationError:
                continue
        return lines

    def save_cart(self, lines: List[CartLine]) -> None:
        self.set(SessionKey.CART, [line.model_dump(mode="json", by_alias=True) for line in lines])

    def wishlist_ids(self) -> List[str]:
        ids = self.get(SessionKey.WISHLIST)
        if not isinstance(ids, list):
            return []
        return [str(i) for i in ids]

    def save_wishlist(self, ids: List[str]) -> None:
        self.set(SessionKey.WISHLIST, list(ids))

    def language(self) -> str:
        lang = self.get(SessionKey.LANGUAGE)
        return lang if lang in LANGUAGES else DEFAULT_LANGUAGE

    def save_language(self, lang: str) -> None:
        self.set(SessionKey.LANGUAGE, lang)
