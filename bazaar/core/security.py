"""
Admin gate.

A single shared password opens the admin area for ADMIN_SESSION_HOURS. The
flag lives in the client-held session with its creation time and is dropped
lazily the first time it is read after expiry. This is deliberately the weak
scheme the storefront has always had (no hashing, no per-admin identity).
"""
import time
from typing import Optional

from bazaar.core.config import ADMIN_PASSWORD, ADMIN_SESSION_HOURS
from bazaar.core.session import SessionKey, SessionState

ADMIN_SESSION_MS = ADMIN_SESSION_HOURS * 60 * 60 * 1000


def now_ms() -> int:
    return int(time.time() * 1000)


def verify_admin_password(password: str) -> bool:
    return password == ADMIN_PASSWORD


def set_admin_auth(session: SessionState, at: Optional[int] = None) -> dict:
    auth = {"isAdmin": True, "timestamp": now_ms() if at is None else at}
    session.set(SessionKey.ADMIN_AUTH, auth)
    return auth


def get_admin_auth(session: SessionState, at: Optional[int] = None) -> Optional[dict]:
    auth = session.get(SessionKey.ADMIN_AUTH)
    if not isinstance(auth, dict):
        return None
    try:
        timestamp = int(auth["timestamp"])
    except (KeyError, TypeError, ValueError):
        return None
    current = now_ms() if at is None else at
    if current - timestamp > ADMIN_SESSION_MS:
        session.clear(SessionKey.ADMIN_AUTH)
        return None
    return auth


def clear_admin_auth(session: SessionState) -> None:
    session.clear(SessionKey.ADMIN_AUTH)
