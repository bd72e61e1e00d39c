## Session token utilities

import hashlib
import secrets
from datetime import datetime, timedelta, timezone

SESSION_COOKIE_NAME = "pf_session"
SESSION_KEY_PREFIX = "session:"
ABSOLUTE_DAYS = 7


def new_raw_token() -> str:
    return secrets.token_urlsafe(32)


def hash_token(raw: str) -> str:
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()


def session_key(raw: str) -> str:
    # only the hash is ever stored
    return SESSION_KEY_PREFIX + hash_token(raw)


def absolute_expiry(now: datetime | None = None, days: int = ABSOLUTE_DAYS) -> datetime:
    now = now or datetime.now(timezone.utc)
    return now + timedelta(days=days)
