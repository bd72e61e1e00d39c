# pathfinder/auth/service.py
"""
Local email/password accounts kept in the flat store.

Records:
  users                -> list of {id, email, name, createdAt, passwordHash}
  session:<token hash> -> {user: {...}, expiresAt}
"""
import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from pydantic import ValidationError

from pathfinder.agents.schemas import User
from pathfinder.auth.hashing import hash_password, verify_password
from pathfinder.auth.sessions import ABSOLUTE_DAYS, absolute_expiry, new_raw_token, session_key
from pathfinder.errors import AuthError
from pathfinder.storage.base import StoragePort

logger = logging.getLogger(__name__)

USERS_KEY = "users"
MIN_PASSWORD_LENGTH = 6


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class AuthService:
    def __init__(self, store: StoragePort, *, session_days: int = ABSOLUTE_DAYS):
        self.store = store
        self.session_days = session_days

    def _find(self, email_norm: str) -> Optional[dict]:
        for record in self.store.get(USERS_KEY, []):
            if record.get("email") == email_norm:
                return record
        return None

    def signup(self, name: str, email: str, password: str) -> User:
        email_norm = normalize_email(email)
        name = (name or "").strip()
        if not name or not email_norm:
            raise AuthError("Name and email are required")
        if self._find(email_norm) is not None:
            raise AuthError("An account with this email already exists")
        if len(password or "") < MIN_PASSWORD_LENGTH:
            raise AuthError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

        user = User(
            id=uuid.uuid4().hex,
            email=email_norm,
            name=name,
            created_at=datetime.now(timezone.utc),
        )
        users = self.store.get(USERS_KEY, [])
        users.append({**user.to_json_dict(), "passwordHash": hash_password(password)})
        self.store.set(USERS_KEY, users)
        logger.info("Registered user %s", user.id)
        return user

    def login(self, email: str, password: str) -> User:
        record = self._find(normalize_email(email))
        if not record or not verify_password(password or "", record.get("passwordHash", "")):
            raise AuthError("Invalid email or password")
        return User.model_validate(record)

    def open_session(self, user: User) -> str:
        raw = new_raw_token()
        self.store.set(
            session_key(raw),
            {
                "user": user.to_json_dict(),
                "expiresAt": absolute_expiry(days=self.session_days).isoformat(),
            },
        )
        return raw

    def user_for_token(self, raw: str | None) -> Optional[User]:
        if not raw:
            return None
        key = session_key(raw)
        record = self.store.get(key)
        if not record:
            return None

        try:
            expires_at = datetime.fromisoformat(record["expiresAt"])
            user = User.model_validate(record["user"])
        except (KeyError, TypeError, ValueError, ValidationError):
            logger.warning("Dropping unreadable session record")
            self.store.remove(key)
            return None

        if expires_at <= datetime.now(timezone.utc):
            self.store.remove(key)
            return None
        return user

    def logout(self, raw: str | None) -> None:
        if raw:
            self.store.remove(session_key(raw))
