"""
client/session.py
Client-side session state: the current token and user, behind a
pluggable key-value store.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Protocol

logger = logging.getLogger(__name__)

TOKEN_KEY = "token"
USER_KEY = "user"


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...
    def set(self, key: str, value: str) -> None: ...
    def delete(self, key: str) -> None: ...


class MemoryStore:
    def __init__(self):
        self._data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileStore:
    """Persists keys to a single JSON file so a session survives restarts."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable session file %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data), encoding="utf-8")

    def get(self, key: str) -> Optional[str]:
        value = self._load().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def delete(self, key: str) -> None:
        data = self._load()
        if data.pop(key, None) is not None:
            self._save(data)


@dataclass
class Session:
    token: str
    user: dict

    @property
    def is_admin(self) -> bool:
        return self.user.get("role") == "ADMIN"


class SessionProvider:
    """
    current_session() → Session | None
    establish(token, user) persists both
    clear() drops both

    A token without a readable user (or the reverse) counts as no session.
    """

    def __init__(self, store: Optional[KeyValueStore] = None):
        self.store = store or MemoryStore()

    def current_session(self) -> Optional[Session]:
        token = self.store.get(TOKEN_KEY)
        raw_user = self.store.get(USER_KEY)
        if not token or not raw_user:
            return None
        try:
            user = json.loads(raw_user)
        except ValueError:
            logger.warning("Stored session user is corrupt; clearing session")
            self.clear()
            return None
        if not isinstance(user, dict):
            self.clear()
            return None
        return Session(token=token, user=user)

    def establish(self, token: str, user: dict) -> Session:
        self.store.set(TOKEN_KEY, token)
        self.store.set(USER_KEY, json.dumps(user))
        return Session(token=token, user=user)

    def clear(self) -> None:
        self.store.delete(TOKEN_KEY)
        self.store.delete(USER_KEY)
