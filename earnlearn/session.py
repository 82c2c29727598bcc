"""Auth token storage and the per-session request context."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from earnlearn.exceptions import MissingTokenError

logger = logging.getLogger(__name__)

TOKEN_KEY = "token"


class MemoryTokenStore:
    """Key/value storage that lives as long as the process."""

    def __init__(self, token: Optional[str] = None):
        self._data: dict[str, str] = {}
        if token:
            self._data[TOKEN_KEY] = token

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class FileTokenStore:
    """
    Persistent key/value storage backed by a JSON file.

    The file holds a flat object, e.g. ``{"token": "eyJ..."}``. A missing or
    unreadable file is treated as empty storage.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path).expanduser()

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text())
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable token storage %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data))

    def get(self, key: str) -> Optional[str]:
        value = self._read().get(key)
        return str(value) if value else None

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)


class Session:
    """
    The authenticated identity used for every outgoing request.

    Built once at session start and handed to the client, so several sessions
    can coexist in one process.
    """

    def __init__(self, store=None):
        self.store = store if store is not None else MemoryTokenStore()

    @classmethod
    def with_token(cls, token: str) -> Session:
        return cls(MemoryTokenStore(token))

    @classmethod
    def from_config(cls, config) -> Session:
        """Session persisted in the config's token file."""
        return cls(FileTokenStore(config.token_file))

    @property
    def token(self) -> Optional[str]:
        return self.store.get(TOKEN_KEY)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def login(self, token: str) -> None:
        self.store.set(TOKEN_KEY, token)

    def logout(self) -> None:
        self.store.remove(TOKEN_KEY)

    def auth_headers(self) -> dict[str, str]:
        """Bearer header for the stored token; raises if there is none."""
        token = self.token
        if not token:
            raise MissingTokenError()
        return {"Authorization": f"Bearer {token}"}
