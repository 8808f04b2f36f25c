"""
Session store implementations.

Both stores keep the user as a JSON string in the persisted (camelCase)
shape and go through the same parse path on load:
- MemorySessionStore: dict-backed, lives as long as the process
- JsonFileSessionStore: one JSON file per key, replaced atomically
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from modules.auth.models import User
from shared.exceptions import StorageError

logger = logging.getLogger(__name__)

DEFAULT_SESSION_KEY = "user"


def serialize_user(user: User) -> str:
    """Serialize a user to the persisted JSON form."""
    return json.dumps(user.to_record())


def deserialize_user(raw: str | bytes, key: str = DEFAULT_SESSION_KEY) -> Optional[User]:
    """
    Parse a persisted record.

    Returns None (and logs) for anything that is not a valid user record,
    including bytes that are not UTF-8.
    """
    try:
        return User.model_validate_json(raw)
    except UnicodeDecodeError:
        logger.warning("Discarding undecodable session record %r", key)
        return None
    except PydanticValidationError as e:
        logger.warning(
            "Discarding unreadable session record %r: %d validation error(s)",
            key,
            e.error_count(),
        )
        return None


class MemorySessionStore:
    """
    In-process session store.

    Useful for tests and single-run tools; nothing survives a restart
    unless the same ``backend`` dict is handed to a new store.
    """

    def __init__(
        self,
        key: str = DEFAULT_SESSION_KEY,
        backend: Optional[dict[str, str]] = None,
    ):
        self._key = key
        self._backend = backend if backend is not None else {}

    @property
    def key(self) -> str:
        return self._key

    def load(self) -> Optional[User]:
        raw = self._backend.get(self._key)
        if raw is None:
            return None
        return deserialize_user(raw, self._key)

    def save(self, user: User) -> None:
        self._backend[self._key] = serialize_user(user)

    def clear(self) -> None:
        self._backend.pop(self._key, None)


class JsonFileSessionStore:
    """
    File-backed session store.

    The record lives in ``<directory>/<key>.json``. Saves write a temp file
    in the same directory and ``os.replace`` it into place, so a reader
    sees either the old record or the new one.
    """

    def __init__(self, directory: Path | str, key: str = DEFAULT_SESSION_KEY):
        self._directory = Path(directory)
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    @property
    def path(self) -> Path:
        return self._directory / f"{self._key}.json"

    def load(self) -> Optional[User]:
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageError(
                f"Failed to read session: {e}",
                code="SESSION_READ_FAILED",
                details={"path": str(self.path)},
            ) from e
        return deserialize_user(raw, self._key)

    def save(self, user: User) -> None:
        payload = serialize_user(user)
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=self._directory, prefix=f".{self._key}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(payload)
                os.replace(tmp_path, self.path)
            except BaseException:
                Path(tmp_path).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(
                f"Failed to save session: {e}",
                code="SESSION_WRITE_FAILED",
                details={"path": str(self.path)},
            ) from e

    def clear(self) -> None:
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(
                f"Failed to clear session: {e}",
                code="SESSION_CLEAR_FAILED",
                details={"path": str(self.path)},
            ) from e
