"""Single-slot cache of the last successful portal payload."""

import json
import logging
import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Protocol, Union, runtime_checkable

from inflight.tracker.errors import CacheUnavailable
from inflight.tracker.models import CacheEntry, utcnow

logger = logging.getLogger(__name__)

CACHE_KEY = "flightDataCache"


@runtime_checkable
class KeyValueStorage(Protocol):
    """Protocol for persisted string key-value stores."""

    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None. Raises CacheUnavailable on read errors."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store a value. Raises CacheUnavailable on write errors."""
        ...


class MemoryStorage:
    """In-process storage, lost when the process exits."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._values: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value


class JsonFileStorage:
    """Key-value storage backed by one JSON object on disk.

    Writes go to a temporary file that replaces the target, so a reader sees
    either the old or the new document, never a partial one.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()

    def _read_all(self) -> Dict[str, str]:
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, json.JSONDecodeError) as e:
            raise CacheUnavailable(f"Cannot read {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise CacheUnavailable(f"Unexpected content in {self.path}")
        return data

    def get(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        try:
            data = self._read_all()
        except CacheUnavailable:
            # A corrupt file is overwritten rather than blocking every write
            data = {}
        data[key] = value
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=".cache-", suffix=".json")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f)
                os.replace(tmp, self.path)
            except BaseException:
                if os.path.exists(tmp):
                    os.unlink(tmp)
                raise
        except OSError as e:
            raise CacheUnavailable(f"Cannot write {self.path}: {e}") from e


class CacheStore:
    """Persists the last successful payload in one well-known slot.

    The slot is shared by all providers: caching for one provider replaces
    whatever another provider left behind. Freshness is the caller's concern
    (see CacheEntry.is_fresh).
    """

    def __init__(self, storage: Optional[KeyValueStorage] = None, key: str = CACHE_KEY):
        self.storage = storage if storage is not None else MemoryStorage()
        self.key = key

    def put(
        self,
        provider_id: str,
        payload: Dict[str, Any],
        captured_at: Optional[datetime] = None,
    ) -> bool:
        """Store the payload. Returns False if storage failed."""
        entry = CacheEntry(
            provider_id=provider_id,
            payload=payload,
            captured_at=captured_at or utcnow(),
        )
        try:
            self.storage.set(self.key, json.dumps(entry.to_dict()))
        except (CacheUnavailable, TypeError, ValueError) as e:
            logger.warning("Failed to cache flight data for %s: %s", provider_id, e)
            return False
        return True

    def get(
        self, provider_id: Optional[str] = None, now: Optional[datetime] = None
    ) -> Optional[CacheEntry]:
        """Return the stored entry, or None when absent, unreadable or corrupt.

        With provider_id, the entry is only returned if it belongs to that
        provider and is younger than the freshness window at now.
        """
        entry = self._read()
        if entry is None or provider_id is None:
            return entry
        if not entry.is_fresh(provider_id, now):
            logger.debug(
                "Cache entry for %s (age %s) not usable for %s",
                entry.provider_id,
                entry.age(now),
                provider_id,
            )
            return None
        return entry

    def _read(self) -> Optional[CacheEntry]:
        try:
            raw = self.storage.get(self.key)
        except CacheUnavailable as e:
            logger.warning("Failed to read cached flight data: %s", e)
            return None
        if not raw:
            return None
        try:
            return CacheEntry.from_dict(json.loads(raw))
        except (ValueError, KeyError, TypeError) as e:
            logger.warning("Ignoring corrupt cache entry: %s", e)
            return None
