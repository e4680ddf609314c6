"""An in-memory translation cache with optional JSON persistence."""

import hashlib
import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def calculate_checksum(text: str, target_language: str) -> str:
    """Calculate the SHA-256 checksum identifying a text in a target language."""
    return hashlib.sha256(f"{target_language}\x00{text}".encode()).hexdigest()


class TranslationCache:
    """Remembers provider results so unchanged text is never translated twice."""

    def __init__(self, entries: dict[str, str] | None = None) -> None:
        """Initialize the cache, optionally pre-populated with checksum-keyed entries."""
        self._entries: dict[str, str] = dict(entries or {})

    def __len__(self) -> int:
        """Return the number of cached translations."""
        return len(self._entries)

    def get(self, text: str, target_language: str) -> str | None:
        """Return the cached translation of `text`, or None on a miss."""
        return self._entries.get(calculate_checksum(text, target_language))

    def put(self, text: str, target_language: str, translated: str) -> None:
        """Store a translation."""
        self._entries[calculate_checksum(text, target_language)] = translated

    def clear(self) -> None:
        """Drop every cached translation."""
        self._entries.clear()

    @classmethod
    def load(cls, cache_path: Path) -> "TranslationCache":
        """
        Safely load a cache from a JSON file.

        A missing or unreadable file yields an empty cache rather than an error.
        """
        logger.debug("Loading translation cache from: %s", cache_path)
        if not cache_path.exists():
            logger.debug("Cache file not found.")
            return cls()
        try:
            with cache_path.open("rb") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError):
            logger.warning("Could not read or parse cache file at %s.", cache_path)
            return cls()
        if not isinstance(data, dict):
            logger.warning("Ignoring cache file at %s: expected a JSON object.", cache_path)
            return cls()
        entries = {str(key): str(value) for key, value in data.items()}
        logger.debug("Loaded %d cached translations.", len(entries))
        return cls(entries)

    def save(self, cache_path: Path) -> None:
        """Write the cache to a JSON file, creating parent directories as needed."""
        cache_path.parent.mkdir(parents=True, exist_ok=True)
        with cache_path.open("w", encoding="utf-8") as f:
            json.dump(self._entries, f, ensure_ascii=False, indent=2, sort_keys=True)
        logger.debug("Saved %d cached translations to %s.", len(self._entries), cache_path)
