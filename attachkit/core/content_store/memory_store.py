"""
In-memory content store, used for tests and ephemeral setups.
"""

import threading

from attachkit.core.content_store.base import ContentStore
from attachkit.models.content import ContentKey, EphemeralContent
from attachkit.utils.exceptions import DataNotFound
from attachkit.utils.id_generator import generate_content_key
from attachkit.utils.logger import get_logger

logger = get_logger(__name__)


class InMemoryContentStore(ContentStore):
    """
    Dict-backed content store.

    Blobs are kept as (data, name) tuples so fetched content never shares an
    analysis cache with the instance that was stored.
    """

    def __init__(self):
        self._blobs: dict[str, tuple[bytes, str | None]] = {}
        self._lock = threading.Lock()

    def store(self, content: EphemeralContent) -> ContentKey:
        key = ContentKey(generate_content_key())
        with self._lock:
            self._blobs[key] = (content.data, content.name)
        logger.debug(f"Stored {content.size} bytes under {key}")
        return key

    def fetch(self, key: str) -> EphemeralContent:
        with self._lock:
            blob = self._blobs.get(key)
        if blob is None:
            raise DataNotFound(f"No content stored under {key}", {"key": key})
        data, name = blob
        return EphemeralContent(data=data, name=name)

    def destroy(self, key: str) -> None:
        with self._lock:
            removed = self._blobs.pop(key, None)
        if removed is None:
            raise DataNotFound(f"No content stored under {key}", {"key": key})
        logger.debug(f"Destroyed {key}")

    def exists(self, key: str) -> bool:
        with self._lock:
            return key in self._blobs

    def keys(self) -> list[str]:
        """Keys currently held, in insertion order."""
        with self._lock:
            return list(self._blobs)

    def __len__(self) -> int:
        with self._lock:
            return len(self._blobs)
