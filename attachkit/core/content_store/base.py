"""
Base interface for content storage.

Key-addressed persistence of binary blobs. Backends own durability and retry
policy; this layer never retries.
"""

from abc import ABC, abstractmethod

from attachkit.models.content import ContentKey, EphemeralContent
from attachkit.utils.exceptions import DataNotFound


class ContentStore(ABC):
    """
    Abstract base class for content store implementations.

    Implementations must be safe for concurrent operations on distinct keys.
    Concurrent mutation of the same key is undefined unless a backend says
    otherwise.
    """

    @abstractmethod
    def store(self, content: EphemeralContent) -> ContentKey:
        """
        Persist content and return its key.

        Args:
            content: Content to persist

        Returns:
            Newly issued ContentKey

        Raises:
            StorageError: If the backend fails to write
        """
        pass

    @abstractmethod
    def fetch(self, key: str) -> EphemeralContent:
        """
        Load content by key.

        Args:
            key: Content key

        Returns:
            EphemeralContent with the stored data and name

        Raises:
            DataNotFound: If the key is unknown or the blob is missing
            StorageError: If the backend fails to read
        """
        pass

    @abstractmethod
    def destroy(self, key: str) -> None:
        """
        Delete content by key.

        Args:
            key: Content key

        Raises:
            DataNotFound: If the key is unknown
            StorageError: If the backend fails to delete
        """
        pass

    def exists(self, key: str) -> bool:
        """
        Check whether a key is held by the store.

        Default implementation fetches the blob. Override when the backend
        can answer more cheaply.
        """
        try:
            self.fetch(key)
        except DataNotFound:
            return False
        return True

    def close(self) -> None:
        """
        Release any open resources.

        Optional to override if the backend needs cleanup.
        """
        pass
