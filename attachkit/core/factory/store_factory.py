"""
Factory for creating content store backends.
"""

from attachkit.config import S3Config, StoreConfig
from attachkit.core.content_store.base import ContentStore
from attachkit.core.content_store.filesystem_store import FileSystemContentStore
from attachkit.core.content_store.memory_store import InMemoryContentStore
from attachkit.core.content_store.s3_store import S3ContentStore
from attachkit.utils.exceptions import ConfigurationError


class ContentStoreFactory:
    """Factory for creating content stores from configuration."""

    @staticmethod
    def create(config: StoreConfig, s3: S3Config | None = None) -> ContentStore:
        """
        Create content store from configuration.

        Args:
            config: Store configuration
            s3: S3 configuration (used by the "s3" backend)

        Returns:
            Content store instance

        Raises:
            ConfigurationError: If backend is not supported
        """
        if config.backend == "memory":
            return InMemoryContentStore()
        elif config.backend == "filesystem":
            return FileSystemContentStore(root_path=config.root_path)
        elif config.backend == "s3":
            return S3ContentStore(s3 or S3Config())
        else:
            raise ConfigurationError(f"Unsupported store backend: {config.backend}")
