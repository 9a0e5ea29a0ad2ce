"""
Content store implementations for attachkit.

Provides abstract base and concrete implementations for blob storage.

Available backends:
- InMemoryContentStore: Process-local, for tests and ephemeral use
- FileSystemContentStore: Blobs under a local directory
- S3ContentStore: S3 / S3-compatible object storage
"""

from attachkit.core.content_store.base import ContentStore
from attachkit.core.content_store.filesystem_store import FileSystemContentStore
from attachkit.core.content_store.memory_store import InMemoryContentStore
from attachkit.core.content_store.s3_store import S3ContentStore

__all__ = [
    "ContentStore",
    "InMemoryContentStore",
    "FileSystemContentStore",
    "S3ContentStore",
]
