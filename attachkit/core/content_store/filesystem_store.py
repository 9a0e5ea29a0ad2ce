"""
Filesystem content store.

Each blob lives at <root>/<key> with a JSON sidecar <root>/<key>.meta.json
holding its name. Writes go through a temporary file and an atomic rename,
so concurrent readers never observe a partial blob.
"""

import json
import os
import tempfile
from pathlib import Path

from attachkit.core.content_store.base import ContentStore
from attachkit.models.content import ContentKey, EphemeralContent
from attachkit.utils.exceptions import DataNotFound, StorageError
from attachkit.utils.id_generator import generate_content_key
from attachkit.utils.logger import get_logger

logger = get_logger(__name__)

META_SUFFIX = ".meta.json"


class FileSystemContentStore(ContentStore):
    """
    Content store writing blobs under a root directory.

    Features:
    - Date-partitioned directories (YYYY/MM/DD)
    - Atomic writes
    - Empty directories pruned on destroy
    """

    def __init__(self, root_path: str | Path = "data/attachments"):
        """
        Initialize filesystem store.

        Args:
            root_path: Directory holding all blobs (created if missing)
        """
        self.root_path = Path(root_path)
        self.root_path.mkdir(parents=True, exist_ok=True)
        self._root = self.root_path.resolve()

    def _path_for(self, key: str) -> Path:
        path = (self._root / key).resolve()
        if path == self._root or not path.is_relative_to(self._root) or key.endswith(META_SUFFIX):
            raise DataNotFound(f"Invalid content key: {key}", {"key": key})
        return path

    @staticmethod
    def _meta_path(path: Path) -> Path:
        return path.with_name(path.name + META_SUFFIX)

    @staticmethod
    def _write_atomic(path: Path, payload: bytes) -> None:
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=".tmp-")
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(payload)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def store(self, content: EphemeralContent) -> ContentKey:
        key = ContentKey(generate_content_key())
        path = self._path_for(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            self._write_atomic(self._meta_path(path), json.dumps({"name": content.name}).encode())
            self._write_atomic(path, content.data)
        except OSError as e:
            raise StorageError(f"Failed to store content: {e}", {"key": key}) from e

        logger.debug(f"Stored {content.size} bytes at {path}")
        return key

    def fetch(self, key: str) -> EphemeralContent:
        path = self._path_for(key)
        try:
            data = path.read_bytes()
        except FileNotFoundError as e:
            raise DataNotFound(f"No content stored under {key}", {"key": key}) from e
        except OSError as e:
            raise StorageError(f"Failed to read content {key}: {e}", {"key": key}) from e

        name = None
        meta_path = self._meta_path(path)
        if meta_path.exists():
            try:
                name = json.loads(meta_path.read_text()).get("name")
            except (OSError, ValueError) as e:
                raise StorageError(f"Failed to read metadata for {key}: {e}", {"key": key}) from e

        return EphemeralContent(data=data, name=name)

    def destroy(self, key: str) -> None:
        path = self._path_for(key)
        try:
            path.unlink()
        except FileNotFoundError as e:
            raise DataNotFound(f"No content stored under {key}", {"key": key}) from e
        except OSError as e:
            raise StorageError(f"Failed to destroy content {key}: {e}", {"key": key}) from e

        self._meta_path(path).unlink(missing_ok=True)
        self._prune(path.parent)
        logger.debug(f"Destroyed {path}")

    def exists(self, key: str) -> bool:
        try:
            return self._path_for(key).is_file()
        except DataNotFound:
            return False

    def _prune(self, directory: Path) -> None:
        """Remove empty directories between a blob and the root."""
        while directory != self._root and directory.is_relative_to(self._root):
            try:
                directory.rmdir()
            except OSError:
                # Not empty, or removed by a concurrent destroy
                return
            directory = directory.parent
