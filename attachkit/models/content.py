"""
Content models: opaque store keys and in-memory content.
"""

import hashlib
from pathlib import Path, PurePath
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

NAME_HINT_ATTRIBUTES = ("original_filename", "filename", "name")


class ContentKey(str):
    """
    Opaque identifier of one stored blob.

    A plain ``str`` assigned to an attachment is raw data; wrapping it in
    ContentKey marks it as a reference to already-persisted content.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return f"ContentKey({str.__repr__(self)})"


def compute_content_hash(data: bytes) -> str:
    """
    Compute SHA256 hash of raw content.

    Args:
        data: Raw bytes

    Returns:
        Hash string in format "sha256:hexdigest"
    """
    return f"sha256:{hashlib.sha256(data).hexdigest()}"


def _name_hint(source: Any) -> str | None:
    for attribute in NAME_HINT_ATTRIBUTES:
        value = getattr(source, attribute, None)
        if callable(value):
            value = value()
        if isinstance(value, str) and value:
            return PurePath(value).name
    return None


class EphemeralContent(BaseModel):
    """
    Content held in memory: either supplied locally and not yet persisted,
    or fetched from a content store.

    Fields are immutable once constructed. The analysis cache is the only
    mutable part and only ever grows, one entry per distinct analyser.
    """

    model_config = ConfigDict(frozen=True)

    data: bytes = Field(..., description="Raw content bytes")
    name: str | None = Field(default=None, description="Originating filename, e.g. 'hello.png'")

    _analysis_cache: dict[str, Any] = PrivateAttr(default_factory=dict)

    @property
    def size(self) -> int:
        """Content length in bytes."""
        return len(self.data)

    @property
    def ext(self) -> str | None:
        """Extension of the originating filename, without the dot."""
        if not self.name:
            return None
        suffix = PurePath(self.name).suffix
        return suffix[1:] if suffix else None

    @property
    def content_hash(self) -> str:
        return compute_content_hash(self.data)

    @property
    def analysis_cache(self) -> dict[str, Any]:
        """Memoized analyser results for this instance."""
        return self._analysis_cache

    @classmethod
    def from_source(cls, source: Any, name: str | None = None) -> "EphemeralContent":
        """
        Build content from whatever the caller assigned.

        Args:
            source: EphemeralContent, bytes-like, str (UTF-8 encoded), Path,
                or a file-like object with read()
            name: Explicit filename; otherwise taken from the source's
                original_filename / filename / name attribute

        Returns:
            EphemeralContent instance

        Raises:
            TypeError: If the source type is not supported
        """
        if isinstance(source, EphemeralContent):
            if name is None or name == source.name:
                return source
            return cls(data=source.data, name=name)

        if isinstance(source, (bytes, bytearray, memoryview)):
            data = bytes(source)
        elif isinstance(source, str):
            data = source.encode("utf-8")
        elif isinstance(source, Path):
            data = source.read_bytes()
            name = name or source.name
        else:
            reader = source if hasattr(source, "read") else getattr(source, "file", None)
            if reader is None or not hasattr(reader, "read"):
                raise TypeError(f"Cannot build content from {type(source).__name__}")
            raw = reader.read()
            data = raw.encode("utf-8") if isinstance(raw, str) else bytes(raw)

        return cls(data=data, name=name or _name_hint(source))

    def __repr__(self) -> str:
        return f"EphemeralContent(name={self.name!r}, size={self.size})"
