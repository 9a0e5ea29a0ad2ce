"""
Host capability interface.

A HostBinding connects one attachment to one field of a host record: where
the content key is persisted and which magic attribute slots exist. The core
never assumes anything about the persistence technology behind it.
"""

from abc import ABC, abstractmethod
from typing import Any


class HostBinding(ABC):
    """Abstract binding between an attachment and one field of a host record."""

    def __init__(self, record: Any, field: str, key_suffix: str = "uid"):
        """
        Args:
            record: Host record
            field: Attachment field name, e.g. "preview_image"
            key_suffix: Suffix of the slot holding the content key
        """
        self.record = record
        self.field = field
        self.key_suffix = key_suffix

    def slot_name(self, suffix: str) -> str:
        """Host slot name for a suffix: <field>_<suffix>."""
        return f"{self.field}_{suffix}"

    @abstractmethod
    def has_magic_attribute(self, suffix: str) -> bool:
        """Whether the host exposes a <field>_<suffix> slot."""
        pass

    @abstractmethod
    def read_magic_attribute(self, suffix: str) -> Any:
        pass

    @abstractmethod
    def write_magic_attribute(self, suffix: str, value: Any) -> None:
        pass

    @abstractmethod
    def read_key(self) -> str | None:
        """Content key currently persisted on the host, or None."""
        pass

    @abstractmethod
    def write_key(self, key: str | None) -> None:
        pass
