"""
Host bindings for plain Python objects and mutable mappings.
"""

from collections.abc import Iterable, MutableMapping
from typing import Any

from attachkit.core.host.base import HostBinding
from attachkit.models.content import ContentKey


def _as_key(value: Any) -> ContentKey | None:
    if value is None or value == "":
        return None
    return value if isinstance(value, ContentKey) else ContentKey(value)


class ObjectHostBinding(HostBinding):
    """
    Binding over object attributes.

    The key lives in <field>_<key_suffix>. Magic slots are the suffixes listed
    in magic_slots or, when magic_slots is None, any <field>_<suffix>
    attribute the record has.
    """

    def __init__(
        self,
        record: Any,
        field: str,
        key_suffix: str = "uid",
        magic_slots: Iterable[str] | None = None,
    ):
        super().__init__(record, field, key_suffix)
        self.magic_slots = set(magic_slots) if magic_slots is not None else None

    def has_magic_attribute(self, suffix: str) -> bool:
        if suffix == self.key_suffix:
            return False
        if self.magic_slots is not None:
            return suffix in self.magic_slots
        return hasattr(self.record, self.slot_name(suffix))

    def read_magic_attribute(self, suffix: str) -> Any:
        return getattr(self.record, self.slot_name(suffix), None)

    def write_magic_attribute(self, suffix: str, value: Any) -> None:
        setattr(self.record, self.slot_name(suffix), value)

    def read_key(self) -> ContentKey | None:
        return _as_key(getattr(self.record, self.slot_name(self.key_suffix), None))

    def write_key(self, key: str | None) -> None:
        setattr(self.record, self.slot_name(self.key_suffix), key)


class MappingHostBinding(HostBinding):
    """
    Binding over a mutable mapping (dict rows, document records).

    Magic slots are the suffixes listed in magic_slots or, when magic_slots is
    None, any <field>_<suffix> key present in the mapping.
    """

    def __init__(
        self,
        record: MutableMapping[str, Any],
        field: str,
        key_suffix: str = "uid",
        magic_slots: Iterable[str] | None = None,
    ):
        super().__init__(record, field, key_suffix)
        self.magic_slots = set(magic_slots) if magic_slots is not None else None

    def has_magic_attribute(self, suffix: str) -> bool:
        if suffix == self.key_suffix:
            return False
        if self.magic_slots is not None:
            return suffix in self.magic_slots
        return self.slot_name(suffix) in self.record

    def read_magic_attribute(self, suffix: str) -> Any:
        return self.record.get(self.slot_name(suffix))

    def write_magic_attribute(self, suffix: str, value: Any) -> None:
        self.record[self.slot_name(suffix)] = value

    def read_key(self) -> ContentKey | None:
        return _as_key(self.record.get(self.slot_name(self.key_suffix)))

    def write_key(self, key: str | None) -> None:
        self.record[self.slot_name(self.key_suffix)] = key
