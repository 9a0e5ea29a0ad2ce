"""
Host bindings for attachkit.

- HostBinding: capability interface to one field of a host record
- ObjectHostBinding: attributes of a plain object
- MappingHostBinding: keys of a mutable mapping
"""

from attachkit.core.host.base import HostBinding
from attachkit.core.host.record import MappingHostBinding, ObjectHostBinding

__all__ = [
    "HostBinding",
    "ObjectHostBinding",
    "MappingHostBinding",
]
