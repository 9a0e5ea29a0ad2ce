"""
Abstract base for analysers.

An analyser groups named capabilities that derive a property (mime type,
dimensions, custom metrics) from raw content.
"""

import inspect
from collections.abc import Callable
from typing import Any

from attachkit.models.content import EphemeralContent


class Analyser:
    """
    Base class for analysers.

    Every public method defined on a subclass is a capability: it receives an
    EphemeralContent and returns the derived value, or None when unknown.

    Example:
        class TextAnalyser(Analyser):
            def line_count(self, content):
                return content.data.count(b"\\n")
    """

    def capabilities(self) -> dict[str, Callable[[EphemeralContent], Any]]:
        """
        Collect the capabilities this analyser provides.

        Returns:
            Mapping of capability name to bound method
        """
        base_names = set(dir(Analyser))
        found = {}
        for name, member in inspect.getmembers(type(self), callable):
            if name.startswith("_") or name in base_names:
                continue
            found[name] = getattr(self, name)
        return found
