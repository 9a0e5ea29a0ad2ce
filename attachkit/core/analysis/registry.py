"""
Analyser registry.

Open mapping of capability name to callable, resolved at call time. One
registry belongs to one app instance; there is no process-wide registry.
"""

from collections.abc import Callable, Iterable, Mapping
from typing import Any

from attachkit.core.analysis.base import Analyser
from attachkit.models.content import EphemeralContent
from attachkit.utils.logger import get_logger

logger = get_logger(__name__)

AnalyserSource = Analyser | type[Analyser] | Mapping[str, Callable[[EphemeralContent], Any]]


class _Missing:
    """Result of calling a capability that isn't registered."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __str__(self) -> str:
        return ""

    def __repr__(self) -> str:
        return "MISSING"

    def __reduce__(self):
        return "MISSING"


MISSING = _Missing()


class AnalyserRegistry:
    """
    Named analysis capabilities for one app.

    Results are memoized on the EphemeralContent passed to call(), so each
    capability runs at most once per content instance.
    """

    def __init__(self, sources: Iterable[AnalyserSource] = ()):
        self._capabilities: dict[str, Callable[[EphemeralContent], Any]] = {}
        for source in sources:
            self.register(source)

    def register(self, source: AnalyserSource) -> list[str]:
        """
        Add one or more capabilities.

        Args:
            source: Analyser instance, Analyser subclass (instantiated without
                arguments) or mapping of name to callable

        Returns:
            Names registered by this call

        Raises:
            TypeError: If source is none of the supported kinds
        """
        if isinstance(source, type) and issubclass(source, Analyser):
            source = source()

        if isinstance(source, Analyser):
            capabilities = source.capabilities()
        elif isinstance(source, Mapping):
            capabilities = dict(source)
        else:
            raise TypeError(f"Cannot register analyser from {type(source).__name__}")

        for name, function in capabilities.items():
            if not callable(function):
                raise TypeError(f"Analyser capability '{name}' is not callable")
            self._capabilities[name] = function

        names = list(capabilities)
        logger.debug(f"Registered analyser capabilities: {names}")
        return names

    def has(self, name: str) -> bool:
        return name in self._capabilities

    def names(self) -> list[str]:
        return list(self._capabilities)

    def call(self, name: str, content: EphemeralContent) -> Any:
        """
        Compute a property of content.

        Args:
            name: Capability name
            content: Content to analyse

        Returns:
            The (memoized) result, which may be None, or MISSING if no
            capability of that name is registered
        """
        function = self._capabilities.get(name)
        if function is None:
            return MISSING

        cache = content.analysis_cache
        if name not in cache:
            cache[name] = function(content)
        return cache[name]

    def __contains__(self, name: object) -> bool:
        return name in self._capabilities

    def __len__(self) -> int:
        return len(self._capabilities)
