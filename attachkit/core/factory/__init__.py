"""
Factory modules for creating attachkit components.

Provides factories for content stores and analyser registries.
"""

from attachkit.core.factory.analysis_factory import AnalyserFactory
from attachkit.core.factory.store_factory import ContentStoreFactory

__all__ = [
    "AnalyserFactory",
    "ContentStoreFactory",
]
