"""
Content analysis for attachkit.

- Analyser: base class whose public methods are capabilities
- AnalyserRegistry: per-app mapping of capability name to callable
- FileCommandAnalyser: mime_type via the `file` command
- MISSING: result for capabilities that aren't registered
"""

from attachkit.core.analysis.base import Analyser
from attachkit.core.analysis.file_command import FileCommandAnalyser
from attachkit.core.analysis.registry import MISSING, AnalyserRegistry

__all__ = [
    "Analyser",
    "AnalyserRegistry",
    "FileCommandAnalyser",
    "MISSING",
]
