"""
Factory for creating analyser registries.
"""

from attachkit.config import AnalysisConfig
from attachkit.core.analysis.file_command import FileCommandAnalyser
from attachkit.core.analysis.registry import AnalyserRegistry


class AnalyserFactory:
    """Factory for creating analyser registries from configuration."""

    @staticmethod
    def create(config: AnalysisConfig) -> AnalyserRegistry:
        """
        Create an analyser registry from configuration.

        Args:
            config: Analysis configuration

        Returns:
            Registry with the configured analysers

        Raises:
            ConfigurationError: If the `file` command is requested but not available
        """
        registry = AnalyserRegistry()
        if config.use_file_command:
            registry.register(FileCommandAnalyser(file_command=config.file_command))
        return registry
