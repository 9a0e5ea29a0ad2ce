"""MIME type detection through the `file` command."""

import shutil
import subprocess

from attachkit.core.analysis.base import Analyser
from attachkit.models.content import EphemeralContent
from attachkit.utils.exceptions import AnalysisError, ConfigurationError


class FileCommandAnalyser(Analyser):
    """Pipes content into `file -b --mime-type -`."""

    def __init__(self, file_command: str | None = None, timeout: float = 10.0):
        """
        Args:
            file_command: Path to the `file` binary (default: found on PATH)
            timeout: Seconds to wait for the command
        """
        self.file_command = file_command or shutil.which("file")
        if not self.file_command:
            raise ConfigurationError("The `file` command was not found on PATH")
        self.timeout = timeout

    def mime_type(self, content: EphemeralContent) -> str | None:
        try:
            result = subprocess.run(
                [self.file_command, "-b", "--mime-type", "-"],
                input=content.data,
                capture_output=True,
                timeout=self.timeout,
                check=False,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            raise AnalysisError(f"Failed to run {self.file_command}: {e}") from e

        if result.returncode != 0:
            raise AnalysisError(
                f"{self.file_command} exited with status {result.returncode}",
                {"stderr": result.stderr.decode(errors="replace").strip()},
            )
        return result.stdout.decode().strip() or None
