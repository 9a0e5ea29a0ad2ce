"""
Tests for FileCommandAnalyser.

Integration tests run the real `file` command and are skipped when it
isn't installed.
"""

import shutil
import subprocess
from unittest.mock import patch

import pytest

from attachkit.core.analysis import AnalyserRegistry, FileCommandAnalyser
from attachkit.models import EphemeralContent
from attachkit.utils.exceptions import AnalysisError, ConfigurationError

PNG_HEADER = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01\x08\x02\x00\x00\x00"


class TestFileCommandAnalyser:
    """Unit tests with a mocked subprocess."""

    def test_missing_command(self):
        with patch("attachkit.core.analysis.file_command.shutil.which", return_value=None):
            with pytest.raises(ConfigurationError):
                FileCommandAnalyser()

    def test_explicit_command(self):
        assert FileCommandAnalyser(file_command="/opt/bin/file").file_command == "/opt/bin/file"

    def test_mime_type_pipes_data(self):
        analyser = FileCommandAnalyser(file_command="/usr/bin/file")
        completed = subprocess.CompletedProcess(args=[], returncode=0, stdout=b"image/png\n", stderr=b"")

        with patch("attachkit.core.analysis.file_command.subprocess.run", return_value=completed) as run:
            result = analyser.mime_type(EphemeralContent(data=PNG_HEADER))

        assert result == "image/png"
        args, kwargs = run.call_args
        assert args[0] == ["/usr/bin/file", "-b", "--mime-type", "-"]
        assert kwargs["input"] == PNG_HEADER

    def test_non_zero_exit(self):
        analyser = FileCommandAnalyser(file_command="/usr/bin/file")
        completed = subprocess.CompletedProcess(args=[], returncode=1, stdout=b"", stderr=b"boom")

        with patch("attachkit.core.analysis.file_command.subprocess.run", return_value=completed):
            with pytest.raises(AnalysisError) as exc_info:
                analyser.mime_type(EphemeralContent(data=b"x"))

        assert exc_info.value.context == {"stderr": "boom"}

    def test_command_cannot_run(self):
        analyser = FileCommandAnalyser(file_command="/nonexistent/file")

        with pytest.raises(AnalysisError):
            analyser.mime_type(EphemeralContent(data=b"x"))

    def test_registers_mime_type_capability(self):
        registry = AnalyserRegistry([FileCommandAnalyser(file_command="/usr/bin/file")])

        assert registry.names() == ["mime_type"]


@pytest.mark.integration
@pytest.mark.skipif(shutil.which("file") is None, reason="`file` command not installed")
class TestFileCommandAnalyserIntegration:
    """Integration tests against the real `file` command."""

    def test_png(self):
        assert FileCommandAnalyser().mime_type(EphemeralContent(data=PNG_HEADER)) == "image/png"

    def test_plain_text(self):
        assert FileCommandAnalyser().mime_type(EphemeralContent(data=b"hello world\n")) == "text/plain"
