"""
Shared test fixtures for all test modules.
"""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from attachkit.core.analysis import Analyser
from attachkit.core.content_store import InMemoryContentStore
from attachkit.core.host import ObjectHostBinding
from attachkit.services import AttachmentApp


class RecordingStore(InMemoryContentStore):
    """In-memory store that records every call in order."""

    def __init__(self):
        super().__init__()
        self.calls: list[tuple[str, str]] = []

    def store(self, content):
        key = super().store(content)
        self.calls.append(("store", key))
        return key

    def fetch(self, key):
        self.calls.append(("fetch", key))
        return super().fetch(key)

    def destroy(self, key):
        self.calls.append(("destroy", key))
        super().destroy(key)

    def calls_of(self, operation: str) -> list[str]:
        return [key for op, key in self.calls if op == operation]


class CustomAnalyser(Analyser):
    """Analyser with deterministic capabilities used across tests."""

    def mime_type(self, content):
        if content.data == b"WRONG TYPE":
            return "wrong/type"
        if content.data == b"OTHER TYPE":
            return None
        return "how/special"

    def number_of_Gs(self, content):
        return content.data.count(b"G")

    def number_of_As(self, content):
        return content.data.count(b"A")

    def some_analyser_method(self, content):
        return "abc" + content.data[:1].decode()


def _make_item(**slots):
    return SimpleNamespace(**{"preview_image_uid": None, **slots})


@pytest.fixture
def make_item():
    """Factory for host records with the key slot and the given extra attributes."""
    return _make_item


@pytest.fixture
def custom_analyser():
    return CustomAnalyser


@pytest.fixture
def recording_store():
    return RecordingStore()


@pytest.fixture
def log():
    """Logging sink spy."""
    return MagicMock()


@pytest.fixture
def app(recording_store, log):
    """App backed by a recording in-memory store with the custom analyser."""
    app = AttachmentApp(name="images", store=recording_store, log=log)
    app.register_analyser(CustomAnalyser)
    return app


@pytest.fixture
def item():
    """Host record with magic slots for size, name, ext and some_analyser_method."""
    return _make_item(
        preview_image_size=None,
        preview_image_name=None,
        preview_image_ext=None,
        preview_image_some_analyser_method=None,
    )


@pytest.fixture
def attachment(app, item):
    return app.attachment(ObjectHostBinding(item, "preview_image"))
