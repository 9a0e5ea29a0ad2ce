"""
Tests for ID generation utilities.

Tests cover:
1. Content key generation
2. Object key generation
3. Uniqueness guarantees
"""

from datetime import datetime

from attachkit.utils import generate_content_key, generate_object_key


class TestGenerateContentKey:
    """Tests for content key generation."""

    def test_format(self):
        """Test content key format: YYYY/MM/DD/xxx (12 hex chars)."""
        key = generate_content_key(datetime(2024, 3, 7))

        assert key.startswith("2024/03/07/")
        unique = key.rsplit("/", 1)[1]
        assert len(unique) == 12
        int(unique, 16)

    def test_defaults_to_today(self):
        """Test the date partition defaults to the current date."""
        key = generate_content_key()

        assert key.startswith(datetime.now().strftime("%Y/%m/%d/"))

    def test_uniqueness(self):
        """Test that generated keys are unique."""
        keys = [generate_content_key() for _ in range(1000)]
        assert len(keys) == len(set(keys))


class TestGenerateObjectKey:
    """Tests for object-store key generation."""

    def test_format(self):
        """Test object key format: prefix/YYYY/MM/DD/<hash16>-xxx."""
        key = generate_object_key("attachments", "sha256:" + "a" * 64, datetime(2024, 3, 7))

        assert key.startswith("attachments/2024/03/07/" + "a" * 16 + "-")
        assert len(key.rsplit("-", 1)[1]) == 12

    def test_prefix_slashes_are_normalized(self):
        key = generate_object_key("/media/", "b" * 64, datetime(2024, 1, 1))

        assert key.startswith("media/2024/01/01/" + "b" * 16)

    def test_empty_prefix(self):
        key = generate_object_key("", "c" * 64, datetime(2024, 1, 1))

        assert key.startswith("2024/01/01/")

    def test_uniqueness(self):
        """Test identical content still gets distinct keys."""
        keys = [generate_object_key("p", "sha256:abc") for _ in range(100)]
        assert len(keys) == len(set(keys))
