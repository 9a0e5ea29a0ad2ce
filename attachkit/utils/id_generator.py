"""
ID generation utilities for attachkit.

Content keys are date-partitioned so filesystem and object-store backends
spread blobs across directories/prefixes:
- Content keys: YYYY/MM/DD/xxx
- S3 object keys: prefix/YYYY/MM/DD/hash-xxx
"""

from datetime import datetime
from uuid import uuid4


def generate_content_key(now: datetime | None = None) -> str:
    """
    Generate a unique content key.

    Args:
        now: Timestamp used for the date partition (default: current time)

    Returns:
        Key in format "YYYY/MM/DD/xxx" where xxx is 12 hex characters
    """
    now = now or datetime.now()
    return f"{now:%Y/%m/%d}/{uuid4().hex[:12]}"


def generate_object_key(prefix: str, content_hash: str, now: datetime | None = None) -> str:
    """
    Generate an object-store key carrying a content hash fragment.

    Args:
        prefix: Key prefix (e.g. "attachments"); empty for none
        content_hash: Hash string, optionally prefixed with "sha256:"
        now: Timestamp used for the date partition

    Returns:
        Key in format "prefix/YYYY/MM/DD/<hash16>-xxx"
    """
    digest = content_hash.split(":", 1)[-1][:16]
    date_key, unique = generate_content_key(now).rsplit("/", 1)
    key = f"{date_key}/{digest}-{unique}"
    prefix = prefix.strip("/")
    return f"{prefix}/{key}" if prefix else key
