"""
Attachment lifecycle states.
"""

from enum import Enum


class AttachmentState(str, Enum):
    """State of one attachment slot."""

    EMPTY = "empty"  # No content, no key
    PENDING = "pending"  # Local content waiting for commit
    PERSISTED = "persisted"  # Key present, content fetched lazily
