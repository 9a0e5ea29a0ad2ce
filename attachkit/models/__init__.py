"""
Data models for attachkit.

Core models:
- ContentKey: Opaque identifier of a stored blob
- EphemeralContent: In-memory content with memoized analysis results
- AttachmentState: empty / pending / persisted
- compute_content_hash: SHA256 helper
"""

from attachkit.models.attachment_state import AttachmentState
from attachkit.models.content import ContentKey, EphemeralContent, compute_content_hash

__all__ = [
    "AttachmentState",
    "ContentKey",
    "EphemeralContent",
    "compute_content_hash",
]
