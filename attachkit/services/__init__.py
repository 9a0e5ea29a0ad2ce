"""
Services for attachkit.

High-level services:
- AttachmentApp: Content store + analysers + URL generation
- Attachment: Handle for one attachment field of one record
- LifecycleCoordinator: Store/destroy on commit and release
- Validation rules: presence, size and analysed properties
- AttachmentSchema: App registration, field accessors, per-record orchestration
"""

from attachkit.services.app import AttachmentApp
from attachkit.services.attachment import CONTENT_PROPERTIES, Attachment
from attachkit.services.lifecycle import LifecycleCoordinator
from attachkit.services.schema import AttachmentSchema
from attachkit.services.validation import (
    PresenceRule,
    PropertyRule,
    Rule,
    SizeRule,
    ValidationErrors,
    Validator,
    mime_type_rule,
)

__all__ = [
    "AttachmentApp",
    "Attachment",
    "CONTENT_PROPERTIES",
    "LifecycleCoordinator",
    "AttachmentSchema",
    "Rule",
    "PresenceRule",
    "SizeRule",
    "PropertyRule",
    "mime_type_rule",
    "ValidationErrors",
    "Validator",
]
