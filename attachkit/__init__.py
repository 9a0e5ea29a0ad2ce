"""
attachkit - attachment lifecycle and content store core.

Host records keep opaque content keys; attachkit handles pending uploads,
lazy fetching, analyser-derived magic attributes, validation and the
store/destroy lifecycle against pluggable content stores.
"""

from attachkit.config import Config
from attachkit.core.analysis import MISSING, Analyser, AnalyserRegistry, FileCommandAnalyser
from attachkit.core.content_store import (
    ContentStore,
    FileSystemContentStore,
    InMemoryContentStore,
    S3ContentStore,
)
from attachkit.core.host import HostBinding, MappingHostBinding, ObjectHostBinding
from attachkit.models import AttachmentState, ContentKey, EphemeralContent
from attachkit.services import (
    Attachment,
    AttachmentApp,
    AttachmentSchema,
    LifecycleCoordinator,
    PresenceRule,
    PropertyRule,
    SizeRule,
    ValidationErrors,
    Validator,
    mime_type_rule,
)
from attachkit.utils.exceptions import (
    AnalysisError,
    AttachKitError,
    AttachmentEmpty,
    ConfigurationError,
    DataNotFound,
    StorageError,
    StoreError,
)

__version__ = "0.1.0"

__all__ = [
    "Config",
    # Content
    "ContentKey",
    "EphemeralContent",
    "AttachmentState",
    # Stores
    "ContentStore",
    "InMemoryContentStore",
    "FileSystemContentStore",
    "S3ContentStore",
    # Analysis
    "Analyser",
    "AnalyserRegistry",
    "FileCommandAnalyser",
    "MISSING",
    # Host
    "HostBinding",
    "ObjectHostBinding",
    "MappingHostBinding",
    # Services
    "AttachmentApp",
    "Attachment",
    "LifecycleCoordinator",
    "AttachmentSchema",
    "PresenceRule",
    "SizeRule",
    "PropertyRule",
    "mime_type_rule",
    "ValidationErrors",
    "Validator",
    # Exceptions
    "AttachKitError",
    "StoreError",
    "DataNotFound",
    "StorageError",
    "ConfigurationError",
    "AttachmentEmpty",
    "AnalysisError",
]
