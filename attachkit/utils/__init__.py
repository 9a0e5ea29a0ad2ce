"""Utility modules for attachkit."""

from attachkit.utils.exceptions import (
    AnalysisError,
    AttachKitError,
    AttachmentEmpty,
    ConfigurationError,
    DataNotFound,
    StorageError,
    StoreError,
)
from attachkit.utils.id_generator import generate_content_key, generate_object_key
from attachkit.utils.logger import get_logger, setup_logging

__all__ = [
    # Logging
    "get_logger",
    "setup_logging",
    # ID Generators
    "generate_content_key",
    "generate_object_key",
    # Exceptions
    "AttachKitError",
    "StoreError",
    "DataNotFound",
    "StorageError",
    "ConfigurationError",
    "AttachmentEmpty",
    "AnalysisError",
]
