"""
Custom exception hierarchy for attachkit.

Provides structured error types for content storage, analysis and attachment
handling. All exceptions inherit from AttachKitError for easy catching.
"""


class AttachKitError(Exception):
    """
    Base exception for all attachkit errors.
    All custom exceptions should inherit from this class.
    """

    def __init__(self, message: str, context: dict | None = None):
        """
        Initialize attachkit error.
        Args:
            message: Error message
            context: Optional context dictionary with additional error details
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}


class StoreError(AttachKitError):
    """
    Base exception for content store operations.
    Used for errors related to persisting, fetching or destroying blobs.
    """

    pass


class DataNotFound(StoreError):
    """
    Content not found errors.
    Raised when a fetch or destroy targets a key the store doesn't hold.
    """

    pass


class StorageError(StoreError):
    """
    Backend I/O errors.
    Raised when the store backend fails for any reason other than a missing key.
    """

    pass


class ConfigurationError(AttachKitError):
    """
    Configuration errors.
    Raised when configuration or a rule declaration is invalid or incomplete.
    """

    pass


class AttachmentEmpty(AttachKitError):
    """
    Raised when content is required from an attachment that holds nothing.
    """

    pass


class AnalysisError(AttachKitError):
    """
    Analyser errors.
    Raised when an analyser fails to compute a property (e.g. external command failure).
    """

    pass
