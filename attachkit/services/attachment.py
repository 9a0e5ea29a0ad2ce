"""
Attachment - handle for one attachment field of one host record.

Mediates between local content, the app's content store and the host's
persisted key. Assignment never touches the store; commit() and release()
hand over to the app's LifecycleCoordinator.
"""

from typing import TYPE_CHECKING, Any

from attachkit.core.host.base import HostBinding
from attachkit.models.attachment_state import AttachmentState
from attachkit.models.content import ContentKey, EphemeralContent
from attachkit.utils.exceptions import AttachmentEmpty

if TYPE_CHECKING:
    from attachkit.services.app import AttachmentApp

# Properties every piece of content has, independent of registered analysers
CONTENT_PROPERTIES = ("size", "name", "ext")


class Attachment:
    """
    Attachment bound to one (host record, field) pair.

    States:
    - empty: no content, no key
    - pending: local content assigned, not yet stored
    - persisted: key present, content fetched lazily on first read

    The key committed to the host stays owned by this attachment until the
    next successful commit replaces or clears it.
    """

    def __init__(self, app: "AttachmentApp", binding: HostBinding):
        """
        Initialize attachment from the host's persisted key.

        Args:
            app: App providing the content store and analysers
            binding: Host binding for the field
        """
        self.app = app
        self.binding = binding

        self._committed_key: ContentKey | None = binding.read_key()
        self._key: ContentKey | None = self._committed_key
        self._pending: EphemeralContent | None = None
        self._fetched: EphemeralContent | None = None
        self._dirty = False
        self._magic_stale = False
        # Host magic slots written for content that hasn't been committed
        self._magic_rewritten = False

    # ═══════════════════════════════════════════════════════════
    # STATE
    # ═══════════════════════════════════════════════════════════

    @property
    def field(self) -> str:
        return self.binding.field

    @property
    def state(self) -> AttachmentState:
        if self._pending is not None:
            return AttachmentState.PENDING
        if self._key is not None:
            return AttachmentState.PERSISTED
        return AttachmentState.EMPTY

    @property
    def is_empty(self) -> bool:
        return self.state == AttachmentState.EMPTY

    @property
    def is_pending(self) -> bool:
        return self.state == AttachmentState.PENDING

    @property
    def is_persisted(self) -> bool:
        return self.state == AttachmentState.PERSISTED

    @property
    def key(self) -> ContentKey | None:
        """Current key; None while empty or pending."""
        return self._key

    @property
    def committed_key(self) -> ContentKey | None:
        """Key last committed to the host, regardless of uncommitted assignments."""
        return self._committed_key

    @property
    def has_changes(self) -> bool:
        return self._dirty

    @property
    def pending_content(self) -> EphemeralContent | None:
        return self._pending

    @property
    def superseded_key(self) -> ContentKey | None:
        """Committed key that the next commit will destroy, if any."""
        if self._dirty and self._committed_key is not None and self._committed_key != self._key:
            return self._committed_key
        return None

    @property
    def needs_magic_refresh(self) -> bool:
        return self._magic_stale

    # ═══════════════════════════════════════════════════════════
    # ASSIGNMENT
    # ═══════════════════════════════════════════════════════════

    def assign(self, source: Any, name: str | None = None) -> None:
        """
        Assign new content, a key, or None.

        Args:
            source: None to clear; a ContentKey to reference stored content;
                anything EphemeralContent.from_source accepts as new data
            name: Optional filename hint for new data
        """
        self._fetched = None
        self._magic_stale = False

        if source is None:
            self._pending = None
            self._key = None
            self._dirty = self._committed_key is not None
            self._magic_rewritten = True
            self._reset_magic_attributes()
        elif isinstance(source, ContentKey):
            self._pending = None
            self._key = source
            # Slots rewritten since the last commit describe other content
            self._magic_stale = source != self._committed_key or self._magic_rewritten
            self._dirty = self._magic_stale
        else:
            self._pending = EphemeralContent.from_source(source, name=name)
            self._key = None
            self._dirty = True
            self._magic_rewritten = True
            self._write_magic_attributes(self._pending)

    # ═══════════════════════════════════════════════════════════
    # READING
    # ═══════════════════════════════════════════════════════════

    def content(self, required: bool = False) -> EphemeralContent | None:
        """
        Get the attachment's content.

        Pending content is returned directly. Persisted content is fetched
        from the store on first access and cached for this attachment's
        lifetime.

        Args:
            required: Raise instead of returning None when empty

        Returns:
            EphemeralContent, or None when empty

        Raises:
            AttachmentEmpty: If empty and required is True
            DataNotFound: If the persisted key no longer resolves
        """
        if self._pending is not None:
            return self._pending
        if self._key is None:
            if required:
                raise AttachmentEmpty(f"Attachment '{self.field}' is empty", {"field": self.field})
            return None
        if self._fetched is None:
            self._fetched = self.app.fetch(self._key)
        return self._fetched

    def read_property(self, name: str) -> Any:
        """
        Get a derived property of the content.

        A magic attribute on the host wins and never causes a fetch. Only
        without one is the content loaded and the analyser consulted.

        Args:
            name: Analyser name, or one of size / name / ext

        Returns:
            Property value; None when empty; MISSING for unknown analysers
        """
        if not self._magic_stale and self.binding.has_magic_attribute(name):
            return self.binding.read_magic_attribute(name)

        content = self.content()
        if content is None:
            return None
        if name in CONTENT_PROPERTIES:
            return getattr(content, name)
        return self.app.analysers.call(name, content)

    @property
    def size(self) -> Any:
        return self.read_property("size")

    @property
    def name(self) -> Any:
        return self.read_property("name")

    @property
    def ext(self) -> Any:
        return self.read_property("ext")

    @property
    def data(self) -> bytes | None:
        content = self.content()
        return content.data if content is not None else None

    def url(self, **params: Any) -> str | None:
        """URL for the stored content; None unless a key is present."""
        if self._key is None:
            return None
        return self.app.url_for(self._key, **params)

    # ═══════════════════════════════════════════════════════════
    # LIFECYCLE
    # ═══════════════════════════════════════════════════════════

    def commit(self) -> ContentKey | None:
        return self.app.lifecycle.commit(self)

    def release(self) -> None:
        self.app.lifecycle.release(self)

    def mark_committed(self, key: ContentKey | None) -> None:
        """Record a successful commit. Called by the LifecycleCoordinator."""
        if self._pending is not None:
            self._fetched = self._pending
        self._pending = None
        self._key = key
        self._committed_key = key
        self._dirty = False
        self._magic_rewritten = False
        self.binding.write_key(key)

    def mark_released(self) -> None:
        """Record a successful release. Called by the LifecycleCoordinator."""
        self._pending = None
        self._fetched = None
        self._key = None
        self._committed_key = None
        self._dirty = False
        self._magic_stale = False
        self._magic_rewritten = False
        self.binding.write_key(None)

    def refresh_magic_attributes(self) -> None:
        """Recompute magic attributes from the current content."""
        content = self.content()
        if content is None:
            self._reset_magic_attributes()
        else:
            self._write_magic_attributes(content)
        self._magic_stale = False
        self._magic_rewritten = False

    def _magic_suffixes(self) -> list[str]:
        suffixes = [*CONTENT_PROPERTIES, *self.app.analysers.names()]
        return [suffix for suffix in dict.fromkeys(suffixes) if self.binding.has_magic_attribute(suffix)]

    def _write_magic_attributes(self, content: EphemeralContent) -> None:
        for suffix in self._magic_suffixes():
            if suffix in CONTENT_PROPERTIES:
                value = getattr(content, suffix)
            else:
                value = self.app.analysers.call(suffix, content)
            self.binding.write_magic_attribute(suffix, value)

    def _reset_magic_attributes(self) -> None:
        for suffix in self._magic_suffixes():
            self.binding.write_magic_attribute(suffix, None)

    def __repr__(self) -> str:
        return f"Attachment(field={self.field!r}, state={self.state.value}, key={self._key!r})"
