"""
AttachmentSchema - declares which fields of a record type hold attachments.

Apps are registered under a kind ("image", "video"), fields are declared as
accessors of a kind, and validation rules are attached to fields. The schema
then binds records to Attachments and coordinates their lifecycle.

Example:
    schema = AttachmentSchema()
    schema.register_app("image", images)
    schema.accessor("image", "preview_image")
    schema.validates_size_of("preview_image", within=(6, 10))

    attachments = schema.bind(item)
    attachments["preview_image"].assign(b"1234567890")
    if schema.is_valid(item, attachments):
        schema.commit(attachments)
"""

from collections.abc import Callable, Mapping, MutableMapping
from typing import Any

from attachkit.core.host.base import HostBinding
from attachkit.core.host.record import MappingHostBinding, ObjectHostBinding
from attachkit.services.app import AttachmentApp
from attachkit.services.attachment import Attachment
from attachkit.services.validation import (
    PresenceRule,
    PropertyRule,
    Rule,
    SizeRule,
    ValidationErrors,
    Validator,
)
from attachkit.utils.exceptions import ConfigurationError
from attachkit.utils.logger import get_logger

logger = get_logger(__name__)

BindingFactory = Callable[[Any, str], HostBinding]


def default_binding(record: Any, field: str) -> HostBinding:
    """MappingHostBinding for mappings, ObjectHostBinding for everything else."""
    if isinstance(record, MutableMapping):
        return MappingHostBinding(record, field)
    return ObjectHostBinding(record, field)


class AttachmentSchema:
    """Attachment fields, their apps and their validation rules for one record type."""

    def __init__(self, binding_factory: BindingFactory = default_binding):
        self.binding_factory = binding_factory
        self.validator = Validator()
        self._apps: dict[str, AttachmentApp] = {}
        self._fields: dict[str, AttachmentApp] = {}

    # ═══════════════════════════════════════════════════════════
    # DECLARATION
    # ═══════════════════════════════════════════════════════════

    def register_app(self, kind: str, app: AttachmentApp) -> None:
        """Make `app` serve accessors of the given kind."""
        self._apps[kind] = app
        logger.debug(f"Registered app {app.name!r} for {kind} accessors")

    def accessor(self, kind: str, *fields: str) -> None:
        """
        Declare attachment fields served by the app registered for `kind`.

        Raises:
            ConfigurationError: If no app is registered for the kind
        """
        app = self._apps.get(kind)
        if app is None:
            raise ConfigurationError(
                f"No app registered for '{kind}' accessors", {"kind": kind, "fields": list(fields)}
            )
        for field in fields:
            self._fields[field] = app

    @property
    def fields(self) -> list[str]:
        return list(self._fields)

    def apps_for_fields(self) -> dict[str, AttachmentApp]:
        """Mapping of attachment field to the app serving it."""
        return dict(self._fields)

    def add_rule(self, rule: Rule) -> Rule:
        return self.validator.add(rule)

    def validates_presence_of(self, *fields: str, **options: Any) -> Rule:
        return self.add_rule(PresenceRule(of=list(fields), **options))

    def validates_size_of(self, *fields: str, **options: Any) -> Rule:
        return self.add_rule(SizeRule(of=list(fields), **options))

    def validates_property(self, property_name: str, **options: Any) -> Rule:
        return self.add_rule(PropertyRule(property_name, **options))

    def validates_mime_type_of(self, *fields: str, **options: Any) -> Rule:
        return self.validates_property("mime_type", of=list(fields), **options)

    # ═══════════════════════════════════════════════════════════
    # PER-RECORD OPERATIONS
    # ═══════════════════════════════════════════════════════════

    def bind(self, record: Any, binding_factory: BindingFactory | None = None) -> dict[str, Attachment]:
        """Create an Attachment for every declared field of a record."""
        factory = binding_factory or self.binding_factory
        return {field: app.attachment(factory(record, field)) for field, app in self._fields.items()}

    @staticmethod
    def read(attachments: Mapping[str, Attachment], field: str) -> Attachment | None:
        """The field's attachment, or None when it is empty."""
        attachment = attachments.get(field)
        if attachment is None or attachment.is_empty:
            return None
        return attachment

    def validate(self, record: Any, attachments: Mapping[str, Attachment]) -> ValidationErrors:
        return self.validator.validate(record, attachments)

    def is_valid(self, record: Any, attachments: Mapping[str, Attachment]) -> bool:
        return self.validator.is_valid(record, attachments)

    def commit(self, attachments: Mapping[str, Attachment]) -> dict[str, Any]:
        """Commit every attachment through its own app. Returns field -> key."""
        return {field: attachment.commit() for field, attachment in attachments.items()}

    def release(self, attachments: Mapping[str, Attachment]) -> None:
        for attachment in attachments.values():
            attachment.release()
