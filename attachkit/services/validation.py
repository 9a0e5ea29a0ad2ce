"""
Validation helpers - declarative rules over attachment state.

Rules are declared once (configuration errors surface at construction) and
evaluated per record against a mapping of field name to Attachment. Every
rule accepts the usual conditional guards:
- if_: callable taking the record, or the name of a record attribute/method
- unless: same, inverted
"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import Any

from attachkit.core.analysis.registry import MISSING
from attachkit.services.attachment import Attachment
from attachkit.utils.exceptions import ConfigurationError

Guard = Callable[[Any], Any] | str | None

_UNSET = object()


def humanize(name: str) -> str:
    """'number_of_Gs' -> 'number of gs'."""
    return name.replace("_", " ").lower()


def render_value(value: Any) -> str:
    """Render a property value for messages; absent values render empty."""
    if value is None or value is MISSING:
        return ""
    return str(value)


def _evaluate_guard(guard: Guard, record: Any) -> bool:
    if callable(guard):
        return bool(guard(record))
    if isinstance(guard, str):
        value = record[guard] if isinstance(record, Mapping) else getattr(record, guard)
        return bool(value() if callable(value) else value)
    raise ConfigurationError(f"Unsupported validation guard: {guard!r}")


def _inclusive_bounds(value: Any, option: str) -> tuple[Any, Any]:
    if isinstance(value, range):
        if value.step != 1 or len(value) == 0:
            raise ConfigurationError(f"'{option}' range must be non-empty with step 1")
        return value.start, value.stop - 1
    if isinstance(value, (tuple, list)) and len(value) == 2:
        low, high = value
        if low > high:
            raise ConfigurationError(f"'{option}' lower bound {low} exceeds upper bound {high}")
        return low, high
    raise ConfigurationError(f"'{option}' must be a range or a (low, high) pair")


class ValidationErrors:
    """Error messages collected per field."""

    def __init__(self):
        self._errors: dict[str, list[str]] = {}

    def add(self, field: str, message: str) -> None:
        self._errors.setdefault(field, []).append(message)

    def on(self, field: str) -> str | list[str] | None:
        """Messages for a field: a single string, a list when several, None when valid."""
        messages = self._errors.get(field)
        if not messages:
            return None
        return messages[0] if len(messages) == 1 else list(messages)

    def full_messages(self) -> list[str]:
        return [f"{humanize(field).capitalize()} {message}" for field, message in self]

    def as_dict(self) -> dict[str, list[str]]:
        return {field: list(messages) for field, messages in self._errors.items()}

    def __iter__(self) -> Iterator[tuple[str, str]]:
        for field, messages in self._errors.items():
            for message in messages:
                yield field, message

    def __contains__(self, field: object) -> bool:
        return field in self._errors

    def __len__(self) -> int:
        return sum(len(messages) for messages in self._errors.values())

    def __bool__(self) -> bool:
        return bool(self._errors)

    def __repr__(self) -> str:
        return f"ValidationErrors({self._errors!r})"


class Rule(ABC):
    """Base rule: target fields, guards and an optional message override."""

    def __init__(
        self,
        of: str | Iterable[str] | None,
        if_: Guard = None,
        unless: Guard = None,
        message: str | None = None,
    ):
        fields = [of] if isinstance(of, str) else list(of or ())
        if not fields:
            raise ConfigurationError(f"{type(self).__name__} requires the 'of' option naming a field")
        self.fields = fields
        self.if_ = if_
        self.unless = unless
        self.message = message

    def applies_to(self, record: Any) -> bool:
        if self.if_ is not None and not _evaluate_guard(self.if_, record):
            return False
        if self.unless is not None and _evaluate_guard(self.unless, record):
            return False
        return True

    def validate(
        self, record: Any, attachments: Mapping[str, Attachment], errors: ValidationErrors
    ) -> None:
        """Check each target field individually, adding failures to errors."""
        if not self.applies_to(record):
            return
        for field in self.fields:
            failure = self.check(attachments.get(field))
            if failure is not None:
                errors.add(field, self.message or failure)

    @abstractmethod
    def check(self, attachment: Attachment | None) -> str | None:
        """Return a failure message, or None when valid."""
        pass


class PresenceRule(Rule):
    """Fails when the attachment is empty."""

    def check(self, attachment: Attachment | None) -> str | None:
        if attachment is None or attachment.is_empty:
            return "can't be blank"
        return None


class SizeRule(Rule):
    """Fails when the content length falls outside inclusive bounds."""

    def __init__(
        self,
        of: str | Iterable[str] | None = None,
        within: range | tuple[int, int] | None = None,
        allow_empty: bool = True,
        **options: Any,
    ):
        super().__init__(of, **options)
        if within is None:
            raise ConfigurationError("SizeRule requires the 'within' option")
        self.minimum, self.maximum = _inclusive_bounds(within, "within")
        self.allow_empty = allow_empty

    def check(self, attachment: Attachment | None) -> str | None:
        if attachment is None or attachment.is_empty:
            if self.allow_empty:
                return None
            size = 0
        else:
            size = attachment.size or 0

        if size < self.minimum:
            return f"is too small (minimum is {self.minimum} bytes)"
        if size > self.maximum:
            return f"is too large (maximum is {self.maximum} bytes)"
        return None


class PropertyRule(Rule):
    """
    Fails when an analysed property is not the expected value.

    Exactly one of:
    - as_: a single expected value
    - in_: a collection of allowed values (a step-1 range means inclusive bounds)
    - between: (low, high) inclusive bounds

    An analyser returning None and an analyser that isn't registered are
    treated alike: both render as '' in the message.
    """

    def __init__(
        self,
        property_name: str,
        of: str | Iterable[str] | None = None,
        as_: Any = _UNSET,
        in_: Iterable[Any] | None = None,
        between: range | tuple[Any, Any] | None = None,
        **options: Any,
    ):
        super().__init__(of, **options)
        given = {"as_": as_ is not _UNSET, "in_": in_ is not None, "between": between is not None}
        supplied = [option for option, present in given.items() if present]
        if len(supplied) != 1:
            raise ConfigurationError(
                "PropertyRule requires exactly one of 'as_', 'in_' or 'between'",
                {"property": property_name, "supplied": supplied},
            )

        self.property_name = property_name
        self.expected = as_
        self.allowed: list[Any] | None = None
        self.bounds: tuple[Any, Any] | None = None

        if isinstance(in_, range):
            self.bounds = _inclusive_bounds(in_, "in_")
        elif in_ is not None:
            if isinstance(in_, (str, bytes)):
                raise ConfigurationError("'in_' must be a collection; use 'as_' for a single value")
            self.allowed = list(in_)
        elif between is not None:
            self.bounds = _inclusive_bounds(between, "between")

    def is_satisfied_by(self, value: Any) -> bool:
        if value is MISSING:
            return False
        if self.allowed is not None:
            return value in self.allowed
        if self.bounds is not None:
            low, high = self.bounds
            try:
                return low <= value <= high
            except TypeError:
                return False
        return value == self.expected

    def expectation(self) -> str:
        if self.allowed is not None:
            return "one of " + ", ".join(f"'{value}'" for value in self.allowed)
        if self.bounds is not None:
            low, high = self.bounds
            return f"between {low} and {high}"
        return f"'{self.expected}'"

    def check(self, attachment: Attachment | None) -> str | None:
        if attachment is None or attachment.is_empty:
            return None
        actual = attachment.read_property(self.property_name)
        if self.is_satisfied_by(actual):
            return None
        return (
            f"{humanize(self.property_name)} is incorrect. "
            f"It needs to be {self.expectation()}, but was '{render_value(actual)}'"
        )


def mime_type_rule(of: str | Iterable[str] | None = None, **options: Any) -> PropertyRule:
    """Convenience wrapper: PropertyRule on the 'mime_type' analyser."""
    return PropertyRule("mime_type", of=of, **options)


class Validator:
    """Ordered collection of rules evaluated together."""

    def __init__(self, rules: Iterable[Rule] = ()):
        self.rules: list[Rule] = list(rules)

    def add(self, rule: Rule) -> Rule:
        self.rules.append(rule)
        return rule

    def validate(self, record: Any, attachments: Mapping[str, Attachment]) -> ValidationErrors:
        errors = ValidationErrors()
        for rule in self.rules:
            rule.validate(record, attachments, errors)
        return errors

    def is_valid(self, record: Any, attachments: Mapping[str, Attachment]) -> bool:
        return not self.validate(record, attachments)
