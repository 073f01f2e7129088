"""Exception hierarchy for declaration, registration, lookup and discrimination.

Validation of a value never raises these for non-conformance; a mismatch is
reported as a Violation instead. These exceptions signal misuse of the
engine itself: malformed declarations, bad registrations, unknown names, and
(from the discriminator, when called directly) unmatched tags.
"""

from __future__ import annotations

from typing import Any


class AdtCheckError(Exception):
    """Base class for all adtcheck errors."""


class InvalidDeclarationError(AdtCheckError, ValueError):
    """A declaration breaks one of its own structural invariants."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid declaration '{name}': {reason}")


class RegistrationError(AdtCheckError):
    """A declaration could not be registered."""


class DuplicateNameError(RegistrationError):
    """A type with the same name is already registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        msg = (
            f"Type '{name}' is already registered. "
            "Registered types cannot be redefined."
        )
        super().__init__(msg)


class UnresolvedReferenceError(RegistrationError):
    """A field refers to a type that has not been registered."""

    def __init__(self, name: str, field: str, reference: str) -> None:
        self.name = name
        self.field = field
        self.reference = reference
        msg = (
            f"Type '{name}' field '{field}' refers to unregistered type "
            f"'{reference}'"
        )
        super().__init__(msg)


class RegistrySealedError(RegistrationError):
    """The registry was sealed and no longer accepts declarations."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Cannot register '{name}': registry is sealed")


class TypeNotFoundError(AdtCheckError, LookupError):
    """No type is registered under the requested name."""

    def __init__(self, name: str, available: tuple[str, ...] = ()) -> None:
        self.name = name
        self.available = available
        msg = f"Type '{name}' not found. Available types: {list(available)}"
        super().__init__(msg)


class DiscriminationError(AdtCheckError):
    """A value could not be matched to a variant of a sum type."""


class MissingDiscriminantError(DiscriminationError):
    """The value does not carry the discriminant field."""

    def __init__(self, type_name: str, discriminant: str) -> None:
        self.type_name = type_name
        self.discriminant = discriminant
        msg = f"Value of '{type_name}' has no discriminant field '{discriminant}'"
        super().__init__(msg)


class UnknownVariantError(DiscriminationError):
    """The discriminant value matches no variant tag."""

    def __init__(
        self,
        type_name: str,
        tag: Any,
        expected: tuple[str, ...],
    ) -> None:
        self.type_name = type_name
        self.tag = tag
        self.expected = expected
        msg = (
            f"Unknown variant {tag!r} for '{type_name}', "
            f"expected one of {list(expected)}"
        )
        super().__init__(msg)
