"""Type declarations: products, sums and named primitives."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from adtcheck.errors import InvalidDeclarationError
from adtcheck.types import TypeDef, TypeRef, as_typedef

if TYPE_CHECKING:
    from collections.abc import Iterable

    from adtcheck.types import TypeExpr


def _duplicates(names: Iterable[str]) -> list[str]:
    return [name for name, count in Counter(names).items() if count > 1]


@dataclass(frozen=True)
class FieldSpec:
    """Schema for a single field.

    ``type`` is a TypeDef, a TypeRef, or a bare type name. ``optional`` only
    exists for legacy encodings where a field may be absent or None.
    """

    name: str
    type: TypeExpr
    optional: bool = False

    @property
    def typedef(self) -> TypeDef:
        """The field type with bare names normalized to TypeRef."""
        return as_typedef(self.type)


@dataclass(frozen=True)
class ProductType:
    """A record whose fields are all present at once."""

    name: str
    fields: tuple[FieldSpec, ...] = ()

    def __post_init__(self) -> None:
        if dupes := _duplicates(f.name for f in self.fields):
            reason = f"duplicate field names {dupes}"
            raise InvalidDeclarationError(self.name, reason)

    def field_names(self) -> tuple[str, ...]:
        """Declared field names in declaration order."""
        return tuple(f.name for f in self.fields)


@dataclass(frozen=True)
class Variant:
    """One alternative of a sum type, owning its own fields."""

    tag: str
    fields: tuple[FieldSpec, ...] = ()

    def field_names(self) -> tuple[str, ...]:
        """Declared field names in declaration order."""
        return tuple(f.name for f in self.fields)


@dataclass(frozen=True)
class SumType:
    """A disjoint union of variants selected by a discriminant field.

    Example:
        SumType(
            name="Response",
            discriminant="state",
            variants=(
                Variant("loading"),
                Variant("success", (FieldSpec("data", "Payload"),)),
                Variant("error", (FieldSpec("error", StrType()),)),
            ),
        )

    """

    name: str
    discriminant: str
    variants: tuple[Variant, ...]
    _by_tag: dict[str, Variant] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.variants:
            raise InvalidDeclarationError(self.name, "sum type has no variants")

        if dupes := _duplicates(v.tag for v in self.variants):
            reason = f"duplicate variant tags {dupes}"
            raise InvalidDeclarationError(self.name, reason)

        for variant in self.variants:
            if dupes := _duplicates(variant.field_names()):
                reason = f"variant '{variant.tag}' has duplicate fields {dupes}"
                raise InvalidDeclarationError(self.name, reason)
            if self.discriminant in variant.field_names():
                reason = (
                    f"variant '{variant.tag}' declares field '{self.discriminant}' "
                    "which collides with the discriminant"
                )
                raise InvalidDeclarationError(self.name, reason)

        object.__setattr__(self, "_by_tag", {v.tag: v for v in self.variants})

    @property
    def tags(self) -> tuple[str, ...]:
        """Variant tags in declaration order."""
        return tuple(v.tag for v in self.variants)

    def variant(self, tag: str) -> Variant | None:
        """Look up a variant by its tag."""
        return self._by_tag.get(tag)

    def owners(self, field_name: str) -> tuple[str, ...]:
        """Tags of every variant that declares ``field_name``."""
        return tuple(v.tag for v in self.variants if field_name in v.field_names())

    @property
    def fields(self) -> tuple[FieldSpec, ...]:
        """All variant fields, in variant then declaration order."""
        return tuple(f for v in self.variants for f in v.fields)


@dataclass(frozen=True)
class PrimitiveDecl:
    """A named primitive or container type, e.g. PrimitiveDecl("str", StrType())."""

    name: str
    kind: TypeDef

    def __post_init__(self) -> None:
        if as_typedef(self.kind) == TypeRef(self.name):
            reason = "alias refers to itself without a container or record"
            raise InvalidDeclarationError(self.name, reason)


type TypeDecl = ProductType | SumType | PrimitiveDecl
