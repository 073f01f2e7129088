"""Field type kinds checked by the validator.

Each primitive kind is also pre-registered in a TypeRegistry under its tag
(``"int"``, ``"str"``, ...) so fields can name it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, dataclass_transform


@dataclass(frozen=True)
@dataclass_transform(frozen_default=True)
class TypeDef:
    """Base for field type kinds, keyed by a unique tag."""

    tag: ClassVar[str]
    registry: ClassVar[dict[str, type[TypeDef]]] = {}

    def __init_subclass__(cls, tag: str | None = None) -> None:
        """Register typedef subclass with automatic tag derivation."""
        dataclass(frozen=True)(cls)
        cls.tag = tag if tag is not None else cls.__name__

        if (existing := TypeDef.registry.get(cls.tag)) and existing is not cls:
            msg = (
                f"Tag '{cls.tag}' already registered to {existing}. "
                "Choose a different tag."
            )
            raise ValueError(msg)

        TypeDef.registry[cls.tag] = cls


class IntType(TypeDef, tag="int"):
    """Accepts int values; bool is rejected."""


class FloatType(TypeDef, tag="float"):
    """Accepts float or int values; bool is rejected."""


class StrType(TypeDef, tag="str"):
    """Accepts str values."""


class BoolType(TypeDef, tag="bool"):
    """Accepts only True or False."""


class NoneType(TypeDef, tag="none"):
    """Accepts only None."""


class BytesType(TypeDef, tag="bytes"):
    """Accepts bytes values."""


class DecimalType(TypeDef, tag="decimal"):
    """Accepts decimal.Decimal values."""


class DateType(TypeDef, tag="date"):
    """Accepts datetime.date values that are not datetimes."""


class TimeType(TypeDef, tag="time"):
    """Accepts datetime.time values."""


class DateTimeType(TypeDef, tag="datetime"):
    """Accepts datetime.datetime values."""


class DurationType(TypeDef, tag="duration"):
    """Accepts datetime.timedelta values."""


# Seeded into every registry unless seed_primitives is off
PRIMITIVE_KINDS: tuple[type[TypeDef], ...] = (
    IntType,
    FloatType,
    StrType,
    BoolType,
    NoneType,
    BytesType,
    DecimalType,
    DateType,
    TimeType,
    DateTimeType,
    DurationType,
)


class ListType(TypeDef, tag="list"):
    """List type: ListType("Item") holds a sequence of Item values."""

    element: TypeExpr


class DictType(TypeDef, tag="dict"):
    """String-keyed dictionary: DictType(IntType()) is dict[str, int]."""

    value: TypeExpr


class LiteralType(TypeDef, tag="literal"):
    """Literal enumeration: LiteralType(("a", "b")) accepts "a" or "b"."""

    values: tuple[str | int | bool, ...]


class TypeRef(TypeDef, tag="ref"):
    """Reference to a declared type by name.

    Declarations store references as names rather than embedding the target,
    so a type may refer to itself without producing an infinite definition.
    """

    name: str


type TypeExpr = TypeDef | str
"""A field type: a TypeDef, or a bare string naming a declared type."""


def as_typedef(expr: TypeExpr) -> TypeDef:
    """Normalize a type expression, turning bare names into TypeRef."""
    if isinstance(expr, str):
        return TypeRef(expr)
    return expr


def referenced_names(expr: TypeExpr) -> tuple[str, ...]:
    """Collect every declared type name a type expression refers to."""
    match as_typedef(expr):
        case TypeRef(name=name):
            return (name,)
        case ListType(element=element):
            return referenced_names(element)
        case DictType(value=value):
            return referenced_names(value)
        case _:
            return ()
