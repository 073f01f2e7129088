"""Structural validation of values against registered declarations.

The validator walks a value alongside its declared type and collects every
violation it finds rather than stopping at the first one. Non-conforming
values are an expected outcome and never raise; only an unknown top-level
type name does.

Example usage:
    registry = TypeRegistry()
    registry.register(ProductType("Payload", (FieldSpec("status", "str"),)))
    registry.register(
        SumType(
            "Response",
            discriminant="state",
            variants=(
                Variant("loading"),
                Variant("success", (FieldSpec("data", "Payload"),)),
            ),
        ),
    )

    result = validate(registry, "Response", {"state": "loading", "data": {}})
    if not result.ok:
        print(result.report())
"""

from __future__ import annotations

import datetime
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from typing import TYPE_CHECKING, Any

import structlog

from adtcheck.diagnostics import (
    DiagnosticCollector,
    Path,
    ValidationResult,
    ViolationKind,
)
from adtcheck.discriminator import discriminate
from adtcheck.errors import DiscriminationError
from adtcheck.schema import PrimitiveDecl, ProductType, SumType, TypeDecl
from adtcheck.types import (
    BoolType,
    BytesType,
    DateTimeType,
    DateType,
    DecimalType,
    DictType,
    DurationType,
    FloatType,
    IntType,
    ListType,
    LiteralType,
    NoneType,
    StrType,
    TimeType,
    TypeDef,
    TypeRef,
    as_typedef,
)

if TYPE_CHECKING:
    from adtcheck.config import EngineSettings
    from adtcheck.registry import TypeRegistry
    from adtcheck.schema import FieldSpec

log = structlog.get_logger(__name__)


# =============================================================================
# Type name formatting: TypeDef -> str
# =============================================================================

_TYPE_FORMATTERS: dict[type[TypeDef], Callable[[Any], str]] = {
    ListType: lambda t: f"list[{type_name(t.element)}]",
    DictType: lambda t: f"dict[str, {type_name(t.value)}]",
    LiteralType: lambda t: f"Literal{list(t.values)}",
    TypeRef: lambda t: t.name,
}


def type_name(expr: TypeDef | str) -> str:
    """Get a human-readable name for a field type."""
    if isinstance(expr, str):
        return expr
    if formatter := _TYPE_FORMATTERS.get(type(expr)):
        return formatter(expr)
    return expr.tag


# =============================================================================
# Kind checks: value -> bool
# =============================================================================

_KIND_CHECKS: dict[type[TypeDef], Callable[[Any], bool]] = {
    NoneType: lambda v: v is None,
    BoolType: lambda v: isinstance(v, bool),
    IntType: lambda v: isinstance(v, int) and not isinstance(v, bool),
    FloatType: lambda v: isinstance(v, int | float) and not isinstance(v, bool),
    StrType: lambda v: isinstance(v, str),
    BytesType: lambda v: isinstance(v, bytes),
    DecimalType: lambda v: isinstance(v, Decimal),
    DateType: lambda v: (
        isinstance(v, datetime.date) and not isinstance(v, datetime.datetime)
    ),
    TimeType: lambda v: isinstance(v, datetime.time),
    DateTimeType: lambda v: isinstance(v, datetime.datetime),
    DurationType: lambda v: isinstance(v, datetime.timedelta),
    ListType: lambda v: isinstance(v, list | tuple),
    DictType: lambda v: isinstance(v, Mapping),
}


def _describe(value: Any) -> str:
    return type(value).__name__


def _segment(key: Any) -> str:
    """Path segment for a mapping key; non-string keys are bracketed reprs."""
    return key if isinstance(key, str) else f"[{key!r}]"


@dataclass
class CheckContext:
    """Per-call state: collected violations and unregistered declarations."""

    registry: TypeRegistry
    out: DiagnosticCollector = field(default_factory=DiagnosticCollector)
    local: dict[str, TypeDecl] = field(default_factory=dict)

    def add(self, path: Path, kind: ViolationKind, detail: str) -> None:
        self.out.add(path, kind, detail)

    def resolve(self, name: str) -> TypeDecl:
        if name in self.local:
            return self.local[name]
        return self.registry.resolve(name)


class Validator:
    """Validates values against the declarations of one registry.

    A Validator holds no per-call state, so a single instance may serve
    concurrent calls once its registry is sealed.
    """

    def __init__(
        self,
        registry: TypeRegistry,
        *,
        settings: EngineSettings | None = None,
    ) -> None:
        self.registry = registry
        self.settings = settings if settings is not None else registry.settings

    def validate(
        self,
        target: TypeDecl | TypeDef | str,
        value: Any,
    ) -> ValidationResult:
        """Validate ``value`` against a declaration, a TypeDef, or a type name.

        Raises:
            TypeNotFoundError: If ``target`` names an unregistered type, or an
                unregistered declaration refers to an unregistered type other
                than itself

        """
        ctx = CheckContext(self.registry)
        match target:
            case str():
                name = target
                self._check_decl(self.registry.resolve(target), value, (), ctx)
            case ProductType() | SumType() | PrimitiveDecl():
                name = target.name
                # An unregistered declaration may still refer to itself by name
                if name not in self.registry:
                    ctx.local[name] = target
                self._check_decl(target, value, (), ctx)
            case _:
                name = type_name(target)
                self._check(target, value, (), ctx)

        result = ctx.out.result()
        log.debug(
            "validation_finished",
            type=name,
            ok=result.ok,
            violations=len(result.violations),
        )
        return result

    # -------------------------------------------------------------------------
    # Declarations
    # -------------------------------------------------------------------------

    def _check_decl(
        self,
        decl: TypeDecl,
        value: Any,
        path: Path,
        ctx: CheckContext,
    ) -> None:
        match decl:
            case PrimitiveDecl(kind=kind):
                self._check(kind, value, path, ctx)
            case ProductType():
                self._check_product(decl, value, path, ctx)
            case SumType():
                self._check_sum(decl, value, path, ctx)

    def _check_product(
        self,
        decl: ProductType,
        value: Any,
        path: Path,
        ctx: CheckContext,
    ) -> None:
        if not isinstance(value, Mapping):
            detail = f"expected {decl.name} record, got {_describe(value)}"
            ctx.add(path, ViolationKind.TYPE_MISMATCH, detail)
            return

        self._check_fields(decl.fields, value, path, ctx, honor_optional=True)
        for key in value:
            if key not in decl.field_names():
                detail = f"field '{key}' is not declared by {decl.name}"
                ctx.add((*path, _segment(key)), ViolationKind.UNEXPECTED_FIELD, detail)

    def _check_sum(
        self,
        decl: SumType,
        value: Any,
        path: Path,
        ctx: CheckContext,
    ) -> None:
        if not isinstance(value, Mapping):
            detail = f"expected {decl.name} record, got {_describe(value)}"
            ctx.add(path, ViolationKind.TYPE_MISMATCH, detail)
            return

        try:
            variant = discriminate(decl, value)
        except DiscriminationError as exc:
            # Without a variant there is nothing left to check against
            tag_path = (*path, decl.discriminant)
            ctx.add(tag_path, ViolationKind.INVALID_DISCRIMINANT, str(exc))
            return

        self._check_fields(
            variant.fields,
            value,
            path,
            ctx,
            honor_optional=not self.settings.strict,
            owner=f"variant '{variant.tag}'",
        )

        own = {decl.discriminant, *variant.field_names()}
        for key in value:
            if key in own:
                continue
            field_path = (*path, _segment(key))
            if owners := decl.owners(key):
                detail = (
                    f"field '{key}' belongs to variant(s) {list(owners)}, "
                    f"not '{variant.tag}'"
                )
                ctx.add(field_path, ViolationKind.EXTRANEOUS_VARIANT_FIELD, detail)
            else:
                detail = f"field '{key}' is not declared by {decl.name}"
                ctx.add(field_path, ViolationKind.UNEXPECTED_FIELD, detail)

    def _check_fields(
        self,
        fields: tuple[FieldSpec, ...],
        value: Mapping[Any, Any],
        path: Path,
        ctx: CheckContext,
        *,
        honor_optional: bool,
        owner: str | None = None,
    ) -> None:
        for spec in fields:
            optional = spec.optional and honor_optional
            field_value = value.get(spec.name)
            if spec.name not in value or (optional and field_value is None):
                if not optional:
                    required_by = f" by {owner}" if owner else ""
                    detail = (
                        f"field '{spec.name}' of type {type_name(spec.type)} "
                        f"is required{required_by}"
                    )
                    ctx.add((*path, spec.name), ViolationKind.MISSING_FIELD, detail)
                continue
            self._check(spec.typedef, field_value, (*path, spec.name), ctx)

    # -------------------------------------------------------------------------
    # Type expressions
    # -------------------------------------------------------------------------

    def _check(
        self,
        expected: TypeDef,
        value: Any,
        path: Path,
        ctx: CheckContext,
    ) -> None:
        match expected:
            case TypeRef(name=name):
                self._check_decl(ctx.resolve(name), value, path, ctx)
                return
            case LiteralType(values=values):
                # True == 1, so compare kinds as well as values
                if not any(type(v) is type(value) and v == value for v in values):
                    detail = f"value {value!r} not in {list(values)}"
                    ctx.add(path, ViolationKind.TYPE_MISMATCH, detail)
                return

        check = _KIND_CHECKS.get(type(expected))
        if check is None:
            detail = f"unknown type {expected!r}"
            ctx.add(path, ViolationKind.TYPE_MISMATCH, detail)
            return
        if not check(value):
            detail = f"expected {type_name(expected)}, got {_describe(value)}"
            ctx.add(path, ViolationKind.TYPE_MISMATCH, detail)
            return

        match expected:
            case ListType(element=element):
                element_type = as_typedef(element)
                for i, item in enumerate(value):
                    self._check(element_type, item, (*path, str(i)), ctx)
            case DictType(value=value_type):
                value_typedef = as_typedef(value_type)
                for key, item in value.items():
                    if not isinstance(key, str):
                        detail = f"expected str key, got {_describe(key)}"
                        key_path = (*path, _segment(key))
                        ctx.add(key_path, ViolationKind.TYPE_MISMATCH, detail)
                        continue
                    self._check(value_typedef, item, (*path, key), ctx)


def validate(
    registry: TypeRegistry,
    target: TypeDecl | TypeDef | str,
    value: Any,
    *,
    settings: EngineSettings | None = None,
) -> ValidationResult:
    """Validate ``value`` against ``target`` using ``registry`` for references."""
    return Validator(registry, settings=settings).validate(target, value)
