"""Type registry: named declarations with lazy, by-name references."""

from __future__ import annotations

import threading
from types import MappingProxyType
from typing import TYPE_CHECKING

import structlog

from adtcheck.config import EngineSettings
from adtcheck.errors import (
    DuplicateNameError,
    RegistrySealedError,
    TypeNotFoundError,
    UnresolvedReferenceError,
)
from adtcheck.schema import PrimitiveDecl, ProductType, SumType, TypeDecl
from adtcheck.types import PRIMITIVE_KINDS, referenced_names

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

log = structlog.get_logger(__name__)


def _references(decl: TypeDecl) -> Iterator[tuple[str, str]]:
    """Yield (field name, referenced type name) pairs for a declaration."""
    match decl:
        case PrimitiveDecl(kind=kind):
            for ref in referenced_names(kind):
                yield "<kind>", ref
        case ProductType() | SumType():
            for spec in decl.fields:
                for ref in referenced_names(spec.type):
                    yield spec.name, ref


class TypeRegistry:
    """Mapping from type name to declaration.

    Registration is append-only: a name can be registered once and its
    declaration is never replaced. Writes are serialized by a lock; once
    ``seal()`` is called the registry becomes a read-only snapshot that
    validators may share across threads.

    Example:
        registry = TypeRegistry()
        registry.register(ProductType("Payload", (FieldSpec("status", "str"),)))
        registry.resolve("Payload")

    """

    def __init__(self, settings: EngineSettings | None = None) -> None:
        self.settings = settings if settings is not None else EngineSettings()
        self._lock = threading.Lock()
        self._decls: dict[str, TypeDecl] = {}
        self._view: Mapping[str, TypeDecl] = self._decls
        self._sealed = False

        if self.settings.seed_primitives:
            for kind in PRIMITIVE_KINDS:
                self._decls[kind.tag] = PrimitiveDecl(kind.tag, kind())

    @property
    def sealed(self) -> bool:
        """Whether the registry still accepts declarations."""
        return self._sealed

    def register(self, decl: TypeDecl) -> TypeDecl:
        """Register a declaration under its name.

        Raises:
            RegistrySealedError: If the registry has been sealed
            DuplicateNameError: If the name is already registered
            UnresolvedReferenceError: If a field refers to an unregistered
                type other than the declaration itself

        """
        with self._lock:
            if self._sealed:
                log.warning("registration_rejected", name=decl.name, reason="sealed")
                raise RegistrySealedError(decl.name)
            if decl.name in self._decls:
                log.warning(
                    "registration_rejected",
                    name=decl.name,
                    reason="duplicate",
                )
                raise DuplicateNameError(decl.name)
            for field_name, ref in _references(decl):
                if ref != decl.name and ref not in self._decls:
                    log.warning(
                        "registration_rejected",
                        name=decl.name,
                        reason="unresolved",
                        reference=ref,
                    )
                    raise UnresolvedReferenceError(decl.name, field_name, ref)
            self._decls[decl.name] = decl

        log.debug("type_registered", name=decl.name, kind=type(decl).__name__)
        return decl

    def register_all(self, *decls: TypeDecl) -> None:
        """Register several declarations in order, stopping at the first error."""
        for decl in decls:
            self.register(decl)

    def seal(self) -> TypeRegistry:
        """Freeze the registry. Further registration raises RegistrySealedError."""
        with self._lock:
            if not self._sealed:
                self._view = MappingProxyType(dict(self._decls))
                self._sealed = True
                log.debug("registry_sealed", types=len(self._view))
        return self

    def resolve(self, name: str) -> TypeDecl:
        """Look up a declaration by name.

        Raises:
            TypeNotFoundError: If no type is registered under ``name``

        """
        try:
            return self._view[name]
        except KeyError:
            raise TypeNotFoundError(name, self.names()) from None

    def names(self) -> tuple[str, ...]:
        """All registered names, sorted."""
        return tuple(sorted(self._view))

    def __contains__(self, name: object) -> bool:
        return name in self._view

    def __len__(self) -> int:
        return len(self._view)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())
