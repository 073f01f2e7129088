"""Violations, validation results and formatted reports."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable

ROOT_GROUP = "<root>"


class ViolationKind(StrEnum):
    """Kinds of structural violations."""

    TYPE_MISMATCH = "TypeMismatch"
    UNEXPECTED_FIELD = "UnexpectedField"
    MISSING_FIELD = "MissingField"
    INVALID_DISCRIMINANT = "InvalidDiscriminant"
    EXTRANEOUS_VARIANT_FIELD = "ExtraneousVariantField"


type Path = tuple[str, ...]


def format_path(path: Path) -> str:
    """Render a path as dotted field names, ``<root>`` when empty."""
    return ".".join(path) if path else ROOT_GROUP


@dataclass(frozen=True)
class Violation:
    """A structural violation found during validation."""

    path: Path
    kind: ViolationKind
    detail: str

    @property
    def key(self) -> tuple[Path, ViolationKind]:
        """Identity used for deduplication."""
        return (self.path, self.kind)

    def __str__(self) -> str:
        return f"{format_path(self.path)}: {self.kind}: {self.detail}"

    def to_dict(self) -> dict[str, Any]:
        return {"path": list(self.path), "kind": str(self.kind), "detail": self.detail}


@dataclass
class DiagnosticCollector:
    """Accumulates violations in discovery order, dropping repeated (path, kind)."""

    _violations: list[Violation] = field(default_factory=list)
    _seen: set[tuple[Path, ViolationKind]] = field(default_factory=set)

    def add(self, path: Path, kind: ViolationKind, detail: str) -> None:
        violation = Violation(path, kind, detail)
        if violation.key in self._seen:
            return
        self._seen.add(violation.key)
        self._violations.append(violation)

    def __len__(self) -> int:
        return len(self._violations)

    def result(self) -> ValidationResult:
        return ValidationResult(violations=tuple(self._violations))


@dataclass(frozen=True)
class ValidationResult:
    """Result of validating one value against one type."""

    violations: tuple[Violation, ...] = ()

    @property
    def ok(self) -> bool:
        """Return True if no violations were found."""
        return len(self.violations) == 0

    def __bool__(self) -> bool:
        return self.ok

    def kinds(self) -> tuple[ViolationKind, ...]:
        """Violation kinds in discovery order."""
        return tuple(v.kind for v in self.violations)

    def report(self) -> FormattedReport:
        """Format the violations for display."""
        return report(self.violations)

    def to_dict(self) -> dict[str, Any]:
        return {"ok": self.ok, "violations": [v.to_dict() for v in self.violations]}

    def __str__(self) -> str:
        return str(self.report())


@dataclass(frozen=True)
class ReportGroup:
    """Violations that share a top-level path segment."""

    name: str
    violations: tuple[Violation, ...]


@dataclass(frozen=True)
class FormattedReport:
    """Ordered, deduplicated violations grouped by top-level field."""

    groups: tuple[ReportGroup, ...]

    @property
    def ok(self) -> bool:
        return not self.groups

    def lines(self) -> tuple[str, ...]:
        """One line per violation, in report order."""
        return tuple(str(v) for g in self.groups for v in g.violations)

    def __str__(self) -> str:
        if self.ok:
            return "Validation passed."

        count = sum(len(g.violations) for g in self.groups)
        lines = [f"Validation failed with {count} violation(s):"]
        for group in self.groups:
            lines.append(f"[{group.name}]")
            lines.extend(f"  {v}" for v in group.violations)
        return "\n".join(lines)

    def to_json(self, *, indent: int | None = 2) -> str:
        """Serialize the report to a JSON string with sorted keys."""
        data = {
            "ok": self.ok,
            "groups": [
                {"name": g.name, "violations": [v.to_dict() for v in g.violations]}
                for g in self.groups
            ],
        }
        return json.dumps(data, indent=indent, sort_keys=True)


def _sort_key(violation: Violation) -> tuple[Path, str]:
    return (violation.path, violation.kind.value)


def report(violations: Iterable[Violation]) -> FormattedReport:
    """Deduplicate, sort and group violations.

    Violations are ordered by path, then by kind name, and grouped by their
    first path segment (``<root>`` for violations on the value itself).
    """
    unique: dict[tuple[Path, ViolationKind], Violation] = {}
    for violation in violations:
        unique.setdefault(violation.key, violation)

    groups: dict[str, list[Violation]] = {}
    for violation in sorted(unique.values(), key=_sort_key):
        name = violation.path[0] if violation.path else ROOT_GROUP
        groups.setdefault(name, []).append(violation)

    return FormattedReport(
        groups=tuple(ReportGroup(name, tuple(vs)) for name, vs in groups.items()),
    )
