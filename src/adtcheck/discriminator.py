"""Variant selection for sum types."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from adtcheck.errors import MissingDiscriminantError, UnknownVariantError

if TYPE_CHECKING:
    from adtcheck.schema import SumType, Variant


def discriminate(sum_type: SumType, value: Any) -> Variant:
    """Return the variant of ``sum_type`` selected by ``value``'s discriminant.

    Tags are unique within a sum type, so at most one variant can match.

    Raises:
        MissingDiscriminantError: If ``value`` is not a mapping or lacks the
            discriminant field
        UnknownVariantError: If the discriminant matches no variant tag

    """
    if not isinstance(value, Mapping) or sum_type.discriminant not in value:
        raise MissingDiscriminantError(sum_type.name, sum_type.discriminant)

    tag = value[sum_type.discriminant]
    variant = sum_type.variant(tag) if isinstance(tag, str) else None
    if variant is None:
        raise UnknownVariantError(sum_type.name, tag, sum_type.tags)
    return variant
