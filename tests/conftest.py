"""Shared fixtures for adtcheck tests."""

from collections.abc import Iterator

import pytest
import structlog

from adtcheck import (
    FieldSpec,
    ProductType,
    SumType,
    TypeRegistry,
    Variant,
)
from adtcheck.types import StrType


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    yield
    structlog.reset_defaults()


@pytest.fixture
def registry() -> TypeRegistry:
    """Registry holding the loading/success/error response union."""
    reg = TypeRegistry()
    reg.register(ProductType("Payload", (FieldSpec("status", StrType()),)))
    reg.register(
        SumType(
            name="Response",
            discriminant="state",
            variants=(
                Variant("loading"),
                Variant("success", (FieldSpec("data", "Payload"),)),
                Variant("error", (FieldSpec("error", "str"),)),
            ),
        ),
    )
    return reg
