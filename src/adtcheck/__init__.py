"""adtcheck - Algebraic data type declarations and structural validation."""

from adtcheck.config import EngineSettings
from adtcheck.diagnostics import (
    FormattedReport,
    ReportGroup,
    ValidationResult,
    Violation,
    ViolationKind,
    report,
)
from adtcheck.discriminator import discriminate
from adtcheck.errors import (
    AdtCheckError,
    DiscriminationError,
    DuplicateNameError,
    InvalidDeclarationError,
    MissingDiscriminantError,
    RegistrationError,
    RegistrySealedError,
    TypeNotFoundError,
    UnknownVariantError,
    UnresolvedReferenceError,
)
from adtcheck.logging import configure_logging
from adtcheck.registry import TypeRegistry
from adtcheck.schema import (
    FieldSpec,
    PrimitiveDecl,
    ProductType,
    SumType,
    TypeDecl,
    Variant,
)
from adtcheck.types import (
    DictType,
    ListType,
    LiteralType,
    TypeDef,
    TypeRef,
)
from adtcheck.validator import (
    Validator,
    type_name,
    validate,
)

__all__ = [
    # Errors
    "AdtCheckError",
    # Type kinds
    "DictType",
    "DiscriminationError",
    "DuplicateNameError",
    # Configuration
    "EngineSettings",
    # Declarations
    "FieldSpec",
    # Diagnostics
    "FormattedReport",
    "InvalidDeclarationError",
    "ListType",
    "LiteralType",
    "MissingDiscriminantError",
    "PrimitiveDecl",
    "ProductType",
    "RegistrationError",
    "RegistrySealedError",
    "ReportGroup",
    "SumType",
    "TypeDecl",
    "TypeDef",
    "TypeNotFoundError",
    "TypeRef",
    # Registry
    "TypeRegistry",
    "UnknownVariantError",
    "UnresolvedReferenceError",
    "ValidationResult",
    # Validation
    "Validator",
    "Variant",
    "Violation",
    "ViolationKind",
    "configure_logging",
    "discriminate",
    "report",
    "type_name",
    "validate",
]
