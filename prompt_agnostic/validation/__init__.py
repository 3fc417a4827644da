from prompt_agnostic.validation.cache import SchemaValidatorCache
from prompt_agnostic.validation.schema_repository import FormatSchemaRepository, ISchemaRepository
from prompt_agnostic.validation.validator import (
    SchemaValidator,
    ValidationIssue,
    ValidationResult,
    format_validation_errors,
)

__all__ = [
    "FormatSchemaRepository",
    "ISchemaRepository",
    "SchemaValidator",
    "SchemaValidatorCache",
    "ValidationIssue",
    "ValidationResult",
    "format_validation_errors",
]
