"""JSON-Schema validation of format payloads."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any, Iterator

from jsonschema import Draft202012Validator, ValidationError, validators
from jsonschema.exceptions import SchemaError

from prompt_agnostic.canonical.models import Format, Subtype
from prompt_agnostic.errors import InvalidSchemaError, ParseError
from prompt_agnostic.inference.frontmatter import load_toml, split_frontmatter
from prompt_agnostic.validation.cache import SchemaValidatorCache
from prompt_agnostic.validation.schema_repository import FormatSchemaRepository, ISchemaRepository

HEADLESS_FORMATS = frozenset(
    {
        Format.WINDSURF.value,
        Format.AGENTS_MD.value,
        Format.RULER.value,
        Format.AIDER.value,
        Format.TRAE.value,
        Format.REPLIT.value,
    }
)

FORMAT_SCHEMAS: dict[str, str] = {
    Format.KIRO.value: "kiro-steering",
    Format.AGENTS_MD.value: "agents-md",
    Format.GENERIC.value: "canonical",
}

SUBTYPE_SCHEMAS: dict[tuple[str, str], str] = {
    (Format.CURSOR.value, Subtype.SLASH_COMMAND.value): "cursor-command",
    (Format.KIRO.value, Subtype.AGENT.value): "kiro-agent",
}

_REQUIRED_RE = re.compile(r"^'(.+?)' is a required property")


def _deprecated(validator: Any, deprecated: Any, instance: Any, schema: dict) -> Iterator[ValidationError]:
    if deprecated is True:
        yield ValidationError("is deprecated")


FormatValidator = validators.extend(Draft202012Validator, {"deprecated": _deprecated})


@dataclass(frozen=True)
class ValidationIssue:
    path: str
    message: str
    keyword: str = ""

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    errors: list[ValidationIssue] = field(default_factory=list)
    warnings: list[ValidationIssue] = field(default_factory=list)


def _value(item: Any) -> str:
    return str(getattr(item, "value", item))


def schema_name(fmt: str) -> str:
    return FORMAT_SCHEMAS.get(fmt, fmt.replace(".", "-"))


def error_path(error: ValidationError) -> str:
    parts = [str(part) for part in error.absolute_path]
    if error.validator == "required":
        missing = _REQUIRED_RE.match(error.message)
        if missing:
            parts.append(missing.group(1))
    return "/" + "/".join(parts)


def format_schema_error(error: ValidationError) -> ValidationIssue:
    return ValidationIssue(path=error_path(error), message=error.message, keyword=str(error.validator))


class SchemaValidator:
    def __init__(
        self,
        repository: ISchemaRepository,
        cache: SchemaValidatorCache | None = None,
    ) -> None:
        self.repository = repository
        self.cache = cache if cache is not None else SchemaValidatorCache()

    @classmethod
    def create_default(cls) -> "SchemaValidator":
        return cls(repository=FormatSchemaRepository(), cache=SchemaValidatorCache())

    def resolve(self, fmt: Format | str, subtype: Subtype | str | None = None) -> tuple[str, str]:
        """Return (cache key, schema name), preferring a format+subtype schema."""
        fmt_value = _value(fmt)
        if subtype is not None:
            subtype_value = _value(subtype)
            name = SUBTYPE_SCHEMAS.get(
                (fmt_value, subtype_value), f"{schema_name(fmt_value)}-{subtype_value}"
            )
            if self.repository.has_schema(name):
                return f"{fmt_value}:{subtype_value}", name
        return fmt_value, schema_name(fmt_value)

    def _compile(self, name: str) -> Any:
        schema = self.repository.load_schema(name)
        try:
            FormatValidator.check_schema(schema)
        except SchemaError as exc:
            raise InvalidSchemaError(self.repository.schema_path(name), exc.message) from exc
        return FormatValidator(schema)

    def validator_for(self, fmt: Format | str, subtype: Subtype | str | None = None) -> Any:
        key, name = self.resolve(fmt, subtype)
        return self.cache.get_or_compile(key, lambda: self._compile(name))

    def validate_format(
        self, fmt: Format | str, data: Any, subtype: Subtype | str | None = None
    ) -> ValidationResult:
        validator = self.validator_for(fmt, subtype)
        errors: list[ValidationIssue] = []
        warnings: list[ValidationIssue] = []
        for error in sorted(validator.iter_errors(data), key=error_path):
            issue = format_schema_error(error)
            if error.validator == "deprecated":
                warnings.append(issue)
            else:
                errors.append(issue)
        return ValidationResult(valid=not errors, errors=errors, warnings=warnings)

    def validate_markdown(
        self, fmt: Format | str, text: str, subtype: Subtype | str | None = None
    ) -> ValidationResult:
        fmt_value = _value(fmt)
        subtype_value = _value(subtype) if subtype is not None else None
        try:
            data = self.payload_for(fmt_value, text, subtype_value)
        except ParseError as exc:
            return ValidationResult(valid=False, errors=[ValidationIssue(path="/", message=exc.detail)])
        return self.validate_format(fmt_value, data, subtype_value)

    @staticmethod
    def payload_for(fmt: str, text: str, subtype: str | None = None) -> Any:
        if fmt == Format.GEMINI.value:
            return load_toml(text, fmt)
        if fmt == Format.GENERIC.value or (fmt == Format.KIRO.value and subtype == Subtype.AGENT.value):
            try:
                return json.loads(text)
            except ValueError as exc:
                raise ParseError(fmt, f"invalid JSON ({exc})") from exc
        if fmt in HEADLESS_FORMATS:
            return {"content": text}
        frontmatter = split_frontmatter(text)
        return {"frontmatter": frontmatter.data, "content": frontmatter.body}


def format_validation_errors(result: ValidationResult) -> str:
    lines: list[str] = []
    if result.errors:
        lines.append("Validation Errors:")
        lines.extend(f"  - {issue}" for issue in result.errors)
    if result.warnings:
        if lines:
            lines.append("")
        lines.append("Warnings:")
        lines.extend(f"  - {issue}" for issue in result.warnings)
    return "\n".join(lines)
