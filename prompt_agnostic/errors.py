from pathlib import Path
from typing import Iterable


class ConverterError(Exception):
    """Base user-facing converter error."""


class ParseError(ConverterError):
    def __init__(self, fmt: str, detail: str) -> None:
        self.format = fmt
        self.detail = detail
        super().__init__(f"Failed to parse {fmt} content: {detail}")


class InvalidTaxonomyError(ConverterError):
    def __init__(self, fmt: str, subtype: str) -> None:
        self.format = fmt
        self.subtype = subtype
        super().__init__(f"Subtype '{subtype}' is not valid for format '{fmt}'")


class UnsupportedFormatError(ConverterError):
    def __init__(self, fmt: str, direction: str) -> None:
        self.format = fmt
        self.direction = direction
        super().__init__(f"No {direction} available for format '{fmt}'")


class SchemaError(ConverterError):
    """Base error for schema lookup and loading."""


class SchemaNotFoundError(SchemaError):
    def __init__(self, name: str, searched: Iterable[Path]) -> None:
        self.name = name
        self.searched = list(searched)
        dirs = ", ".join(str(path) for path in self.searched) or "<none>"
        super().__init__(f"Schema '{name}' not found (searched: {dirs})")


class InvalidSchemaError(SchemaError):
    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Invalid schema file ({detail}): {path}")
