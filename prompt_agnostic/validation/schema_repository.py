import json
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Sequence

from prompt_agnostic.constants import SCHEMA_DIR_ENV, SCHEMA_DIRS, SCHEMA_SUFFIX
from prompt_agnostic.errors import InvalidSchemaError, SchemaNotFoundError


class ISchemaRepository(ABC):
    @abstractmethod
    def has_schema(self, name: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def load_schema(self, name: str) -> dict[str, Any]:
        raise NotImplementedError


def default_schema_dirs() -> list[Path]:
    dirs = list(SCHEMA_DIRS)
    override = os.environ.get(SCHEMA_DIR_ENV)
    if override:
        dirs.insert(0, Path(override).expanduser())
    return dirs


class FormatSchemaRepository(ISchemaRepository):
    """Look up ``<name>.schema.json`` files in a fixed list of directories."""

    def __init__(self, search_dirs: Sequence[Path] | None = None) -> None:
        self.search_dirs = (
            [Path(path) for path in search_dirs]
            if search_dirs is not None
            else default_schema_dirs()
        )

    def schema_path(self, name: str) -> Path | None:
        filename = f"{name}{SCHEMA_SUFFIX}"
        for directory in self.search_dirs:
            candidate = directory / filename
            if candidate.is_file():
                return candidate
        return None

    def has_schema(self, name: str) -> bool:
        return self.schema_path(name) is not None

    def load_schema(self, name: str) -> dict[str, Any]:
        path = self.schema_path(name)
        if path is None:
            raise SchemaNotFoundError(name, self.search_dirs)
        try:
            schema = json.loads(path.read_text(encoding="utf-8"))
        except ValueError as exc:
            raise InvalidSchemaError(path, str(exc)) from exc
        if not isinstance(schema, dict):
            raise InvalidSchemaError(path, "schema root must be an object")
        return schema
