from pathlib import Path
from typing import Final


PACKAGE_ROOT: Final[Path] = Path(__file__).resolve().parent

SCHEMA_DIR_ENV: Final[str] = "PROMPT_AGNOSTIC_SCHEMA_DIR"
SCHEMA_DIRS: Final[tuple[Path, ...]] = (
    PACKAGE_ROOT / "schemas",
    PACKAGE_ROOT.parent / "schemas",
)
SCHEMA_SUFFIX: Final[str] = ".schema.json"

CANONICAL_FORMAT: Final[str] = "canonical"
CANONICAL_VERSION: Final[str] = "1.0"
DEFAULT_PACKAGE_VERSION: Final[str] = "1.0.0"

OVERVIEW_TITLE: Final[str] = "Overview"
WINDSURF_CHARACTER_LIMIT: Final[int] = 12_000
AIDER_DESCRIPTION_LIMIT: Final[int] = 200
RULER_COMMENT_END_ESCAPE: Final[str] = "--&gt;"
MAX_INFERRED_TAGS: Final[int] = 5

RULE_TITLE_KEYWORDS: Final[tuple[str, ...]] = ("rule", "guideline", "principle", "convention")
EXAMPLE_TITLE_KEYWORDS: Final[tuple[str, ...]] = ("example", "sample")
CONTEXT_TITLE_KEYWORDS: Final[tuple[str, ...]] = ("context", "background")
PERSONA_TITLES: Final[tuple[str, ...]] = ("role", "persona")

LOSSY_MARKERS: Final[tuple[str, ...]] = ("skipped", "not supported")

TECH_KEYWORDS: Final[tuple[str, ...]] = (
    "python",
    "typescript",
    "javascript",
    "react",
    "vue",
    "django",
    "flask",
    "fastapi",
    "node",
    "rust",
    "go",
    "java",
    "docker",
    "kubernetes",
    "sql",
    "testing",
)
