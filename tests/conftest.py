import sys
from pathlib import Path

from click.testing import CliRunner
import pytest


def _ensure_repo_on_path() -> None:
    repo_root = Path(__file__).resolve().parent.parent
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))


_ensure_repo_on_path()

from prompt_agnostic.canonical.models import PackageIdentity  # noqa: E402
from prompt_agnostic.validation import SchemaValidator  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_schema_env(monkeypatch) -> None:
    monkeypatch.delenv("PROMPT_AGNOSTIC_SCHEMA_DIR", raising=False)


@pytest.fixture
def identity() -> PackageIdentity:
    return PackageIdentity(id="code-reviewer", name="Code Reviewer", author="Ada")


@pytest.fixture(scope="session")
def validator() -> SchemaValidator:
    return SchemaValidator.create_default()


@pytest.fixture
def write_text(tmp_path: Path):
    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()
