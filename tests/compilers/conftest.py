import pytest

from prompt_agnostic.canonical.models import (
    CanonicalContent,
    CanonicalPackage,
    ContextSection,
    CustomSection,
    Example,
    ExamplesSection,
    Format,
    HookEvent,
    HookLanguage,
    HookSection,
    InstructionsSection,
    MetadataSection,
    PackageMetadata,
    PersonaData,
    PersonaSection,
    Priority,
    Rule,
    RulesSection,
    Subtype,
    ToolsSection,
)


@pytest.fixture
def make_package():
    def _make(
        *sections,
        subtype: Subtype = Subtype.RULE,
        fmt: Format = Format.CLAUDE,
        metadata: PackageMetadata | None = None,
        package_id: str = "style-guide",
    ) -> CanonicalPackage:
        head = MetadataSection(title="Style Guide", description="House style for Python code")
        return CanonicalPackage(
            id=package_id,
            version="1.0.0",
            name="Style Guide",
            description="House style for Python code",
            author="Ada",
            tags=frozenset({"python"}),
            format=fmt,
            subtype=subtype,
            content=CanonicalContent(sections=(head, *sections)),
            metadata=metadata or PackageMetadata(title="Style Guide", description="House style for Python code"),
        )

    return _make


@pytest.fixture
def rules_section() -> RulesSection:
    return RulesSection(
        title="Rules",
        items=(
            Rule(content="Use type hints", rationale="Editors catch mistakes early", examples=("def f(x: int) -> int",)),
            Rule(content="Prefer pathlib"),
        ),
    )


@pytest.fixture
def examples_section() -> ExamplesSection:
    return ExamplesSection(
        title="Examples",
        examples=(
            Example(description="Typed function", code="def f(x: int) -> int:\n    return x", language="python", good=True),
            Example(description="Untyped function", code="def f(x):\n    return x", language="python", good=False),
        ),
    )


@pytest.fixture
def every_section(rules_section, examples_section) -> tuple:
    return (
        PersonaSection(data=PersonaData(role="senior Python reviewer", name="Ada", style=("direct",))),
        ToolsSection(tools=("Read", "Grep")),
        InstructionsSection(title="Workflow", content="Review the diff first.", priority=Priority.HIGH),
        rules_section,
        examples_section,
        ContextSection(title="Background", content="Legacy Django monolith."),
        HookSection(event=HookEvent.SESSION_START, language=HookLanguage.BASH, code="make setup"),
        CustomSection(content="Cursor-only note", editor_type=Format.CURSOR, title="Cursor"),
    )
