"""Tests for rule, example and persona sub-parsers and the body pipeline."""

from prompt_agnostic.canonical.models import (
    ContextSection,
    Example,
    ExamplesSection,
    InstructionsSection,
    PersonaSection,
    Priority,
    Rule,
    RulesSection,
)
from prompt_agnostic.inference.blocks import Block
from prompt_agnostic.inference.sections import (
    block_sections,
    classify_example_title,
    instructions_section,
    parse_body,
    parse_examples,
    parse_persona,
    parse_rules,
)


def test_parse_rules_rationale_and_inline_example() -> None:
    items, ordered = parse_rules("- Do X\n   - *Rationale: because Y*\n- Do Z\n   Example: `z()`")
    assert ordered is False
    assert items == (
        Rule(content="Do X", rationale="because Y"),
        Rule(content="Do Z", examples=("z()",)),
    )


def test_parse_rules_italic_line_is_rationale() -> None:
    items, _ = parse_rules("- Keep it small\n   *Prefer under 30 lines*")
    assert items[0].rationale == "Prefer under 30 lines"


def test_parse_rules_numbered_list_is_ordered() -> None:
    items, ordered = parse_rules("1. first\n2. second")
    assert ordered is True
    assert [rule.content for rule in items] == ["first", "second"]


def test_parse_rules_indented_fence_becomes_example() -> None:
    content = (
        "- Use context managers\n"
        "   ```python\n"
        "   with open(p) as f:\n"
        "       data = f.read()\n"
        "   ```"
    )
    items, _ = parse_rules(content)
    assert items[0].examples == ("with open(p) as f:\n    data = f.read()",)


def test_parse_rules_long_fence_keeps_inner_fence() -> None:
    content = (
        "- Show the markdown\n"
        "   ````markdown\n"
        "   ```python\n"
        "   x = 1\n"
        "   ```\n"
        "   ````\n"
        "- Next rule"
    )
    items, _ = parse_rules(content)
    assert items[0].examples == ("```python\nx = 1\n```",)
    assert [rule.content for rule in items] == ["Show the markdown", "Next rule"]


def test_parse_rules_empty_returns_none() -> None:
    assert parse_rules("") is None


def test_classify_example_title() -> None:
    assert classify_example_title("✓ Short function") == (True, "Short function")
    assert classify_example_title("❌ Incorrect: global state") == (False, "global state")
    assert classify_example_title("Good example: typed") == (True, "typed")
    assert classify_example_title("Don't - mutate args") == (False, "mutate args")
    assert classify_example_title("Doing things") == (None, "Doing things")
    assert classify_example_title("Good") == (True, "Good")


def test_parse_examples_from_subheadings() -> None:
    content = (
        "### ✓ Typed\n```python\ndef f(x: int) -> int: ...\n```\n\n"
        "### ❌ Bad: untyped\n```python\ndef f(x): ...\n```"
    )
    assert parse_examples(content) == (
        Example(description="Typed", code="def f(x: int) -> int: ...", language="python", good=True),
        Example(description="untyped", code="def f(x): ...", language="python", good=False),
    )


def test_parse_examples_from_bare_fence() -> None:
    examples = parse_examples("Use this:\n```sh\nmake test\n```")
    assert examples == (Example(description="Use this", code="make test", language="sh"),)


def test_parse_examples_marker_line_sets_good() -> None:
    examples = parse_examples("### Naming\n*Good example*\n```py\nx = 1\n```")
    assert examples[0].good is True


def test_parse_persona_named_with_style_and_expertise() -> None:
    text = (
        "You are Ada, a senior reviewer.\n"
        "Your communication style is direct, concise and friendly.\n"
        "Your areas of expertise include:\n"
        "- Python\n"
        "- Testing\n"
        "\n"
        "Always cite files."
    )
    persona, residual = parse_persona(text)
    assert persona.name == "Ada"
    assert persona.role == "a senior reviewer"
    assert persona.style == ("direct", "concise", "friendly")
    assert persona.expertise == ("Python", "Testing")
    assert residual == "Always cite files."


def test_parse_persona_article_keeps_whole_role() -> None:
    persona, _ = parse_persona("You are an expert, focused on security.")
    assert persona.name is None
    assert persona.role == "an expert, focused on security"


def test_parse_persona_role_with_dotted_name() -> None:
    persona, residual = parse_persona("You are a senior Node.js reviewer. Keep answers short.")
    assert persona.role == "a senior Node.js reviewer"
    assert residual == "Keep answers short."

    named, _ = parse_persona("You are Ada, a Vue.js specialist.")
    assert (named.name, named.role) == ("Ada", "a Vue.js specialist")

    role_is, _ = parse_persona("Your role is to maintain the Next.js app.")
    assert role_is.role == "to maintain the Next.js app"


def test_parse_persona_rendered_form() -> None:
    persona, residual = parse_persona("🤖 **Ada** - senior reviewer\n\n**Style:** calm, precise")
    assert (persona.icon, persona.name, persona.role) == ("🤖", "Ada", "senior reviewer")
    assert persona.style == ("calm", "precise")
    assert residual == ""


def test_important_marker_sets_high_priority() -> None:
    section = instructions_section("Notes", "**Important:** never push to main")
    assert section.priority is Priority.HIGH
    assert section.content == "never push to main"


def test_block_sections_falls_back_to_instructions() -> None:
    sections = block_sections(Block(title="Examples", content="No code here, only prose."))
    assert sections == [InstructionsSection(title="Examples", content="No code here, only prose.")]


def test_block_sections_context() -> None:
    sections = block_sections(Block(title="Background", content="Legacy monolith."))
    assert sections == [ContextSection(title="Background", content="Legacy monolith.")]


def test_parse_body_title_description_and_rules() -> None:
    parsed = parse_body("# Title\n\nDesc.\n\n## Rules\n- Do X\n   - *Rationale: because Y*\n")
    assert parsed.title == "Title"
    assert parsed.description == "Desc."
    assert parsed.sections == (
        RulesSection(title="Rules", items=(Rule(content="Do X", rationale="because Y"),)),
    )


def test_parse_body_persona_preamble_is_not_description() -> None:
    parsed = parse_body("# Bot\n\nYou are a helper.\n\n## Notes\ntext")
    assert parsed.description is None
    assert isinstance(parsed.sections[0], PersonaSection)
    assert parsed.sections[0].data.role == "a helper"
    assert parsed.sections[1] == InstructionsSection(title="Notes", content="text")


def test_parse_body_drops_paragraph_repeating_known_description() -> None:
    parsed = parse_body("# T\n\nSame text.\n\nMore.", description="Same text.")
    assert parsed.description == "Same text."
    assert parsed.sections == (InstructionsSection(title="Overview", content="More."),)


def test_parse_body_keeps_paragraph_differing_from_known_description() -> None:
    parsed = parse_body("# T\n\nOther text.", description="Known")
    assert parsed.sections == (InstructionsSection(title="Overview", content="Other text."),)


def test_parse_body_handler_runs_before_classifier() -> None:
    def handler(block: Block):
        if block.title == "Special":
            return [ContextSection(title="Special", content=block.content)]
        return None

    parsed = parse_body("## Special\n- looks like a rule\n\n## Other\n```sh\nls\n```", handler=handler)
    assert parsed.sections[0] == ContextSection(title="Special", content="- looks like a rule")
    assert isinstance(parsed.sections[1], ExamplesSection)
