"""Tests for the block classifier priority order."""

from prompt_agnostic.inference.classifier import BlockKind, classify_block, is_rule_list, looks_like_persona


def test_title_keyword_beats_content_shape() -> None:
    assert classify_block("Coding Guidelines", "```py\nx = 1\n```") is BlockKind.RULES
    assert classify_block("Examples", "- just a list") is BlockKind.EXAMPLES
    assert classify_block("Project Background", "- a\n- b") is BlockKind.CONTEXT


def test_code_fence_beats_list_shape() -> None:
    assert classify_block("Usage", "- step\n\n```sh\nmake\n```") is BlockKind.EXAMPLES


def test_list_and_bold_labels_are_rules() -> None:
    assert classify_block("Style", "- one\n- two\n  continued") is BlockKind.RULES
    assert classify_block("Style", "1. first\n2. second") is BlockKind.RULES
    assert classify_block("Style", "**Naming**: use snake_case\n**Imports**: sorted") is BlockKind.RULES


def test_default_is_instructions() -> None:
    assert classify_block("Workflow", "Read the ticket, then write code.") is BlockKind.INSTRUCTIONS


def test_exact_role_title_with_persona_body() -> None:
    assert classify_block("Role", "You are a careful reviewer.") is BlockKind.PERSONA
    assert classify_block("Persona", "🤖 **Ada** - senior reviewer") is BlockKind.PERSONA
    assert classify_block("Role Examples", "You are a careful reviewer.") is BlockKind.EXAMPLES
    assert classify_block("Role", "Owns the release process.") is BlockKind.INSTRUCTIONS


def test_looks_like_persona() -> None:
    assert looks_like_persona("You are an expert.")
    assert looks_like_persona("Hello. Your role is to review.")
    assert not looks_like_persona("Review the code.")


def test_is_rule_list_requires_all_top_level_items() -> None:
    assert is_rule_list("- a\n   indented note\n- b")
    assert not is_rule_list("- a\nplain sentence")
    assert not is_rule_list("")
