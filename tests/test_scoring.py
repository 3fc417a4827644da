"""Tests for the quality scoring policy."""

import pytest

from prompt_agnostic.canonical.models import Format
from prompt_agnostic.scoring import ConversionContext, ScoringPolicy, is_lossy


def test_clean_context_scores_100() -> None:
    ctx = ConversionContext(target=Format.AIDER)
    assert ctx.score() == 100
    assert ctx.lossy is False


def test_skip_message_and_single_lossy_penalty() -> None:
    ctx = ConversionContext(target=Format.AIDER)
    ctx.skip("Tools")
    assert ctx.warnings == ["Tools section skipped (not supported by Aider)"]
    assert ctx.score() == 90
    ctx.skip("Persona")
    assert ctx.score() == 90


def test_explicit_penalty_stacks_with_lossy() -> None:
    ctx = ConversionContext(target=Format.DROID)
    ctx.penalize(5, "Context section skipped (not supported by Droid)")
    ctx.penalize(5, "Hook section skipped (not supported by Droid)")
    assert ctx.score() == 80


def test_advisory_warning_costs_advisory_penalty_once() -> None:
    ctx = ConversionContext(target=Format.WINDSURF)
    ctx.warn("Content is long")
    ctx.warn("Another note")
    assert ctx.lossy is False
    assert ctx.score() == 95


def test_validation_errors_cost_per_error_and_warn() -> None:
    ctx = ConversionContext(target=Format.CURSOR)
    ctx.record_validation(["/a: bad", "/b: bad"])
    assert ctx.warnings == ["Output failed cursor schema validation (2 errors)"]
    assert ctx.score() == 90
    ctx.record_validation([])
    assert len(ctx.warnings) == 1


def test_score_is_clamped() -> None:
    ctx = ConversionContext(target=Format.RULER)
    ctx.penalize(150, "Hooks are not supported by Ruler")
    assert ctx.score() == 0


def test_custom_policy() -> None:
    policy = ScoringPolicy(lossy_penalty=25, advisory_penalty=1)
    ctx = ConversionContext(target=Format.AIDER, policy=policy)
    ctx.skip("Tools")
    ctx.warn("note")
    assert ctx.score() == 74


def test_policy_rejects_non_positive_values() -> None:
    with pytest.raises(ValueError, match="lossy_penalty must be positive"):
        ScoringPolicy(lossy_penalty=0)


def test_is_lossy_markers() -> None:
    assert is_lossy(["Hooks are NOT SUPPORTED here"])
    assert is_lossy(["x", "Persona section skipped"])
    assert not is_lossy(["Content exceeds the limit"])
