"""Tests for the compiled validator cache."""

from prompt_agnostic.validation import SchemaValidatorCache


def test_compiles_once_per_key() -> None:
    cache = SchemaValidatorCache()
    calls = []

    def compile_validator():
        calls.append(1)
        return object()

    first = cache.get_or_compile("claude", compile_validator)
    second = cache.get_or_compile("claude", compile_validator)
    assert first is second
    assert len(calls) == 1
    assert "claude" in cache
    assert len(cache) == 1


def test_keys_are_independent() -> None:
    cache = SchemaValidatorCache()
    claude = cache.get_or_compile("claude", object)
    agent = cache.get_or_compile("claude:agent", object)
    assert claude is not agent
    assert cache.keys() == ["claude", "claude:agent"]


def test_clear() -> None:
    cache = SchemaValidatorCache()
    cache.get_or_compile("cursor", object)
    cache.clear()
    assert len(cache) == 0
