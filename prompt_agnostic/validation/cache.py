from typing import Callable, Generic, TypeVar

V = TypeVar("V")


class SchemaValidatorCache(Generic[V]):
    """Compiled validators keyed by resolved schema key.

    Entries are only ever inserted if absent, so concurrent callers may race
    to compile the same key but all end up sharing the first stored value.
    """

    def __init__(self) -> None:
        self._validators: dict[str, V] = {}

    def get_or_compile(self, key: str, compile_validator: Callable[[], V]) -> V:
        cached = self._validators.get(key)
        if cached is not None:
            return cached
        return self._validators.setdefault(key, compile_validator())

    def __contains__(self, key: object) -> bool:
        return key in self._validators

    def __len__(self) -> int:
        return len(self._validators)

    def keys(self) -> list[str]:
        return list(self._validators)

    def clear(self) -> None:
        self._validators.clear()
