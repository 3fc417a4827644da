"""Quality scoring shared by every compiler."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Iterable

from prompt_agnostic.canonical.models import Format
from prompt_agnostic.constants import LOSSY_MARKERS


@dataclass(frozen=True)
class ScoringPolicy:
    lossy_penalty: int = 10
    unsupported_subtype_penalty: int = 20
    degraded_subtype_penalty: int = 10
    validation_error_penalty: int = 5
    section_penalty: int = 5
    advisory_penalty: int = 5

    def __post_init__(self) -> None:
        for item in fields(self):
            if getattr(self, item.name) <= 0:
                raise ValueError(f"{item.name} must be positive")


def is_lossy(warnings: Iterable[str]) -> bool:
    return any(marker in warning.lower() for warning in warnings for marker in LOSSY_MARKERS)


@dataclass
class ConversionContext:
    """Warnings and penalties collected while rendering one package."""

    target: Format
    policy: ScoringPolicy = field(default_factory=ScoringPolicy)
    warnings: list[str] = field(default_factory=list)
    penalty: int = 0
    _penalized: set[int] = field(default_factory=set)

    def warn(self, message: str) -> None:
        self.warnings.append(message)

    def skip(self, label: str) -> None:
        self.warn(f"{label} section skipped (not supported by {self.target.label})")

    def penalize(self, points: int, message: str) -> None:
        self._penalized.add(len(self.warnings))
        self.warnings.append(message)
        self.penalty += points

    def record_validation(self, errors: list[str]) -> None:
        if errors:
            self.penalize(
                self.policy.validation_error_penalty * len(errors),
                f"Output failed {self.target.value} schema validation ({len(errors)} errors)",
            )

    @property
    def lossy(self) -> bool:
        return is_lossy(self.warnings)

    def score(self) -> int:
        score = 100 - self.penalty
        if self.lossy:
            score -= self.policy.lossy_penalty
        advisory = [
            warning
            for index, warning in enumerate(self.warnings)
            if index not in self._penalized and not is_lossy([warning])
        ]
        if advisory:
            score -= self.policy.advisory_penalty
        return max(0, min(100, score))
