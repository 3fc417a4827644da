from pathlib import Path

from rich.console import Console

from prompt_agnostic.canonical.models import ConversionResult, Format
from prompt_agnostic.tui.enums import UIStyle
from prompt_agnostic.tui.sections import UISection
from prompt_agnostic.tui.tables import ResultTable, ScoreTable, TaxonomyTable, ValidationTable
from prompt_agnostic.validation.validator import ValidationResult


class ConverterConsoleUI:
    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render_conversion(
        self,
        result: ConversionResult,
        source: Format,
        target: Format,
        output: Path | None = None,
    ) -> None:
        subtitle = f"written to {output}" if output is not None else None
        self.console.print(
            UISection.scored(
                "conversion",
                ResultTable.summary_block(result, source, target),
                result.quality_score,
                subtitle=subtitle,
            )
        )
        if result.warnings:
            self.console.print(
                UISection.wrap("warnings", ResultTable.warnings_table(result.warnings), style=UIStyle.YELLOW)
            )

    def render_validation(self, path: Path, fmt: Format, result: ValidationResult) -> None:
        if result.valid and not result.warnings:
            self.console.print(UISection.verdict("validate", f"{path} is a valid {fmt.label} file.", ok=True))
            return
        self.console.print(
            UISection.wrap(
                "validate",
                ValidationTable.issues_table(result),
                style=UIStyle.GREEN if result.valid else UIStyle.RED,
                subtitle=str(path),
            )
        )

    def render_detection(self, path: Path, fmt: Format) -> None:
        self.console.print(UISection.wrap("detect", f"{path}: {fmt.value} ({fmt.label})", style=UIStyle.CYAN))

    def render_formats(self) -> None:
        self.console.print(UISection.wrap("formats", TaxonomyTable.formats_table()))

    def render_scores(self, path: Path, scores: dict[Format, int]) -> None:
        self.console.print(
            UISection.wrap(
                "compatibility",
                ScoreTable.scores_table(scores),
                style=UIStyle.MAGENTA,
                subtitle=str(path),
            )
        )
