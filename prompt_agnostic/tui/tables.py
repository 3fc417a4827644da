from rich.table import Column, Table

from prompt_agnostic.canonical.models import ConversionResult, Format
from prompt_agnostic.taxonomy import FORMAT_SUBTYPES, default_subtype
from prompt_agnostic.tui.enums import UIStyle, score_style
from prompt_agnostic.validation.validator import ValidationResult


def _styled(value: str, style: str) -> str:
    return f"[{style}]{value}[/{style}]"


class ResultTable:
    @staticmethod
    def summary_block(result: ConversionResult, source: Format, target: Format) -> Table:
        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        table.add_row("From", source.label)
        table.add_row("To", target.label)
        table.add_row("Quality", _styled(str(result.quality_score), score_style(result.quality_score)))
        table.add_row("Lossy", "yes" if result.lossy_conversion else "no")
        table.add_row("Warnings", str(len(result.warnings)))
        return table

    @staticmethod
    def warnings_table(warnings: list[str]) -> Table:
        table = Table(
            Column(header="#", width=4, justify="right"),
            Column(header="Warning", overflow="fold"),
            expand=True,
            header_style="bold",
        )
        for index, warning in enumerate(warnings, start=1):
            table.add_row(str(index), warning)
        return table


class ValidationTable:
    @staticmethod
    def issues_table(result: ValidationResult) -> Table:
        table = Table(
            Column(header="Level", width=8),
            Column(header="Path", overflow="fold", max_width=40),
            Column(header="Message"),
            expand=True,
            header_style="bold",
        )
        for issue in result.errors:
            table.add_row(_styled("error", UIStyle.RED.value), issue.path, issue.message)
        for issue in result.warnings:
            table.add_row(_styled("warning", UIStyle.YELLOW.value), issue.path, issue.message)
        return table


class TaxonomyTable:
    @staticmethod
    def formats_table() -> Table:
        table = Table(
            Column(header="Format", width=12),
            Column(header="Name", width=14),
            Column(header="Subtypes", overflow="fold"),
            Column(header="Default", width=14),
            expand=True,
            header_style="bold",
        )
        for fmt, subtypes in FORMAT_SUBTYPES.items():
            table.add_row(
                fmt.value,
                fmt.label,
                ", ".join(subtype.value for subtype in subtypes),
                default_subtype(fmt).value,
            )
        return table


class ScoreTable:
    @staticmethod
    def scores_table(scores: dict[Format, int]) -> Table:
        table = Table(
            Column(header="Format", width=12),
            Column(header="Score", width=8, justify="right"),
            expand=True,
            header_style="bold",
        )
        for fmt, score in sorted(scores.items(), key=lambda item: (-item[1], item[0].value)):
            table.add_row(fmt.value, _styled(str(score), score_style(score)))
        return table
