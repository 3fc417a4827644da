import json
import logging
from pathlib import Path
from typing import Callable, Optional

import click
from rich.console import Console

from prompt_agnostic.canonical.models import Format, PackageIdentity, Subtype
from prompt_agnostic.compilers import CompileOptions, convert, score_formats
from prompt_agnostic.errors import ConverterError
from prompt_agnostic.parsers import detect_format, is_kiro_agent_format, parse
from prompt_agnostic.tui import ConverterConsoleUI
from prompt_agnostic.validation import SchemaValidator


FORMAT_VALUES = [fmt.value for fmt in Format if fmt is not Format.MCP]
SUBTYPE_VALUES = [subtype.value for subtype in Subtype]


def _format_option(name: str, dest: str, required: bool, help_text: str) -> Callable:
    return click.option(
        name,
        dest,
        required=required,
        type=click.Choice(FORMAT_VALUES, case_sensitive=False),
        help=help_text,
    )


def _subtype_option() -> Callable:
    return click.option(
        "--subtype",
        type=click.Choice(SUBTYPE_VALUES, case_sensitive=False),
        default=None,
        help="Override the detected subtype.",
    )


def _source_argument() -> Callable:
    return click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))


def _read(source: Path) -> str:
    return source.read_text(encoding="utf-8")


def _identity(source: Path, package_id: Optional[str], name: Optional[str]) -> PackageIdentity:
    return PackageIdentity(id=package_id or source.stem, name=name or source.stem)


def _source_format(content: str, value: Optional[str]) -> Format:
    return Format(value.lower()) if value else detect_format(content)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Convert AI assistant configuration between formats."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    ctx.obj = {}


@cli.command("convert", help="Convert a file from one format to another.")
@_source_argument()
@_format_option("--from", "from_fmt", False, "Source format; detected when omitted.")
@_format_option("--to", "to_fmt", True, "Target format.")
@_subtype_option()
@click.option("--id", "package_id", default=None, help="Package id; defaults to the file name.")
@click.option("--name", default=None, help="Package name; defaults to the file name.")
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), default=None)
@click.option("--json", "as_json", is_flag=True, help="Print the conversion result as JSON.")
def convert_cmd(
    source: Path,
    from_fmt: Optional[str],
    to_fmt: str,
    subtype: Optional[str],
    package_id: Optional[str],
    name: Optional[str],
    output: Optional[Path],
    as_json: bool,
) -> None:
    content = _read(source)
    source_fmt = _source_format(content, from_fmt)
    target_fmt = Format(to_fmt.lower())
    try:
        pkg = parse(content, source_fmt, _identity(source, package_id, name), subtype)
        result = convert(pkg, target_fmt, CompileOptions())
    except ConverterError as exc:
        raise click.ClickException(str(exc))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    elif output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(result.content, encoding="utf-8")
        ConverterConsoleUI(Console()).render_conversion(result, source_fmt, target_fmt, output)
    else:
        click.echo(result.content, nl=False)
        ConverterConsoleUI(Console(stderr=True)).render_conversion(result, source_fmt, target_fmt)

    if not result.content:
        raise click.exceptions.Exit(1)


@cli.command(help="Validate a file against its format schema.")
@_source_argument()
@_format_option("--format", "fmt", False, "File format; detected when omitted.")
@_subtype_option()
def validate(source: Path, fmt: Optional[str], subtype: Optional[str]) -> None:
    ui = ConverterConsoleUI(Console())
    content = _read(source)
    file_fmt = _source_format(content, fmt)
    if subtype is None and file_fmt is Format.KIRO and is_kiro_agent_format(content):
        subtype = Subtype.AGENT.value
    try:
        result = SchemaValidator.create_default().validate_markdown(file_fmt, content, subtype)
    except ConverterError as exc:
        raise click.ClickException(str(exc))

    ui.render_validation(source, file_fmt, result)
    if not result.valid:
        raise click.exceptions.Exit(1)


@cli.command(help="Detect the format of a file.")
@_source_argument()
def detect(source: Path) -> None:
    ConverterConsoleUI(Console()).render_detection(source, detect_format(_read(source)))


@cli.command(help="List supported formats and their subtypes.")
def formats() -> None:
    ConverterConsoleUI(Console()).render_formats()


@cli.command(help="Score how well a file converts to every format.")
@_source_argument()
@_format_option("--from", "from_fmt", False, "Source format; detected when omitted.")
@click.option("--json", "as_json", is_flag=True, help="Print the scores as JSON.")
def score(source: Path, from_fmt: Optional[str], as_json: bool) -> None:
    content = _read(source)
    source_fmt = _source_format(content, from_fmt)
    try:
        pkg = parse(content, source_fmt, _identity(source, None, None))
    except ConverterError as exc:
        raise click.ClickException(str(exc))

    scores = score_formats(pkg)
    if as_json:
        click.echo(json.dumps({fmt.value: value for fmt, value in scores.items()}, indent=2))
        return
    ConverterConsoleUI(Console()).render_scores(source, scores)


def main() -> int:
    try:
        code = cli(standalone_mode=False)
    except click.exceptions.Exit as exc:
        code = exc.exit_code
        return code if isinstance(code, int) else 1
    except click.ClickException as exc:
        exc.show()
        return 2
    return code if isinstance(code, int) else 0


if __name__ == "__main__":
    raise SystemExit(main())
