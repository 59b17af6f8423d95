from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.text import Text

from sourcegauge import __version__
from sourcegauge.batch import AnalysisRecord, BatchResult, analyze_paths, analyze_source
from sourcegauge.config import ConfigError, SourceGaugeConfig, load_config
from sourcegauge.engine.parser import ParseError
from sourcegauge.engine.types import SourceUnit
from sourcegauge.gates import search_rules
from sourcegauge.logging_utils import configure_logging
from sourcegauge.reporters.json_reporter import render_json, rule_to_dict
from sourcegauge.reporters.terminal import render_rules_terminal, render_terminal
from sourcegauge.validation import ValidationError, validate_source_unit

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="SourceGauge - line counts, complexity and maintainability for JavaScript.",
)
console = Console()
err_console = Console(stderr=True)
logger = logging.getLogger(__name__)

STDIN_PATH = Path("-")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback()
def _main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Verbose logs (printed to stderr)."),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Reduce non-essential output."),
    ] = False,
) -> None:
    """SourceGauge CLI."""

    if verbose and quiet:
        raise typer.BadParameter("Choose at most one: --verbose or --quiet.")
    configure_logging(verbose=verbose, quiet=quiet)


def _load_config_or_exit(project_dir: Path) -> SourceGaugeConfig:
    try:
        return load_config(project_dir)
    except ConfigError as exc:
        err_console.print(f"Config error: {exc}")
        raise typer.Exit(code=2) from exc


def _read_stdin(name: str | None) -> SourceUnit:
    if not name:
        raise typer.BadParameter("--name is required when reading from stdin.")
    return SourceUnit(file_name=name, code=typer.get_text_stream("stdin").read())


def _split_stdin(paths: list[Path]) -> tuple[list[Path], bool]:
    files = [p for p in paths if p != STDIN_PATH]
    if len(files) < len(paths) - 1:
        raise typer.BadParameter("'-' may be given at most once.")
    return files, len(files) != len(paths)


@app.command()
def analyze(
    paths: Annotated[
        list[Path],
        typer.Argument(help="JavaScript files, or '-' to read one file from stdin."),
    ],
    name: Annotated[
        str | None,
        typer.Option("--name", help="File name to report for source read from stdin."),
    ] = None,
    fmt: Annotated[
        str,
        typer.Option("--format", help="Output format: terminal, json.", show_default=True),
    ] = "terminal",
    fail_under: Annotated[
        int | None,
        typer.Option("--fail-under", min=0, max=100, help="Fail if any maintainability index is below this value."),
    ] = None,
    project_dir: Annotated[
        Path,
        typer.Option("--project-dir", help="Directory holding the pyproject.toml to read.", show_default=True),
    ] = Path("."),
) -> None:
    """Analyze JavaScript files and report their metrics."""

    normalized = fmt.strip().lower()
    if normalized not in {"terminal", "json"}:
        raise typer.BadParameter("Unsupported format. Use: terminal, json.")

    config = _load_config_or_exit(project_dir)
    files, use_stdin = _split_stdin(paths)

    records: list[AnalysisRecord] = []
    if use_stdin:
        unit = _read_stdin(name)
        records.append(analyze_source(unit.file_name, unit.code, config=config))
    records.extend(analyze_paths(files, config=config).records)
    logger.debug("analyzed %d source unit(s)", len(records))

    result = BatchResult(
        records=tuple(records),
        fail_under=fail_under if fail_under is not None else config.fail_under,
    )
    if normalized == "json":
        typer.echo(render_json(result))
    else:
        render_terminal(result, console=console)

    if not result.ok:
        raise typer.Exit(code=1)


@app.command()
def validate(
    paths: Annotated[
        list[Path],
        typer.Argument(help="JavaScript files, or '-' to read one file from stdin."),
    ],
    name: Annotated[
        str | None,
        typer.Option("--name", help="File name to report for source read from stdin."),
    ] = None,
    project_dir: Annotated[
        Path,
        typer.Option("--project-dir", help="Directory holding the pyproject.toml to read.", show_default=True),
    ] = Path("."),
) -> None:
    """Check file names and syntax without computing metrics."""

    config = _load_config_or_exit(project_dir)
    files, use_stdin = _split_stdin(paths)

    units: list[SourceUnit] = []
    if use_stdin:
        units.append(_read_stdin(name))
    for path in files:
        try:
            units.append(SourceUnit(file_name=path.name, code=path.read_text(encoding="utf-8", errors="replace")))
        except OSError as exc:
            raise typer.BadParameter(f"Cannot read {path}: {exc}") from exc

    failures = 0
    for unit in units:
        try:
            validate_source_unit(unit, config.limits)
        except ValidationError as exc:
            failures += 1
            _print_check(unit.file_name, ok=False, detail=exc.reason)
        except ParseError as exc:
            failures += 1
            _print_check(unit.file_name, ok=False, detail=f"Invalid JavaScript code: {exc.message}")
        else:
            _print_check(unit.file_name, ok=True)

    if failures:
        raise typer.Exit(code=1)


@app.command()
def rules(
    search: Annotated[
        str | None,
        typer.Option("--search", help="Filter rules by id or name (case-insensitive)."),
    ] = None,
    fmt: Annotated[
        str,
        typer.Option("--format", help="Output format: terminal, json.", show_default=True),
    ] = "terminal",
    project_dir: Annotated[
        Path,
        typer.Option("--project-dir", help="Directory holding the pyproject.toml to read.", show_default=True),
    ] = Path("."),
) -> None:
    """List the quality rules configured in [tool.sourcegauge]."""

    config = _load_config_or_exit(project_dir)
    selected = search_rules(config.rules, search)

    normalized = fmt.strip().lower()
    if normalized == "json":
        typer.echo(json.dumps([rule_to_dict(r) for r in selected], indent=2, sort_keys=True))
        return
    if normalized != "terminal":
        raise typer.BadParameter("Unsupported format. Use: terminal, json.")

    if not selected:
        console.print(Text("No rules configured.", style="dim"))
        return
    render_rules_terminal(selected, console=console)


def _print_check(file_name: str, *, ok: bool, detail: str | None = None) -> None:
    line = Text()
    if ok:
        line.append("✔ ", style="green")
        line.append(file_name)
    else:
        line.append("✖ ", style="bold red")
        line.append(file_name, style="bold")
        line.append(f"  {detail}")
    console.print(line)
