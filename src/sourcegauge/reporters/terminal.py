from __future__ import annotations

from collections.abc import Iterable

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from sourcegauge import __version__
from sourcegauge.batch import AnalysisRecord, BatchResult
from sourcegauge.config import QualityRule

_STATUS_STYLE = {"analyzed": "green", "failed": "bold red"}


def render_terminal(result: BatchResult, *, console: Console) -> None:
    header = Text()
    header.append("SourceGauge ", style="bold")
    header.append(f"v{__version__}", style="dim")
    header.append(" - JavaScript metrics", style="dim")

    console.print(
        Panel(
            header,
            subtitle=f"Analyzed {len(result.records)} files",
            border_style="cyan",
        )
    )

    table = Table(show_header=True, header_style="bold")
    table.add_column("File")
    table.add_column("LOC", justify="right")
    table.add_column("SLOC", justify="right")
    table.add_column("LLOC", justify="right")
    table.add_column("Comments", justify="right")
    table.add_column("Comment %", justify="right")
    table.add_column("Code/Comment", justify="right")
    table.add_column("CC", justify="right")
    table.add_column("MI", justify="right")

    for record in result.records:
        report = record.report
        if report is None:
            table.add_row(Text(record.file_name, style=_STATUS_STYLE["failed"]), *(["-"] * 8))
            continue
        table.add_row(
            record.file_name,
            str(report.loc),
            str(report.sloc),
            str(report.lloc),
            str(report.comments),
            report.comment_percentage,
            report.code_to_comment_ratio,
            str(report.cyclomatic_complexity),
            Text(report.maintainability_index, style=_mi_style(report.maintainability_index)),
        )
    console.print(table)

    for record in result.records:
        _print_problems(record, console=console)

    _print_summary(result, console=console)


def render_rules_terminal(rules: Iterable[QualityRule], *, console: Console) -> None:
    table = Table(show_header=True, header_style="bold")
    table.add_column("ID")
    table.add_column("Name")
    table.add_column("Condition")
    table.add_column("Status")
    table.add_column("Description", style="dim")
    for rule in rules:
        table.add_row(
            rule.rule_id,
            rule.name,
            f"{rule.metric} {rule.condition} {rule.threshold:g}",
            Text(rule.status, style="green" if rule.active else "dim"),
            rule.description,
        )
    console.print(table)


def _print_problems(record: AnalysisRecord, *, console: Console) -> None:
    if record.status == "failed":
        line = Text()
        line.append("  ✖ ", style="bold red")
        line.append(record.file_name, style="bold")
        line.append(f"  {record.error_details or 'analysis failed'}")
        console.print(line)
    for violation in record.violations:
        line = Text()
        line.append("  ⚠ ", style="yellow")
        line.append(violation.rule.rule_id, style="bold")
        line.append(f"  {record.file_name}: {violation.rule.name}")
        line.append(f"  ({violation.message})", style="dim")
        console.print(line)


def _print_summary(result: BatchResult, *, console: Console) -> None:
    console.print(Text("─" * 60, style="dim"))
    failed = len(result.failed)
    violations = sum(len(r.violations) for r in result.records)
    status = "OK" if result.ok else "FAILED"
    console.print(
        Text(
            f"Result: {status} ({failed} failed, {violations} rule violation(s))",
            style="bold" if result.ok else "bold red",
        )
    )
    if result.below_threshold:
        names = ", ".join(r.file_name for r in result.below_threshold)
        console.print(Text(f"Below maintainability {result.fail_under}: {names}", style="dim"))
    console.print(Text("─" * 60, style="dim"))


def _mi_style(value: str) -> str:
    index = float(value)
    if index >= 65:
        return "green"
    if index >= 20:
        return "yellow"
    return "red"
