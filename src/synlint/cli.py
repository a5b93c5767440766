"""CLI interface for synlint using Typer framework."""

import json as jsonlib
import logging
import sys
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from synlint import __description__, __version__
from synlint.config import LogLevel, OutputFormat, SynlintConfig, load_config
from synlint.errors import SynlintError
from synlint.models.finding import Severity
from synlint.parser import load_manifest
from synlint.validation import ValidationFramework, ValidationReport

app = typer.Typer(
    name="synlint",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)

console = Console()

SEVERITY_COLORS = {
    Severity.HIGH: "red",
    Severity.MEDIUM: "yellow",
    Severity.LOW: "cyan",
}

_LOG_LEVELS = {
    LogLevel.ERROR: logging.ERROR,
    LogLevel.WARN: logging.WARNING,
    LogLevel.INFO: logging.INFO,
    LogLevel.DEBUG: logging.DEBUG,
}


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        console.print(f"synlint version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-V", callback=version_callback, is_eager=True, help="Show version and exit")
    ] = False,
) -> None:
    """synlint - Static analysis for exported data-orchestration workspace templates."""


def _configure_logging(level: LogLevel) -> None:
    """Send log records to stderr so JSON on stdout stays parseable."""
    logging.basicConfig(
        level=_LOG_LEVELS[level],
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _load_config_or_exit(config: Path | None) -> SynlintConfig:
    try:
        return load_config(config)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


def _severity_cell(severity: Severity) -> str:
    color = SEVERITY_COLORS[severity]
    return f"[{color}]{severity.label}[/{color}]"


def _output_table(report: ValidationReport, summary: bool, detail: bool) -> None:
    if summary:
        table = Table(title=f"Summary ({report.total_findings} findings)")
        table.add_column("Issue Count", style="white", justify="right")
        table.add_column("Check Detail", style="white")
        table.add_column("Severity", style="white")

        for entry in report.summary:
            count_style = "bold" if entry.issue_count else "dim"
            table.add_row(
                f"[{count_style}]{entry.issue_count}[/{count_style}]",
                entry.check_detail,
                _severity_cell(entry.severity)
            )

        console.print(table)

    if detail:
        if not report.details:
            console.print("\n[green]No issues found![/green]")
            return

        table = Table(title="Details")
        table.add_column("Component", style="magenta", no_wrap=True)
        table.add_column("Name", style="cyan")
        table.add_column("Issue", style="white")
        table.add_column("Severity", style="white")

        for finding in report.details:
            table.add_row(finding.component, finding.name, finding.message, _severity_cell(finding.severity))

        console.print(table)


def _output_markdown(report: ValidationReport, summary: bool, detail: bool) -> None:
    console.print("# Workspace Analysis Report")
    console.print(f"**Total findings:** {report.total_findings}")
    console.print()

    if summary:
        console.print("## Summary")
        console.print("| Issue Count | Check Detail | Severity |")
        console.print("|---:|---|---|")
        for entry in report.summary:
            console.print(f"| {entry.issue_count} | {entry.check_detail} | {entry.severity.label} |")
        console.print()

    if detail and report.details:
        console.print("## Details")
        for finding in report.details:
            console.print(f"- **{finding.severity.label.upper()}** {finding.component} "
                          f"`{finding.name}`: {finding.message}")


@app.command()
def check(
    template: Annotated[
        Path,
        typer.Argument(help="Path to the exported workspace template (JSON)")
    ],
    summary: Annotated[
        Optional[bool],
        typer.Option("--summary/--no-summary", help="Print the per-rule summary (default: on)")
    ] = None,
    detail: Annotated[
        Optional[bool],
        typer.Option("--detail/--no-detail", "-d", help="Print every finding (default: off)")
    ] = None,
    format: Annotated[
        Optional[OutputFormat],
        typer.Option("--format", "-f", help="Output format: table, json, markdown (default: table)")
    ] = None,
    fail_on: Annotated[
        Optional[Severity],
        typer.Option("--fail-on", help="Exit with code 1 when a finding reaches this severity")
    ] = None,
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file path (default: search for .synlint.json)")
    ] = None,
    log_level: Annotated[
        Optional[LogLevel],
        typer.Option("--log-level", help="Logging level: error, warn, info, debug")
    ] = None,
) -> None:
    """Analyze a workspace template and report findings."""
    synlint_config = _load_config_or_exit(config)
    _configure_logging(log_level or synlint_config.logging.level)

    output = synlint_config.output
    summary = output.summary if summary is None else summary
    detail = output.detail if detail is None else detail
    format = format or output.format
    fail_on = fail_on or output.fail_on

    try:
        manifest = load_manifest(template)

        framework = ValidationFramework(synlint_config)
        framework.create_default_rules()
        report = framework.validate(manifest, detail=detail)
    except SynlintError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if format == OutputFormat.JSON:
        data = report.to_dict()
        if not summary:
            data.pop("summary")
        # Plain print: rich would wrap and highlight the JSON
        print(jsonlib.dumps(data, indent=2))
    elif format == OutputFormat.MARKDOWN:
        _output_markdown(report, summary, detail)
    else:
        _output_table(report, summary, detail)

    raise typer.Exit(report.exit_code(fail_on))


@app.command()
def rules(
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file path (default: search for .synlint.json)")
    ] = None,
) -> None:
    """List the active rule catalog."""
    synlint_config = _load_config_or_exit(config)

    framework = ValidationFramework(synlint_config)
    framework.create_default_rules()

    table = Table(title=f"Rules ({len(framework.rules)} active)")
    table.add_column("Rule", style="cyan", no_wrap=True)
    table.add_column("Target", style="magenta")
    table.add_column("Check Detail", style="white")
    table.add_column("Severity", style="white")

    for rule in framework.rules:
        table.add_row(rule.name, rule.target.value, rule.description, _severity_cell(rule.severity))

    console.print(table)


if __name__ == "__main__":
    app()
