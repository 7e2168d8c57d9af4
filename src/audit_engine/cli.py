"""CLI harness for audit-engine over saved provider payloads."""

import json
import logging
import sys
from pathlib import Path
from typing import Any

import click
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from . import __version__
from .auditor import StaticBenchmarkProvider, StaticSignalProvider, audit_page
from .checklist import observed_fields_from_listing
from .config import DEFAULT_LOCALE, LOG_LEVEL
from .engine import run_checklist_audit, run_local_audit
from .extract import raw_signals_from_html
from .models import AuditResult, Priority
from .phrases import normalize_locale
from .signals import raw_signals_from_onpage

console = Console()
err_console = Console(stderr=True)

COMMANDS = ["page", "profile", "local", "--help", "--version"]


def configure_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else getattr(logging, LOG_LEVEL, logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )
    logging.getLogger("audit_engine").setLevel(level)


def priority_style(priority: Priority) -> str:
    """Get Rich style for a priority tier."""
    return {
        Priority.CRITICAL: "bold red",
        Priority.HIGH: "red",
        Priority.MEDIUM: "yellow",
        Priority.LOW: "blue",
    }.get(priority, "white")


def score_color(score: float) -> str:
    """Get color for a score value."""
    if score >= 80:
        return "green"
    elif score >= 60:
        return "yellow"
    elif score >= 40:
        return "orange1"
    else:
        return "red"


def print_score_bar(score: float, width: int = 20) -> Text:
    """Create a visual score bar."""
    filled = int((score / 100) * width)
    empty = width - filled
    color = score_color(score)

    bar = Text()
    bar.append("█" * filled, style=color)
    bar.append("░" * empty, style="dim")
    bar.append(f" {score:g}/100", style=f"bold {color}")
    return bar


def print_result(result: AuditResult, title: str, verbose: bool = False) -> None:
    """Print audit result to console."""
    console.print()
    subtitle = f"[dim]{result.variant} audit[/dim]"
    if result.strength:
        subtitle += f" [dim]• {result.strength.replace('_', ' ')}[/dim]"
    console.print(Panel(f"[bold]{title}[/bold]\n{subtitle}", title="Audit", border_style="blue"))

    if result.error:
        console.print(f"\n[red]Error:[/red] {result.error}")

    console.print()
    console.print("  Score: ", end="")
    console.print(print_score_bar(result.score, width=25))
    console.print()

    table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
    table.add_column("Component", style="cyan")
    table.add_column("Score", justify="right")
    for name, value in result.component_scores.items():
        table.add_row(name.replace("_", " "), f"[{score_color(value)}]{value:g}[/]")
    console.print(table)

    if result.checklist and verbose:
        checklist = Table(box=box.SIMPLE, show_header=True, header_style="bold")
        checklist.add_column("Field", style="cyan")
        checklist.add_column("Weight", justify="right")
        checklist.add_column("Status")
        for item in result.checklist:
            status = "[green]✓[/green]" if item.completed else "[red]✗[/red]"
            checklist.add_row(item.field, str(item.weight), status)
        console.print(checklist)

    if verbose and result.keyword_analysis:
        ka = result.keyword_analysis
        console.print(
            f"  Keyword [bold]{ka.keyword}[/bold]: {ka.occurrences} occurrences, "
            f"density {ka.density:g}% ({ka.density_bucket.value.replace('_', ' ')})"
        )
    if verbose and result.benchmark_summary:
        bs = result.benchmark_summary
        console.print(
            f"  Benchmark: {bs.count} items, median {bs.median_size:g}, "
            f"title match {bs.title_match_ratio:.0%}"
        )

    if result.recommendations:
        console.print("\n[bold]Recommendations:[/bold]\n")
        for rec in result.recommendations:
            style = priority_style(rec.priority)
            console.print(f"  [{style}]{rec.priority.value:<8}[/] {rec.issue}")
            console.print(f"           [cyan]→ {rec.action}[/cyan]")

    quick_wins = result.quick_wins
    if quick_wins:
        console.print("\n[bold]Top Quick Wins:[/bold]\n")
        for i, rec in enumerate(quick_wins[:3], 1):
            console.print(f"  {i}. [bold]{rec.action}[/bold]")
        console.print()

    console.print("[dim]─" * 50 + "[/dim]")
    console.print(f"[dim]audit-engine v{__version__}[/dim]")
    console.print()


def load_json(path: str) -> Any:
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise click.BadParameter(f"cannot read {path}: {e}", param_hint="PAYLOAD")


def emit(result: AuditResult, title: str, json_output: bool, verbose: bool = False) -> None:
    if json_output:
        click.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    else:
        print_result(result, title, verbose=verbose)


@click.group(invoke_without_command=True)
@click.pass_context
@click.version_option(version=__version__)
def cli(ctx):
    """Audit Engine - score pages, business profiles and local visibility.

    \b
    Quick start:
        audit-engine page signals.json --keyword "plumber paris"
        audit-engine profile listing.json
        audit-engine local pack.json --business "Acme Plumbing"
    """
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@click.argument("payload", type=click.Path(exists=True, dir_okay=False))
@click.option("--onpage", "payload_format", flag_value="onpage", help="PAYLOAD is an on-page crawler item")
@click.option("--html", "payload_format", flag_value="html", help="PAYLOAD is an HTML page")
@click.option("--url", default="", help="URL of the audited page")
@click.option("-k", "--keyword", default=None, help="Target keyword")
@click.option("-b", "--benchmark", type=click.Path(exists=True, dir_okay=False),
              help="JSON list of competing reference items")
@click.option("-l", "--locale", default=DEFAULT_LOCALE, help="Locale of the recommendations")
@click.option("-v", "--verbose", is_flag=True, help="Show analysis details and debug logs")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
def page(payload: str, payload_format: str | None, url: str, keyword: str | None,
         benchmark: str | None, locale: str, verbose: bool, json_output: bool):
    """Audit a page from saved signals.

    \b
    Examples:
        audit-engine page signals.json
        audit-engine page item.json --onpage --keyword "plumber paris"
        audit-engine page index.html --html --url https://example.com/ --json
    """
    configure_logging(verbose)

    if payload_format == "html":
        try:
            html = Path(payload).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise click.BadParameter(f"cannot read {payload}: {e}", param_hint="PAYLOAD")
        raw = raw_signals_from_html(html, url=url)
    else:
        data = load_json(payload)
        if not isinstance(data, dict):
            raise click.BadParameter("expected a JSON object", param_hint="PAYLOAD")
        raw = raw_signals_from_onpage(data) if payload_format == "onpage" else data

    benchmark_provider = None
    if benchmark:
        items = load_json(benchmark)
        if not isinstance(items, list):
            raise click.BadParameter("expected a JSON list", param_hint="--benchmark")
        benchmark_provider = StaticBenchmarkProvider(items)

    result = audit_page(
        url or raw.get("url", ""),
        StaticSignalProvider(raw),
        benchmark_provider,
        keyword=keyword,
        locale=normalize_locale(locale),
    )
    emit(result, url or raw.get("url") or payload, json_output, verbose)


@cli.command()
@click.argument("payload", type=click.Path(exists=True, dir_okay=False))
@click.option("-l", "--locale", default=DEFAULT_LOCALE, help="Locale of the recommendations")
@click.option("-v", "--verbose", is_flag=True, help="Show the checklist and debug logs")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
def profile(payload: str, locale: str, verbose: bool, json_output: bool):
    """Audit a business profile listing for completeness.

    \b
    Examples:
        audit-engine profile listing.json
        audit-engine profile listing.json --locale fr --json
    """
    configure_logging(verbose)
    data = load_json(payload)
    if data is not None and not isinstance(data, dict):
        raise click.BadParameter("expected a JSON object", param_hint="PAYLOAD")

    result = run_checklist_audit(observed_fields_from_listing(data), locale=normalize_locale(locale))
    title = (data or {}).get("title") or (data or {}).get("name") or payload
    emit(result, title, json_output, verbose)


@cli.command()
@click.argument("payload", type=click.Path(exists=True, dir_okay=False))
@click.option("-n", "--business", required=True, help="Name of the audited business")
@click.option("-l", "--locale", default=DEFAULT_LOCALE, help="Locale of the recommendations")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logs")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
def local(payload: str, business: str, locale: str, verbose: bool, json_output: bool):
    """Audit local pack visibility for a business.

    \b
    Examples:
        audit-engine local pack.json --business "Acme Plumbing"
    """
    configure_logging(verbose)
    data = load_json(payload)
    if isinstance(data, dict):
        data = data.get("items") or [data]
    if not isinstance(data, list):
        raise click.BadParameter("expected a JSON list of local pack items", param_hint="PAYLOAD")

    result = run_local_audit(business, data, locale=normalize_locale(locale))
    emit(result, business, json_output, verbose)


# Convenience: allow `audit-engine FILE` as shortcut for `audit-engine page FILE`
def main():
    """Entry point that handles both `audit-engine FILE` and `audit-engine page FILE`."""
    args = sys.argv[1:]

    if args and not args[0].startswith("-") and args[0] not in COMMANDS:
        if args[0].endswith((".json", ".html", ".htm")):
            sys.argv.insert(1, "page")

    cli()


if __name__ == "__main__":
    main()
