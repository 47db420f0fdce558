"""CLI entry point for jaeger-assist."""

from __future__ import annotations

import argparse
import asyncio
import json
import os
import sys
from pathlib import Path

# Ensure project root is on Python path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from jaeger_assist.config import load_config, setup_logging
from jaeger_assist.errors import JaegerAssistError
from jaeger_assist.llm.factory import create_provider
from jaeger_assist.services.explain_service import ExplainService, ExplainSpanRequest, ExplainSpanResponse
from jaeger_assist.services.query_service import (
    QueryService,
    TranslateQueryRequest,
    TranslateQueryResponse,
)

console = Console()

ASSESSMENT_STYLES = {
    "fast": "green",
    "normal": "cyan",
    "slow": "yellow",
    "critical": "bold red",
}


def display_search(result: TranslateQueryResponse, console: Console) -> None:
    """Display translated search parameters."""
    params = result.params

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="dim")
    table.add_column()
    table.add_row("Service", params.service)
    table.add_row("Operation", params.operation or "-")
    table.add_row("Tags", ", ".join(f"{k}={v}" for k, v in params.tags.items()) or "-")
    table.add_row("Min duration", params.min_duration or "-")
    table.add_row("Max duration", params.max_duration or "-")
    table.add_row("Lookback", params.lookback)
    table.add_row("Limit", str(params.limit))

    console.print(Panel(table, title=f'"{escape(result.original_query)}"', border_style="blue"))
    console.print(
        f"[dim]{result.metadata.provider} · {result.metadata.processing_time_ms:.1f}ms[/dim]"
    )


def display_explanation(result: ExplainSpanResponse, console: Console) -> None:
    """Display a span explanation."""
    explanation = result.explanation
    assessment = explanation.performance.assessment.value

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="dim")
    table.add_column()
    table.add_row("Type", explanation.span_type)
    table.add_row(
        "Duration",
        f"{explanation.performance.duration} "
        f"[{ASSESSMENT_STYLES.get(assessment, 'white')}]({assessment})[/]",
    )
    if explanation.error_info:
        table.add_row("Error type", explanation.error_info.error_type or "-")
        table.add_row("Error message", explanation.error_info.error_message or "-")
    for detail in explanation.key_details:
        table.add_row("Detail", escape(detail))

    console.print(Panel(
        table,
        title=escape(explanation.summary),
        border_style="red" if explanation.error_info else "green",
    ))
    console.print(
        f"[dim]span {result.span_id} · trace {result.trace_id} · "
        f"{result.metadata.provider} · {result.metadata.processing_time_ms:.1f}ms[/dim]"
    )


async def run_search(query: str, service: QueryService, as_json: bool) -> int:
    result = await service.translate_query(TranslateQueryRequest(query=query))
    if as_json:
        console.print(Syntax(json.dumps(result.to_dict(), indent=2), "json"))
    else:
        display_search(result, console)
    return 0


async def run_explain(span_file: Path, service: ExplainService, as_json: bool) -> int:
    with open(span_file) as f:
        span = json.load(f)

    result = await service.explain_span(ExplainSpanRequest(span=span))
    if as_json:
        console.print(Syntax(json.dumps(result.to_dict(), indent=2, ensure_ascii=False), "json"))
    else:
        display_explanation(result, console)
    return 0


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="jaeger-assist: natural-language trace search and span explanations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--config", default=None, help="Path to config YAML file")
    parser.add_argument("--provider", default=None, help="Completion provider (mock, anthropic)")
    parser.add_argument("--json", action="store_true", help="Print the raw JSON response")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", required=True)
    search = subparsers.add_parser("search", help="Translate a query into Jaeger search parameters")
    search.add_argument("query", help="Natural-language query")
    explain = subparsers.add_parser("explain", help="Explain a span stored as JSON")
    explain.add_argument("span_file", type=Path, help="Path to a span JSON file")

    args = parser.parse_args()

    # Load configuration
    settings = load_config(args.config)
    if args.provider:
        settings.llm.provider = args.provider
    if args.verbose:
        settings.logging.level = "DEBUG"
    setup_logging(settings.logging)

    try:
        provider = create_provider(settings)
        if args.command == "search":
            coro = run_search(args.query, QueryService(provider, settings.llm), args.json)
        else:
            coro = run_explain(args.span_file, ExplainService(provider, settings.llm), args.json)
        return asyncio.run(coro)
    except JaegerAssistError as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1
    except (OSError, json.JSONDecodeError) as e:
        console.print(f"[red]Error reading span file: {e}[/red]")
        return 1


if __name__ == "__main__":
    sys.exit(main())
