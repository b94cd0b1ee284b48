"""
CLI Main - Typer-based command-line interface.

Usage:
    physiokg conditions
    physiokg search shoulder
    physiokg reason "Frozen Shoulder"
    physiokg serve
"""

from __future__ import annotations

import asyncio
import json
import logging

import typer
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from physiokg.adapters.neo4j import Neo4jClient
from physiokg.config import PhysioKGError, get_settings
from physiokg.domains.reasoning import ReasoningRecord

app = typer.Typer(
    name="physiokg",
    help="PhysioKG - Physiotherapy clinical reasoning assistant",
    add_completion=False,
)
console = Console()


@app.callback()
def configure(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Configure logging for every command."""
    level = "DEBUG" if verbose else get_settings().log_level.upper()
    logging.basicConfig(level=level, format="%(levelname)s: %(name)s: %(message)s")


def _create_client() -> Neo4jClient:
    """Build the graph client from settings."""
    settings = get_settings()
    return Neo4jClient(
        uri=settings.neo4j_uri,
        username=settings.neo4j_username,
        password=settings.neo4j_password,
        database=settings.neo4j_database,
    )


@app.command()
def conditions() -> None:
    """List every condition in the knowledge graph."""
    asyncio.run(_conditions_async())


async def _conditions_async() -> None:
    """Async listing implementation."""
    from physiokg.domains.conditions import ConditionIndex

    client = _create_client()
    try:
        await client.connect()
        names = await ConditionIndex(client).list_conditions()
    except PhysioKGError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1)
    finally:
        await client.close()

    if not names:
        console.print("[yellow]No conditions in the knowledge graph.[/yellow]")
        return

    for name in names:
        console.print(f"  {name}")
    console.print(f"\n[dim]{len(names)} conditions[/dim]")


@app.command()
def search(
    fragment: str = typer.Argument(..., help="Condition name fragment"),
) -> None:
    """Search conditions by name (case-insensitive)."""
    asyncio.run(_search_async(fragment))


async def _search_async(fragment: str) -> None:
    """Async search implementation."""
    from physiokg.domains.conditions import ConditionIndex, require_fragment

    settings = get_settings()
    client = _create_client()
    try:
        # Reject a blank fragment before touching the graph
        require_fragment(fragment)
        await client.connect()
        names = await ConditionIndex(client, limit=settings.search_limit).search(fragment)
    except PhysioKGError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1)
    finally:
        await client.close()

    if not names:
        console.print(f"[yellow]No conditions match:[/yellow] {fragment}")
        return

    console.print(f"\n[yellow]Conditions matching:[/yellow] {fragment.strip()}\n")
    for i, name in enumerate(names, 1):
        console.print(f"  {i}. {name}")


@app.command()
def reason(
    condition: str = typer.Argument(..., help="Condition name"),
    timeout: float | None = typer.Option(
        None, "--timeout", "-t", min=0.1, help="Deadline in seconds"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the record as JSON"),
) -> None:
    """Generate the clinical reasoning record for a condition."""
    asyncio.run(_reason_async(condition, timeout, as_json))


async def _reason_async(condition: str, timeout: float | None, as_json: bool) -> None:
    """Async reasoning implementation."""
    from physiokg.domains.reasoning import ReasoningAggregator, require_condition

    settings = get_settings()
    client = _create_client()

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        progress.add_task("Generating reasoning...", total=None)

        try:
            require_condition(condition)
            await client.connect()
            aggregator = ReasoningAggregator(
                client,
                max_concurrency=settings.reasoning_max_concurrency,
                default_timeout=settings.reasoning_timeout_seconds,
            )
            record = await aggregator.generate(condition, timeout=timeout)
        except PhysioKGError as e:
            console.print(f"[red]Error:[/red] {e.message}")
            raise typer.Exit(1)
        finally:
            await client.close()

    if as_json:
        console.print_json(json.dumps(record.to_response()))
        return

    _print_record(record)


def _print_record(record: ReasoningRecord) -> None:
    """Render a reasoning record as Rich tables."""
    console.print(Panel(f"[bold]{record.condition}[/bold]", title="Clinical Reasoning"))

    if record.red_flags:
        table = Table(title="Red Flags", title_style="bold red")
        table.add_column("Flag")
        table.add_column("Urgency")
        table.add_column("Action")
        for flag in record.red_flags:
            table.add_row(flag.flag, _urgency_color(flag.urgency.value), flag.action or "")
        console.print(table)

    sections = [
        ("Impairments", record.impairments, ["name", "severity", "evidence"]),
        ("Assessments", record.assessments, ["name", "type", "priority"]),
        ("Interventions", record.interventions, ["name", "category", "evidence"]),
        ("Exercises", record.exercises, ["name", "phase", "dosage"]),
        ("Medications", record.medications, ["name", "indication", "caution"]),
        ("Outcome Measures", record.outcome_measures, ["name", "type", "frequency"]),
    ]
    for title, items, columns in sections:
        if not items:
            console.print(f"[dim]{title}: none recorded[/dim]")
            continue

        table = Table(title=title)
        for column in columns:
            table.add_column(column.capitalize())
        for item in items:
            table.add_row(*(_cell(getattr(item, column)) for column in columns))
        console.print(table)


def _cell(value: object) -> str:
    if value is None:
        return ""
    return getattr(value, "value", str(value))


def _urgency_color(urgency: str) -> str:
    """Color-code red flag urgency."""
    colors = {
        "High": "[bold red]HIGH[/bold red]",
        "Medium": "[yellow]MEDIUM[/yellow]",
        "Low": "[green]LOW[/green]",
    }
    return colors.get(urgency, urgency.upper())


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", "-h", help="Host to bind"),
    port: int | None = typer.Option(None, "--port", "-p", help="Port to bind"),
    reload: bool = typer.Option(False, "--reload", "-r", help="Enable auto-reload"),
) -> None:
    """Start the API server."""
    import uvicorn

    settings = get_settings()
    host = host or settings.api_host
    port = port or settings.api_port

    console.print("\n[green]Starting PhysioKG API server[/green]")
    console.print(f"[dim]http://{host}:{port}[/dim]\n")

    uvicorn.run(
        "physiokg.interfaces.api:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=True,
    )


@app.command()
def version() -> None:
    """Show version information."""
    from physiokg import __version__

    console.print(f"PhysioKG v{__version__}")


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
