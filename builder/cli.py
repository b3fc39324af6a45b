"""Command line entry point: run a build or inspect key rotation."""

import asyncio
import json as json_lib
import uuid

from rich.console import Console
from rich.table import Table
import typer

from shared.contracts import BuildRequest
from shared.logging import setup_logging

from .config import get_settings
from .credentials import CredentialPool
from .database import get_engine
from .dependencies import (
    build_orchestrator,
    get_credential_store,
    get_gemini_provider,
    get_project_store,
)

app = typer.Typer(
    name="playground-builder",
    help="CLI for the playground AI build pipeline",
    add_completion=False,
)
console = Console()


async def _run_build(request: BuildRequest):
    settings = get_settings()
    orchestrator = build_orchestrator(settings, get_project_store(), get_credential_store())
    try:
        return await orchestrator.run(request)
    finally:
        await get_gemini_provider().close()
        await get_engine().dispose()


async def _read_rotation(service: str):
    try:
        return await get_credential_store().get(service)
    finally:
        await get_engine().dispose()


@app.command()
def build(
    idea: str = typer.Argument(..., help="Natural-language description of the site"),
    owner_id: str = typer.Option(..., "--owner", "-o", help="Owner (user) ID"),
    project_id: str = typer.Option(None, "--project", "-p", help="Project ID (new UUID if omitted)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """Run the full build pipeline for a project."""
    settings = get_settings()
    setup_logging(**settings.logging_options("builder-cli"))

    request = BuildRequest(
        project_id=project_id or str(uuid.uuid4()),
        idea=idea,
        owner_id=owner_id,
    )
    result = asyncio.run(_run_build(request))

    if json_output:
        typer.echo(json_lib.dumps(result.to_wire(), indent=2, ensure_ascii=False))
        raise typer.Exit(code=0 if result.success else 1)

    if not result.success:
        console.print(f"[bold red]Build failed:[/bold red] {result.error}")
        raise typer.Exit(code=1)

    table = Table(title=f"Project {request.project_id}")
    table.add_column("Artifact", style="cyan", no_wrap=True)
    table.add_column("Characters", justify="right", style="magenta")
    table.add_row("html", str(len(result.html or "")))
    table.add_row("css", str(len(result.css or "")))
    table.add_row("js", str(len(result.js or "")))
    console.print(table)
    console.print(f"[bold green]Published.[/bold green] Subpages created: {result.subpages_created or 0}")


@app.command()
def rotation(
    service: str = typer.Option(None, "--service", "-s", help="Rotation row name"),
):
    """Show the current credential index for a provider."""
    settings = get_settings()
    service = service or settings.rotation_service_name
    state = asyncio.run(_read_rotation(service))
    pool = CredentialPool.from_environ(primary=settings.gemini_api_key or None)

    if state is None:
        console.print(f"[yellow]No rotation row for '{service}'; key #1 is used.[/yellow]")
        console.print(f"Pool size: {len(pool)}")
        return

    table = Table(title=f"Rotation: {service}")
    table.add_column("Current index", justify="right", style="cyan")
    table.add_column("Pool size", justify="right", style="magenta")
    table.add_column("Last rotation", style="green")
    table.add_row(
        str(state.current_index),
        str(len(pool)),
        state.last_rotation_time.isoformat(),
    )
    console.print(table)
    if state.current_index not in pool:
        console.print("[yellow]Stored index is outside the pool; key #1 will be used.[/yellow]")


if __name__ == "__main__":
    app()
