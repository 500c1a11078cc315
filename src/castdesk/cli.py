"""Typer CLI for castdesk."""

import asyncio

import typer
from rich.console import Console

app = typer.Typer(name="castdesk", help="castdesk: studio/talent messaging and invitations")
console = Console()


@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", help="Bind host"),
    port: int = typer.Option(8080, help="Bind port"),
):
    """Start the castdesk API server."""
    import uvicorn
    from castdesk.app import create_app

    console.print(f"[bold green]Starting castdesk on {host}:{port}[/bold green]")
    uvicorn.run(create_app(), host=host, port=port)


@app.command("init-db")
def init_db():
    """Create all tables in the configured database."""
    from castdesk.common.config import get_settings
    from castdesk.common.database import DatabaseManager

    async def _run() -> None:
        db = DatabaseManager(get_settings())
        await db.init()
        try:
            await db.create_all()
        finally:
            await db.close()

    asyncio.run(_run())
    console.print(f"[bold green]Schema created[/bold green] at {get_settings().db_url}")


@app.command()
def health(
    url: str = typer.Option("http://localhost:8080", help="Server URL"),
):
    """Check castdesk server health."""
    import httpx

    try:
        resp = httpx.get(f"{url}/health", timeout=5)
        data = resp.json()
        console.print(f"[bold green]{data['status']}[/bold green] v{data['version']}")
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
