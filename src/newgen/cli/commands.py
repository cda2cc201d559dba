"""CLI commands for the Newgen backend.

Commands:
- init-db: Create the database schema
- serve: Run the HTTP API with uvicorn
- add-test-result: Record a test result for a user
- show-config: Print the effective configuration (secrets masked)
"""

from pathlib import Path

import typer
import uvicorn
from rich.console import Console
from rich.table import Table

from newgen.config.app_config import load_app_config
from newgen.db.database import StoreError, get_db_path, init_db
from newgen.db.test_results_repository import insert_test_result
from newgen.db.users_repository import get_user_by_id

app = typer.Typer(
    name="newgen",
    help="Newgen career backend",
    no_args_is_help=True,
)
console = Console()


def _mask(value: str | None) -> str:
    """Hide a secret but show whether it is set."""
    if not value:
        return "[dim](not set)[/dim]"
    return "****"


def _init_db_from_config(db_path: Path | None) -> None:
    config = load_app_config()
    init_db(db_path or config.database.path, timeout=config.database.timeout)


@app.command(name="init-db")
def init_db_command(
    db_path: Path | None = typer.Option(None, "--db", help="Database file (default from config)"),
) -> None:
    """Create the database schema if it does not exist."""
    try:
        _init_db_from_config(db_path)
    except StoreError as e:
        console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]✓ Database ready[/green] [dim]{get_db_path()}[/dim]")


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address (default from config)"),
    port: int | None = typer.Option(None, "--port", "-p", help="Port (default from config)"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
) -> None:
    """Run the HTTP API."""
    config = load_app_config()
    bind_host = host or config.server.host
    bind_port = port or config.server.port

    console.print(f"[blue]Server is live on port {bind_port}[/blue]")
    uvicorn.run("newgen.web.api:app", host=bind_host, port=bind_port, reload=reload)


@app.command(name="add-test-result")
def add_test_result(
    user_id: int = typer.Argument(..., help="User id"),
    category: str = typer.Argument(..., help="Test category"),
    score: int = typer.Argument(..., help="Score"),
    db_path: Path | None = typer.Option(None, "--db", help="Database file (default from config)"),
) -> None:
    """Record a test result for a user."""
    try:
        _init_db_from_config(db_path)
        if get_user_by_id(user_id) is None:
            console.print(f"[red]✗ User not found: {user_id}[/red]")
            raise typer.Exit(1)
        insert_test_result(user_id, category, score)
    except StoreError as e:
        console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]✓ Saved {category}={score} for user {user_id}[/green]")


@app.command(name="show-config")
def show_config() -> None:
    """Print the effective configuration."""
    config = load_app_config()

    table = Table(title="Newgen configuration")
    table.add_column("Setting")
    table.add_column("Value")

    table.add_row("database.path", config.database.path)
    table.add_row("server", f"{config.server.host}:{config.server.port}")
    table.add_row("llm.base_url", config.llm.base_url)
    table.add_row("llm.model", config.llm.model)
    table.add_row("llm.max_tokens", str(config.llm.max_tokens))
    table.add_row("llm.timeout", f"{config.llm.timeout}s")
    table.add_row(f"llm.api_key ({config.llm.api_key_env})", _mask(config.llm.get_api_key()))
    table.add_row("email.enabled", str(config.email.enabled))
    table.add_row("email.server", f"{config.email.host}:{config.email.port}")
    table.add_row("email.username", config.email.username or "[dim](not set)[/dim]")
    table.add_row("email.password", _mask(config.email.password))
    table.add_row("email.sender", f"{config.email.sender_name} <{config.email.from_address or '?'}>")
    table.add_row("security.password_scheme", config.security.password_scheme)

    console.print(table)


if __name__ == "__main__":
    app()
