"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from cli.common import get_state
from cli.ui_components import print_banner
from core.config import AppSettings, get_user_env_file, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console(stderr=True)


async def _check_http(
    url: str, settings: AppSettings, transport: httpx.AsyncBaseTransport | None = None
) -> tuple[bool, str]:
    try:
        async with build_async_client(settings, transport=transport) as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        return False, str(exc) or exc.__class__.__name__


def _mask(token: str) -> str:
    if len(token) <= 8:
        return "***"
    return f"{token[:4]}…{token[-4:]}"


@app.command()
def run(ctx: typer.Context) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    state = get_state(ctx)
    settings = state.settings
    token = state.bearer_token
    print_banner(_console)

    table = Table(title="tweetcall Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    if token:
        table.add_row("Bearer token", "OK", _mask(token))
    else:
        table.add_row("Bearer token", "MISSING", "Use --token or `tweetcall doctor set-token`")
    table.add_row("API host", "OK", state.api_host)
    table.add_row("HTTP timeout", "OK", f"{settings.http_timeout_seconds:g}s")
    stream_timeout = settings.stream_timeout_seconds
    table.add_row(
        "Stream read timeout",
        "OK",
        f"{stream_timeout:g}s" if stream_timeout else "none (wait for keep-alives)",
    )
    table.add_row("Stream keep-alive", "OK", f"{settings.stream_keep_alive_seconds:g}s")
    table.add_row("Log level", "OK", settings.log_level)
    table.add_row("User config", "OK", str(get_user_env_file()))

    # Connectivity (best-effort)
    ok_http, detail_http = asyncio.run(_check_http(state.api_host, settings, state.transport))
    table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not token:
        _console.print(
            "\n[yellow]Note:[/yellow] every API command needs a bearer token "
            "(TWEETCALL_BEARER_TOKEN)."
        )


@app.command(name="set-token")
def set_token() -> None:
    """Store the bearer token in the user config .env."""

    token = typer.prompt("Bearer token", hide_input=True, confirmation_prompt=False).strip()
    if not token:
        raise typer.BadParameter("a bearer token is required")

    host = typer.prompt("API host", default=AppSettings().api_host, show_default=True).strip()

    env_path = write_user_env_vars(
        {
            "TWEETCALL_BEARER_TOKEN": token,
            "TWEETCALL_API_HOST": host,
        }
    )

    _console.print(f"[green]Saved token to:[/green] {env_path}")
