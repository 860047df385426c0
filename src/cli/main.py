"""CLI principal (`tweetcall`).

Cada subcomando es un ejemplo autocontenido: una llamada a un endpoint de la
API v2 y el JSON de la respuesta en stdout. Los logs y las tablas van a
stderr.
"""

from __future__ import annotations

import asyncio
import logging
import time
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from cli import compliance, doctor, lists, spaces, stream, tweets, users
from cli.common import CliState, get_state, run_call, split_csv
from cli.ui_components import build_rate_limit_table
from core.config import AppSettings
from core.domain.fields import Expansion, TweetField
from core.domain.models import RateLimit
from core.domain.options import FieldOptions, PageOptions
from core.errors import HTTPError, TwitterError
from core.logging_setup import configure_logging

logger = logging.getLogger("tweetcall")

app = typer.Typer(
    no_args_is_help=True,
    help="Ejemplos de la API v2 de Twitter: un endpoint por comando.",
)
misc_app = typer.Typer(no_args_is_help=True, help="Errores HTTP y rate limits.")

app.add_typer(tweets.app, name="tweets")
app.add_typer(users.app, name="users")
app.add_typer(lists.app, name="lists")
app.add_typer(spaces.app, name="spaces")
app.add_typer(compliance.app, name="compliance")
app.add_typer(stream.app, name="stream")
app.add_typer(misc_app, name="misc")
app.add_typer(doctor.app, name="doctor")

_console = Console(stderr=True)

RATE_LIMIT_LIST_ID = "84839422"


@app.callback()
def main(
    ctx: typer.Context,
    token: Annotated[
        str | None,
        typer.Option("--token", help="Bearer token (por defecto TWEETCALL_BEARER_TOKEN)."),
    ] = None,
    host: Annotated[
        str | None, typer.Option("--host", help="Host de la API (por defecto api.twitter.com).")
    ] = None,
    output: Annotated[
        Path | None, typer.Option("--output", "-o", help="Guarda también el JSON en un fichero.")
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Logs en DEBUG.")] = False,
) -> None:
    state = ctx.obj if isinstance(ctx.obj, CliState) else CliState(settings=AppSettings())
    state.token = token or state.token
    state.host = host or state.host
    state.output = output or state.output
    state.verbose = verbose

    try:
        configure_logging("DEBUG" if verbose else state.settings.log_level)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    ctx.obj = state


@misc_app.command(name="http-error")
def http_error(
    ctx: typer.Context,
    ids: Annotated[str, typer.Option("--ids", help="Ids de tweets separados por comas.")],
) -> None:
    """Provoca un `HTTPError` (host con barra final) e imprime su JSON."""

    state = get_state(ctx)
    broken_host = state.api_host.rstrip("/") + "/"
    opts = FieldOptions(
        expansions=[Expansion.ENTITIES_MENTIONS_USERNAME, Expansion.AUTHOR_ID],
        tweet_fields=[TweetField.CREATED_AT, TweetField.CONVERSATION_ID, TweetField.ATTACHMENTS],
    )

    async def _call(client):
        try:
            await client.tweet_lookup(split_csv(ids), opts)
        except HTTPError as exc:
            return exc
        raise TwitterError("there should be an error")

    run_call(ctx, _call, host=broken_host)


@misc_app.command(name="rate-limit")
def rate_limit(
    ctx: typer.Context,
    list_id: Annotated[
        str, typer.Option("--list-id", help="Lista usada para las llamadas.")
    ] = RATE_LIMIT_LIST_ID,
    wait: Annotated[
        bool, typer.Option("--wait", help="Espera al reset de la ventana y repite la llamada.")
    ] = False,
) -> None:
    """Dos llamadas seguidas y los rate limits que devolvió cada una."""

    opts = PageOptions(max_results=1)

    async def _call(client):
        rows: list[tuple[str, RateLimit | None]] = []
        for n in (1, 2):
            response = await client.list_user_members(list_id, opts)
            rows.append((f"call {n}", response.rate_limit))

        last = rows[-1][1]
        if wait and last is not None:
            delay = max(0.0, last.reset - time.time())
            logger.info("waiting %.0fs for the rate limit reset", delay)
            await asyncio.sleep(delay)
            response = await client.list_user_members(list_id, opts)
            rows.append(("after reset", response.rate_limit))

        _console.print(build_rate_limit_table(rows))
        return [{"call": label, "rate_limit": limit} for label, limit in rows]

    run_call(ctx, _call)


def run() -> None:
    """Entrypoint para el script `tweetcall`."""

    app()


if __name__ == "__main__":
    run()
