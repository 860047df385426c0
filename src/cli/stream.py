"""Comandos `tweetcall stream ...`: reglas del stream filtrado y lectura de streams."""

from __future__ import annotations

import logging
from typing import Annotated, Any

import typer

from adapters.json_exporter import render_json
from adapters.twitter import StreamMessage
from cli.common import (
    ExpansionsOpt,
    TweetFieldsOpt,
    UserFieldsOpt,
    field_selectors,
    get_state,
    run_call,
    split_csv,
)
from core.domain.models import StreamRule, SystemMessages, TweetMessage
from core.domain.options import StreamOptions

logger = logging.getLogger(__name__)

app = typer.Typer(no_args_is_help=True, help="Stream filtrado (reglas) y sample stream.")

DryRunOpt = Annotated[
    bool, typer.Option("--dry-run", help="Solo valida; la API no aplica los cambios.")
]
LimitOpt = Annotated[
    int, typer.Option("--limit", min=0, help="Mensajes a leer antes de cerrar (0 = sin límite).")
]
BackfillOpt = Annotated[
    int, typer.Option("--backfill-minutes", min=0, help="Minutos de backfill (0..5).")
]


def labelled(message: StreamMessage) -> dict[str, Any]:
    """Envuelve el mensaje con su tipo: `tweet`, `system` o `disconnect`."""

    if isinstance(message, TweetMessage):
        return {"tweet": message.raw}
    if isinstance(message, SystemMessages):
        return {"system": message.messages}
    return {"disconnect": message}


# --- reglas ----------------------------------------------------------------------


@app.command()
def rules(
    ctx: typer.Context,
    ids: Annotated[str | None, typer.Option("--ids", help="Ids de reglas (opcional).")] = None,
) -> None:
    """Reglas activas del stream filtrado."""

    run_call(ctx, lambda client: client.tweet_search_stream_rules(split_csv(ids)))


@app.command(name="add-rule")
def add_rule(
    ctx: typer.Context,
    value: Annotated[str, typer.Option("--value", help="Regla, p.ej. `cat has:images`.")],
    tag: Annotated[str | None, typer.Option("--tag")] = None,
    dry_run: DryRunOpt = False,
) -> None:
    rule = StreamRule(value=value, tag=tag)
    run_call(ctx, lambda client: client.tweet_search_stream_add_rules([rule], dry_run))


@app.command(name="delete-rules")
def delete_rules(
    ctx: typer.Context,
    ids: Annotated[str | None, typer.Option("--ids", help="Ids de reglas.")] = None,
    values: Annotated[
        str | None, typer.Option("--values", help="Valores de reglas (separados por comas).")
    ] = None,
    dry_run: DryRunOpt = False,
) -> None:
    """Borra reglas por id o por valor."""

    if bool(ids) == bool(values):
        raise typer.BadParameter("use either --ids or --values")
    run_call(
        ctx,
        lambda client: client.tweet_search_stream_delete_rules(
            ids=split_csv(ids) or None,
            values=split_csv(values) or None,
            dry_run=dry_run,
        ),
    )


# --- streams ---------------------------------------------------------------------


def _consume(ctx: typer.Context, open_stream, limit: int) -> None:
    state = get_state(ctx)

    async def _call(client) -> None:
        stream = await open_stream(client)
        received = 0
        async with stream:
            async for message in stream:
                text = render_json(labelled(message))
                typer.echo(text)
                if state.output is not None:
                    with state.output.open("a", encoding="utf-8") as sink:
                        sink.write(text + "\n")
                received += 1
                if limit and received >= limit:
                    break
        if stream.timed_out:
            logger.warning("stream connection lost")
        logger.info("stream closed after %d messages (%d errors)", received, len(stream.errors))

    try:
        run_call(ctx, _call)
    except KeyboardInterrupt:
        typer.echo("closing", err=True)


def _stream_options(
    backfill_minutes: int,
    expansions: str | None,
    tweet_fields: str | None,
    user_fields: str | None,
) -> StreamOptions:
    return StreamOptions(
        backfill_minutes=backfill_minutes,
        **field_selectors(
            expansions=expansions, tweet_fields=tweet_fields, user_fields=user_fields
        ),
    )


@app.command()
def search(
    ctx: typer.Context,
    limit: LimitOpt = 0,
    backfill_minutes: BackfillOpt = 0,
    expansions: ExpansionsOpt = None,
    tweet_fields: TweetFieldsOpt = None,
    user_fields: UserFieldsOpt = None,
) -> None:
    """Lee el stream filtrado por las reglas activas (Ctrl-C para cerrar)."""

    opts = _stream_options(backfill_minutes, expansions, tweet_fields, user_fields)
    _consume(ctx, lambda client: client.tweet_search_stream(opts), limit)


@app.command()
def sample(
    ctx: typer.Context,
    limit: LimitOpt = 0,
    backfill_minutes: BackfillOpt = 0,
    expansions: ExpansionsOpt = None,
    tweet_fields: TweetFieldsOpt = None,
    user_fields: UserFieldsOpt = None,
) -> None:
    """Lee el sample stream (Ctrl-C para cerrar)."""

    opts = _stream_options(backfill_minutes, expansions, tweet_fields, user_fields)
    _consume(ctx, lambda client: client.tweet_sample_stream(opts), limit)
