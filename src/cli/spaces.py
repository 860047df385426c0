"""Comandos `tweetcall spaces ...`."""

from __future__ import annotations

from typing import Annotated

import typer

from cli.common import (
    ExpansionsOpt,
    SpaceFieldsOpt,
    TopicFieldsOpt,
    TweetFieldsOpt,
    UserFieldsOpt,
    field_selectors,
    run_call,
    split_csv,
)
from core.domain.fields import SpaceState
from core.domain.options import FieldOptions, SpaceSearchOptions

app = typer.Typer(no_args_is_help=True, help="Spaces: lookup, creadores, compradores y búsqueda.")

SpaceIdOpt = Annotated[str, typer.Option("--space-id", help="Id del Space.")]


def _fields(
    expansions: str | None,
    space_fields: str | None = None,
    topic_fields: str | None = None,
    tweet_fields: str | None = None,
    user_fields: str | None = None,
) -> FieldOptions:
    return FieldOptions(
        **field_selectors(
            expansions=expansions,
            space_fields=space_fields,
            topic_fields=topic_fields,
            tweet_fields=tweet_fields,
            user_fields=user_fields,
        )
    )


@app.command()
def lookup(
    ctx: typer.Context,
    ids: Annotated[str, typer.Option("--ids", help="Ids de Spaces separados por comas.")],
    expansions: ExpansionsOpt = None,
    space_fields: SpaceFieldsOpt = None,
    topic_fields: TopicFieldsOpt = None,
    user_fields: UserFieldsOpt = None,
) -> None:
    opts = _fields(expansions, space_fields, topic_fields, user_fields=user_fields)
    run_call(ctx, lambda client: client.spaces_lookup(split_csv(ids), opts))


@app.command(name="by-creator")
def by_creator(
    ctx: typer.Context,
    user_ids: Annotated[
        str, typer.Option("--user-ids", help="Ids de creadores separados por comas.")
    ],
    expansions: ExpansionsOpt = None,
    space_fields: SpaceFieldsOpt = None,
    topic_fields: TopicFieldsOpt = None,
    user_fields: UserFieldsOpt = None,
) -> None:
    opts = _fields(expansions, space_fields, topic_fields, user_fields=user_fields)
    run_call(ctx, lambda client: client.spaces_by_creator_lookup(split_csv(user_ids), opts))


@app.command()
def buyers(
    ctx: typer.Context,
    space_id: SpaceIdOpt,
    expansions: ExpansionsOpt = None,
    tweet_fields: TweetFieldsOpt = None,
    user_fields: UserFieldsOpt = None,
) -> None:
    """Usuarios que compraron entrada para el Space."""

    opts = _fields(expansions, tweet_fields=tweet_fields, user_fields=user_fields)
    run_call(ctx, lambda client: client.space_buyers_lookup(space_id, opts))


@app.command()
def tweets(
    ctx: typer.Context,
    space_id: SpaceIdOpt,
    expansions: ExpansionsOpt = None,
    tweet_fields: TweetFieldsOpt = None,
    user_fields: UserFieldsOpt = None,
) -> None:
    opts = _fields(expansions, tweet_fields=tweet_fields, user_fields=user_fields)
    run_call(ctx, lambda client: client.space_tweets_lookup(space_id, opts))


@app.command()
def search(
    ctx: typer.Context,
    query: Annotated[str, typer.Option("--query", help="Texto a buscar en el título.")],
    state: Annotated[SpaceState | None, typer.Option("--state")] = None,
    expansions: ExpansionsOpt = None,
    space_fields: SpaceFieldsOpt = None,
    topic_fields: TopicFieldsOpt = None,
    user_fields: UserFieldsOpt = None,
) -> None:
    opts = SpaceSearchOptions(
        state=state,
        **field_selectors(
            expansions=expansions,
            space_fields=space_fields,
            topic_fields=topic_fields,
            user_fields=user_fields,
        ),
    )
    run_call(ctx, lambda client: client.spaces_search(query, opts))
