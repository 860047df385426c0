"""Comandos `tweetcall lists ...`."""

from __future__ import annotations

from typing import Annotated

import typer

from cli.common import (
    ExpansionsOpt,
    ListFieldsOpt,
    MaxResultsOpt,
    PaginationTokenOpt,
    TweetFieldsOpt,
    UserFieldsOpt,
    field_selectors,
    parse_bool,
    run_call,
)
from core.domain.options import FieldOptions, ListMetadata, PageOptions

app = typer.Typer(no_args_is_help=True, help="Listas: lookup, gestión, miembros, pins y follows.")

ListIdOpt = Annotated[str, typer.Option("--list-id", help="Id de la lista.")]
UserIdOpt = Annotated[str, typer.Option("--user-id", help="Id del usuario.")]
NameOpt = Annotated[str | None, typer.Option("--name", help="Nombre de la lista.")]
DescriptionOpt = Annotated[str | None, typer.Option("--description")]
PrivateOpt = Annotated[
    str | None, typer.Option("--private", help="true/false: lista privada.")
]


def _page(
    max_results: int,
    pagination_token: str | None,
    expansions: str | None,
    list_fields: str | None = None,
    tweet_fields: str | None = None,
    user_fields: str | None = None,
) -> PageOptions:
    return PageOptions(
        max_results=max_results,
        pagination_token=pagination_token,
        **field_selectors(
            expansions=expansions,
            list_fields=list_fields,
            tweet_fields=tweet_fields,
            user_fields=user_fields,
        ),
    )


def _metadata(name: str | None, description: str | None, private: str | None) -> ListMetadata:
    return ListMetadata(
        name=name,
        description=description,
        private=parse_bool(private) if private is not None else None,
    )


# --- lookup ----------------------------------------------------------------------


@app.command()
def lookup(
    ctx: typer.Context,
    list_id: ListIdOpt,
    expansions: ExpansionsOpt = None,
    list_fields: ListFieldsOpt = None,
    user_fields: UserFieldsOpt = None,
) -> None:
    opts = FieldOptions(
        **field_selectors(expansions=expansions, list_fields=list_fields, user_fields=user_fields)
    )
    run_call(ctx, lambda client: client.list_lookup(list_id, opts))


@app.command()
def owned(
    ctx: typer.Context,
    user_id: UserIdOpt,
    max_results: MaxResultsOpt = 0,
    pagination_token: PaginationTokenOpt = None,
    expansions: ExpansionsOpt = None,
    list_fields: ListFieldsOpt = None,
    user_fields: UserFieldsOpt = None,
) -> None:
    """Listas que pertenecen a un usuario."""

    opts = _page(max_results, pagination_token, expansions, list_fields, user_fields=user_fields)
    run_call(ctx, lambda client: client.user_list_lookup(user_id, opts))


@app.command()
def tweets(
    ctx: typer.Context,
    list_id: ListIdOpt,
    max_results: MaxResultsOpt = 0,
    pagination_token: PaginationTokenOpt = None,
    expansions: ExpansionsOpt = None,
    tweet_fields: TweetFieldsOpt = None,
    user_fields: UserFieldsOpt = None,
) -> None:
    opts = _page(
        max_results,
        pagination_token,
        expansions,
        tweet_fields=tweet_fields,
        user_fields=user_fields,
    )
    run_call(ctx, lambda client: client.list_tweet_lookup(list_id, opts))


# --- gestión ---------------------------------------------------------------------


@app.command()
def create(
    ctx: typer.Context,
    name: Annotated[str, typer.Option("--name", help="Nombre de la lista.")],
    description: DescriptionOpt = None,
    private: PrivateOpt = None,
) -> None:
    metadata = _metadata(name, description, private)
    run_call(ctx, lambda client: client.create_list(metadata))


@app.command()
def update(
    ctx: typer.Context,
    list_id: ListIdOpt,
    name: NameOpt = None,
    description: DescriptionOpt = None,
    private: PrivateOpt = None,
) -> None:
    metadata = _metadata(name, description, private)
    run_call(ctx, lambda client: client.update_list(list_id, metadata))


@app.command()
def delete(ctx: typer.Context, list_id: ListIdOpt) -> None:
    run_call(ctx, lambda client: client.delete_list(list_id))


# --- miembros --------------------------------------------------------------------


@app.command()
def members(
    ctx: typer.Context,
    list_id: ListIdOpt,
    max_results: MaxResultsOpt = 0,
    pagination_token: PaginationTokenOpt = None,
    expansions: ExpansionsOpt = None,
    tweet_fields: TweetFieldsOpt = None,
    user_fields: UserFieldsOpt = None,
) -> None:
    opts = _page(
        max_results,
        pagination_token,
        expansions,
        tweet_fields=tweet_fields,
        user_fields=user_fields,
    )
    run_call(ctx, lambda client: client.list_user_members(list_id, opts))


@app.command(name="member-add")
def member_add(ctx: typer.Context, list_id: ListIdOpt, user_id: UserIdOpt) -> None:
    run_call(ctx, lambda client: client.add_list_member(list_id, user_id))


@app.command(name="member-remove")
def member_remove(ctx: typer.Context, list_id: ListIdOpt, user_id: UserIdOpt) -> None:
    run_call(ctx, lambda client: client.remove_list_member(list_id, user_id))


@app.command()
def memberships(
    ctx: typer.Context,
    user_id: UserIdOpt,
    max_results: MaxResultsOpt = 0,
    pagination_token: PaginationTokenOpt = None,
    expansions: ExpansionsOpt = None,
    list_fields: ListFieldsOpt = None,
    user_fields: UserFieldsOpt = None,
) -> None:
    """Listas de las que el usuario es miembro."""

    opts = _page(max_results, pagination_token, expansions, list_fields, user_fields=user_fields)
    run_call(ctx, lambda client: client.user_list_memberships(user_id, opts))


# --- pins ------------------------------------------------------------------------


@app.command()
def pinned(
    ctx: typer.Context,
    user_id: UserIdOpt,
    expansions: ExpansionsOpt = None,
    list_fields: ListFieldsOpt = None,
    user_fields: UserFieldsOpt = None,
) -> None:
    opts = FieldOptions(
        **field_selectors(expansions=expansions, list_fields=list_fields, user_fields=user_fields)
    )
    run_call(ctx, lambda client: client.user_pinned_lists(user_id, opts))


@app.command()
def pin(ctx: typer.Context, user_id: UserIdOpt, list_id: ListIdOpt) -> None:
    run_call(ctx, lambda client: client.user_pin_list(user_id, list_id))


@app.command()
def unpin(ctx: typer.Context, user_id: UserIdOpt, list_id: ListIdOpt) -> None:
    run_call(ctx, lambda client: client.user_unpin_list(user_id, list_id))


# --- follows ---------------------------------------------------------------------


@app.command()
def followed(
    ctx: typer.Context,
    user_id: UserIdOpt,
    max_results: MaxResultsOpt = 0,
    pagination_token: PaginationTokenOpt = None,
    expansions: ExpansionsOpt = None,
    list_fields: ListFieldsOpt = None,
    user_fields: UserFieldsOpt = None,
) -> None:
    opts = _page(max_results, pagination_token, expansions, list_fields, user_fields=user_fields)
    run_call(ctx, lambda client: client.user_followed_lists(user_id, opts))


@app.command()
def follow(ctx: typer.Context, user_id: UserIdOpt, list_id: ListIdOpt) -> None:
    run_call(ctx, lambda client: client.user_follow_list(user_id, list_id))


@app.command()
def unfollow(ctx: typer.Context, user_id: UserIdOpt, list_id: ListIdOpt) -> None:
    run_call(ctx, lambda client: client.user_unfollow_list(user_id, list_id))


@app.command()
def followers(
    ctx: typer.Context,
    list_id: ListIdOpt,
    max_results: MaxResultsOpt = 0,
    pagination_token: PaginationTokenOpt = None,
    expansions: ExpansionsOpt = None,
    tweet_fields: TweetFieldsOpt = None,
    user_fields: UserFieldsOpt = None,
) -> None:
    opts = _page(
        max_results,
        pagination_token,
        expansions,
        tweet_fields=tweet_fields,
        user_fields=user_fields,
    )
    run_call(ctx, lambda client: client.list_user_followers(list_id, opts))
