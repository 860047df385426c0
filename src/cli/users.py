"""Comandos `tweetcall users ...`."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

import typer

from cli.common import (
    TIME_FORMATS,
    ExpansionsOpt,
    MaxResultsOpt,
    PaginationTokenOpt,
    TweetFieldsOpt,
    UserFieldsOpt,
    field_selectors,
    parse_enum_list,
    run_call,
    split_csv,
)
from core.domain.fields import Exclude
from core.domain.options import FieldOptions, PageOptions, TimelineOptions

app = typer.Typer(
    no_args_is_help=True, help="Usuarios: lookup, follows, timelines, blocks, mutes y likes."
)

UserIdOpt = Annotated[str, typer.Option("--user-id", help="Id del usuario (origen).")]
TargetIdOpt = Annotated[str, typer.Option("--target-id", help="Id del usuario destino.")]
TweetIdOpt = Annotated[str, typer.Option("--tweet-id", help="Id del tweet.")]


def _page(
    max_results: int,
    pagination_token: str | None,
    expansions: str | None,
    tweet_fields: str | None,
    user_fields: str | None,
) -> PageOptions:
    return PageOptions(
        max_results=max_results,
        pagination_token=pagination_token,
        **field_selectors(
            expansions=expansions, tweet_fields=tweet_fields, user_fields=user_fields
        ),
    )


def _timeline(
    *,
    excludes: str | None,
    max_results: int,
    pagination_token: str | None,
    start_time: datetime | None,
    end_time: datetime | None,
    since_id: str | None,
    until_id: str | None,
    expansions: str | None,
    tweet_fields: str | None,
    user_fields: str | None,
) -> TimelineOptions:
    return TimelineOptions(
        excludes=parse_enum_list(excludes, Exclude, "--exclude"),
        max_results=max_results,
        pagination_token=pagination_token,
        start_time=start_time,
        end_time=end_time,
        since_id=since_id,
        until_id=until_id,
        **field_selectors(
            expansions=expansions, tweet_fields=tweet_fields, user_fields=user_fields
        ),
    )


ExcludeOpt = Annotated[
    str | None, typer.Option("--exclude", help="retweets,replies (separados por comas).")
]
StartTimeOpt = Annotated[datetime | None, typer.Option("--start-time", formats=TIME_FORMATS)]
EndTimeOpt = Annotated[datetime | None, typer.Option("--end-time", formats=TIME_FORMATS)]
SinceIdOpt = Annotated[str | None, typer.Option("--since-id")]
UntilIdOpt = Annotated[str | None, typer.Option("--until-id")]


# --- lookup ----------------------------------------------------------------------


@app.command()
def lookup(
    ctx: typer.Context,
    ids: Annotated[str, typer.Option("--ids", help="Ids de usuarios separados por comas.")],
    expansions: ExpansionsOpt = None,
    tweet_fields: TweetFieldsOpt = None,
    user_fields: UserFieldsOpt = None,
) -> None:
    opts = FieldOptions(
        **field_selectors(expansions=expansions, tweet_fields=tweet_fields, user_fields=user_fields)
    )
    run_call(ctx, lambda client: client.user_lookup(split_csv(ids), opts))


@app.command(name="by-username")
def by_username(
    ctx: typer.Context,
    names: Annotated[str, typer.Option("--names", help="Usernames separados por comas.")],
    expansions: ExpansionsOpt = None,
    tweet_fields: TweetFieldsOpt = None,
    user_fields: UserFieldsOpt = None,
) -> None:
    opts = FieldOptions(
        **field_selectors(expansions=expansions, tweet_fields=tweet_fields, user_fields=user_fields)
    )
    run_call(ctx, lambda client: client.username_lookup(split_csv(names), opts))


@app.command()
def me(
    ctx: typer.Context,
    expansions: ExpansionsOpt = None,
    tweet_fields: TweetFieldsOpt = None,
    user_fields: UserFieldsOpt = None,
) -> None:
    """Usuario autenticado (requiere user context)."""

    opts = FieldOptions(
        **field_selectors(expansions=expansions, tweet_fields=tweet_fields, user_fields=user_fields)
    )
    run_call(ctx, lambda client: client.auth_user_lookup(opts))


# --- follows ---------------------------------------------------------------------


@app.command()
def following(
    ctx: typer.Context,
    user_id: UserIdOpt,
    max_results: MaxResultsOpt = 0,
    pagination_token: PaginationTokenOpt = None,
    expansions: ExpansionsOpt = None,
    tweet_fields: TweetFieldsOpt = None,
    user_fields: UserFieldsOpt = None,
) -> None:
    opts = _page(max_results, pagination_token, expansions, tweet_fields, user_fields)
    run_call(ctx, lambda client: client.user_following_lookup(user_id, opts))


@app.command()
def followers(
    ctx: typer.Context,
    user_id: UserIdOpt,
    max_results: MaxResultsOpt = 0,
    pagination_token: PaginationTokenOpt = None,
    expansions: ExpansionsOpt = None,
    tweet_fields: TweetFieldsOpt = None,
    user_fields: UserFieldsOpt = None,
) -> None:
    opts = _page(max_results, pagination_token, expansions, tweet_fields, user_fields)
    run_call(ctx, lambda client: client.user_followers_lookup(user_id, opts))


@app.command()
def follow(ctx: typer.Context, user_id: UserIdOpt, target_id: TargetIdOpt) -> None:
    run_call(ctx, lambda client: client.user_follows(user_id, target_id))


@app.command()
def unfollow(ctx: typer.Context, user_id: UserIdOpt, target_id: TargetIdOpt) -> None:
    run_call(ctx, lambda client: client.delete_user_follows(user_id, target_id))


# --- timelines -------------------------------------------------------------------


@app.command()
def tweets(
    ctx: typer.Context,
    user_id: UserIdOpt,
    exclude: ExcludeOpt = None,
    max_results: MaxResultsOpt = 0,
    pagination_token: PaginationTokenOpt = None,
    start_time: StartTimeOpt = None,
    end_time: EndTimeOpt = None,
    since_id: SinceIdOpt = None,
    until_id: UntilIdOpt = None,
    expansions: ExpansionsOpt = None,
    tweet_fields: TweetFieldsOpt = None,
    user_fields: UserFieldsOpt = None,
) -> None:
    """Timeline de tweets de un usuario."""

    opts = _timeline(
        excludes=exclude,
        max_results=max_results,
        pagination_token=pagination_token,
        start_time=start_time,
        end_time=end_time,
        since_id=since_id,
        until_id=until_id,
        expansions=expansions,
        tweet_fields=tweet_fields,
        user_fields=user_fields,
    )
    run_call(ctx, lambda client: client.user_tweet_timeline(user_id, opts))


@app.command()
def mentions(
    ctx: typer.Context,
    user_id: UserIdOpt,
    max_results: MaxResultsOpt = 0,
    pagination_token: PaginationTokenOpt = None,
    start_time: StartTimeOpt = None,
    end_time: EndTimeOpt = None,
    since_id: SinceIdOpt = None,
    until_id: UntilIdOpt = None,
    expansions: ExpansionsOpt = None,
    tweet_fields: TweetFieldsOpt = None,
    user_fields: UserFieldsOpt = None,
) -> None:
    """Timeline de menciones de un usuario."""

    opts = _timeline(
        excludes=None,
        max_results=max_results,
        pagination_token=pagination_token,
        start_time=start_time,
        end_time=end_time,
        since_id=since_id,
        until_id=until_id,
        expansions=expansions,
        tweet_fields=tweet_fields,
        user_fields=user_fields,
    )
    run_call(ctx, lambda client: client.user_mention_timeline(user_id, opts))


@app.command(name="home-timeline")
def home_timeline(
    ctx: typer.Context,
    user_id: UserIdOpt,
    exclude: ExcludeOpt = None,
    max_results: MaxResultsOpt = 0,
    pagination_token: PaginationTokenOpt = None,
    start_time: StartTimeOpt = None,
    end_time: EndTimeOpt = None,
    since_id: SinceIdOpt = None,
    until_id: UntilIdOpt = None,
    expansions: ExpansionsOpt = None,
    tweet_fields: TweetFieldsOpt = None,
    user_fields: UserFieldsOpt = None,
) -> None:
    """Timeline cronológica inversa (home) del usuario autenticado."""

    opts = _timeline(
        excludes=exclude,
        max_results=max_results,
        pagination_token=pagination_token,
        start_time=start_time,
        end_time=end_time,
        since_id=since_id,
        until_id=until_id,
        expansions=expansions,
        tweet_fields=tweet_fields,
        user_fields=user_fields,
    )
    run_call(ctx, lambda client: client.user_reverse_chronological_timeline(user_id, opts))


# --- retweets --------------------------------------------------------------------


@app.command()
def retweet(ctx: typer.Context, user_id: UserIdOpt, tweet_id: TweetIdOpt) -> None:
    run_call(ctx, lambda client: client.user_retweet(user_id, tweet_id))


@app.command()
def unretweet(ctx: typer.Context, user_id: UserIdOpt, tweet_id: TweetIdOpt) -> None:
    run_call(ctx, lambda client: client.delete_user_retweet(user_id, tweet_id))


# --- blocks / mutes --------------------------------------------------------------


@app.command()
def blocks(
    ctx: typer.Context,
    user_id: UserIdOpt,
    max_results: MaxResultsOpt = 0,
    pagination_token: PaginationTokenOpt = None,
    expansions: ExpansionsOpt = None,
    tweet_fields: TweetFieldsOpt = None,
    user_fields: UserFieldsOpt = None,
) -> None:
    opts = _page(max_results, pagination_token, expansions, tweet_fields, user_fields)
    run_call(ctx, lambda client: client.user_blocks_lookup(user_id, opts))


@app.command()
def block(ctx: typer.Context, user_id: UserIdOpt, target_id: TargetIdOpt) -> None:
    run_call(ctx, lambda client: client.user_blocks(user_id, target_id))


@app.command()
def unblock(ctx: typer.Context, user_id: UserIdOpt, target_id: TargetIdOpt) -> None:
    run_call(ctx, lambda client: client.delete_user_blocks(user_id, target_id))


@app.command()
def mutes(
    ctx: typer.Context,
    user_id: UserIdOpt,
    max_results: MaxResultsOpt = 0,
    pagination_token: PaginationTokenOpt = None,
    expansions: ExpansionsOpt = None,
    tweet_fields: TweetFieldsOpt = None,
    user_fields: UserFieldsOpt = None,
) -> None:
    opts = _page(max_results, pagination_token, expansions, tweet_fields, user_fields)
    run_call(ctx, lambda client: client.user_mutes_lookup(user_id, opts))


@app.command()
def mute(ctx: typer.Context, user_id: UserIdOpt, target_id: TargetIdOpt) -> None:
    run_call(ctx, lambda client: client.user_mutes(user_id, target_id))


@app.command()
def unmute(ctx: typer.Context, user_id: UserIdOpt, target_id: TargetIdOpt) -> None:
    run_call(ctx, lambda client: client.delete_user_mutes(user_id, target_id))


# --- likes -----------------------------------------------------------------------


@app.command(name="liked-tweets")
def liked_tweets(
    ctx: typer.Context,
    user_id: UserIdOpt,
    max_results: MaxResultsOpt = 0,
    pagination_token: PaginationTokenOpt = None,
    expansions: ExpansionsOpt = None,
    tweet_fields: TweetFieldsOpt = None,
    user_fields: UserFieldsOpt = None,
) -> None:
    opts = _page(max_results, pagination_token, expansions, tweet_fields, user_fields)
    run_call(ctx, lambda client: client.user_likes_lookup(user_id, opts))


@app.command()
def like(ctx: typer.Context, user_id: UserIdOpt, tweet_id: TweetIdOpt) -> None:
    run_call(ctx, lambda client: client.user_likes(user_id, tweet_id))


@app.command()
def unlike(ctx: typer.Context, user_id: UserIdOpt, tweet_id: TweetIdOpt) -> None:
    run_call(ctx, lambda client: client.delete_user_likes(user_id, tweet_id))
