"""Comandos `tweetcall tweets ...`."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

import typer

from cli.common import (
    TIME_FORMATS,
    ExpansionsOpt,
    MaxResultsOpt,
    MediaFieldsOpt,
    PaginationTokenOpt,
    PlaceFieldsOpt,
    PollFieldsOpt,
    TweetFieldsOpt,
    UserFieldsOpt,
    field_selectors,
    parse_bool,
    run_call,
    split_csv,
)
from core.domain.fields import Granularity, SortOrder
from core.domain.options import (
    CountsOptions,
    CreateTweetMedia,
    CreateTweetPoll,
    CreateTweetReply,
    CreateTweetRequest,
    FieldOptions,
    PageOptions,
    TweetSearchOptions,
)

app = typer.Typer(no_args_is_help=True, help="Lookup, gestión, búsqueda y counts de tweets.")

TweetIdOpt = Annotated[str, typer.Option("--id", help="Id del tweet.")]
UserIdOpt = Annotated[str, typer.Option("--user-id", help="Id del usuario autenticado.")]
QueryOpt = Annotated[str, typer.Option("--query", help="Query de búsqueda.")]
StartTimeOpt = Annotated[
    datetime | None, typer.Option("--start-time", formats=TIME_FORMATS, help="Inicio (UTC).")
]
EndTimeOpt = Annotated[
    datetime | None, typer.Option("--end-time", formats=TIME_FORMATS, help="Fin (UTC).")
]
SinceIdOpt = Annotated[str | None, typer.Option("--since-id")]
UntilIdOpt = Annotated[str | None, typer.Option("--until-id")]
NextTokenOpt = Annotated[str | None, typer.Option("--next-token", help="Cursor de la página.")]
SortOrderOpt = Annotated[SortOrder | None, typer.Option("--sort-order")]
GranularityOpt = Annotated[Granularity | None, typer.Option("--granularity")]


@app.command()
def lookup(
    ctx: typer.Context,
    ids: Annotated[str, typer.Option("--ids", help="Ids de tweets separados por comas.")],
    expansions: ExpansionsOpt = None,
    tweet_fields: TweetFieldsOpt = None,
    user_fields: UserFieldsOpt = None,
    media_fields: MediaFieldsOpt = None,
    place_fields: PlaceFieldsOpt = None,
    poll_fields: PollFieldsOpt = None,
) -> None:
    """Lookup de uno o varios tweets."""

    opts = FieldOptions(
        **field_selectors(
            expansions=expansions,
            tweet_fields=tweet_fields,
            user_fields=user_fields,
            media_fields=media_fields,
            place_fields=place_fields,
            poll_fields=poll_fields,
        )
    )
    run_call(ctx, lambda client: client.tweet_lookup(split_csv(ids), opts))


@app.command()
def dictionary(
    ctx: typer.Context,
    ids: Annotated[str, typer.Option("--ids", help="Ids de tweets separados por comas.")],
) -> None:
    """Lookup + resolución de includes por tweet (autor, media, menciones...)."""

    opts = FieldOptions(
        **field_selectors(
            expansions=(
                "attachments.poll_ids,attachments.media_keys,author_id,"
                "entities.mentions.username,geo.place_id,in_reply_to_user_id,"
                "referenced_tweets.id,referenced_tweets.id.author_id"
            ),
            tweet_fields="attachments,author_id,conversation_id,created_at,entities,geo,"
            "in_reply_to_user_id,lang,referenced_tweets",
            user_fields="created_at,description,name,username,verified",
        )
    )

    async def _call(client):
        response = await client.tweet_lookup(split_csv(ids), opts)
        return response.tweet_dictionaries()

    run_call(ctx, _call)


@app.command()
def create(
    ctx: typer.Context,
    text: Annotated[str | None, typer.Option("--text", help="Texto del tweet.")] = None,
    quote_tweet_id: Annotated[str | None, typer.Option("--quote-tweet-id")] = None,
    reply_to: Annotated[
        str | None, typer.Option("--reply-to", help="Tweet al que responde.")
    ] = None,
    exclude_reply_user_ids: Annotated[str | None, typer.Option("--exclude-reply-user-ids")] = None,
    media_ids: Annotated[str | None, typer.Option("--media-ids")] = None,
    tagged_user_ids: Annotated[str | None, typer.Option("--tagged-user-ids")] = None,
    poll_options: Annotated[str | None, typer.Option("--poll-options")] = None,
    poll_duration: Annotated[int, typer.Option("--poll-duration", min=0)] = 0,
    reply_settings: Annotated[str | None, typer.Option("--reply-settings")] = None,
    super_followers_only: Annotated[bool, typer.Option("--super-followers-only")] = False,
) -> None:
    """Publica un tweet (requiere user context)."""

    request = CreateTweetRequest(
        text=text,
        quote_tweet_id=quote_tweet_id,
        reply_settings=reply_settings,
        for_super_followers_only=super_followers_only,
    )
    if media_ids or tagged_user_ids:
        request.media = CreateTweetMedia(
            media_ids=split_csv(media_ids), tagged_user_ids=split_csv(tagged_user_ids)
        )
    if poll_options:
        request.poll = CreateTweetPoll(
            options=split_csv(poll_options), duration_minutes=poll_duration
        )
    if reply_to or exclude_reply_user_ids:
        request.reply = CreateTweetReply(
            in_reply_to_tweet_id=reply_to,
            exclude_reply_user_ids=split_csv(exclude_reply_user_ids),
        )
    run_call(ctx, lambda client: client.create_tweet(request))


@app.command()
def delete(ctx: typer.Context, tweet_id: TweetIdOpt) -> None:
    run_call(ctx, lambda client: client.delete_tweet(tweet_id))


@app.command(name="hide-replies")
def hide_replies(
    ctx: typer.Context,
    tweet_id: TweetIdOpt,
    hide: Annotated[str, typer.Option("--hide", help="true/false: ocultar o mostrar.")],
) -> None:
    """Oculta o muestra una respuesta."""

    hidden = parse_bool(hide)
    run_call(ctx, lambda client: client.tweet_hide_replies(tweet_id, hidden))


def _search_options(
    *,
    max_results: int,
    next_token: str | None,
    sort_order: SortOrder | None,
    start_time: datetime | None,
    end_time: datetime | None,
    since_id: str | None,
    until_id: str | None,
    expansions: str | None,
    tweet_fields: str | None,
    user_fields: str | None,
    media_fields: str | None,
    place_fields: str | None,
    poll_fields: str | None,
) -> TweetSearchOptions:
    return TweetSearchOptions(
        max_results=max_results,
        next_token=next_token,
        sort_order=sort_order,
        start_time=start_time,
        end_time=end_time,
        since_id=since_id,
        until_id=until_id,
        **field_selectors(
            expansions=expansions,
            tweet_fields=tweet_fields,
            user_fields=user_fields,
            media_fields=media_fields,
            place_fields=place_fields,
            poll_fields=poll_fields,
        ),
    )


@app.command(name="recent-search")
def recent_search(
    ctx: typer.Context,
    query: QueryOpt,
    max_results: MaxResultsOpt = 0,
    next_token: NextTokenOpt = None,
    sort_order: SortOrderOpt = None,
    start_time: StartTimeOpt = None,
    end_time: EndTimeOpt = None,
    since_id: SinceIdOpt = None,
    until_id: UntilIdOpt = None,
    expansions: ExpansionsOpt = None,
    tweet_fields: TweetFieldsOpt = None,
    user_fields: UserFieldsOpt = None,
    media_fields: MediaFieldsOpt = None,
    place_fields: PlaceFieldsOpt = None,
    poll_fields: PollFieldsOpt = None,
) -> None:
    """Búsqueda de los últimos 7 días."""

    opts = _search_options(
        max_results=max_results,
        next_token=next_token,
        sort_order=sort_order,
        start_time=start_time,
        end_time=end_time,
        since_id=since_id,
        until_id=until_id,
        expansions=expansions,
        tweet_fields=tweet_fields,
        user_fields=user_fields,
        media_fields=media_fields,
        place_fields=place_fields,
        poll_fields=poll_fields,
    )
    run_call(ctx, lambda client: client.tweet_recent_search(query, opts))


@app.command()
def search(
    ctx: typer.Context,
    query: QueryOpt,
    max_results: MaxResultsOpt = 0,
    next_token: NextTokenOpt = None,
    sort_order: SortOrderOpt = None,
    start_time: StartTimeOpt = None,
    end_time: EndTimeOpt = None,
    since_id: SinceIdOpt = None,
    until_id: UntilIdOpt = None,
    expansions: ExpansionsOpt = None,
    tweet_fields: TweetFieldsOpt = None,
    user_fields: UserFieldsOpt = None,
    media_fields: MediaFieldsOpt = None,
    place_fields: PlaceFieldsOpt = None,
    poll_fields: PollFieldsOpt = None,
) -> None:
    """Búsqueda en el archivo completo."""

    opts = _search_options(
        max_results=max_results,
        next_token=next_token,
        sort_order=sort_order,
        start_time=start_time,
        end_time=end_time,
        since_id=since_id,
        until_id=until_id,
        expansions=expansions,
        tweet_fields=tweet_fields,
        user_fields=user_fields,
        media_fields=media_fields,
        place_fields=place_fields,
        poll_fields=poll_fields,
    )
    run_call(ctx, lambda client: client.tweet_search(query, opts))


@app.command(name="recent-counts")
def recent_counts(
    ctx: typer.Context,
    query: QueryOpt,
    granularity: GranularityOpt = None,
    start_time: StartTimeOpt = None,
    end_time: EndTimeOpt = None,
    since_id: SinceIdOpt = None,
    until_id: UntilIdOpt = None,
    next_token: NextTokenOpt = None,
) -> None:
    opts = CountsOptions(
        granularity=granularity,
        start_time=start_time,
        end_time=end_time,
        since_id=since_id,
        until_id=until_id,
        next_token=next_token,
    )
    run_call(ctx, lambda client: client.tweet_recent_counts(query, opts))


@app.command(name="all-counts")
def all_counts(
    ctx: typer.Context,
    query: QueryOpt,
    granularity: GranularityOpt = None,
    start_time: StartTimeOpt = None,
    end_time: EndTimeOpt = None,
    since_id: SinceIdOpt = None,
    until_id: UntilIdOpt = None,
    next_token: NextTokenOpt = None,
) -> None:
    opts = CountsOptions(
        granularity=granularity,
        start_time=start_time,
        end_time=end_time,
        since_id=since_id,
        until_id=until_id,
        next_token=next_token,
    )
    run_call(ctx, lambda client: client.tweet_all_counts(query, opts))


def _page(
    max_results: int,
    pagination_token: str | None,
    expansions: str | None = None,
    tweet_fields: str | None = None,
    user_fields: str | None = None,
) -> PageOptions:
    return PageOptions(
        max_results=max_results,
        pagination_token=pagination_token,
        **field_selectors(
            expansions=expansions, tweet_fields=tweet_fields, user_fields=user_fields
        ),
    )


@app.command()
def quotes(
    ctx: typer.Context,
    tweet_id: TweetIdOpt,
    max_results: MaxResultsOpt = 0,
    pagination_token: PaginationTokenOpt = None,
    expansions: ExpansionsOpt = None,
    tweet_fields: TweetFieldsOpt = None,
    user_fields: UserFieldsOpt = None,
) -> None:
    """Tweets que citan a un tweet."""

    opts = _page(max_results, pagination_token, expansions, tweet_fields, user_fields)
    run_call(ctx, lambda client: client.quote_tweets_lookup(tweet_id, opts))


@app.command(name="liking-users")
def liking_users(
    ctx: typer.Context,
    tweet_id: TweetIdOpt,
    max_results: MaxResultsOpt = 0,
    pagination_token: PaginationTokenOpt = None,
    expansions: ExpansionsOpt = None,
    tweet_fields: TweetFieldsOpt = None,
    user_fields: UserFieldsOpt = None,
) -> None:
    opts = _page(max_results, pagination_token, expansions, tweet_fields, user_fields)
    run_call(ctx, lambda client: client.tweet_likes_lookup(tweet_id, opts))


@app.command(name="retweeted-by")
def retweeted_by(
    ctx: typer.Context,
    tweet_id: TweetIdOpt,
    max_results: MaxResultsOpt = 0,
    pagination_token: PaginationTokenOpt = None,
    expansions: ExpansionsOpt = None,
    tweet_fields: TweetFieldsOpt = None,
    user_fields: UserFieldsOpt = None,
) -> None:
    opts = _page(max_results, pagination_token, expansions, tweet_fields, user_fields)
    run_call(ctx, lambda client: client.user_retweet_lookup(tweet_id, opts))


@app.command()
def bookmarks(
    ctx: typer.Context,
    user_id: UserIdOpt,
    max_results: MaxResultsOpt = 0,
    pagination_token: PaginationTokenOpt = None,
    expansions: ExpansionsOpt = None,
    tweet_fields: TweetFieldsOpt = None,
    user_fields: UserFieldsOpt = None,
) -> None:
    """Bookmarks del usuario (requiere user context)."""

    opts = _page(max_results, pagination_token, expansions, tweet_fields, user_fields)
    run_call(ctx, lambda client: client.tweet_bookmarks_lookup(user_id, opts))


@app.command(name="bookmark-add")
def bookmark_add(ctx: typer.Context, user_id: UserIdOpt, tweet_id: TweetIdOpt) -> None:
    run_call(ctx, lambda client: client.add_tweet_bookmark(user_id, tweet_id))


@app.command(name="bookmark-remove")
def bookmark_remove(ctx: typer.Context, user_id: UserIdOpt, tweet_id: TweetIdOpt) -> None:
    run_call(ctx, lambda client: client.remove_tweet_bookmark(user_id, tweet_id))
