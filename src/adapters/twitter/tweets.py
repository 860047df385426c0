"""Endpoints de tweets: lookup, gestión, búsqueda, counts y relaciones."""

from __future__ import annotations

from adapters.twitter._base import (
    TwitterClientBase,
    check_max_results,
    check_query,
    require,
    require_ids,
)
from core.domain.models import ActionResponse, TweetCountsResponse, TweetResponse, UserResponse
from core.domain.options import (
    CountsOptions,
    CreateTweetRequest,
    FieldOptions,
    PageOptions,
    TweetSearchOptions,
)

RECENT_SEARCH_QUERY_LENGTH = 512
SEARCH_QUERY_LENGTH = 1024
RECENT_COUNTS_QUERY_LENGTH = 512
ALL_COUNTS_QUERY_LENGTH = 1024
QUOTE_TWEETS_MIN_RESULTS = 10
QUOTE_TWEETS_MAX_RESULTS = 100
LIKES_MIN_RESULTS = 10
LIKES_MAX_RESULTS = 100
RETWEETED_BY_MAX_RESULTS = 100


class TweetsMixin(TwitterClientBase):
    async def tweet_lookup(
        self, ids: list[str], opts: FieldOptions | None = None
    ) -> TweetResponse:
        """Uno o varios tweets por id (hasta 100).

        Un único id usa `2/tweets/:id`; varios, `2/tweets?ids=`. En ambos
        casos `data` llega como lista.
        """

        ids = require_ids(ids, "tweet lookup")
        params = (opts or FieldOptions()).to_params()
        if len(ids) == 1:
            url = self._url("tweets", ids[0])
        else:
            url = self._url("tweets")
            params["ids"] = ",".join(ids)
        return await self._call("tweet lookup", "GET", url, TweetResponse, params=params)

    async def create_tweet(self, tweet: CreateTweetRequest) -> ActionResponse:
        tweet.validate_request()
        return await self._call(
            "create tweet",
            "POST",
            self._url("tweets"),
            ActionResponse,
            json=tweet.to_body(),
            expected=201,
        )

    async def delete_tweet(self, tweet_id: str) -> ActionResponse:
        require(tweet_id, "delete tweet")
        return await self._call(
            "delete tweet", "DELETE", self._url("tweets", tweet_id), ActionResponse
        )

    async def tweet_hide_replies(self, tweet_id: str, hide: bool) -> ActionResponse:
        """Oculta (o muestra) una respuesta a un tweet propio."""

        require(tweet_id, "tweet hide replies")
        return await self._call(
            "tweet hide replies",
            "PUT",
            self._url("tweets", tweet_id, "hidden"),
            ActionResponse,
            json={"hidden": hide},
        )

    async def tweet_recent_search(
        self, query: str, opts: TweetSearchOptions | None = None
    ) -> TweetResponse:
        """Tweets de los últimos 7 días que cumplen `query`."""

        check_query(query, "tweet recent search", RECENT_SEARCH_QUERY_LENGTH)
        params = (opts or TweetSearchOptions()).to_params()
        params["query"] = query
        return await self._call(
            "tweet recent search",
            "GET",
            self._url("tweets", "search", "recent"),
            TweetResponse,
            params=params,
        )

    async def tweet_search(
        self, query: str, opts: TweetSearchOptions | None = None
    ) -> TweetResponse:
        """Búsqueda en el archivo completo (acceso académico)."""

        check_query(query, "tweet search", SEARCH_QUERY_LENGTH)
        params = (opts or TweetSearchOptions()).to_params()
        params["query"] = query
        return await self._call(
            "tweet search",
            "GET",
            self._url("tweets", "search", "all"),
            TweetResponse,
            params=params,
        )

    async def tweet_recent_counts(
        self, query: str, opts: CountsOptions | None = None
    ) -> TweetCountsResponse:
        check_query(query, "tweet recent counts", RECENT_COUNTS_QUERY_LENGTH)
        params = (opts or CountsOptions()).to_params()
        params["query"] = query
        return await self._call(
            "tweet recent counts",
            "GET",
            self._url("tweets", "counts", "recent"),
            TweetCountsResponse,
            params=params,
        )

    async def tweet_all_counts(
        self, query: str, opts: CountsOptions | None = None
    ) -> TweetCountsResponse:
        check_query(query, "tweet all counts", ALL_COUNTS_QUERY_LENGTH)
        params = (opts or CountsOptions()).to_params()
        params["query"] = query
        return await self._call(
            "tweet all counts",
            "GET",
            self._url("tweets", "counts", "all"),
            TweetCountsResponse,
            params=params,
        )

    async def quote_tweets_lookup(
        self, tweet_id: str, opts: PageOptions | None = None
    ) -> TweetResponse:
        opts = opts or PageOptions()
        require(tweet_id, "quote tweets lookup")
        check_max_results(
            opts.max_results,
            "quote tweets lookup",
            minimum=QUOTE_TWEETS_MIN_RESULTS,
            maximum=QUOTE_TWEETS_MAX_RESULTS,
        )
        return await self._call(
            "quote tweets lookup",
            "GET",
            self._url("tweets", tweet_id, "quote_tweets"),
            TweetResponse,
            params=opts.to_params(),
        )

    async def tweet_likes_lookup(
        self, tweet_id: str, opts: PageOptions | None = None
    ) -> UserResponse:
        """Usuarios que dieron like a un tweet."""

        opts = opts or PageOptions()
        require(tweet_id, "tweet likes lookup")
        check_max_results(
            opts.max_results,
            "tweet likes lookup",
            minimum=LIKES_MIN_RESULTS,
            maximum=LIKES_MAX_RESULTS,
        )
        return await self._call(
            "tweet likes lookup",
            "GET",
            self._url("tweets", tweet_id, "liking_users"),
            UserResponse,
            params=opts.to_params(),
        )

    async def user_retweet_lookup(
        self, tweet_id: str, opts: PageOptions | None = None
    ) -> UserResponse:
        """Usuarios que retuitearon un tweet."""

        opts = opts or PageOptions()
        require(tweet_id, "user retweet lookup")
        check_max_results(
            opts.max_results, "user retweet lookup", maximum=RETWEETED_BY_MAX_RESULTS
        )
        return await self._call(
            "user retweet lookup",
            "GET",
            self._url("tweets", tweet_id, "retweeted_by"),
            UserResponse,
            params=opts.to_params(),
        )

    async def tweet_bookmarks_lookup(
        self, user_id: str, opts: PageOptions | None = None
    ) -> TweetResponse:
        opts = opts or PageOptions()
        require(user_id, "tweet bookmarks lookup", "a user id")
        check_max_results(opts.max_results, "tweet bookmarks lookup", maximum=100)
        return await self._call(
            "tweet bookmarks lookup",
            "GET",
            self._url("users", user_id, "bookmarks"),
            TweetResponse,
            params=opts.to_params(),
        )

    async def add_tweet_bookmark(self, user_id: str, tweet_id: str) -> ActionResponse:
        require(user_id, "add tweet bookmark", "a user id")
        require(tweet_id, "add tweet bookmark", "a tweet id")
        return await self._call(
            "add tweet bookmark",
            "POST",
            self._url("users", user_id, "bookmarks"),
            ActionResponse,
            json={"tweet_id": tweet_id},
        )

    async def remove_tweet_bookmark(self, user_id: str, tweet_id: str) -> ActionResponse:
        require(user_id, "remove tweet bookmark", "a user id")
        require(tweet_id, "remove tweet bookmark", "a tweet id")
        return await self._call(
            "remove tweet bookmark",
            "DELETE",
            self._url("users", user_id, "bookmarks", tweet_id),
            ActionResponse,
        )
