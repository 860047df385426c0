"""Endpoints de usuarios: lookup, follows, timelines, blocks, mutes, likes y retweets."""

from __future__ import annotations

from adapters.twitter._base import (
    TwitterClientBase,
    check_max_results,
    require,
    require_ids,
)
from core.domain.models import ActionResponse, TweetResponse, UserResponse
from core.domain.options import FieldOptions, PageOptions, TimelineOptions

USER_TIMELINE_MIN_RESULTS = 5
USER_TIMELINE_MAX_RESULTS = 100
REVERSE_CHRONOLOGICAL_MIN_RESULTS = 1
REVERSE_CHRONOLOGICAL_MAX_RESULTS = 100
BLOCKS_MAX_RESULTS = 1000
MUTES_MAX_RESULTS = 1000
FOLLOWS_MAX_RESULTS = 1000
LIKED_TWEETS_MIN_RESULTS = 10
LIKED_TWEETS_MAX_RESULTS = 100


class UsersMixin(TwitterClientBase):
    async def user_lookup(
        self, ids: list[str], opts: FieldOptions | None = None
    ) -> UserResponse:
        """Uno o varios usuarios por id (hasta 100)."""

        ids = require_ids(ids, "user lookup")
        params = (opts or FieldOptions()).to_params()
        if len(ids) == 1:
            url = self._url("users", ids[0])
        else:
            url = self._url("users")
            params["ids"] = ",".join(ids)
        return await self._call("user lookup", "GET", url, UserResponse, params=params)

    async def username_lookup(
        self, usernames: list[str], opts: FieldOptions | None = None
    ) -> UserResponse:
        """Uno o varios usuarios por username (hasta 100)."""

        names = [n.lstrip("@") for n in usernames if n]
        if not names:
            require("", "username lookup", "an username")
        names = require_ids(names, "username lookup")
        params = (opts or FieldOptions()).to_params()
        if len(names) == 1:
            url = self._url("users", "by", "username", names[0])
        else:
            url = self._url("users", "by")
            params["usernames"] = ",".join(names)
        return await self._call("username lookup", "GET", url, UserResponse, params=params)

    async def auth_user_lookup(self, opts: FieldOptions | None = None) -> UserResponse:
        """El usuario dueño del token (requiere user context)."""

        return await self._call(
            "auth user lookup",
            "GET",
            self._url("users", "me"),
            UserResponse,
            params=(opts or FieldOptions()).to_params(),
        )

    # --- follows -----------------------------------------------------------------

    async def user_following_lookup(
        self, user_id: str, opts: PageOptions | None = None
    ) -> UserResponse:
        opts = opts or PageOptions()
        require(user_id, "user following lookup")
        check_max_results(opts.max_results, "user following lookup", maximum=FOLLOWS_MAX_RESULTS)
        return await self._call(
            "user following lookup",
            "GET",
            self._url("users", user_id, "following"),
            UserResponse,
            params=opts.to_params(),
        )

    async def user_followers_lookup(
        self, user_id: str, opts: PageOptions | None = None
    ) -> UserResponse:
        opts = opts or PageOptions()
        require(user_id, "user followers lookup")
        check_max_results(opts.max_results, "user followers lookup", maximum=FOLLOWS_MAX_RESULTS)
        return await self._call(
            "user followers lookup",
            "GET",
            self._url("users", user_id, "followers"),
            UserResponse,
            params=opts.to_params(),
        )

    async def user_follows(self, user_id: str, target_user_id: str) -> ActionResponse:
        require(user_id, "user follows", "a user id")
        require(target_user_id, "user follows", "a target user id")
        return await self._call(
            "user follows",
            "POST",
            self._url("users", user_id, "following"),
            ActionResponse,
            json={"target_user_id": target_user_id},
        )

    async def delete_user_follows(self, user_id: str, target_user_id: str) -> ActionResponse:
        require(user_id, "delete user follows", "a user id")
        require(target_user_id, "delete user follows", "a target user id")
        return await self._call(
            "delete user follows",
            "DELETE",
            self._url("users", user_id, "following", target_user_id),
            ActionResponse,
        )

    # --- timelines ---------------------------------------------------------------

    async def user_tweet_timeline(
        self, user_id: str, opts: TimelineOptions | None = None
    ) -> TweetResponse:
        """Tweets publicados por un usuario (más recientes primero)."""

        opts = opts or TimelineOptions()
        require(user_id, "user tweet timeline", "a user id")
        check_max_results(
            opts.max_results,
            "user tweet timeline",
            minimum=USER_TIMELINE_MIN_RESULTS,
            maximum=USER_TIMELINE_MAX_RESULTS,
        )
        return await self._call(
            "user tweet timeline",
            "GET",
            self._url("users", user_id, "tweets"),
            TweetResponse,
            params=opts.to_params(),
        )

    async def user_mention_timeline(
        self, user_id: str, opts: TimelineOptions | None = None
    ) -> TweetResponse:
        opts = opts or TimelineOptions()
        require(user_id, "user mention timeline", "a user id")
        if opts.excludes:
            # La API no admite `exclude` en menciones.
            opts = opts.model_copy(update={"excludes": []})
        check_max_results(
            opts.max_results,
            "user mention timeline",
            minimum=USER_TIMELINE_MIN_RESULTS,
            maximum=USER_TIMELINE_MAX_RESULTS,
        )
        return await self._call(
            "user mention timeline",
            "GET",
            self._url("users", user_id, "mentions"),
            TweetResponse,
            params=opts.to_params(),
        )

    async def user_reverse_chronological_timeline(
        self, user_id: str, opts: TimelineOptions | None = None
    ) -> TweetResponse:
        """Home timeline del usuario autenticado (user context)."""

        opts = opts or TimelineOptions()
        require(user_id, "user reverse chronological timeline", "a user id")
        check_max_results(
            opts.max_results,
            "user reverse chronological timeline",
            minimum=REVERSE_CHRONOLOGICAL_MIN_RESULTS,
            maximum=REVERSE_CHRONOLOGICAL_MAX_RESULTS,
        )
        return await self._call(
            "user reverse chronological timeline",
            "GET",
            self._url("users", user_id, "timelines", "reverse_chronological"),
            TweetResponse,
            params=opts.to_params(),
        )

    # --- retweets ----------------------------------------------------------------

    async def user_retweet(self, user_id: str, tweet_id: str) -> ActionResponse:
        require(user_id, "user retweet", "a user id")
        require(tweet_id, "user retweet", "a tweet id")
        return await self._call(
            "user retweet",
            "POST",
            self._url("users", user_id, "retweets"),
            ActionResponse,
            json={"tweet_id": tweet_id},
        )

    async def delete_user_retweet(self, user_id: str, tweet_id: str) -> ActionResponse:
        require(user_id, "delete user retweet", "a user id")
        require(tweet_id, "delete user retweet", "a tweet id")
        return await self._call(
            "delete user retweet",
            "DELETE",
            self._url("users", user_id, "retweets", tweet_id),
            ActionResponse,
        )

    # --- blocks ------------------------------------------------------------------

    async def user_blocks_lookup(
        self, user_id: str, opts: PageOptions | None = None
    ) -> UserResponse:
        opts = opts or PageOptions()
        require(user_id, "user blocks lookup", "a user id")
        check_max_results(opts.max_results, "user blocks lookup", maximum=BLOCKS_MAX_RESULTS)
        return await self._call(
            "user blocks lookup",
            "GET",
            self._url("users", user_id, "blocking"),
            UserResponse,
            params=opts.to_params(),
        )

    async def user_blocks(self, user_id: str, target_user_id: str) -> ActionResponse:
        require(user_id, "user blocks", "a user id")
        require(target_user_id, "user blocks", "a target user id")
        return await self._call(
            "user blocks",
            "POST",
            self._url("users", user_id, "blocking"),
            ActionResponse,
            json={"target_user_id": target_user_id},
        )

    async def delete_user_blocks(self, user_id: str, target_user_id: str) -> ActionResponse:
        require(user_id, "delete user blocks", "a user id")
        require(target_user_id, "delete user blocks", "a target user id")
        return await self._call(
            "delete user blocks",
            "DELETE",
            self._url("users", user_id, "blocking", target_user_id),
            ActionResponse,
        )

    # --- mutes -------------------------------------------------------------------

    async def user_mutes_lookup(
        self, user_id: str, opts: PageOptions | None = None
    ) -> UserResponse:
        opts = opts or PageOptions()
        require(user_id, "user mutes lookup", "a user id")
        check_max_results(opts.max_results, "user mutes lookup", maximum=MUTES_MAX_RESULTS)
        return await self._call(
            "user mutes lookup",
            "GET",
            self._url("users", user_id, "muting"),
            UserResponse,
            params=opts.to_params(),
        )

    async def user_mutes(self, user_id: str, target_user_id: str) -> ActionResponse:
        require(user_id, "user mutes", "a user id")
        require(target_user_id, "user mutes", "a target user id")
        return await self._call(
            "user mutes",
            "POST",
            self._url("users", user_id, "muting"),
            ActionResponse,
            json={"target_user_id": target_user_id},
        )

    async def delete_user_mutes(self, user_id: str, target_user_id: str) -> ActionResponse:
        require(user_id, "delete user mutes", "a user id")
        require(target_user_id, "delete user mutes", "a target user id")
        return await self._call(
            "delete user mutes",
            "DELETE",
            self._url("users", user_id, "muting", target_user_id),
            ActionResponse,
        )

    # --- likes -------------------------------------------------------------------

    async def user_likes_lookup(
        self, user_id: str, opts: PageOptions | None = None
    ) -> TweetResponse:
        """Tweets a los que un usuario dio like."""

        opts = opts or PageOptions()
        require(user_id, "user likes lookup", "a user id")
        check_max_results(
            opts.max_results,
            "user likes lookup",
            minimum=LIKED_TWEETS_MIN_RESULTS,
            maximum=LIKED_TWEETS_MAX_RESULTS,
        )
        return await self._call(
            "user likes lookup",
            "GET",
            self._url("users", user_id, "liked_tweets"),
            TweetResponse,
            params=opts.to_params(),
        )

    async def user_likes(self, user_id: str, tweet_id: str) -> ActionResponse:
        require(user_id, "user likes", "a user id")
        require(tweet_id, "user likes", "a tweet id")
        return await self._call(
            "user likes",
            "POST",
            self._url("users", user_id, "likes"),
            ActionResponse,
            json={"tweet_id": tweet_id},
        )

    async def delete_user_likes(self, user_id: str, tweet_id: str) -> ActionResponse:
        require(user_id, "delete user likes", "a user id")
        require(tweet_id, "delete user likes", "a tweet id")
        return await self._call(
            "delete user likes",
            "DELETE",
            self._url("users", user_id, "likes", tweet_id),
            ActionResponse,
        )
