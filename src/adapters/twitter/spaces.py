"""Endpoints de Spaces."""

from __future__ import annotations

from adapters.twitter._base import TwitterClientBase, require, require_ids
from core.domain.models import SpaceResponse, TweetResponse, UserResponse
from core.domain.options import FieldOptions, SpaceSearchOptions
from core.errors import ParameterError

SPACE_MAX_IDS = 100
SPACE_BY_CREATOR_MAX_IDS = 100


class SpacesMixin(TwitterClientBase):
    async def spaces_lookup(
        self, ids: list[str], opts: FieldOptions | None = None
    ) -> SpaceResponse:
        """Uno o varios Spaces por id (hasta 100)."""

        ids = require_ids(ids, "space lookup", SPACE_MAX_IDS)
        params = (opts or FieldOptions()).to_params()
        if len(ids) == 1:
            url = self._url("spaces", ids[0])
        else:
            url = self._url("spaces")
            params["ids"] = ",".join(ids)
        return await self._call("space lookup", "GET", url, SpaceResponse, params=params)

    async def spaces_by_creator_lookup(
        self, user_ids: list[str], opts: FieldOptions | None = None
    ) -> SpaceResponse:
        """Spaces activos o programados de los creadores indicados."""

        user_ids = require_ids(user_ids, "space by creator lookup", SPACE_BY_CREATOR_MAX_IDS)
        params = (opts or FieldOptions()).to_params()
        params["user_ids"] = ",".join(user_ids)
        return await self._call(
            "space by creator lookup",
            "GET",
            self._url("spaces", "by", "creator_ids"),
            SpaceResponse,
            params=params,
        )

    async def space_buyers_lookup(
        self, space_id: str, opts: FieldOptions | None = None
    ) -> UserResponse:
        """Usuarios que compraron entrada para un Space de pago."""

        require(space_id, "space buyers lookup")
        return await self._call(
            "space buyers lookup",
            "GET",
            self._url("spaces", space_id, "buyers"),
            UserResponse,
            params=(opts or FieldOptions()).to_params(),
        )

    async def space_tweets_lookup(
        self, space_id: str, opts: FieldOptions | None = None
    ) -> TweetResponse:
        require(space_id, "space tweets lookup")
        return await self._call(
            "space tweets lookup",
            "GET",
            self._url("spaces", space_id, "tweets"),
            TweetResponse,
            params=(opts or FieldOptions()).to_params(),
        )

    async def spaces_search(
        self, query: str, opts: SpaceSearchOptions | None = None
    ) -> SpaceResponse:
        if not query:
            raise ParameterError("space search: a query is required")
        params = (opts or SpaceSearchOptions()).to_params()
        params["query"] = query
        return await self._call(
            "space search",
            "GET",
            self._url("spaces", "search"),
            SpaceResponse,
            params=params,
        )
