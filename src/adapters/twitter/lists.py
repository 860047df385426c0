"""Endpoints de listas: lookup, gestión, miembros, pins y follows."""

from __future__ import annotations

from adapters.twitter._base import M, TwitterClientBase, check_max_results, require
from core.domain.models import ActionResponse, ListResponse, TweetResponse, UserResponse
from core.domain.options import FieldOptions, ListMetadata, PageOptions
from core.errors import ParameterError

LIST_PAGE_MAX_RESULTS = 100


class ListsMixin(TwitterClientBase):
    async def _list_page(
        self,
        name: str,
        url: str,
        model: type[M],
        opts: PageOptions | None,
    ) -> M:
        opts = opts or PageOptions()
        check_max_results(opts.max_results, name, maximum=LIST_PAGE_MAX_RESULTS)
        return await self._call(name, "GET", url, model, params=opts.to_params())

    # --- lookup ------------------------------------------------------------------

    async def list_lookup(self, list_id: str, opts: FieldOptions | None = None) -> ListResponse:
        require(list_id, "list lookup", "a list id")
        return await self._call(
            "list lookup",
            "GET",
            self._url("lists", list_id),
            ListResponse,
            params=(opts or FieldOptions()).to_params(),
        )

    async def user_list_lookup(
        self, user_id: str, opts: PageOptions | None = None
    ) -> ListResponse:
        """Listas que pertenecen a un usuario."""

        require(user_id, "user list lookup", "a user id")
        return await self._list_page(
            "user list lookup", self._url("users", user_id, "owned_lists"), ListResponse, opts
        )

    async def list_tweet_lookup(
        self, list_id: str, opts: PageOptions | None = None
    ) -> TweetResponse:
        require(list_id, "list tweet lookup", "a list id")
        return await self._list_page(
            "list tweet lookup", self._url("lists", list_id, "tweets"), TweetResponse, opts
        )

    # --- gestión -----------------------------------------------------------------

    async def create_list(self, metadata: ListMetadata) -> ActionResponse:
        require(metadata.name, "create list", "a name")
        return await self._call(
            "create list",
            "POST",
            self._url("lists"),
            ActionResponse,
            json=metadata.to_body(),
            expected=201,
        )

    async def update_list(self, list_id: str, metadata: ListMetadata) -> ActionResponse:
        require(list_id, "update list", "a list id")
        body = metadata.to_body()
        if not body:
            raise ParameterError("update list: name, description or private is required")
        return await self._call(
            "update list",
            "PUT",
            self._url("lists", list_id),
            ActionResponse,
            json=body,
        )

    async def delete_list(self, list_id: str) -> ActionResponse:
        require(list_id, "delete list", "a list id")
        return await self._call(
            "delete list", "DELETE", self._url("lists", list_id), ActionResponse
        )

    # --- miembros ----------------------------------------------------------------

    async def add_list_member(self, list_id: str, user_id: str) -> ActionResponse:
        require(list_id, "add list member", "a list id")
        require(user_id, "add list member", "a user id")
        return await self._call(
            "add list member",
            "POST",
            self._url("lists", list_id, "members"),
            ActionResponse,
            json={"user_id": user_id},
        )

    async def remove_list_member(self, list_id: str, user_id: str) -> ActionResponse:
        require(list_id, "remove list member", "a list id")
        require(user_id, "remove list member", "a user id")
        return await self._call(
            "remove list member",
            "DELETE",
            self._url("lists", list_id, "members", user_id),
            ActionResponse,
        )

    async def list_user_members(
        self, list_id: str, opts: PageOptions | None = None
    ) -> UserResponse:
        require(list_id, "list user members", "a list id")
        return await self._list_page(
            "list user members", self._url("lists", list_id, "members"), UserResponse, opts
        )

    async def user_list_memberships(
        self, user_id: str, opts: PageOptions | None = None
    ) -> ListResponse:
        """Listas de las que el usuario es miembro."""

        require(user_id, "user list memberships", "a user id")
        return await self._list_page(
            "user list memberships",
            self._url("users", user_id, "list_memberships"),
            ListResponse,
            opts,
        )

    # --- pins --------------------------------------------------------------------

    async def user_pin_list(self, user_id: str, list_id: str) -> ActionResponse:
        require(user_id, "user pin list", "a user id")
        require(list_id, "user pin list", "a list id")
        return await self._call(
            "user pin list",
            "POST",
            self._url("users", user_id, "pinned_lists"),
            ActionResponse,
            json={"list_id": list_id},
        )

    async def user_unpin_list(self, user_id: str, list_id: str) -> ActionResponse:
        require(user_id, "user unpin list", "a user id")
        require(list_id, "user unpin list", "a list id")
        return await self._call(
            "user unpin list",
            "DELETE",
            self._url("users", user_id, "pinned_lists", list_id),
            ActionResponse,
        )

    async def user_pinned_lists(
        self, user_id: str, opts: FieldOptions | None = None
    ) -> ListResponse:
        require(user_id, "user pinned lists", "a user id")
        return await self._call(
            "user pinned lists",
            "GET",
            self._url("users", user_id, "pinned_lists"),
            ListResponse,
            params=(opts or FieldOptions()).to_params(),
        )

    # --- follows -----------------------------------------------------------------

    async def user_follow_list(self, user_id: str, list_id: str) -> ActionResponse:
        require(user_id, "user follow list", "a user id")
        require(list_id, "user follow list", "a list id")
        return await self._call(
            "user follow list",
            "POST",
            self._url("users", user_id, "followed_lists"),
            ActionResponse,
            json={"list_id": list_id},
        )

    async def user_unfollow_list(self, user_id: str, list_id: str) -> ActionResponse:
        require(user_id, "user unfollow list", "a user id")
        require(list_id, "user unfollow list", "a list id")
        return await self._call(
            "user unfollow list",
            "DELETE",
            self._url("users", user_id, "followed_lists", list_id),
            ActionResponse,
        )

    async def user_followed_lists(
        self, user_id: str, opts: PageOptions | None = None
    ) -> ListResponse:
        require(user_id, "user followed lists", "a user id")
        return await self._list_page(
            "user followed lists",
            self._url("users", user_id, "followed_lists"),
            ListResponse,
            opts,
        )

    async def list_user_followers(
        self, list_id: str, opts: PageOptions | None = None
    ) -> UserResponse:
        require(list_id, "list user followers", "a list id")
        return await self._list_page(
            "list user followers", self._url("lists", list_id, "followers"), UserResponse, opts
        )
