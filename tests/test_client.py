"""Cliente contra un transporte falso: URLs, cuerpos, errores y validación."""

from __future__ import annotations

import json

import pytest

from adapters.auth import BearerTokenAuthorizer
from adapters.twitter import TwitterClient
from conftest import TEST_TOKEN, FakeApi
from core.config import AppSettings
from core.domain.fields import Exclude, Expansion
from core.domain.models import RateLimit
from core.domain.options import (
    CreateTweetRequest,
    FieldOptions,
    ListMetadata,
    PageOptions,
    TimelineOptions,
)
from core.errors import ErrorResponse, HTTPError, ParameterError, ResponseDecodeError


@pytest.mark.asyncio
async def test_single_tweet_lookup_uses_path_and_bearer(
    client: TwitterClient, api: FakeApi
) -> None:
    api.reply(json={"data": {"id": "20", "text": "just setting up my twttr"}})

    async with client:
        response = await client.tweet_lookup(
            ["20"], FieldOptions(expansions=[Expansion.AUTHOR_ID])
        )

    request = api.last
    assert request.method == "GET"
    assert request.url.path == "/2/tweets/20"
    assert request.url.params["expansions"] == "author_id"
    assert "ids" not in request.url.params
    assert request.headers["Authorization"] == f"Bearer {TEST_TOKEN}"
    assert [t.id for t in response.data] == ["20"]
    assert response.rate_limit == RateLimit(limit=300, remaining=299, reset=1700000000)


@pytest.mark.asyncio
async def test_multi_tweet_lookup_uses_ids_param(client: TwitterClient, api: FakeApi) -> None:
    api.reply(json={"data": [{"id": "1", "text": "a"}, {"id": "2", "text": "b"}]})

    async with client:
        response = await client.tweet_lookup(["1", "2"])

    assert api.last.url.path == "/2/tweets"
    assert api.last.url.params["ids"] == "1,2"
    assert len(response.data) == 2


@pytest.mark.asyncio
async def test_partial_errors_are_kept(client: TwitterClient, api: FakeApi) -> None:
    api.reply(
        json={
            "data": [{"id": "1", "text": "a"}],
            "errors": [
                {
                    "value": "2",
                    "detail": "Could not find tweet with ids: [2].",
                    "title": "Not Found Error",
                    "resource_type": "tweet",
                }
            ],
        }
    )

    async with client:
        response = await client.tweet_lookup(["1", "2"])

    assert response.errors[0].value == "2"


@pytest.mark.asyncio
async def test_lookup_rejects_too_many_ids(client: TwitterClient, api: FakeApi) -> None:
    async with client:
        with pytest.raises(ParameterError, match="greater than max 100"):
            await client.tweet_lookup([str(i) for i in range(101)])
        with pytest.raises(ParameterError, match="an id is required"):
            await client.tweet_lookup([])

    assert api.requests == []


@pytest.mark.asyncio
async def test_structured_error_response(client: TwitterClient, api: FakeApi) -> None:
    api.reply(
        400,
        json={
            "title": "Invalid Request",
            "detail": "One or more parameters to your request was invalid.",
            "type": "https://api.twitter.com/2/problems/invalid-request",
            "errors": [{"parameters": {"ids": ["x"]}, "message": "bad id"}],
        },
    )

    async with client:
        with pytest.raises(ErrorResponse) as excinfo:
            await client.tweet_lookup(["x"])

    err = excinfo.value
    assert err.status_code == 400
    assert err.title == "Invalid Request"
    assert err.rate_limit is not None and err.rate_limit.remaining == 299
    assert len(err.errors) == 1


@pytest.mark.asyncio
async def test_non_json_error_is_http_error(client: TwitterClient, api: FakeApi) -> None:
    api.reply(404, content=b"<html>not found</html>")

    async with client:
        with pytest.raises(HTTPError) as excinfo:
            await client.tweet_lookup(["1"])

    assert excinfo.value.status_code == 404
    assert excinfo.value.status == "404 Not Found"
    assert excinfo.value.url.startswith("https://api.twitter.com/2/tweets/1")


@pytest.mark.asyncio
async def test_trailing_slash_host_is_used_verbatim(
    api: FakeApi, settings: AppSettings
) -> None:
    api.reply(404, content=b"")
    client = TwitterClient(
        BearerTokenAuthorizer(TEST_TOKEN),
        host="https://api.twitter.com/",
        transport=api.transport,
        settings=settings,
    )

    async with client:
        with pytest.raises(HTTPError):
            await client.tweet_lookup(["1", "2"])

    assert str(api.last.url).startswith("https://api.twitter.com//2/tweets")


@pytest.mark.asyncio
async def test_undecodable_body_raises_decode_error(client: TwitterClient, api: FakeApi) -> None:
    api.reply(content=b"not json")

    async with client:
        with pytest.raises(ResponseDecodeError, match="tweet lookup decode error") as excinfo:
            await client.tweet_lookup(["1"])

    assert excinfo.value.__cause__ is not None
    assert excinfo.value.rate_limit is not None


@pytest.mark.asyncio
async def test_create_tweet_expects_201(client: TwitterClient, api: FakeApi) -> None:
    api.reply(201, json={"data": {"id": "99", "text": "hello"}})

    async with client:
        response = await client.create_tweet(CreateTweetRequest(text="hello"))

    assert api.last.method == "POST"
    assert json.loads(api.last.content) == {"text": "hello"}
    assert response.data == {"id": "99", "text": "hello"}


@pytest.mark.asyncio
async def test_create_tweet_200_is_unexpected(client: TwitterClient, api: FakeApi) -> None:
    api.reply(200, json={"data": {"id": "99", "text": "hello"}})

    async with client:
        with pytest.raises(ErrorResponse) as excinfo:
            await client.create_tweet(CreateTweetRequest(text="hello"))

    assert excinfo.value.status_code == 200


@pytest.mark.asyncio
async def test_create_tweet_validates_before_sending(client: TwitterClient, api: FakeApi) -> None:
    async with client:
        with pytest.raises(ParameterError):
            await client.create_tweet(CreateTweetRequest())

    assert api.requests == []


@pytest.mark.asyncio
async def test_hide_replies_body(client: TwitterClient, api: FakeApi) -> None:
    api.reply(json={"data": {"hidden": True}})

    async with client:
        response = await client.tweet_hide_replies("123", True)

    assert api.last.method == "PUT"
    assert api.last.url.path == "/2/tweets/123/hidden"
    assert json.loads(api.last.content) == {"hidden": True}
    assert response.data["hidden"] is True


@pytest.mark.asyncio
async def test_search_query_length(client: TwitterClient, api: FakeApi) -> None:
    async with client:
        with pytest.raises(ParameterError, match="a query is required"):
            await client.tweet_recent_search("")
        with pytest.raises(ParameterError, match="length"):
            await client.tweet_recent_search("x" * 513)

    assert api.requests == []


@pytest.mark.asyncio
async def test_recent_counts(client: TwitterClient, api: FakeApi) -> None:
    api.reply(
        json={
            "data": [
                {"start": "2021-05-01T00:00:00Z", "end": "2021-05-02T00:00:00Z", "tweet_count": 42}
            ],
            "meta": {"total_tweet_count": 42},
        }
    )

    async with client:
        response = await client.tweet_recent_counts("from:TwitterDev")

    assert api.last.url.path == "/2/tweets/counts/recent"
    assert api.last.url.params["query"] == "from:TwitterDev"
    assert response.data[0].tweet_count == 42
    assert response.meta.total_tweet_count == 42


@pytest.mark.asyncio
async def test_max_results_bounds(client: TwitterClient, api: FakeApi) -> None:
    async with client:
        with pytest.raises(ParameterError, match="minimum of 10"):
            await client.quote_tweets_lookup("1", PageOptions(max_results=5))
        with pytest.raises(ParameterError, match="limited to 1000"):
            await client.user_followers_lookup("1", PageOptions(max_results=1001))
        with pytest.raises(ParameterError, match="limited to 100"):
            await client.list_user_members("1", PageOptions(max_results=101))

    assert api.requests == []


@pytest.mark.asyncio
async def test_username_lookup_paths(client: TwitterClient, api: FakeApi) -> None:
    api.reply(json={"data": {"id": "2244994945", "username": "TwitterDev"}})

    async with client:
        await client.username_lookup(["@TwitterDev"])
        await client.username_lookup(["TwitterDev", "Twitter"])

    first, second = api.requests
    assert first.url.path == "/2/users/by/username/TwitterDev"
    assert second.url.path == "/2/users/by"
    assert second.url.params["usernames"] == "TwitterDev,Twitter"


@pytest.mark.asyncio
async def test_follow_body(client: TwitterClient, api: FakeApi) -> None:
    api.reply(json={"data": {"following": True, "pending_follow": False}})

    async with client:
        response = await client.user_follows("1", "2")

    assert api.last.url.path == "/2/users/1/following"
    assert json.loads(api.last.content) == {"target_user_id": "2"}
    assert response.data["following"] is True


@pytest.mark.asyncio
async def test_unlike_path(client: TwitterClient, api: FakeApi) -> None:
    api.reply(json={"data": {"liked": False}})

    async with client:
        await client.delete_user_likes("1", "55")

    assert api.last.method == "DELETE"
    assert api.last.url.path == "/2/users/1/likes/55"


@pytest.mark.asyncio
async def test_mention_timeline_drops_exclude(client: TwitterClient, api: FakeApi) -> None:
    api.reply(json={"data": [], "meta": {"result_count": 0}})
    opts = TimelineOptions(excludes=[Exclude.REPLIES], max_results=5)

    async with client:
        await client.user_tweet_timeline("1", opts)
        await client.user_mention_timeline("1", opts)

    timeline, mentions = api.requests
    assert timeline.url.params["exclude"] == "replies"
    assert "exclude" not in mentions.url.params
    assert mentions.url.path == "/2/users/1/mentions"


@pytest.mark.asyncio
async def test_create_and_update_list(client: TwitterClient, api: FakeApi) -> None:
    api.reply(201, json={"data": {"id": "7", "name": "test v2 create list"}})
    api.reply(200, json={"data": {"updated": True}})

    async with client:
        created = await client.create_list(ListMetadata(name="test v2 create list"))
        updated = await client.update_list("7", ListMetadata(private=True))

    assert created.data["id"] == "7"
    assert updated.data == {"updated": True}
    assert api.last.method == "PUT"
    assert json.loads(api.last.content) == {"private": True}


@pytest.mark.asyncio
async def test_update_list_requires_a_change(client: TwitterClient, api: FakeApi) -> None:
    async with client:
        with pytest.raises(ParameterError, match="name, description or private"):
            await client.update_list("7", ListMetadata())
        with pytest.raises(ParameterError, match="a name is required"):
            await client.create_list(ListMetadata(description="no name"))

    assert api.requests == []


@pytest.mark.asyncio
async def test_pin_list_body(client: TwitterClient, api: FakeApi) -> None:
    api.reply(json={"data": {"pinned": True}})

    async with client:
        await client.user_pin_list("1", "7")

    assert api.last.url.path == "/2/users/1/pinned_lists"
    assert json.loads(api.last.content) == {"list_id": "7"}


@pytest.mark.asyncio
async def test_spaces_lookup_and_search(client: TwitterClient, api: FakeApi) -> None:
    api.reply(json={"data": [{"id": "1DXxyRYNejbKM", "state": "live"}]})

    async with client:
        single = await client.spaces_lookup(["1DXxyRYNejbKM"])
        await client.spaces_by_creator_lookup(["2244994945", "6253282"])
        with pytest.raises(ParameterError, match="a query is required"):
            await client.spaces_search("")

    lookup, by_creator = api.requests
    assert lookup.url.path == "/2/spaces/1DXxyRYNejbKM"
    assert single.data[0].state == "live"
    assert by_creator.url.path == "/2/spaces/by/creator_ids"
    assert by_creator.url.params["user_ids"] == "2244994945,6253282"


@pytest.mark.asyncio
async def test_path_segments_are_escaped(client: TwitterClient, api: FakeApi) -> None:
    api.reply(json={"data": []})

    async with client:
        await client.list_lookup("a/b")

    assert api.last.url.raw_path.startswith(b"/2/lists/a%2Fb")


_TOO_MANY = [str(i) for i in range(101)]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "method, args, match",
    [
        ("tweet_recent_search", ("x" * 513,), r"length \(512\)"),
        ("tweet_recent_counts", ("x" * 513,), r"length \(512\)"),
        ("tweet_search", ("x" * 1025,), r"length \(1024\)"),
        ("tweet_all_counts", ("x" * 1025,), r"length \(1024\)"),
        ("user_tweet_timeline", ("1", TimelineOptions(max_results=4)), "minimum of 5"),
        ("user_tweet_timeline", ("1", TimelineOptions(max_results=101)), "limited to 100"),
        ("user_mention_timeline", ("1", TimelineOptions(max_results=4)), "minimum of 5"),
        (
            "user_reverse_chronological_timeline",
            ("1", TimelineOptions(max_results=101)),
            "limited to 100",
        ),
        ("user_blocks_lookup", ("1", PageOptions(max_results=1001)), "limited to 1000"),
        ("user_mutes_lookup", ("1", PageOptions(max_results=1001)), "limited to 1000"),
        ("user_likes_lookup", ("1", PageOptions(max_results=9)), "minimum of 10"),
        ("user_likes_lookup", ("1", PageOptions(max_results=101)), "limited to 100"),
        ("user_lookup", (_TOO_MANY,), "greater than max 100"),
        ("username_lookup", (_TOO_MANY,), "greater than max 100"),
        ("spaces_lookup", (_TOO_MANY,), "greater than max 100"),
        ("spaces_by_creator_lookup", (_TOO_MANY,), "greater than max 100"),
    ],
)
async def test_parameter_limits(
    client: TwitterClient, api: FakeApi, method: str, args: tuple, match: str
) -> None:
    async with client:
        with pytest.raises(ParameterError, match=match):
            await getattr(client, method)(*args)

    assert api.requests == []


@pytest.mark.asyncio
async def test_query_length_counts_utf8_bytes(client: TwitterClient, api: FakeApi) -> None:
    api.reply(json={"meta": {"result_count": 0}})

    async with client:
        await client.tweet_recent_search("é" * 256)
        with pytest.raises(ParameterError, match=r"length \(512\)"):
            await client.tweet_recent_search("é" * 257)
        await client.tweet_search("x" * 1024)

    assert len(api.requests) == 2


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "method, args, http_method, path, body",
    [
        ("user_blocks_lookup", ("7",), "GET", "/2/users/7/blocking", None),
        ("user_blocks", ("7", "9"), "POST", "/2/users/7/blocking", {"target_user_id": "9"}),
        ("delete_user_blocks", ("7", "9"), "DELETE", "/2/users/7/blocking/9", None),
        ("user_mutes_lookup", ("7",), "GET", "/2/users/7/muting", None),
        ("user_mutes", ("7", "9"), "POST", "/2/users/7/muting", {"target_user_id": "9"}),
        ("delete_user_mutes", ("7", "9"), "DELETE", "/2/users/7/muting/9", None),
        ("user_retweet", ("7", "20"), "POST", "/2/users/7/retweets", {"tweet_id": "20"}),
        ("delete_user_retweet", ("7", "20"), "DELETE", "/2/users/7/retweets/20", None),
        ("tweet_bookmarks_lookup", ("7",), "GET", "/2/users/7/bookmarks", None),
        ("add_tweet_bookmark", ("7", "20"), "POST", "/2/users/7/bookmarks", {"tweet_id": "20"}),
        ("remove_tweet_bookmark", ("7", "20"), "DELETE", "/2/users/7/bookmarks/20", None),
        ("space_buyers_lookup", ("1DXxyRYNejbKM",), "GET", "/2/spaces/1DXxyRYNejbKM/buyers", None),
        ("space_tweets_lookup", ("1DXxyRYNejbKM",), "GET", "/2/spaces/1DXxyRYNejbKM/tweets", None),
        (
            "user_reverse_chronological_timeline",
            ("7", TimelineOptions(max_results=1)),
            "GET",
            "/2/users/7/timelines/reverse_chronological",
            None,
        ),
    ],
)
async def test_endpoint_paths_and_bodies(
    client: TwitterClient,
    api: FakeApi,
    method: str,
    args: tuple,
    http_method: str,
    path: str,
    body: dict | None,
) -> None:
    api.reply(json={"meta": {"result_count": 0}})

    async with client:
        response = await getattr(client, method)(*args)

    assert api.last.method == http_method
    assert api.last.url.path == path
    if body is None:
        assert api.last.content == b""
    else:
        assert json.loads(api.last.content) == body
    assert response.rate_limit.remaining == 299
