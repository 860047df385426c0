"""CLI de punta a punta sobre un transporte falso."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from cli.common import CliState
from cli.main import app
from conftest import TEST_TOKEN, FakeApi
from core.config import AppSettings, get_user_env_file

runner = CliRunner()


def _invoke(api: FakeApi, args: list[str], *, token: str | None = TEST_TOKEN, **settings):
    state = CliState(
        settings=AppSettings(_env_file=None, bearer_token=token, **settings),
        transport=api.transport,
    )
    return runner.invoke(app, args, obj=state)


def test_tweets_lookup_prints_json(api: FakeApi) -> None:
    api.reply(json={"data": [{"id": "1", "text": "a"}, {"id": "2", "text": "b"}]})

    result = _invoke(api, ["tweets", "lookup", "--ids", "1, 2", "--tweet-fields", "created_at"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert [t["id"] for t in payload["data"]] == ["1", "2"]
    assert payload["rate_limit"]["remaining"] == 299
    assert api.last.url.params["ids"] == "1,2"
    assert api.last.url.params["tweet.fields"] == "created_at"
    assert api.last.headers["Authorization"] == f"Bearer {TEST_TOKEN}"


def test_global_token_and_host(api: FakeApi) -> None:
    api.reply(json={"data": {"id": "1", "text": "a"}})

    result = _invoke(
        api,
        ["--token", "other", "--host", "http://localhost:8080", "tweets", "lookup", "--ids", "1"],
    )

    assert result.exit_code == 0, result.output
    assert str(api.last.url) == "http://localhost:8080/2/tweets/1"
    assert api.last.headers["Authorization"] == "Bearer other"


def test_api_error_prints_structured_json(api: FakeApi) -> None:
    api.reply(401, json={"title": "Unauthorized", "type": "about:blank", "status": 401})

    result = _invoke(api, ["users", "me"])

    assert result.exit_code == 1
    payload = json.loads(result.stdout)
    assert payload["status_code"] == 401
    assert payload["title"] == "Unauthorized"


def test_missing_token_fails_without_request(api: FakeApi) -> None:
    result = _invoke(api, ["tweets", "lookup", "--ids", "1"], token=None)

    assert result.exit_code == 1
    assert api.requests == []


def test_unknown_field_is_a_usage_error(api: FakeApi) -> None:
    result = _invoke(api, ["tweets", "lookup", "--ids", "1", "--tweet-fields", "nope"])

    assert result.exit_code == 2
    assert api.requests == []


def test_hide_replies_parses_bool(api: FakeApi) -> None:
    api.reply(json={"data": {"hidden": False}})

    ok = _invoke(api, ["tweets", "hide-replies", "--id", "5", "--hide", "F"])
    bad = _invoke(api, ["tweets", "hide-replies", "--id", "5", "--hide", "maybe"])

    assert ok.exit_code == 0, ok.output
    assert json.loads(api.requests[0].content) == {"hidden": False}
    assert bad.exit_code == 2
    assert len(api.requests) == 1


def test_output_file(api: FakeApi, tmp_path: Path) -> None:
    api.reply(json={"data": {"following": True, "pending_follow": False}})
    target = tmp_path / "out" / "follow.json"

    result = _invoke(
        api,
        ["--output", str(target), "users", "follow", "--user-id", "1", "--target-id", "2"],
    )

    assert result.exit_code == 0, result.output
    assert json.loads(target.read_text(encoding="utf-8"))["data"]["following"] is True
    assert json.loads(api.last.content) == {"target_user_id": "2"}


def test_http_error_example_exits_zero(api: FakeApi) -> None:
    api.reply(404, content=b"")

    result = _invoke(api, ["misc", "http-error", "--ids", "1,2"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["status_code"] == 404
    assert payload["url"].startswith("https://api.twitter.com//2/tweets")


def test_stream_add_rule_dry_run(api: FakeApi) -> None:
    api.reply(201, json={"data": [{"id": "r1", "value": "cat", "tag": "t"}]})

    result = _invoke(
        api, ["stream", "add-rule", "--value", "cat", "--tag", "t", "--dry-run"]
    )

    assert result.exit_code == 0, result.output
    assert api.last.url.params["dry_run"] == "true"
    assert json.loads(api.last.content) == {"add": [{"value": "cat", "tag": "t"}]}


def test_stream_delete_rules_requires_one_selector(api: FakeApi) -> None:
    result = _invoke(api, ["stream", "delete-rules"])

    assert result.exit_code == 2
    assert api.requests == []


def test_stream_sample_stops_at_limit(api: FakeApi) -> None:
    lines = [
        {"data": {"id": "1", "text": "first"}},
        {"info": {"message": "still here"}},
        {"data": {"id": "2", "text": "never printed"}},
    ]
    body = "\r\n".join(json.dumps(line) for line in lines).encode("utf-8")
    api.reply(content=body)

    result = _invoke(api, ["stream", "sample", "--limit", "2"])

    assert result.exit_code == 0, result.output
    assert api.last.url.path == "/2/tweets/sample/stream"
    assert '"first"' in result.stdout
    assert '"still here"' in result.stdout
    assert "never printed" not in result.stdout


def test_compliance_upload(api: FakeApi, tmp_path: Path) -> None:
    job = {
        "id": "42",
        "type": "tweets",
        "status": "created",
        "upload_url": "https://storage.googleapis.com/upload?signature=abc",
    }
    api.reply(json={"data": job})
    api.reply(content=b"")
    ids_file = tmp_path / "ids.txt"
    ids_file.write_text("1\n\n2\n", encoding="utf-8")

    result = _invoke(api, ["compliance", "upload", "--id", "42", "--ids-file", str(ids_file)])

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {"id": "42", "uploaded": 2}
    lookup, upload = api.requests
    assert lookup.url.path == "/2/compliance/jobs/42"
    assert upload.method == "PUT"
    assert upload.content == b"1\n2"


def test_rate_limit_example(api: FakeApi) -> None:
    api.reply(json={"data": [{"id": "1", "username": "a"}], "meta": {"result_count": 1}})

    result = _invoke(api, ["misc", "rate-limit", "--list-id", "7"])

    assert result.exit_code == 0, result.output
    assert len(api.requests) == 2
    assert api.last.url.path == "/2/lists/7/members"
    assert api.last.url.params["max_results"] == "1"


def test_doctor_set_token(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

    result = runner.invoke(
        app,
        ["doctor", "set-token"],
        input="secret-token\nhttps://api.example.test\n",
        obj=CliState(settings=AppSettings(_env_file=None)),
    )

    assert result.exit_code == 0, result.output
    text = get_user_env_file().read_text(encoding="utf-8")
    assert "TWEETCALL_BEARER_TOKEN=secret-token" in text
    assert "TWEETCALL_API_HOST=https://api.example.test" in text


def test_stream_sample_stops_when_keep_alive_lapses(api: FakeApi) -> None:
    async def body():
        yield (json.dumps({"data": {"id": "1", "text": "first"}}) + "\r\n").encode("utf-8")
        await asyncio.sleep(1.0)
        yield (json.dumps({"data": {"id": "2", "text": "after-lapse"}}) + "\r\n").encode("utf-8")

    api.reply(content=body())

    result = _invoke(api, ["stream", "sample"], stream_keep_alive_seconds=0.2)

    assert result.exit_code == 0, result.output
    assert '"first"' in result.stdout
    assert "after-lapse" not in result.stdout


def _batch_replies(api: FakeApi, final_status: str) -> None:
    job = {
        "id": "42",
        "type": "tweets",
        "status": "created",
        "upload_url": "https://storage.googleapis.com/upload?signature=abc",
        "download_url": "https://storage.googleapis.com/download?signature=def",
    }
    api.reply(json={"data": job})
    api.reply(content=b"")
    api.reply(json={"data": {**job, "status": "in_progress"}})
    api.reply(json={"data": {**job, "status": final_status}})
    api.reply(content=b'{"id":"1","action":"delete","reason":"deleted"}\n')


def test_compliance_batch_runs_every_step(api: FakeApi, tmp_path: Path) -> None:
    _batch_replies(api, "complete")
    ids_file = tmp_path / "ids.txt"
    ids_file.write_text("1\n2\n", encoding="utf-8")

    result = _invoke(
        api,
        [
            "compliance", "batch", "--type", "tweets", "--ids-file", str(ids_file),
            "--name", "nightly", "--interval", "0",
        ],
    )

    assert result.exit_code == 0, result.output
    create, upload, first_poll, second_poll, download = api.requests
    assert json.loads(create.content) == {"type": "tweets", "name": "nightly"}
    assert upload.method == "PUT"
    assert upload.content == b"1\n2"
    assert first_poll.url.path == second_poll.url.path == "/2/compliance/jobs/42"
    assert download.url.path == "/download"
    assert "Authorization" not in download.headers
    assert '"in_progress"' in result.stdout
    assert '"complete"' in result.stdout
    assert '"reason": "deleted"' in result.stdout


def test_compliance_batch_failed_job_skips_download(api: FakeApi, tmp_path: Path) -> None:
    _batch_replies(api, "failed")
    ids_file = tmp_path / "ids.txt"
    ids_file.write_text("1\n", encoding="utf-8")

    result = _invoke(
        api,
        ["compliance", "batch", "--type", "tweets", "--ids-file", str(ids_file), "--interval", "0"],
    )

    assert result.exit_code == 1
    assert len(api.requests) == 4


def test_invalid_host_exits_one(api: FakeApi) -> None:
    result = _invoke(api, ["--host", "http://[::1", "tweets", "lookup", "--ids", "1"])

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert api.requests == []


def test_recent_counts_window_and_cursor(api: FakeApi) -> None:
    api.reply(json={"meta": {"total_tweet_count": 0}})

    result = _invoke(
        api,
        [
            "tweets", "recent-counts", "--query", "cat",
            "--since-id", "5", "--until-id", "9", "--next-token", "abc",
        ],
    )

    assert result.exit_code == 0, result.output
    params = api.last.url.params
    assert (params["since_id"], params["until_id"], params["next_token"]) == ("5", "9", "abc")


def test_recent_search_media_place_poll_fields(api: FakeApi) -> None:
    api.reply(json={"meta": {"result_count": 0}})

    result = _invoke(
        api,
        [
            "tweets", "recent-search", "--query", "cat",
            "--media-fields", "url", "--place-fields", "full_name", "--poll-fields", "options",
        ],
    )

    assert result.exit_code == 0, result.output
    params = api.last.url.params
    assert params["media.fields"] == "url"
    assert params["place.fields"] == "full_name"
    assert params["poll.fields"] == "options"


def test_doctor_run_uses_global_options(api: FakeApi) -> None:
    api.reply(json={})

    result = _invoke(
        api,
        ["--token", "cli-token-123456", "--host", "http://localhost:8080", "doctor", "run"],
        token=None,
    )

    assert result.exit_code == 0, result.output
    assert api.last.url.host == "localhost"
    assert api.last.url.port == 8080
    assert "MISSING" not in result.output
    assert "HTTP 200" in result.output
