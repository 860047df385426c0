from __future__ import annotations

import json

import pytest

from adapters.twitter import TwitterClient
from conftest import FakeApi
from core.domain.fields import ComplianceJobStatus, ComplianceJobType
from core.domain.models import ComplianceJob
from core.domain.options import ComplianceJobsOptions
from core.errors import HTTPError, ParameterError, ResponseDecodeError

JOB = {
    "id": "1382081613278814209",
    "type": "tweets",
    "name": "my job",
    "resumable": False,
    "created_at": "2021-04-13T20:58:21.000Z",
    "upload_url": "https://storage.googleapis.com/upload?signature=abc",
    "upload_expires_at": "2021-04-13T21:13:21.000Z",
    "download_url": "https://storage.googleapis.com/download?signature=def",
    "download_expires_at": "2021-04-20T20:58:21.000Z",
    "status": "created",
}


@pytest.mark.asyncio
async def test_create_job_body(client: TwitterClient, api: FakeApi) -> None:
    api.reply(json={"data": JOB})

    async with client:
        response = await client.create_compliance_job(ComplianceJobType.TWEETS, name="my job")

    assert api.last.method == "POST"
    assert api.last.url.path == "/2/compliance/jobs"
    assert json.loads(api.last.content) == {"type": "tweets", "name": "my job"}
    job = response.data[0]
    assert job.status is ComplianceJobStatus.CREATED
    assert job.upload_url.startswith("https://storage.googleapis.com/upload")


@pytest.mark.asyncio
async def test_create_job_rejects_unknown_type(client: TwitterClient, api: FakeApi) -> None:
    async with client:
        with pytest.raises(ParameterError, match="a type is required"):
            await client.create_compliance_job("")
        with pytest.raises(ParameterError, match="unknown job type"):
            await client.create_compliance_job("spaces")

    assert api.requests == []


@pytest.mark.asyncio
async def test_jobs_lookup_params(client: TwitterClient, api: FakeApi) -> None:
    api.reply(json={"data": [JOB]})

    async with client:
        response = await client.compliance_jobs(
            "users", ComplianceJobsOptions(status=ComplianceJobStatus.COMPLETE)
        )

    assert dict(api.last.url.params) == {"type": "users", "status": "complete"}
    assert response.data[0].id == JOB["id"]


@pytest.mark.asyncio
async def test_upload_ids_without_bearer(client: TwitterClient, api: FakeApi) -> None:
    api.reply(content=b"")

    async with client:
        await client.upload_compliance_ids(ComplianceJob.model_validate(JOB), ["1", "", "2"])

    request = api.last
    assert request.method == "PUT"
    assert request.url.host == "storage.googleapis.com"
    assert request.content == b"1\n2"
    assert request.headers["Content-Type"] == "text/plain"
    assert "Authorization" not in request.headers


@pytest.mark.asyncio
async def test_upload_failure(client: TwitterClient, api: FakeApi) -> None:
    api.reply(403, content=b"<Error>SignatureDoesNotMatch</Error>")

    async with client:
        with pytest.raises(HTTPError):
            await client.upload_compliance_ids(ComplianceJob.model_validate(JOB), ["1"])


@pytest.mark.asyncio
async def test_upload_requires_url(client: TwitterClient, api: FakeApi) -> None:
    async with client:
        with pytest.raises(ParameterError, match="no upload url"):
            await client.upload_compliance_ids(ComplianceJob(id="1"), ["1"])


@pytest.mark.asyncio
async def test_download_results(client: TwitterClient, api: FakeApi) -> None:
    body = (
        '{"id":"1","action":"delete","created_at":"2021-01-01T00:00:00.000Z",'
        '"reason":"deleted"}\n'
        "\n"
        '{"id":"2","action":"scrub_geo","created_at":"2021-01-02T00:00:00.000Z"}\n'
    )
    api.reply(content=body.encode("utf-8"))

    async with client:
        response = await client.download_compliance_results(ComplianceJob.model_validate(JOB))

    assert "Authorization" not in api.last.headers
    assert [r.id for r in response.results] == ["1", "2"]
    assert response.results[1].action == "scrub_geo"


@pytest.mark.asyncio
async def test_download_bad_line(client: TwitterClient, api: FakeApi) -> None:
    api.reply(content=b'{"id":"1"}\nnot json\n')

    async with client:
        with pytest.raises(ResponseDecodeError, match="compliance batch job download"):
            await client.download_compliance_results(ComplianceJob.model_validate(JOB))
