"""Batch compliance: jobs, subida de ids y descarga de resultados.

Por qué subida/descarga aquí:
- Las URLs de subida y descarga son prefirmadas por la API; no llevan
  bearer token pero sí comparten transporte, timeouts y decodificación de
  errores con el resto del cliente.
"""

from __future__ import annotations

import json
import logging
from typing import Iterable

from pydantic import ValidationError

from adapters.twitter._base import TwitterClientBase, require
from core.domain.fields import ComplianceJobType
from core.domain.models import (
    ComplianceJob,
    ComplianceJobsResponse,
    ComplianceResult,
    ComplianceResultsResponse,
    RateLimit,
)
from core.domain.options import ComplianceJobsOptions
from core.errors import ParameterError, ResponseDecodeError

logger = logging.getLogger(__name__)


def _job_type(value: ComplianceJobType | str, name: str) -> str:
    if not value:
        raise ParameterError(f"{name}: a type is required")
    try:
        return ComplianceJobType(value).value
    except ValueError as exc:
        raise ParameterError(f"{name}: unknown job type {value!r}") from exc


class ComplianceMixin(TwitterClientBase):
    async def create_compliance_job(
        self,
        job_type: ComplianceJobType | str,
        *,
        name: str | None = None,
        resumable: bool = False,
    ) -> ComplianceJobsResponse:
        """Crea un job de compliance para ids de tweets o de usuarios."""

        body: dict[str, object] = {"type": _job_type(job_type, "create compliance batch job")}
        if name:
            body["name"] = name
        if resumable:
            body["resumable"] = True
        return await self._call(
            "create compliance batch job",
            "POST",
            self._url("compliance", "jobs"),
            ComplianceJobsResponse,
            json=body,
        )

    async def compliance_job(self, job_id: str) -> ComplianceJobsResponse:
        require(job_id, "compliance batch job")
        return await self._call(
            "compliance batch job",
            "GET",
            self._url("compliance", "jobs", job_id),
            ComplianceJobsResponse,
        )

    async def compliance_jobs(
        self,
        job_type: ComplianceJobType | str,
        opts: ComplianceJobsOptions | None = None,
    ) -> ComplianceJobsResponse:
        params = (opts or ComplianceJobsOptions()).to_params()
        params["type"] = _job_type(job_type, "compliance batch job lookup")
        return await self._call(
            "compliance batch job lookup",
            "GET",
            self._url("compliance", "jobs"),
            ComplianceJobsResponse,
            params=params,
        )

    async def upload_compliance_ids(self, job: ComplianceJob, ids: Iterable[str]) -> None:
        """Sube los ids (uno por línea) a la URL prefirmada del job."""

        if not job.upload_url:
            raise ParameterError("compliance batch job upload: the job has no upload url")
        content = "\n".join(i for i in ids if i)
        response = await self._send(
            "PUT",
            job.upload_url,
            content=content.encode("utf-8"),
            headers={"Content-Type": "text/plain"},
            authorize=False,
        )
        if response.status_code != 200:
            raise self._error_from_response(response, RateLimit.from_headers(response.headers))
        logger.info("compliance job %s: ids uploaded", job.id)

    async def download_compliance_results(self, job: ComplianceJob) -> ComplianceResultsResponse:
        """Descarga los resultados del job: un objeto JSON por línea."""

        if not job.download_url:
            raise ParameterError("compliance batch job download: the job has no download url")
        response = await self._send("GET", job.download_url, authorize=False)
        rate_limit = RateLimit.from_headers(response.headers)
        if response.status_code != 200:
            raise self._error_from_response(response, rate_limit)

        results: list[ComplianceResult] = []
        for line in response.text.splitlines():
            if not line.strip():
                continue
            try:
                results.append(ComplianceResult.model_validate(json.loads(line)))
            except (ValueError, ValidationError) as exc:
                raise ResponseDecodeError(
                    "compliance batch job download", rate_limit=rate_limit
                ) from exc
        return ComplianceResultsResponse(results=results, rate_limit=rate_limit)
