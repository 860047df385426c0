"""Comandos `tweetcall compliance ...`."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Annotated

import typer

from adapters.json_exporter import render_json
from cli.common import run_call
from core.domain.fields import ComplianceJobStatus, ComplianceJobType
from core.domain.options import ComplianceJobsOptions
from core.errors import ParameterError

logger = logging.getLogger(__name__)

app = typer.Typer(no_args_is_help=True, help="Batch compliance: jobs, subida de ids y resultados.")

JobIdOpt = Annotated[str, typer.Option("--id", help="Id del job de compliance.")]
JobTypeOpt = Annotated[ComplianceJobType, typer.Option("--type", help="tweets o users.")]
IdsFileOpt = Annotated[
    Path,
    typer.Option("--ids-file", exists=True, dir_okay=False, help="Fichero con un id por línea."),
]

PENDING_STATUSES = frozenset({ComplianceJobStatus.CREATED, ComplianceJobStatus.IN_PROGRESS})


def _read_ids(path: Path) -> list[str]:
    lines = path.read_text(encoding="utf-8").splitlines()
    return [line.strip() for line in lines if line.strip()]


async def _job(client, job_id: str):
    response = await client.compliance_job(job_id)
    if not response.data:
        raise ParameterError(f"compliance batch job: job {job_id} not found")
    return response.data[0]


@app.command()
def create(
    ctx: typer.Context,
    job_type: JobTypeOpt,
    name: Annotated[str | None, typer.Option("--name")] = None,
    resumable: Annotated[bool, typer.Option("--resumable")] = False,
) -> None:
    """Crea un job; la respuesta incluye las URLs de subida y descarga."""

    run_call(
        ctx,
        lambda client: client.create_compliance_job(job_type, name=name, resumable=resumable),
    )


@app.command()
def job(ctx: typer.Context, job_id: JobIdOpt) -> None:
    run_call(ctx, lambda client: client.compliance_job(job_id))


@app.command()
def jobs(
    ctx: typer.Context,
    job_type: JobTypeOpt,
    status: Annotated[ComplianceJobStatus | None, typer.Option("--status")] = None,
) -> None:
    opts = ComplianceJobsOptions(status=status)
    run_call(ctx, lambda client: client.compliance_jobs(job_type, opts))


@app.command()
def upload(ctx: typer.Context, job_id: JobIdOpt, ids_file: IdsFileOpt) -> None:
    """Sube los ids de `--ids-file` a la URL de subida del job."""

    ids = _read_ids(ids_file)

    async def _call(client):
        compliance_job = await _job(client, job_id)
        await client.upload_compliance_ids(compliance_job, ids)
        return {"id": compliance_job.id, "uploaded": len(ids)}

    run_call(ctx, _call)


@app.command()
def download(ctx: typer.Context, job_id: JobIdOpt) -> None:
    """Descarga los resultados de un job completado."""

    async def _call(client):
        compliance_job = await _job(client, job_id)
        return await client.download_compliance_results(compliance_job)

    run_call(ctx, _call)


@app.command()
def batch(
    ctx: typer.Context,
    job_type: JobTypeOpt,
    ids_file: IdsFileOpt,
    name: Annotated[str | None, typer.Option("--name")] = None,
    interval: Annotated[
        float, typer.Option("--interval", min=0, help="Segundos entre consultas de estado.")
    ] = 1.0,
) -> None:
    """Job completo: crear, subir ids, esperar a que termine y descargar.

    Cada paso imprime su JSON; el último documento son los resultados.
    Un job que termina en `failed` o `expired` sale con código 1.
    """

    ids = _read_ids(ids_file)

    async def _call(client):
        created = await client.create_compliance_job(job_type, name=name)
        typer.echo(render_json(created))
        if not created.data:
            raise ParameterError("compliance batch job: the API returned no job")
        compliance_job = created.data[0]

        await client.upload_compliance_ids(compliance_job, ids)
        typer.echo(render_json({"id": compliance_job.id, "uploaded": len(ids)}))

        while True:
            await asyncio.sleep(interval)
            polled = await client.compliance_job(compliance_job.id)
            typer.echo(render_json(polled))
            if not polled.data:
                raise ParameterError(f"compliance batch job: job {compliance_job.id} not found")
            current = polled.data[0]
            if current.status not in PENDING_STATUSES:
                break

        if current.status is not ComplianceJobStatus.COMPLETE:
            status = current.status.value if current.status else "unknown"
            logger.error("compliance job %s ended as %s", current.id, status)
            raise typer.Exit(code=1)
        if current.download_url:
            compliance_job = current
        return await client.download_compliance_results(compliance_job)

    run_call(ctx, _call)
