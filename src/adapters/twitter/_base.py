"""Núcleo HTTP compartido por todos los endpoints.

Cada método público de `TwitterClient` sigue la misma secuencia:
validar parámetros -> construir request -> autorizar -> enviar -> leer rate
limits -> decodificar el error o el cuerpo esperado.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from adapters.http_client import build_async_client
from core.config import DEFAULT_API_HOST, AppSettings
from core.domain.models import ErrorObj, RateLimit
from core.errors import ErrorResponse, HTTPError, ParameterError, ResponseDecodeError
from core.interfaces.authorizer import Authorizer

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

MAX_LOOKUP_IDS = 100


class TwitterClientBase:
    """Cliente base: host, transporte HTTP y autorizador.

    `host` se usa tal cual (`f"{host}/2/tweets"`); una barra final produce
    una ruta inválida y la API responde con un error HTTP sin cuerpo JSON.
    """

    def __init__(
        self,
        authorizer: Authorizer,
        *,
        host: str = DEFAULT_API_HOST,
        http: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        settings: AppSettings | None = None,
    ) -> None:
        self._authorizer = authorizer
        self._host = host
        self._settings = settings or AppSettings()
        self._http = http
        self._transport = transport
        self._owns_http = http is None

    @property
    def host(self) -> str:
        return self._host

    async def __aenter__(self) -> TwitterClientBase:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._http is not None and self._owns_http:
            await self._http.aclose()
            self._http = None

    def _client(self) -> httpx.AsyncClient:
        if self._http is None:
            self._http = build_async_client(self._settings, transport=self._transport)
        return self._http

    def _url(self, *segments: str) -> str:
        path = "/".join(quote(s, safe="") for s in segments)
        return f"{self._host}/2/{path}"

    async def _send(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, str] | None = None,
        json: Any = None,
        content: str | bytes | None = None,
        headers: dict[str, str] | None = None,
        stream: bool = False,
        timeout: httpx.Timeout | None = None,
        authorize: bool = True,
    ) -> httpx.Response:
        """Envía un request. `authorize=False` para URLs prefirmadas (compliance)."""

        client = self._client()
        extra: dict[str, Any] = {}
        if timeout is not None:
            extra["timeout"] = timeout
        request = client.build_request(
            method,
            url,
            params=params or None,
            json=json,
            content=content,
            headers=headers,
            **extra,
        )
        if authorize:
            self._authorizer.add(request)
        response = await client.send(request, stream=stream)
        logger.debug(
            "%s %s -> %s (remaining=%s)",
            method,
            request.url,
            response.status_code,
            response.headers.get("x-rate-limit-remaining", "?"),
        )
        return response

    async def _call(
        self,
        name: str,
        method: str,
        url: str,
        model: type[M],
        *,
        params: dict[str, str] | None = None,
        json: Any = None,
        expected: int = 200,
    ) -> M:
        response = await self._send(method, url, params=params, json=json)
        rate_limit = RateLimit.from_headers(response.headers)

        if response.status_code != expected:
            raise self._error_from_response(response, rate_limit)

        try:
            result = model.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise ResponseDecodeError(name, rate_limit=rate_limit) from exc

        if "rate_limit" in model.model_fields:
            result.rate_limit = rate_limit  # type: ignore[attr-defined]
        return result

    @staticmethod
    def _error_from_response(
        response: httpx.Response, rate_limit: RateLimit | None
    ) -> ErrorResponse | HTTPError:
        """Error estructurado si el cuerpo es un objeto JSON; HTTPError si no."""

        try:
            body = response.json()
        except ValueError:
            body = None

        if not isinstance(body, dict):
            return HTTPError(
                status=f"{response.status_code} {response.reason_phrase}".strip(),
                status_code=response.status_code,
                url=str(response.request.url),
                rate_limit=rate_limit,
            )

        errors: list[ErrorObj] = []
        for item in body.get("errors") or []:
            if isinstance(item, dict):
                try:
                    errors.append(ErrorObj.model_validate(item))
                except ValidationError:
                    continue

        return ErrorResponse(
            status_code=response.status_code,
            title=body.get("title"),
            detail=body.get("detail"),
            type=body.get("type"),
            errors=errors,
            rate_limit=rate_limit,
        )


# --- validación de parámetros -----------------------------------------------------


def require(value: str | None, name: str, what: str = "an id") -> str:
    if not value:
        raise ParameterError(f"{name}: {what} is required")
    return value


def require_ids(ids: Sequence[str], name: str, limit: int = MAX_LOOKUP_IDS) -> list[str]:
    clean = [i for i in ids if i]
    if not clean:
        raise ParameterError(f"{name}: an id is required")
    if len(clean) > limit:
        raise ParameterError(f"{name}: ids {len(clean)} is greater than max {limit}")
    return clean


def check_query(query: str, name: str, max_length: int) -> str:
    if not query:
        raise ParameterError(f"{name}: a query is required")
    if len(query.encode("utf-8")) > max_length:
        raise ParameterError(f"{name}: the query over the length ({max_length})")
    return query


def check_max_results(
    value: int, name: str, *, maximum: int, minimum: int | None = None
) -> None:
    """`0` significa "no enviado" y siempre es válido."""

    if value == 0:
        return
    if value > maximum:
        raise ParameterError(f"{name}: max results is limited to {maximum} [{value}]")
    if minimum is not None and value < minimum:
        raise ParameterError(f"{name}: max results has a minimum of {minimum} [{value}]")
