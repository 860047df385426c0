"""Errores del cliente de la API v2.

Tres familias:
- `ParameterError`: la llamada no se envía, el input es inválido.
- `ErrorResponse` / `HTTPError`: la API respondió con un status inesperado,
  con cuerpo JSON estructurado o sin él.
- `ResponseDecodeError` / `StreamError`: la respuesta llegó pero no se pudo
  interpretar.

Los errores que vienen de una respuesta llevan los `RateLimit` de sus
cabeceras; `rate_limit_from_error` los recupera sin importar el tipo.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from core.domain.models import ErrorObj, RateLimit


class TwitterError(Exception):
    """Base de los errores del cliente."""


class ParameterError(TwitterError, ValueError):
    """Parámetro de entrada inválido."""


class ErrorResponse(TwitterError):
    """Error estructurado devuelto por la API (cuerpo JSON)."""

    def __init__(
        self,
        *,
        status_code: int,
        title: str | None = None,
        detail: str | None = None,
        type: str | None = None,
        errors: list[ErrorObj] | None = None,
        rate_limit: RateLimit | None = None,
    ) -> None:
        self.status_code = status_code
        self.title = title
        self.detail = detail
        self.type = type
        self.errors = errors or []
        self.rate_limit = rate_limit
        super().__init__(self._message())

    def _message(self) -> str:
        parts = [f"twitter api error {self.status_code}"]
        if self.title:
            parts.append(self.title)
        if self.detail:
            parts.append(self.detail)
        elif self.errors and self.errors[0].detail:
            parts.append(self.errors[0].detail)
        return ": ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"status_code": self.status_code}
        if self.title:
            out["title"] = self.title
        if self.detail:
            out["detail"] = self.detail
        if self.type:
            out["type"] = self.type
        if self.errors:
            out["errors"] = [e.to_json_dict() for e in self.errors]
        if self.rate_limit is not None:
            out["rate_limit"] = self.rate_limit.model_dump()
        return out


class HTTPError(TwitterError):
    """Status inesperado cuyo cuerpo no es un error JSON de la API."""

    def __init__(
        self,
        *,
        status: str,
        status_code: int,
        url: str,
        rate_limit: RateLimit | None = None,
    ) -> None:
        self.status = status
        self.status_code = status_code
        self.url = url
        self.rate_limit = rate_limit
        super().__init__(f"twitter [{url}] status: {status} code: {status_code}")

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "status": self.status,
            "status_code": self.status_code,
            "url": self.url,
        }
        if self.rate_limit is not None:
            out["rate_limit"] = self.rate_limit.model_dump()
        return out


class ResponseDecodeError(TwitterError):
    """La respuesta esperada no pudo decodificarse (la causa va encadenada)."""

    def __init__(self, name: str, *, rate_limit: RateLimit | None = None) -> None:
        self.name = name
        self.rate_limit = rate_limit
        super().__init__(f"{name} decode error")


class StreamErrorType(str, Enum):
    TWEET = "tweet"
    SYSTEM = "system"
    DISCONNECT = "disconnect"
    DECODE = "decode"


class StreamError(TwitterError):
    """Mensaje del stream que no se pudo interpretar."""

    def __init__(self, type: StreamErrorType, msg: str) -> None:
        self.type = type
        self.msg = msg
        super().__init__(f"{type.value}: {msg}")


def rate_limit_from_error(err: BaseException) -> RateLimit | None:
    """Límites asociados a un error de respuesta, o None."""

    if isinstance(err, (ErrorResponse, HTTPError, ResponseDecodeError)):
        return err.rate_limit
    return None
