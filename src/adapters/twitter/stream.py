"""Lectura de los streams de tweets (filtrado y sample).

El servidor envía mensajes JSON separados por `\\r\\n`:
- `{"data": ...}`: un tweet (con `includes` y `matching_rules`),
- `{"info"|"warn"|"error": ...}`: mensajes de sistema,
- `{"errors": [...]}` o `{"title": ...}`: desconexiones / problemas de conexión,
- líneas vacías: keep-alive (cada ~20 s).

Un mensaje sin `:` llega codificado en base64.

Por qué no se corta la iteración ante un mensaje inválido:
- Un stream puede durar horas; un mensaje corrupto se registra en
  `TweetStream.errors` (y en el log) y la lectura continúa.
"""

from __future__ import annotations

import asyncio
import base64
import binascii
import json
import logging
import time
from typing import Any, AsyncIterator, Union

import httpx
from pydantic import ValidationError

from core.domain.models import (
    ConnectionIssue,
    Disconnection,
    DisconnectionError,
    RateLimit,
    SystemMessage,
    SystemMessages,
    TweetMessage,
    TweetResponse,
)
from core.errors import StreamError, StreamErrorType

logger = logging.getLogger(__name__)

MESSAGE_SEPARATOR = "\r\n"
KEEP_ALIVE_TIMEOUT_SECONDS = 21.0

SYSTEM_MESSAGE_KEYS = ("info", "warn", "error")
TWEET_KEY = "data"
DISCONNECTION_ERRORS_KEY = "errors"
DISCONNECTION_TITLE_KEY = "title"

StreamMessage = Union[TweetMessage, SystemMessages, DisconnectionError]


def normalize_message(raw: str) -> str:
    """Devuelve el JSON del mensaje, decodificando base64 si hace falta."""

    if ":" in raw:
        return raw
    try:
        return base64.b64decode(raw, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as exc:
        raise StreamError(StreamErrorType.DECODE, "normalize stream base64") from exc


def _disconnection_entry(
    item: dict[str, Any], into: DisconnectionError
) -> None:
    if item.get("disconnect_type"):
        into.disconnections.append(Disconnection.model_validate(item))
    else:
        into.connections.append(ConnectionIssue.model_validate(item))


def parse_message(raw: str) -> StreamMessage:
    """Clasifica y decodifica un mensaje del stream.

    Lanza `StreamError` con el tipo del mensaje que no se pudo interpretar.
    """

    text = normalize_message(raw)
    try:
        payload = json.loads(text)
    except ValueError as exc:
        raise StreamError(StreamErrorType.DECODE, "unmarshal stream message") from exc
    if not isinstance(payload, dict):
        raise StreamError(StreamErrorType.DECODE, "decode stream message")

    if TWEET_KEY in payload:
        try:
            return TweetMessage(raw=TweetResponse.model_validate(payload))
        except ValidationError as exc:
            raise StreamError(StreamErrorType.TWEET, "unmarshal tweet stream") from exc

    if any(key in payload for key in SYSTEM_MESSAGE_KEYS):
        try:
            return SystemMessages(
                messages={
                    key: SystemMessage.model_validate(payload[key])
                    for key in SYSTEM_MESSAGE_KEYS
                    if key in payload
                }
            )
        except ValidationError as exc:
            raise StreamError(StreamErrorType.SYSTEM, "unmarshal system stream") from exc

    if DISCONNECTION_ERRORS_KEY in payload or DISCONNECTION_TITLE_KEY in payload:
        result = DisconnectionError()
        try:
            if DISCONNECTION_ERRORS_KEY in payload:
                items = payload[DISCONNECTION_ERRORS_KEY]
                if not isinstance(items, list):
                    raise StreamError(StreamErrorType.DISCONNECT, "unmarshal disconnect stream")
                for item in items:
                    _disconnection_entry(item, result)
            else:
                _disconnection_entry(payload, result)
        except (ValidationError, TypeError, AttributeError) as exc:
            raise StreamError(StreamErrorType.DISCONNECT, "unmarshal disconnect stream") from exc
        return result

    raise StreamError(StreamErrorType.DECODE, "decode stream message")


class TweetStream:
    """Stream abierto: `async for message in stream`.

    La conexión se mantiene hasta que el servidor la cierra o se llama a
    `aclose()`. Si no llega nada (ni siquiera un keep-alive) durante
    `keep_alive_timeout` segundos, la iteración termina, el stream se cierra
    y `timed_out` queda en True.
    """

    def __init__(
        self,
        response: httpx.Response,
        *,
        rate_limit: RateLimit | None = None,
        keep_alive_timeout: float = KEEP_ALIVE_TIMEOUT_SECONDS,
    ) -> None:
        self._response = response
        self.rate_limit = rate_limit
        self.errors: list[StreamError] = []
        self.timed_out = False
        self._keep_alive_timeout = keep_alive_timeout
        self._last_seen = time.monotonic()
        self._closed = False
        self._ended = False

    @property
    def connection_alive(self) -> bool:
        if self._closed or self._ended:
            return False
        return time.monotonic() - self._last_seen < self._keep_alive_timeout

    async def __aenter__(self) -> TweetStream:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    def __aiter__(self) -> AsyncIterator[StreamMessage]:
        return self._messages()

    async def aclose(self) -> None:
        if not self._closed:
            self._closed = True
            await self._response.aclose()

    async def _next_chunk(self, chunks: AsyncIterator[str]) -> str:
        return await chunks.__anext__()

    async def _messages(self) -> AsyncIterator[StreamMessage]:
        buffer = ""
        chunks = self._response.aiter_text()
        while True:
            try:
                chunk = await asyncio.wait_for(
                    self._next_chunk(chunks), timeout=self._keep_alive_timeout
                )
            except StopAsyncIteration:
                break
            except asyncio.TimeoutError:
                logger.warning("stream: no data for %gs", self._keep_alive_timeout)
                self.timed_out = True
                self._ended = True
                await self.aclose()
                return
            self._last_seen = time.monotonic()
            buffer += chunk
            while MESSAGE_SEPARATOR in buffer:
                line, buffer = buffer.split(MESSAGE_SEPARATOR, 1)
                message = self._decode(line)
                if message is not None:
                    yield message
        message = self._decode(buffer)
        if message is not None:
            yield message
        self._ended = True

    def _decode(self, line: str) -> StreamMessage | None:
        if not line.strip():
            return None
        try:
            return parse_message(line.strip())
        except StreamError as exc:
            logger.warning("stream error: %s", exc)
            self.errors.append(exc)
            return None
