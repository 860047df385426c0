"""Piezas compartidas por todos los comandos de la CLI.

Cada comando sigue la misma forma:
1. leer flags (token, ids, selectores de campos),
2. construir el autorizador y el cliente ligado al host,
3. llamar a exactamente un método del cliente,
4. imprimir el JSON de la respuesta, o el error estructurado.

Por qué centralizarlo:
- La política de errores (JSON + exit 1 para errores de la API, log + exit 1
  para todo lo demás) es la misma en todos los comandos.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Annotated, Any, Awaitable, Callable, TypeVar

import httpx
import typer

from adapters.auth import BearerTokenAuthorizer
from adapters.json_exporter import export_json, render_json
from adapters.twitter import TwitterClient
from core.config import AppSettings
from core.domain.fields import (
    Expansion,
    ListField,
    MediaField,
    PlaceField,
    PollField,
    SpaceField,
    TopicField,
    TweetField,
    UserField,
)
from core.errors import ErrorResponse, HTTPError, TwitterError

logger = logging.getLogger("tweetcall")

E = TypeVar("E", bound=Enum)

_TRUE_VALUES = frozenset({"1", "t", "true", "y", "yes"})
_FALSE_VALUES = frozenset({"0", "f", "false", "n", "no"})

TIME_FORMATS = ["%Y-%m-%dT%H:%M:%SZ", "%Y-%m-%dT%H:%M:%S", "%Y-%m-%d"]


@dataclass
class CliState:
    """Opciones globales (`tweetcall --token ... --host ...`)."""

    settings: AppSettings
    token: str | None = None
    host: str | None = None
    output: Path | None = None
    verbose: bool = False
    transport: httpx.AsyncBaseTransport | None = None

    @property
    def api_host(self) -> str:
        return self.host or self.settings.api_host

    @property
    def bearer_token(self) -> str:
        return self.token or self.settings.bearer_token or ""


def get_state(ctx: typer.Context) -> CliState:
    state = ctx.find_root().obj
    if not isinstance(state, CliState):
        state = CliState(settings=AppSettings())
        ctx.find_root().obj = state
    return state


# --- parsing de flags --------------------------------------------------------------


def parse_bool(value: str) -> bool:
    """`true/false/1/0/yes/no/t/f` (sin distinguir mayúsculas)."""

    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise typer.BadParameter(f"invalid boolean value: {value!r}")


def split_csv(value: str | None) -> list[str]:
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def parse_enum_list(value: str | None, enum_cls: type[E], option: str) -> list[E]:
    items: list[E] = []
    for raw in split_csv(value):
        try:
            items.append(enum_cls(raw))
        except ValueError as exc:
            valid = ", ".join(member.value for member in enum_cls)
            raise typer.BadParameter(f"{option}: unknown value {raw!r} (valid: {valid})") from exc
    return items


ExpansionsOpt = Annotated[
    str | None, typer.Option("--expansions", help="Expansiones separadas por comas.")
]
TweetFieldsOpt = Annotated[
    str | None, typer.Option("--tweet-fields", help="Campos de tweet (tweet.fields).")
]
UserFieldsOpt = Annotated[
    str | None, typer.Option("--user-fields", help="Campos de usuario (user.fields).")
]
MediaFieldsOpt = Annotated[
    str | None, typer.Option("--media-fields", help="Campos de media (media.fields).")
]
PlaceFieldsOpt = Annotated[
    str | None, typer.Option("--place-fields", help="Campos de lugar (place.fields).")
]
PollFieldsOpt = Annotated[
    str | None, typer.Option("--poll-fields", help="Campos de encuesta (poll.fields).")
]
ListFieldsOpt = Annotated[
    str | None, typer.Option("--list-fields", help="Campos de lista (list.fields).")
]
SpaceFieldsOpt = Annotated[
    str | None, typer.Option("--space-fields", help="Campos de Space (space.fields).")
]
TopicFieldsOpt = Annotated[
    str | None, typer.Option("--topic-fields", help="Campos de topic (topic.fields).")
]
MaxResultsOpt = Annotated[
    int, typer.Option("--max-results", min=0, help="Tamaño de página (0 = default de la API).")
]
PaginationTokenOpt = Annotated[
    str | None, typer.Option("--pagination-token", help="Cursor de la página a pedir.")
]


def field_selectors(
    *,
    expansions: str | None = None,
    tweet_fields: str | None = None,
    user_fields: str | None = None,
    media_fields: str | None = None,
    place_fields: str | None = None,
    poll_fields: str | None = None,
    list_fields: str | None = None,
    space_fields: str | None = None,
    topic_fields: str | None = None,
) -> dict[str, Any]:
    """Argumentos de `FieldOptions` (y subclases) a partir de los flags CSV."""

    return {
        "expansions": parse_enum_list(expansions, Expansion, "--expansions"),
        "tweet_fields": parse_enum_list(tweet_fields, TweetField, "--tweet-fields"),
        "user_fields": parse_enum_list(user_fields, UserField, "--user-fields"),
        "media_fields": parse_enum_list(media_fields, MediaField, "--media-fields"),
        "place_fields": parse_enum_list(place_fields, PlaceField, "--place-fields"),
        "poll_fields": parse_enum_list(poll_fields, PollField, "--poll-fields"),
        "list_fields": parse_enum_list(list_fields, ListField, "--list-fields"),
        "space_fields": parse_enum_list(space_fields, SpaceField, "--space-fields"),
        "topic_fields": parse_enum_list(topic_fields, TopicField, "--topic-fields"),
    }


# --- ejecución --------------------------------------------------------------------


def emit(state: CliState, value: Any) -> None:
    """Imprime el JSON en stdout y, si se pidió, lo guarda en `--output`."""

    typer.echo(render_json(value))
    if state.output is not None:
        path = export_json(value, state.output)
        logger.info("saved JSON to %s", path)


def build_client(state: CliState, *, host: str | None = None) -> TwitterClient:
    return TwitterClient(
        BearerTokenAuthorizer(state.bearer_token),
        host=host or state.api_host,
        transport=state.transport,
        settings=state.settings,
    )


def run_call(
    ctx: typer.Context,
    call: Callable[[TwitterClient], Awaitable[Any]],
    *,
    host: str | None = None,
) -> None:
    """Ejecuta una llamada del cliente y aplica la política de errores."""

    state = get_state(ctx)

    async def _main() -> Any:
        async with build_client(state, host=host) as client:
            return await call(client)

    try:
        result = asyncio.run(_main())
    except (ErrorResponse, HTTPError) as exc:
        emit(state, exc)
        raise typer.Exit(code=1) from exc
    except (TwitterError, httpx.HTTPError, httpx.InvalidURL) as exc:
        logger.error("%s", exc)
        raise typer.Exit(code=1) from exc

    if result is not None:
        emit(state, result)
