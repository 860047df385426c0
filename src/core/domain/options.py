"""Parámetros opcionales de las llamadas a la API.

Cada modelo sabe convertirse en query string (`to_params`) o en cuerpo JSON
(`to_body`). Reglas comunes:
- las listas se unen con comas,
- los valores vacíos/cero no se envían,
- las fechas van en RFC 3339 UTC (`2021-05-01T10:00:00Z`).
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from core.domain.fields import (
    ComplianceJobStatus,
    Exclude,
    Expansion,
    Granularity,
    ListField,
    MediaField,
    PlaceField,
    PollField,
    SortOrder,
    SpaceField,
    SpaceState,
    TopicField,
    TweetField,
    UserField,
    join_values,
)
from core.errors import ParameterError


def format_time(value: datetime) -> str:
    """RFC 3339 con segundos y sufijo `Z`."""

    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


class _Options(BaseModel):
    model_config = ConfigDict(extra="forbid")


class FieldOptions(_Options):
    """Expansiones y selectores de campos (`*.fields`)."""

    expansions: list[Expansion] = Field(default_factory=list)
    media_fields: list[MediaField] = Field(default_factory=list)
    place_fields: list[PlaceField] = Field(default_factory=list)
    poll_fields: list[PollField] = Field(default_factory=list)
    tweet_fields: list[TweetField] = Field(default_factory=list)
    user_fields: list[UserField] = Field(default_factory=list)
    list_fields: list[ListField] = Field(default_factory=list)
    space_fields: list[SpaceField] = Field(default_factory=list)
    topic_fields: list[TopicField] = Field(default_factory=list)

    def to_params(self) -> dict[str, str]:
        params: dict[str, str] = {}
        selectors = (
            ("expansions", self.expansions),
            ("media.fields", self.media_fields),
            ("place.fields", self.place_fields),
            ("poll.fields", self.poll_fields),
            ("tweet.fields", self.tweet_fields),
            ("user.fields", self.user_fields),
            ("list.fields", self.list_fields),
            ("space.fields", self.space_fields),
            ("topic.fields", self.topic_fields),
        )
        for key, values in selectors:
            if values:
                params[key] = join_values(values)
        return params


class PageOptions(FieldOptions):
    """Páginas de usuarios, listas o likes (`max_results` + `pagination_token`)."""

    max_results: int = Field(default=0, ge=0)
    pagination_token: str | None = None

    def to_params(self) -> dict[str, str]:
        params = super().to_params()
        if self.max_results > 0:
            params["max_results"] = str(self.max_results)
        if self.pagination_token:
            params["pagination_token"] = self.pagination_token
        return params


class _TimeWindow(BaseModel):
    start_time: datetime | None = None
    end_time: datetime | None = None
    since_id: str | None = None
    until_id: str | None = None

    def _window_params(self) -> dict[str, str]:
        params: dict[str, str] = {}
        if self.start_time is not None:
            params["start_time"] = format_time(self.start_time)
        if self.end_time is not None:
            params["end_time"] = format_time(self.end_time)
        if self.since_id:
            params["since_id"] = self.since_id
        if self.until_id:
            params["until_id"] = self.until_id
        return params


class TweetSearchOptions(FieldOptions, _TimeWindow):
    """Búsqueda reciente y de archivo completo."""

    max_results: int = Field(default=0, ge=0)
    next_token: str | None = None
    sort_order: SortOrder | None = None

    def to_params(self) -> dict[str, str]:
        params = super().to_params()
        params.update(self._window_params())
        if self.max_results > 0:
            params["max_results"] = str(self.max_results)
        if self.next_token:
            params["next_token"] = self.next_token
        if self.sort_order is not None:
            params["sort_order"] = self.sort_order.value
        return params


class TimelineOptions(FieldOptions, _TimeWindow):
    """Timelines de tweets de un usuario (propios, menciones, home)."""

    excludes: list[Exclude] = Field(default_factory=list)
    max_results: int = Field(default=0, ge=0)
    pagination_token: str | None = None

    def to_params(self) -> dict[str, str]:
        params = super().to_params()
        if self.excludes:
            params["exclude"] = join_values(self.excludes)
        params.update(self._window_params())
        if self.max_results > 0:
            params["max_results"] = str(self.max_results)
        if self.pagination_token:
            params["pagination_token"] = self.pagination_token
        return params


class CountsOptions(_Options, _TimeWindow):
    granularity: Granularity | None = None
    next_token: str | None = None

    def to_params(self) -> dict[str, str]:
        params = self._window_params()
        if self.granularity is not None:
            params["granularity"] = self.granularity.value
        if self.next_token:
            params["next_token"] = self.next_token
        return params


class StreamOptions(FieldOptions):
    """Opciones del stream filtrado y del sample stream."""

    backfill_minutes: int = Field(default=0, ge=0)

    def to_params(self) -> dict[str, str]:
        params = super().to_params()
        if self.backfill_minutes > 0:
            params["backfill_minutes"] = str(self.backfill_minutes)
        return params


class SpaceSearchOptions(FieldOptions):
    state: SpaceState | None = None

    def to_params(self) -> dict[str, str]:
        params = super().to_params()
        if self.state is not None:
            params["state"] = self.state.value
        return params


class ComplianceJobsOptions(_Options):
    status: ComplianceJobStatus | None = None

    def to_params(self) -> dict[str, str]:
        if self.status is None:
            return {}
        return {"status": self.status.value}


# --- cuerpos de escritura --------------------------------------------------------


class CreateTweetGeo(_Options):
    place_id: str | None = None


class CreateTweetMedia(_Options):
    media_ids: list[str] = Field(default_factory=list)
    tagged_user_ids: list[str] = Field(default_factory=list)

    def validate_request(self) -> None:
        if self.tagged_user_ids and not self.media_ids:
            raise ParameterError("media ids are required if tagged user ids are present")


class CreateTweetPoll(_Options):
    duration_minutes: int = 0
    options: list[str] = Field(default_factory=list)

    def validate_request(self) -> None:
        if self.options and self.duration_minutes <= 0:
            raise ParameterError("poll duration minutes are required with options")


class CreateTweetReply(_Options):
    exclude_reply_user_ids: list[str] = Field(default_factory=list)
    in_reply_to_tweet_id: str | None = None

    def validate_request(self) -> None:
        if self.exclude_reply_user_ids and not self.in_reply_to_tweet_id:
            raise ParameterError(
                "in reply to tweet id is required if exclude reply user ids are present"
            )


class CreateTweetRequest(_Options):
    """Cuerpo de `POST /2/tweets`."""

    text: str | None = None
    direct_message_deep_link: str | None = None
    for_super_followers_only: bool = False
    quote_tweet_id: str | None = None
    reply_settings: str | None = None
    geo: CreateTweetGeo | None = None
    media: CreateTweetMedia | None = None
    poll: CreateTweetPoll | None = None
    reply: CreateTweetReply | None = None

    def validate_request(self) -> None:
        for part in (self.media, self.poll, self.reply):
            if part is not None:
                part.validate_request()
        has_media = self.media is not None and bool(self.media.media_ids)
        if not has_media and not self.text:
            raise ParameterError("create tweet text is required if no media ids")

    def to_body(self) -> dict[str, Any]:
        return self.model_dump(
            mode="json",
            exclude_none=True,
            exclude_defaults=True,
        )


class ListMetadata(_Options):
    """Cuerpo de creación/actualización de listas."""

    name: str | None = None
    description: str | None = None
    private: bool | None = None

    def to_body(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)
