"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Valida la forma de las respuestas de la API v2 sin acoplar el Core a httpx.
- `extra="allow"` conserva los campos que la API añada y que no modelamos:
  lo que se imprime es lo que devolvió la API.

Nota:
- Estos modelos describen *qué* devuelve la API, no *cómo* se obtiene.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping

from pydantic import BaseModel, Field, model_validator
from pydantic.config import ConfigDict

from core.domain.fields import ComplianceJobStatus, ComplianceJobType

RATE_LIMIT_HEADER = "x-rate-limit-limit"
RATE_REMAINING_HEADER = "x-rate-limit-remaining"
RATE_RESET_HEADER = "x-rate-limit-reset"


class ApiModel(BaseModel):
    """Base de todos los objetos de la API."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    def to_json_dict(self) -> dict[str, Any]:
        """Dict listo para `json.dumps` (sin campos vacíos)."""

        return self.model_dump(mode="json", exclude_none=True, by_alias=True)


class RateLimit(BaseModel):
    """Límites de la ventana actual, leídos de las cabeceras de respuesta."""

    limit: int = Field(..., description="Requests permitidos en la ventana.")
    remaining: int = Field(..., description="Requests restantes en la ventana.")
    reset: int = Field(..., description="Fin de la ventana (epoch UNIX, segundos).")

    @property
    def reset_at(self) -> datetime:
        return datetime.fromtimestamp(self.reset, tz=timezone.utc)

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> RateLimit | None:
        """Devuelve None si falta alguna cabecera o no es un entero."""

        try:
            return cls(
                limit=int(headers[RATE_LIMIT_HEADER]),
                remaining=int(headers[RATE_REMAINING_HEADER]),
                reset=int(headers[RATE_RESET_HEADER]),
            )
        except (KeyError, TypeError, ValueError):
            return None


class ErrorObj(ApiModel):
    """Error parcial dentro de una respuesta 200 (p.ej. un id inexistente)."""

    title: str | None = None
    detail: str | None = None
    type: str | None = None
    value: str | None = None
    parameter: str | None = None
    resource_type: str | None = None
    resource_id: str | None = None
    section: str | None = None


# --- entidades ---------------------------------------------------------------


class EntityObj(ApiModel):
    start: int = 0
    end: int = 0


class EntityMention(EntityObj):
    username: str
    id: str | None = None


class EntityTag(EntityObj):
    tag: str


class EntityURL(EntityObj):
    url: str
    expanded_url: str | None = None
    display_url: str | None = None
    status: int | None = None
    title: str | None = None
    description: str | None = None
    unwound_url: str | None = None


class EntityAnnotation(EntityObj):
    probability: float | None = None
    type: str | None = None
    normalized_text: str | None = None


class Entities(ApiModel):
    annotations: list[EntityAnnotation] | None = None
    urls: list[EntityURL] | None = None
    hashtags: list[EntityTag] | None = None
    mentions: list[EntityMention] | None = None
    cashtags: list[EntityTag] | None = None


class Withheld(ApiModel):
    copyright: bool | None = None
    country_codes: list[str] | None = None
    scope: str | None = None


# --- tweet -------------------------------------------------------------------


class TweetAttachments(ApiModel):
    media_keys: list[str] | None = None
    poll_ids: list[str] | None = None


class TweetContext(ApiModel):
    id: str
    name: str | None = None
    description: str | None = None


class TweetContextAnnotation(ApiModel):
    domain: TweetContext
    entity: TweetContext


class TweetGeoCoordinates(ApiModel):
    type: str
    coordinates: list[float]


class TweetGeo(ApiModel):
    place_id: str | None = None
    coordinates: TweetGeoCoordinates | None = None


class TweetMetrics(ApiModel):
    impression_count: int | None = None
    url_link_clicks: int | None = None
    user_profile_clicks: int | None = None
    like_count: int | None = None
    reply_count: int | None = None
    retweet_count: int | None = None
    quote_count: int | None = None
    bookmark_count: int | None = None


class TweetReferencedTweet(ApiModel):
    type: str = Field(..., description="retweeted | quoted | replied_to")
    id: str


class Tweet(ApiModel):
    """Objeto primario de los endpoints de tweets."""

    id: str
    text: str = ""
    attachments: TweetAttachments | None = None
    author_id: str | None = None
    context_annotations: list[TweetContextAnnotation] | None = None
    conversation_id: str | None = None
    created_at: str | None = None
    entities: Entities | None = None
    geo: TweetGeo | None = None
    in_reply_to_user_id: str | None = None
    lang: str | None = None
    non_public_metrics: TweetMetrics | None = None
    organic_metrics: TweetMetrics | None = None
    possibly_sensitive: bool | None = None
    promoted_metrics: TweetMetrics | None = None
    public_metrics: TweetMetrics | None = None
    referenced_tweets: list[TweetReferencedTweet] | None = None
    reply_settings: str | None = None
    source: str | None = None
    withheld: Withheld | None = None


# --- user --------------------------------------------------------------------


class UserMetrics(ApiModel):
    followers_count: int | None = None
    following_count: int | None = None
    tweet_count: int | None = None
    listed_count: int | None = None


class User(ApiModel):
    """Metadatos de una cuenta."""

    id: str
    name: str | None = None
    username: str | None = None
    created_at: str | None = None
    description: str | None = None
    entities: dict[str, Any] | None = None
    location: str | None = None
    pinned_tweet_id: str | None = None
    profile_image_url: str | None = None
    protected: bool | None = None
    public_metrics: UserMetrics | None = None
    url: str | None = None
    verified: bool | None = None
    withheld: Withheld | None = None


# --- media / place / poll / topic --------------------------------------------


class MediaMetrics(ApiModel):
    playback_0_count: int | None = None
    playback_25_count: int | None = None
    playback_50_count: int | None = None
    playback_75_count: int | None = None
    playback_100_count: int | None = None
    view_count: int | None = None


class Media(ApiModel):
    """Imagen, GIF o vídeo adjunto a un tweet."""

    media_key: str
    type: str | None = None
    url: str | None = None
    duration_ms: int | None = None
    height: int | None = None
    width: int | None = None
    preview_image_url: str | None = None
    alt_text: str | None = None
    non_public_metrics: MediaMetrics | None = None
    organic_metrics: MediaMetrics | None = None
    promoted_metrics: MediaMetrics | None = None
    public_metrics: MediaMetrics | None = None


class PlaceGeo(ApiModel):
    type: str | None = None
    bbox: list[float] | None = None
    properties: dict[str, Any] | None = None


class Place(ApiModel):
    id: str
    full_name: str | None = None
    name: str | None = None
    contained_within: list[str] | None = None
    country: str | None = None
    country_code: str | None = None
    geo: PlaceGeo | None = None
    place_type: str | None = None


class PollOption(ApiModel):
    position: int
    label: str
    votes: int = 0


class Poll(ApiModel):
    id: str
    options: list[PollOption] | None = None
    duration_minutes: int | None = None
    end_datetime: str | None = None
    voting_status: str | None = None


class Topic(ApiModel):
    id: str
    name: str | None = None
    description: str | None = None


# --- list / space / compliance -----------------------------------------------


class TwitterList(ApiModel):
    """Metadatos de una lista de Twitter."""

    id: str
    name: str | None = None
    created_at: str | None = None
    description: str | None = None
    follower_count: int | None = None
    member_count: int | None = None
    private: bool | None = None
    owner_id: str | None = None


class Space(ApiModel):
    id: str
    state: str | None = None
    created_at: str | None = None
    ended_at: str | None = None
    host_ids: list[str] | None = None
    lang: str | None = None
    is_ticketed: bool | None = None
    invited_user_ids: list[str] | None = None
    participant_count: int | None = None
    scheduled_start: str | None = None
    speaker_ids: list[str] | None = None
    started_at: str | None = None
    title: str | None = None
    topic_ids: list[str] | None = None
    updated_at: str | None = None
    creator_id: str | None = None
    subscriber_count: int | None = None


class ComplianceJob(ApiModel):
    id: str
    type: ComplianceJobType | None = None
    name: str | None = None
    resumable: bool | None = None
    created_at: str | None = None
    upload_url: str | None = None
    upload_expires_at: str | None = None
    download_url: str | None = None
    download_expires_at: str | None = None
    status: ComplianceJobStatus | None = None
    error: str | None = None


class ComplianceResult(ApiModel):
    """Una línea del fichero de resultados de un job de compliance."""

    id: str
    action: str | None = None
    created_at: str | None = None
    redacted_at: str | None = None
    reason: str | None = None


class StreamRule(ApiModel):
    id: str | None = None
    value: str | None = None
    tag: str | None = None


class TweetCount(ApiModel):
    start: str
    end: str
    tweet_count: int


# --- includes & dictionaries --------------------------------------------------


class Includes(ApiModel):
    """Objetos expandidos (`expansions=`) que acompañan al objeto primario."""

    tweets: list[Tweet] | None = None
    users: list[User] | None = None
    places: list[Place] | None = None
    media: list[Media] | None = None
    polls: list[Poll] | None = None
    topics: list[Topic] | None = None

    def users_by_id(self) -> dict[str, User]:
        return {user.id: user for user in self.users or []}

    def users_by_username(self) -> dict[str, User]:
        return {user.username: user for user in self.users or [] if user.username}

    def polls_by_id(self) -> dict[str, Poll]:
        return {poll.id: poll for poll in self.polls or []}

    def media_by_key(self) -> dict[str, Media]:
        return {m.media_key: m for m in self.media or []}

    def places_by_id(self) -> dict[str, Place]:
        return {place.id: place for place in self.places or []}

    def tweets_by_id(self) -> dict[str, Tweet]:
        return {tweet.id: tweet for tweet in self.tweets or []}


class TweetMention(ApiModel):
    mention: EntityMention
    user: User


class TweetReference(ApiModel):
    reference: TweetReferencedTweet
    tweet_dictionary: TweetDictionary


class TweetDictionary(ApiModel):
    """Un tweet junto con los objetos de `includes` que referencia."""

    tweet: Tweet
    author: User | None = None
    in_reply_user: User | None = None
    place: Place | None = None
    attachment_media: list[Media] = Field(default_factory=list)
    attachment_polls: list[Poll] = Field(default_factory=list)
    mentions: list[TweetMention] = Field(default_factory=list)
    referenced_tweets: list[TweetReference] = Field(default_factory=list)


class UserDictionary(ApiModel):
    """Un usuario junto con su tweet fijado (si vino en `includes`)."""

    user: User
    pinned_tweet: Tweet | None = None


def create_tweet_dictionary(
    tweet: Tweet,
    includes: Includes | None,
    *,
    resolve_references: bool = True,
) -> TweetDictionary:
    """Resuelve las referencias de `tweet` contra `includes`.

    Los tweets referenciados se resuelven un único nivel: su propio
    diccionario no vuelve a expandir referencias.
    """

    dictionary = TweetDictionary(tweet=tweet)
    if includes is None:
        return dictionary

    users = includes.users_by_id()
    if tweet.author_id:
        dictionary.author = users.get(tweet.author_id)
    if tweet.in_reply_to_user_id:
        dictionary.in_reply_user = users.get(tweet.in_reply_to_user_id)

    if tweet.geo and tweet.geo.place_id:
        dictionary.place = includes.places_by_id().get(tweet.geo.place_id)

    if tweet.attachments:
        media = includes.media_by_key()
        dictionary.attachment_media = [
            media[key] for key in tweet.attachments.media_keys or [] if key in media
        ]
        polls = includes.polls_by_id()
        dictionary.attachment_polls = [
            polls[pid] for pid in tweet.attachments.poll_ids or [] if pid in polls
        ]

    if tweet.entities and tweet.entities.mentions:
        by_name = includes.users_by_username()
        for mention in tweet.entities.mentions:
            user = by_name.get(mention.username)
            if user is not None:
                dictionary.mentions.append(TweetMention(mention=mention, user=user))

    if resolve_references and tweet.referenced_tweets:
        referenced = includes.tweets_by_id()
        for reference in tweet.referenced_tweets:
            ref_tweet = referenced.get(reference.id)
            if ref_tweet is None:
                continue
            dictionary.referenced_tweets.append(
                TweetReference(
                    reference=reference,
                    tweet_dictionary=create_tweet_dictionary(
                        ref_tweet, includes, resolve_references=False
                    ),
                )
            )

    return dictionary


def create_user_dictionary(user: User, includes: Includes | None) -> UserDictionary:
    dictionary = UserDictionary(user=user)
    if includes is None or not user.pinned_tweet_id:
        return dictionary
    dictionary.pinned_tweet = includes.tweets_by_id().get(user.pinned_tweet_id)
    return dictionary


# --- envelopes ---------------------------------------------------------------


class Meta(ApiModel):
    """Metadatos de paginación / resumen que acompañan a la respuesta."""

    result_count: int | None = None
    newest_id: str | None = None
    oldest_id: str | None = None
    next_token: str | None = None
    previous_token: str | None = None
    total_tweet_count: int | None = None
    sent: str | None = None
    summary: dict[str, int] | None = None


class Envelope(ApiModel):
    """Campos comunes de toda respuesta: includes, errores, meta y límites."""

    includes: Includes | None = None
    errors: list[ErrorObj] | None = None
    meta: Meta | None = None
    rate_limit: RateLimit | None = None

    @model_validator(mode="before")
    @classmethod
    def _data_as_list(cls, value: Any) -> Any:
        # Los lookups de un único id devuelven `data` como objeto.
        if isinstance(value, dict) and isinstance(value.get("data"), dict):
            value = {**value, "data": [value["data"]]}
        return value


class TweetResponse(Envelope):
    data: list[Tweet] = Field(default_factory=list)
    matching_rules: list[StreamRule] | None = None

    def tweet_dictionaries(self) -> dict[str, TweetDictionary]:
        return {
            tweet.id: create_tweet_dictionary(tweet, self.includes) for tweet in self.data
        }


class UserResponse(Envelope):
    data: list[User] = Field(default_factory=list)

    def user_dictionaries(self) -> dict[str, UserDictionary]:
        return {user.id: create_user_dictionary(user, self.includes) for user in self.data}


class ListResponse(Envelope):
    data: list[TwitterList] = Field(default_factory=list)


class SpaceResponse(Envelope):
    data: list[Space] = Field(default_factory=list)


class TweetCountsResponse(Envelope):
    data: list[TweetCount] = Field(default_factory=list)


class StreamRulesResponse(Envelope):
    data: list[StreamRule] = Field(default_factory=list)


class ComplianceJobsResponse(Envelope):
    data: list[ComplianceJob] = Field(default_factory=list)


class ComplianceResultsResponse(ApiModel):
    results: list[ComplianceResult] = Field(default_factory=list)
    rate_limit: RateLimit | None = None


class ActionResponse(ApiModel):
    """Respuesta de los endpoints de escritura: `{"data": {...}}`.

    Ejemplos: `{"hidden": true}`, `{"following": true}`,
    `{"id": "...", "text": "..."}` al crear un tweet.
    """

    data: dict[str, Any] = Field(default_factory=dict)
    errors: list[ErrorObj] | None = None
    rate_limit: RateLimit | None = None


# --- stream messages -----------------------------------------------------------


class SystemMessage(ApiModel):
    message: str
    sent: str | None = None


class Disconnection(ApiModel):
    title: str | None = None
    disconnect_type: str | None = None
    detail: str | None = None
    type: str | None = None


class ConnectionIssue(ApiModel):
    title: str | None = None
    connection_issue: str | None = None
    detail: str | None = None
    type: str | None = None


class DisconnectionError(ApiModel):
    """Mensaje de desconexión enviado por el servidor del stream."""

    disconnections: list[Disconnection] = Field(default_factory=list)
    connections: list[ConnectionIssue] = Field(default_factory=list)


class TweetMessage(ApiModel):
    raw: TweetResponse


class SystemMessages(ApiModel):
    """Mensajes de sistema indexados por tipo (`info`, `warn`, `error`)."""

    messages: dict[str, SystemMessage] = Field(default_factory=dict)


TweetReference.model_rebuild()
