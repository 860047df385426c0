"""Selectores de campos y expansiones de la API v2.

Cada enum es un `str` para que se serialice tal cual en la query string
(`tweet.fields=created_at,lang`). Los valores son los que documenta la API.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable


class Expansion(str, Enum):
    """Objetos referenciados que la API puede incluir en `includes`."""

    ATTACHMENTS_POLL_IDS = "attachments.poll_ids"
    ATTACHMENTS_MEDIA_KEYS = "attachments.media_keys"
    AUTHOR_ID = "author_id"
    ENTITIES_MENTIONS_USERNAME = "entities.mentions.username"
    GEO_PLACE_ID = "geo.place_id"
    IN_REPLY_TO_USER_ID = "in_reply_to_user_id"
    REFERENCED_TWEETS_ID = "referenced_tweets.id"
    REFERENCED_TWEETS_ID_AUTHOR_ID = "referenced_tweets.id.author_id"
    PINNED_TWEET_ID = "pinned_tweet_id"
    OWNER_ID = "owner_id"
    CREATOR_ID = "creator_id"
    HOST_IDS = "host_ids"
    SPEAKER_IDS = "speaker_ids"
    INVITED_USER_IDS = "invited_user_ids"
    TOPIC_IDS = "topic_ids"


class TweetField(str, Enum):
    ID = "id"
    TEXT = "text"
    ATTACHMENTS = "attachments"
    AUTHOR_ID = "author_id"
    CONTEXT_ANNOTATIONS = "context_annotations"
    CONVERSATION_ID = "conversation_id"
    CREATED_AT = "created_at"
    ENTITIES = "entities"
    GEO = "geo"
    IN_REPLY_TO_USER_ID = "in_reply_to_user_id"
    LANG = "lang"
    NON_PUBLIC_METRICS = "non_public_metrics"
    PUBLIC_METRICS = "public_metrics"
    ORGANIC_METRICS = "organic_metrics"
    PROMOTED_METRICS = "promoted_metrics"
    POSSIBLY_SENSITIVE = "possibly_sensitive"
    REFERENCED_TWEETS = "referenced_tweets"
    REPLY_SETTINGS = "reply_settings"
    SOURCE = "source"
    WITHHELD = "withheld"


class UserField(str, Enum):
    CREATED_AT = "created_at"
    DESCRIPTION = "description"
    ENTITIES = "entities"
    ID = "id"
    LOCATION = "location"
    NAME = "name"
    PINNED_TWEET_ID = "pinned_tweet_id"
    PROFILE_IMAGE_URL = "profile_image_url"
    PROTECTED = "protected"
    PUBLIC_METRICS = "public_metrics"
    URL = "url"
    USERNAME = "username"
    VERIFIED = "verified"
    WITHHELD = "withheld"


class MediaField(str, Enum):
    DURATION_MS = "duration_ms"
    HEIGHT = "height"
    MEDIA_KEY = "media_key"
    PREVIEW_IMAGE_URL = "preview_image_url"
    TYPE = "type"
    URL = "url"
    WIDTH = "width"
    ALT_TEXT = "alt_text"
    PUBLIC_METRICS = "public_metrics"
    NON_PUBLIC_METRICS = "non_public_metrics"
    ORGANIC_METRICS = "organic_metrics"
    PROMOTED_METRICS = "promoted_metrics"


class PlaceField(str, Enum):
    CONTAINED_WITHIN = "contained_within"
    COUNTRY = "country"
    COUNTRY_CODE = "country_code"
    FULL_NAME = "full_name"
    GEO = "geo"
    ID = "id"
    NAME = "name"
    PLACE_TYPE = "place_type"


class PollField(str, Enum):
    DURATION_MINUTES = "duration_minutes"
    END_DATETIME = "end_datetime"
    ID = "id"
    OPTIONS = "options"
    VOTING_STATUS = "voting_status"


class ListField(str, Enum):
    CREATED_AT = "created_at"
    FOLLOWER_COUNT = "follower_count"
    MEMBER_COUNT = "member_count"
    PRIVATE = "private"
    DESCRIPTION = "description"
    OWNER_ID = "owner_id"


class SpaceField(str, Enum):
    HOST_IDS = "host_ids"
    CREATED_AT = "created_at"
    CREATOR_ID = "creator_id"
    ID = "id"
    LANG = "lang"
    INVITED_USER_IDS = "invited_user_ids"
    PARTICIPANT_COUNT = "participant_count"
    SPEAKER_IDS = "speaker_ids"
    STARTED_AT = "started_at"
    ENDED_AT = "ended_at"
    SUBSCRIBER_COUNT = "subscriber_count"
    TOPIC_IDS = "topic_ids"
    STATE = "state"
    TITLE = "title"
    UPDATED_AT = "updated_at"
    SCHEDULED_START = "scheduled_start"
    IS_TICKETED = "is_ticketed"


class TopicField(str, Enum):
    ID = "id"
    NAME = "name"
    DESCRIPTION = "description"


class Exclude(str, Enum):
    """Tipos de tweet a excluir de los timelines."""

    RETWEETS = "retweets"
    REPLIES = "replies"


class SpaceState(str, Enum):
    ALL = "all"
    LIVE = "live"
    SCHEDULED = "scheduled"


class Granularity(str, Enum):
    """Agrupación de la serie temporal en los endpoints de counts."""

    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"


class SortOrder(str, Enum):
    RECENCY = "recency"
    RELEVANCY = "relevancy"


class ComplianceJobType(str, Enum):
    TWEETS = "tweets"
    USERS = "users"


class ComplianceJobStatus(str, Enum):
    CREATED = "created"
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"
    FAILED = "failed"
    EXPIRED = "expired"


def join_values(values: Iterable[str | Enum]) -> str:
    """Une valores de enum (o strings) con comas, en el orden recibido."""

    return ",".join(v.value if isinstance(v, Enum) else str(v) for v in values)
