"""Cliente de la API v2 de Twitter.

Un método asíncrono por endpoint documentado, agrupados por recurso en
mixins. Todos comparten host, transporte HTTP y autorizador.

Uso:
    async with TwitterClient(BearerTokenAuthorizer(token)) as client:
        response = await client.tweet_lookup(["1261326399320715264"])
"""

from __future__ import annotations

from adapters.twitter.compliance import ComplianceMixin
from adapters.twitter.lists import ListsMixin
from adapters.twitter.spaces import SpacesMixin
from adapters.twitter.streams import StreamsMixin
from adapters.twitter.tweets import TweetsMixin
from adapters.twitter.users import UsersMixin


class TwitterClient(
    TweetsMixin,
    UsersMixin,
    ListsMixin,
    SpacesMixin,
    ComplianceMixin,
    StreamsMixin,
):
    """Cliente ligado a un host, un `httpx.AsyncClient` y un `Authorizer`.

    Sin reintentos ni caché: cada llamada es exactamente un request.
    """

    async def __aenter__(self) -> TwitterClient:
        return self
