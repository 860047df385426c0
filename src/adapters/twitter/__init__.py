"""Cliente ligero de la API v2 de Twitter.

Por qué un paquete:
- Un módulo por recurso (tweets, users, lists, spaces, compliance, streams).
- `TwitterClient` los compone; `TweetStream` lee los streams abiertos.
"""

from adapters.twitter.client import TwitterClient
from adapters.twitter.stream import StreamMessage, TweetStream, parse_message

__all__ = ["StreamMessage", "TweetStream", "TwitterClient", "parse_message"]
