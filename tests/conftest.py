"""Configuración de pytest para tweetcall."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import httpx
import pytest

# Añade src/ al PYTHONPATH para permitir imports absolutos
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from adapters.auth import BearerTokenAuthorizer  # noqa: E402
from adapters.twitter import TwitterClient  # noqa: E402
from core.config import AppSettings  # noqa: E402

TEST_TOKEN = "test-token-1234"

RATE_LIMIT_HEADERS = {
    "x-rate-limit-limit": "300",
    "x-rate-limit-remaining": "299",
    "x-rate-limit-reset": "1700000000",
}


class FakeApi:
    """Transporte falso: registra los requests y responde en orden.

    La última respuesta se repite si llegan más requests que respuestas.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._replies: list[dict[str, Any]] = []

    def reply(
        self,
        status: int = 200,
        json: Any = None,
        *,
        content: Any = None,
        headers: dict[str, str] | None = None,
    ) -> FakeApi:
        self._replies.append(
            {
                "status": status,
                "json": json,
                "content": content,
                "headers": {**RATE_LIMIT_HEADERS, **(headers or {})},
            }
        )
        return self

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        index = min(len(self.requests), len(self._replies)) - 1
        reply = self._replies[index]
        if reply["json"] is not None:
            return httpx.Response(reply["status"], json=reply["json"], headers=reply["headers"])
        return httpx.Response(reply["status"], content=reply["content"], headers=reply["headers"])

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None, bearer_token=TEST_TOKEN)


@pytest.fixture
def api() -> FakeApi:
    return FakeApi()


@pytest.fixture
def client(api: FakeApi, settings: AppSettings) -> TwitterClient:
    return TwitterClient(
        BearerTokenAuthorizer(TEST_TOKEN),
        transport=api.transport,
        settings=settings,
    )
