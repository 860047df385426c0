"""Autorizadores concretos (`core.interfaces.Authorizer`)."""

from __future__ import annotations

import httpx

from core.errors import ParameterError
from core.interfaces.authorizer import Authorizer


class BearerTokenAuthorizer(Authorizer):
    """Añade `Authorization: Bearer <token>` a cada request."""

    def __init__(self, token: str) -> None:
        token = (token or "").strip()
        if not token:
            raise ParameterError("a bearer token is required")
        self._token = token

    def add(self, request: httpx.Request) -> None:
        request.headers["Authorization"] = f"Bearer {self._token}"

    def __repr__(self) -> str:
        return "BearerTokenAuthorizer(token=***)"
