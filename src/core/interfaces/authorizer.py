"""Contrato de autorización de requests.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- El cliente no sabe si el token es app-only, de usuario o un stub de test:
  solo pide que cada request salga decorada.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import httpx


@runtime_checkable
class Authorizer(Protocol):
    """Añade la autorización a un request saliente.

    Reglas de diseño:
    - `add` modifica el request en sitio (cabeceras) y no hace I/O.
    - Se invoca una vez por request, justo antes de enviarlo.
    """

    def add(self, request: httpx.Request) -> None:
        """Decora `request` con las credenciales."""

        ...
