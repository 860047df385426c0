"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- El token, el host y los timeouts llegan al cliente HTTP desde un único sitio.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_HOST = "https://api.twitter.com"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "tweetcall"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "tweetcall"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "tweetcall"
    return Path.home() / ".config" / "tweetcall"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str], env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# tweetcall user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Orden de carga: variables de entorno, `.env` del proyecto y luego el
    `.env` del usuario (lo escribe `tweetcall doctor set-token`).
    """

    model_config = SettingsConfigDict(
        env_prefix="TWEETCALL_",
        extra="ignore",
        case_sensitive=False,
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    bearer_token: str | None = Field(
        default=None,
        description="Bearer token de la API v2 (app-only o user context).",
    )
    api_host: str = Field(
        default=DEFAULT_API_HOST,
        min_length=8,
        description="Host base de la API, p.ej. https://api.twitter.com.",
    )
    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    stream_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Timeout de lectura HTTP para streams; None lo deja al keep-alive.",
    )
    stream_keep_alive_seconds: float = Field(
        default=21.0,
        gt=0,
        description="Segundos sin datos (ni keep-alive) tras los que el stream se da por caído.",
    )
    user_agent: str = Field(
        default="tweetcall/0.1",
        min_length=1,
        description="User-Agent enviado en cada request.",
    )
    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging (DEBUG, INFO, WARNING, ERROR, CRITICAL).",
    )

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.strip().upper()
