"""Render/exportación JSON de respuestas y errores.

Por qué un único formato:
- Los ejemplos imprimen lo que devolvió la API, indentado con 4 espacios,
  en el orden de claves recibido y sin los campos ausentes (`None`).
- El mismo texto va a stdout y, opcionalmente, a un fichero (`--output`).
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel

JSON_INDENT = 4


def to_payload(value: Any) -> Any:
    """Convierte modelos, errores con `to_dict()` y colecciones a JSON plano."""

    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", exclude_none=True, by_alias=True)
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, dict):
        return {str(k): to_payload(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_payload(v) for v in value]
    return value


def render_json(value: Any) -> str:
    return json.dumps(to_payload(value), ensure_ascii=False, indent=JSON_INDENT)


def export_json(value: Any, output_path: Path) -> Path:
    """Escribe el JSON en UTF-8 (crea los directorios que falten)."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_json(value) + "\n", encoding="utf-8")
    return output_path
