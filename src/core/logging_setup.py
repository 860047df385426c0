"""Logging de la aplicación.

Los logs van a stderr con `rich.logging.RichHandler`; stdout queda libre para
el JSON de las respuestas.

Uso:
    from core.logging_setup import configure_logging

    configure_logging("DEBUG")
    logger = logging.getLogger(__name__)
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


def configure_logging(level: str = "WARNING") -> None:
    """Configura el logger raíz una sola vez por proceso.

    Raises:
        ValueError: si el nivel no es válido.
    """

    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Invalid log level: {level}. Valid: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=False,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    root = logging.getLogger()
    root.setLevel(level_upper)
    root.handlers = [handler]

    # httpx registra cada request en INFO con la URL completa.
    logging.getLogger("httpx").setLevel(max(logging.WARNING, root.level))
    logging.getLogger("httpcore").setLevel(logging.WARNING)
