"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Las tablas van a stderr; stdout queda para el JSON de la API.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import RateLimit


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida."""

    title = Text("tweetcall", style="bold cyan")
    subtitle = Text("Twitter API v2 • un endpoint por comando", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_rate_limit_table(rows: list[tuple[str, RateLimit | None]]) -> Table:
    """Tabla con los límites leídos en cada llamada."""

    table = Table(title="Rate Limits")
    table.add_column("Call", style="cyan", no_wrap=True)
    table.add_column("Limit", style="white", justify="right")
    table.add_column("Remaining", style="green", justify="right")
    table.add_column("Reset (UTC)", style="magenta")
    for label, limit in rows:
        if limit is None:
            table.add_row(label, "-", "-", "-")
            continue
        table.add_row(
            label,
            str(limit.limit),
            str(limit.remaining),
            limit.reset_at.strftime("%Y-%m-%d %H:%M:%S"),
        )
    return table
