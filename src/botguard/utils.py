"""Utility helpers for botguard."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from .schemas import EnvironmentEntry

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


def load_json(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as fh:
        return json.load(fh)


def render_environment_table(entries: Iterable[EnvironmentEntry], console: Optional[Console] = None) -> None:
    console = console or Console()
    table = Table(title="Environment")
    table.add_column("Key", no_wrap=True)
    table.add_column("Value", overflow="fold")
    table.add_column("Redacted")
    for entry in entries:
        # plain Text so untrusted values are never read as markup
        table.add_row(Text(entry.key), Text(entry.value or ""), "yes" if entry.redacted else "")
    console.print(table)
