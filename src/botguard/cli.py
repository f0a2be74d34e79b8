"""Command line entry points for sanitizing bot input."""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path
from typing import List, Optional

import typer
from pydantic import ValidationError

from .config import GuardConfig
from .sanitizer import Sanitizer
from .schemas import CommentEvent
from .utils import configure_logging, load_json, render_environment_table

app = typer.Typer(help="Sanitize and validate untrusted bot input")


def _sanitizer(bot_username: Optional[str] = None) -> Sanitizer:
    config = GuardConfig.from_env()
    if bot_username is not None:
        config = config.copy(update={"bot_username": bot_username})
    configure_logging(config.log_level)
    return Sanitizer.initialize(config)


@app.command()
def mentions(
    text: str,
    bot_username: Optional[str] = typer.Option(None, help="Bot handle, defaults to BOT_USERNAME"),
) -> None:
    typer.echo(_sanitizer(bot_username).bot_mentions(text))


@app.command()
def labels(names: List[str] = typer.Argument(..., help="Labels to filter")) -> None:
    for label in _sanitizer().labels(names) or []:
        typer.echo(label)


@app.command()
def command(text: str) -> None:
    typer.echo(_sanitizer().command_input(text))


@app.command("check-repo")
def check_repo(name: str) -> None:
    if not _sanitizer().is_valid_repository(name):
        typer.echo(f"invalid repository name: {name!r}", err=True)
        raise typer.Exit(code=1)
    typer.echo("ok")


@app.command("check-ref")
def check_ref(ref: str) -> None:
    if not _sanitizer().is_valid_ref(ref):
        typer.echo(f"invalid ref: {ref!r}", err=True)
        raise typer.Exit(code=1)
    typer.echo("ok")


@app.command()
def unescape(path: Optional[Path] = typer.Argument(None, exists=True, dir_okay=False)) -> None:
    raw = path.read_text(encoding="utf-8") if path else sys.stdin.read()
    typer.echo(_sanitizer().unescape_markdown(raw), nl=False)


@app.command()
def env(only_redacted: bool = typer.Option(False, help="Show redacted entries only")) -> None:
    entries = _sanitizer().environment_entries(dict(os.environ))
    if only_redacted:
        entries = [entry for entry in entries if entry.redacted]
    render_environment_table(entries)


@app.command()
def event(path: Path = typer.Argument(..., exists=True, dir_okay=False)) -> None:
    try:
        payload = CommentEvent.model_validate(load_json(path))
    except (UnicodeDecodeError, json.JSONDecodeError, ValidationError) as exc:
        typer.echo(f"invalid event: {exc}", err=True)
        raise typer.Exit(code=2)
    result = _sanitizer().sanitize_event(payload)
    data = result.model_dump()
    typer.echo(json.dumps(data, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    app()
