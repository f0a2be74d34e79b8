"""Configuration for the bot input guard."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from typing import Any, ClassVar, Dict, Optional, Tuple

from .patterns import REDACTION_MARKER, SENSITIVE_KEY_TERMS


@dataclass(frozen=True)
class GuardConfig:
    bot_username: Optional[str] = None
    sensitive_key_terms: Tuple[str, ...] = SENSITIVE_KEY_TERMS
    extra_sensitive_terms: Tuple[str, ...] = ()
    redaction_marker: str = REDACTION_MARKER
    log_level: str = "INFO"

    ENV_PREFIX: ClassVar[str] = "BOTGUARD_"
    # names the bot deployment already exports
    ENV_ALIASES: ClassVar[Dict[str, str]] = {"bot_username": "BOT_USERNAME"}

    def __post_init__(self) -> None:
        self._validate()

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None, **overrides: Any) -> "GuardConfig":
        environ = os.environ if environ is None else environ
        values: Dict[str, Any] = {}
        for field_info in fields(cls):
            if not field_info.init:
                continue
            env_name = f"{cls.ENV_PREFIX}{field_info.name.upper()}"
            alias = cls.ENV_ALIASES.get(field_info.name)
            if env_name in environ:
                values[field_info.name] = cls._cast_value(field_info.type, environ[env_name])
            elif alias and alias in environ:
                values[field_info.name] = cls._cast_value(field_info.type, environ[alias])
        values.update(overrides)
        return cls(**values)

    def copy(self, update: Optional[Dict[str, Any]] = None) -> "GuardConfig":
        update = update or {}
        data = {field.name: getattr(self, field.name) for field in fields(self) if field.init}
        data.update(update)
        return GuardConfig(**data)

    def sensitive_terms(self) -> Tuple[str, ...]:
        terms = []
        for term in self.sensitive_key_terms + self.extra_sensitive_terms:
            term = term.strip().lower()
            if term and term not in terms:
                terms.append(term)
        return tuple(terms)

    def _validate(self) -> None:
        if not self.redaction_marker:
            raise ValueError("redaction_marker must not be empty")
        if not self.sensitive_terms():
            raise ValueError("at least one sensitive key term is required")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"unknown log level {self.log_level!r}")

    @staticmethod
    def _cast_value(field_type: Any, raw: str) -> Any:
        # annotations are strings under postponed evaluation
        type_name = field_type if isinstance(field_type, str) else getattr(field_type, "__name__", "")
        if type_name.startswith(("Tuple", "tuple")):
            return tuple(part.strip() for part in raw.split(",") if part.strip())
        if type_name.startswith("Optional"):
            return raw or None
        return raw
