"""Sanitizer façade with its configuration bound once."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Mapping, Optional, Tuple

from . import sanitize
from .config import GuardConfig
from .schemas import CommentEvent, EnvironmentEntry, SanitizedEvent

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Sanitizer:
    config: GuardConfig
    sensitive_terms: Tuple[str, ...] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "sensitive_terms", self.config.sensitive_terms())

    @classmethod
    def initialize(cls, config: GuardConfig | None = None) -> "Sanitizer":
        config = config or GuardConfig.from_env()
        return cls(config=config)

    def bot_mentions(self, text: Optional[str]) -> Optional[str]:
        return sanitize.sanitize_bot_mentions(text, self.config.bot_username)

    def labels(self, labels: Optional[Iterable[Optional[str]]]) -> Optional[List[str]]:
        return sanitize.sanitize_labels(labels)

    def command_input(self, text: Optional[str]) -> Optional[str]:
        return sanitize.sanitize_command_input(text)

    def is_valid_repository(self, name: Optional[str]) -> bool:
        return sanitize.validate_repository_name(name)

    def is_valid_ref(self, ref: Optional[str]) -> bool:
        return sanitize.validate_github_ref(ref)

    def environment_value(self, key: Optional[str], value: Optional[str]) -> Optional[str]:
        return sanitize.sanitize_environment_value(key, value, self.sensitive_terms, self.config.redaction_marker)

    def redact_environment(self, environ: Mapping[str, Optional[str]]) -> dict:
        return sanitize.redact_environment(environ, self.sensitive_terms, self.config.redaction_marker)

    def environment_entries(self, environ: Mapping[str, Optional[str]]) -> List[EnvironmentEntry]:
        terms = self.sensitive_terms
        entries = []
        for key in sorted(environ):
            redacted = sanitize.is_sensitive_key(key, terms)
            value = self.config.redaction_marker if redacted else environ[key]
            entries.append(EnvironmentEntry(key=key, value=value, redacted=redacted))
        return entries

    def unescape_markdown(self, text: Optional[str]) -> Optional[str]:
        return sanitize.unescape_markdown(text)

    def sanitize_event(self, event: CommentEvent) -> SanitizedEvent:
        """Apply the per-field transforms the bot uses for one incoming comment.

        The body is unescaped before mentions are stripped so that escaped
        text cannot hide a mention. A repository or ref that fails validation
        is dropped and listed in ``rejected_fields``.
        """

        modified: List[str] = []
        rejected: List[str] = []

        body = self.bot_mentions(self.unescape_markdown(event.body))
        if body != event.body:
            modified.append("body")

        labels = self.labels(event.labels) or []
        if labels != list(event.labels):
            modified.append("labels")

        command = self.command_input(event.command)
        if command != event.command:
            modified.append("command")

        repository_valid = self.is_valid_repository(event.repository)
        repository = event.repository if repository_valid else None
        if event.repository is not None and not repository_valid:
            rejected.append("repository")

        ref_valid = self.is_valid_ref(event.ref)
        ref = event.ref if ref_valid else None
        if event.ref is not None and not ref_valid:
            rejected.append("ref")

        if modified:
            logger.debug("Sanitized fields: %s", ", ".join(modified))
        for name in rejected:
            logger.warning("Rejected %s identifier %r", name, getattr(event, name))

        return SanitizedEvent(
            body=body,
            labels=labels,
            command=command,
            repository=repository,
            ref=ref,
            repository_valid=repository_valid,
            ref_valid=ref_valid,
            modified_fields=modified,
            rejected_fields=rejected,
        )
