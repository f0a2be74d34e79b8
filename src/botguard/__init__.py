"""Input sanitization and validation for bot-driven automation."""

from .config import GuardConfig
from .patterns import REDACTION_MARKER, RULESET_VERSION
from .sanitize import (
    redact_environment,
    sanitize_bot_mentions,
    sanitize_command_input,
    sanitize_environment_value,
    sanitize_labels,
    unescape_markdown,
    validate_github_ref,
    validate_repository_name,
)
from .sanitizer import Sanitizer
from .schemas import CommentEvent, EnvironmentEntry, SanitizedEvent

__all__ = [
    "CommentEvent",
    "EnvironmentEntry",
    "GuardConfig",
    "REDACTION_MARKER",
    "RULESET_VERSION",
    "SanitizedEvent",
    "Sanitizer",
    "redact_environment",
    "sanitize_bot_mentions",
    "sanitize_command_input",
    "sanitize_environment_value",
    "sanitize_labels",
    "unescape_markdown",
    "validate_github_ref",
    "validate_repository_name",
]
