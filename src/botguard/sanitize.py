"""Pure transforms for untrusted bot input.

Every function is total: ``None`` passes through unchanged and malformed text
yields a defined value instead of an exception.
"""

from __future__ import annotations

from typing import Iterable, List, Mapping, Optional, Sequence

from .patterns import (
    GIT_REF_FORBIDDEN,
    GIT_REF_PATTERN,
    LABEL_DISALLOWED,
    MARKDOWN_ESCAPE_PATTERN,
    MARKDOWN_ESCAPES,
    REDACTION_MARKER,
    REPOSITORY_NAME_PATTERN,
    SENSITIVE_KEY_TERMS,
    SHELL_HAZARD_PATTERN,
)


def bare_username(bot_username: Optional[str]) -> str:
    if not bot_username:
        return ""
    return bot_username.strip().lstrip("@")


def sanitize_bot_mentions(text: Optional[str], bot_username: Optional[str]) -> Optional[str]:
    """Turn ``@bot`` mentions into the plain bot name so the bot cannot re-trigger itself.

    Matching is case-insensitive and every hit is rewritten in the configured
    casing. Without a configured name the text is returned as is.
    """

    name = bare_username(bot_username)
    if not text or not name:
        return text
    folded = [ch.lower() for ch in name]
    size = len(name)
    out: List[str] = []
    pending = list(reversed(text))
    while pending:
        out.append(pending.pop())
        if len(out) <= size or out[-size - 1] != "@":
            continue
        if any(out[i - size].lower() != folded[i] for i in range(size)):
            continue
        del out[-size - 1 :]
        while out and out[-1] == "@":
            out.pop()
        # the bare name can complete a mention with what precedes it ("@a@aa" -> "aaa"),
        # so it is fed back through; every rewrite drops at least one "@"
        pending.extend(reversed(name))
    return "".join(out)


def sanitize_label(label: Optional[str]) -> str:
    if not label:
        return ""
    return LABEL_DISALLOWED.sub("", label)


def sanitize_labels(labels: Optional[Iterable[Optional[str]]]) -> Optional[List[str]]:
    # one output per input; labels that filter down to "" are kept
    if labels is None:
        return None
    return [sanitize_label(label) for label in labels]


def sanitize_command_input(text: Optional[str]) -> Optional[str]:
    if not text:
        return text
    return SHELL_HAZARD_PATTERN.sub("", text).strip()


def validate_repository_name(name: Optional[str]) -> bool:
    if not isinstance(name, str) or not name:
        return False
    return REPOSITORY_NAME_PATTERN.fullmatch(name) is not None


def validate_github_ref(ref: Optional[str]) -> bool:
    """Accept branch, tag and ``refs/...`` names built from ``[A-Za-z0-9._/-]``.

    ``..`` is rejected even though a single dot is legal: git treats it as a
    range operator.
    """

    if not isinstance(ref, str) or not ref:
        return False
    if any(token in ref for token in GIT_REF_FORBIDDEN):
        return False
    return GIT_REF_PATTERN.fullmatch(ref) is not None


def is_sensitive_key(key: Optional[str], sensitive_terms: Sequence[str] = SENSITIVE_KEY_TERMS) -> bool:
    if not key:
        return False
    lowered = key.lower()
    return any(term.lower() in lowered for term in sensitive_terms if term)


def sanitize_environment_value(
    key: Optional[str],
    value: Optional[str],
    sensitive_terms: Sequence[str] = SENSITIVE_KEY_TERMS,
    marker: str = REDACTION_MARKER,
) -> Optional[str]:
    """Return ``marker`` when ``key`` names a secret, else ``value`` untouched.

    Classification looks at the key name only; the value is never inspected.
    """

    if is_sensitive_key(key, sensitive_terms):
        return marker
    return value


def redact_environment(
    environ: Mapping[str, Optional[str]],
    sensitive_terms: Sequence[str] = SENSITIVE_KEY_TERMS,
    marker: str = REDACTION_MARKER,
) -> dict:
    return {key: sanitize_environment_value(key, value, sensitive_terms, marker) for key, value in environ.items()}


def unescape_markdown(text: Optional[str]) -> Optional[str]:
    # single pass: replacements are never re-scanned
    if not text:
        return text
    return MARKDOWN_ESCAPE_PATTERN.sub(lambda match: MARKDOWN_ESCAPES[match.group(1)], text)
