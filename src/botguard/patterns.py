"""Character classes and term lists shared by the sanitizers.

Everything here is a security boundary. Extend these constants rather than
adding literals to the transforms, and bump ``RULESET_VERSION`` when a set
changes.
"""

from __future__ import annotations

import re
from typing import Dict, FrozenSet, Tuple

RULESET_VERSION = "1.1"

# Minimum is ` $ ; | & > <. The rest are grouping, escaping and
# statement-separator primitives of POSIX shells.
SHELL_HAZARD_CHARS: FrozenSet[str] = frozenset(
    [
        "`",
        "$",
        ";",
        "|",
        "&",
        ">",
        "<",
        "(",
        ")",
        "{",
        "}",
        "\\",
        "\n",
        "\r",
        "\x00",
    ]
)

SENSITIVE_KEY_TERMS: Tuple[str, ...] = (
    "token",
    "secret",
    "key",
    "password",
    "passwd",
    "credential",
    "auth",
    "private",
    "aws_access",
    "api_key",
)

REDACTION_MARKER = "[REDACTED]"

LABEL_DISALLOWED = re.compile(r"[^A-Za-z0-9_:.\-]")

REPOSITORY_NAME_PATTERN = re.compile(r"[A-Za-z0-9._\-]+")
GIT_REF_PATTERN = re.compile(r"[A-Za-z0-9._/\-]+")
GIT_REF_FORBIDDEN: Tuple[str, ...] = ("..", " ", "@", "#")

MARKDOWN_ESCAPES: Dict[str, str] = {
    "n": "\n",
    '"': '"',
    "'": "'",
    "*": "*",
    "-": "-",
    "#": "#",
    "`": "`",
    "[": "[",
    "]": "]",
    "(": "(",
    ")": ")",
}

SHELL_HAZARD_PATTERN = re.compile("[" + "".join(re.escape(ch) for ch in sorted(SHELL_HAZARD_CHARS)) + "]")
MARKDOWN_ESCAPE_PATTERN = re.compile(r"\\([" + "".join(re.escape(ch) for ch in MARKDOWN_ESCAPES) + "])")
