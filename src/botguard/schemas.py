"""Data models for sanitized bot events."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, computed_field


class CommentEvent(BaseModel):
    body: Optional[str] = None
    labels: List[Optional[str]] = Field(default_factory=list)
    command: Optional[str] = None
    repository: Optional[str] = None
    ref: Optional[str] = None


class SanitizedEvent(BaseModel):
    body: Optional[str] = None
    labels: List[str] = Field(default_factory=list)
    command: Optional[str] = None
    repository: Optional[str] = None
    ref: Optional[str] = None
    repository_valid: bool = False
    ref_valid: bool = False
    modified_fields: List[str] = Field(default_factory=list)
    rejected_fields: List[str] = Field(default_factory=list)

    @computed_field
    @property
    def is_actionable(self) -> bool:
        """True unless a supplied repository or ref was rejected."""

        return not self.rejected_fields


@dataclass
class EnvironmentEntry:
    key: str
    value: Optional[str]
    redacted: bool

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)
