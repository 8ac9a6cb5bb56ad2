"""Pydantic models for parsed studio exports."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    """Speaker of a conversation turn."""

    user = "user"
    model = "model"


class SourceMessage(BaseModel):
    """One conversation turn: a role and its text fragments in source order."""

    model_config = ConfigDict(frozen=True)

    role: Role
    parts: list[str] = Field(default_factory=list)


class ParseResult(BaseModel):
    """Messages extracted from a source text plus its optional system instruction."""

    model_config = ConfigDict(frozen=True)

    messages: list[SourceMessage] = Field(default_factory=list)
    system_instruction: str | None = None
