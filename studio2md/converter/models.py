"""Pydantic models for the markdown conversion subsystem."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, model_validator


class ConversionOptions(BaseModel):
    """Rendering switches for one conversion."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    include_thinking: bool = False
    claude_mode: bool = False


class FormattedMarkdown(BaseModel):
    markdown: str
    message_count: int


class ConversionResult(BaseModel):
    """Outcome of one conversion: markdown on success, an error message otherwise."""

    success: bool
    markdown: str | None = None
    error: str | None = None
    message_count: int | None = None
    system_instruction: str | None = None

    @model_validator(mode="after")
    def _one_of_markdown_or_error(self) -> ConversionResult:
        if self.success and (self.markdown is None or self.error is not None):
            raise ValueError("successful result needs markdown and no error")
        if not self.success and (self.error is None or self.markdown is not None):
            raise ValueError("failed result needs an error and no markdown")
        return self

    @classmethod
    def ok(
        cls,
        markdown: str,
        message_count: int,
        system_instruction: str | None = None,
    ) -> ConversionResult:
        return cls(
            success=True,
            markdown=markdown,
            message_count=message_count,
            system_instruction=system_instruction,
        )

    @classmethod
    def fail(cls, error: str) -> ConversionResult:
        return cls(success=False, error=error)
