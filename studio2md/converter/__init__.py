"""Markdown conversion subsystem: parsed turns to a transcript."""

from studio2md.converter.converter import ConversationConverter, convert
from studio2md.converter.formatter import MarkdownFormatter, format_markdown
from studio2md.converter.models import (
    ConversionOptions,
    ConversionResult,
    FormattedMarkdown,
)

__all__ = [
    "ConversationConverter",
    "ConversionOptions",
    "ConversionResult",
    "FormattedMarkdown",
    "MarkdownFormatter",
    "convert",
    "format_markdown",
]
