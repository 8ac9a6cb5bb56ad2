"""Source parsing subsystem: studio export code to structured messages."""

from studio2md.parser.engine import EngineState, ParsingEngine
from studio2md.parser.extractor import AstExtractor, TextStructureExtractor
from studio2md.parser.models import ParseResult, Role, SourceMessage
from studio2md.parser.placeholders import is_placeholder_message, is_placeholder_text

__all__ = [
    "AstExtractor",
    "EngineState",
    "ParseResult",
    "ParsingEngine",
    "Role",
    "SourceMessage",
    "TextStructureExtractor",
    "is_placeholder_message",
    "is_placeholder_text",
]
