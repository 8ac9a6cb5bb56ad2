"""Conversion entry point: source text in, ConversionResult out."""

from __future__ import annotations

import logging
import threading

from studio2md.config.models import ConversionConfig, EngineConfig
from studio2md.converter.formatter import MarkdownFormatter
from studio2md.converter.models import ConversionOptions, ConversionResult
from studio2md.errors import ConversionError
from studio2md.parser.engine import ParsingEngine

logger = logging.getLogger(__name__)

EMPTY_SOURCE_ERROR = "Please provide some code to convert"


class ConversationConverter:
    """Runs the parse → format pipeline and reports every outcome as a result.

    Errors never escape ``convert``: they come back as a failed
    ConversionResult carrying a human-readable message, and nothing is
    retried.
    """

    def __init__(
        self,
        engine: ParsingEngine | None = None,
        engine_config: EngineConfig | None = None,
        conversion_config: ConversionConfig | None = None,
    ) -> None:
        self.engine = engine if engine is not None else ParsingEngine()
        self._engine_config = engine_config or EngineConfig()
        self._conversion_config = conversion_config or ConversionConfig()
        self._formatter = MarkdownFormatter(self._conversion_config.knowledge_cutoff)

    def default_options(self) -> ConversionOptions:
        return ConversionOptions(
            include_thinking=self._conversion_config.include_thinking,
            claude_mode=self._conversion_config.claude_mode,
        )

    def convert(
        self,
        source_text: str,
        options: ConversionOptions | None = None,
    ) -> ConversionResult:
        if not source_text or not source_text.strip():
            return ConversionResult.fail(EMPTY_SOURCE_ERROR)

        options = options or self.default_options()

        try:
            parsed = self.engine.parse(
                source_text,
                wait=self._engine_config.wait_for_ready,
                timeout=self._engine_config.init_timeout,
            )
            formatted = self._formatter.format(parsed.messages, options)
        except ConversionError as e:
            logger.info("Conversion failed (%s): %s", e.kind, e)
            return ConversionResult.fail(str(e))
        except Exception as e:
            logger.exception("Unexpected conversion failure")
            return ConversionResult.fail(f"Conversion failed: {e}")

        logger.debug("Converted %d message(s)", formatted.message_count)
        return ConversionResult.ok(
            markdown=formatted.markdown,
            message_count=formatted.message_count,
            system_instruction=parsed.system_instruction,
        )


_default_converter: ConversationConverter | None = None
_default_lock = threading.Lock()


def _get_default_converter() -> ConversationConverter:
    global _default_converter
    with _default_lock:
        if _default_converter is None:
            _default_converter = ConversationConverter()
        return _default_converter


def convert(
    source_text: str,
    options: ConversionOptions | None = None,
    engine: ParsingEngine | None = None,
) -> ConversionResult:
    """Convert with default configuration.

    Without an explicit ``engine`` every call shares one process-wide
    converter, so its engine initializes once and is reused.
    """
    if engine is not None:
        return ConversationConverter(engine=engine).convert(source_text, options)
    return _get_default_converter().convert(source_text, options)
