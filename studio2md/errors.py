"""Error hierarchy for the conversion pipeline.

Every error here is terminal for a single conversion call. The converter
catches them and reports ``str(err)`` back inside ``ConversionResult.error``.
"""

from __future__ import annotations


class ConversionError(Exception):
    """Base class for errors surfaced by a conversion."""

    kind = "conversion"


class SourceSyntaxError(ConversionError):
    """Source text is not valid Python."""

    kind = "syntax"

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Python syntax error: {reason}")


class NotFoundError(ConversionError):
    """No ``contents`` assignment in the source."""

    kind = "not_found"

    def __init__(self, target: str = "contents") -> None:
        self.target = target
        super().__init__(f"No {target} assignment found in code")


class ShapeError(ConversionError):
    """``contents`` is bound to something other than a list literal."""

    kind = "shape"

    def __init__(self, target: str = "contents") -> None:
        self.target = target
        super().__init__(f"{target} is not a list")


class EmptyResultError(ConversionError):
    kind = "empty_result"

    def __init__(self) -> None:
        super().__init__("No valid messages found to convert")


class EngineNotReadyError(ConversionError):
    kind = "engine_not_ready"

    def __init__(self) -> None:
        super().__init__(
            "Parsing engine is not ready. Please wait for initialization to complete."
        )


class EngineInitError(ConversionError):
    """Wraps the extractor's initialization failure with context."""

    kind = "engine_init"

    def __init__(self, cause: Exception) -> None:
        super().__init__(f"Parsing engine failed to initialize: {cause}")
        self.__cause__ = cause
