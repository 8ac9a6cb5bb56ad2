"""Lazily-initialized parsing engine with an explicit lifecycle."""

from __future__ import annotations

import logging
import threading
from enum import Enum

from studio2md.errors import EngineInitError, EngineNotReadyError
from studio2md.parser.extractor import AstExtractor, TextStructureExtractor
from studio2md.parser.models import ParseResult

logger = logging.getLogger(__name__)


class EngineState(str, Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"


class _Attempt:
    """One in-flight initialization shared by every caller that joins it."""

    def __init__(self) -> None:
        self.done = threading.Event()
        self.error: Exception | None = None


class ParsingEngine:
    """Owns a TextStructureExtractor and gates parsing on its initialization.

    Concurrent ``initialize()`` calls collapse onto a single attempt: the
    first caller runs the extractor's setup, later callers wait for that same
    outcome. A failed attempt puts the engine back in UNINITIALIZED and is
    never retried automatically; calling ``initialize()`` again starts a new
    attempt.
    """

    def __init__(self, extractor: TextStructureExtractor | None = None) -> None:
        self._extractor = extractor if extractor is not None else AstExtractor()
        self._lock = threading.Lock()
        self._state = EngineState.UNINITIALIZED
        self._attempt: _Attempt | None = None
        self._last_error: Exception | None = None

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state is EngineState.READY

    @property
    def is_initializing(self) -> bool:
        return self._state is EngineState.INITIALIZING

    @property
    def error(self) -> str | None:
        """Message of the most recent failed initialization, if any."""
        return str(self._last_error) if self._last_error is not None else None

    def initialize(self, timeout: float | None = None) -> None:
        """Bring the engine to READY, or join an initialization already running.

        Raises EngineInitError if the attempt fails, and EngineNotReadyError
        if ``timeout`` elapses while waiting on another caller's attempt.
        """
        with self._lock:
            if self._state is EngineState.READY:
                return
            if self._state is EngineState.INITIALIZING and self._attempt is not None:
                attempt = self._attempt
                owner = False
            else:
                attempt = self._attempt = _Attempt()
                self._state = EngineState.INITIALIZING
                owner = True

        if owner:
            self._run(attempt)
        elif not attempt.done.wait(timeout):
            raise EngineNotReadyError()

        if attempt.error is not None:
            raise EngineInitError(attempt.error) from attempt.error

    def parse(
        self,
        source_text: str,
        *,
        wait: bool = False,
        timeout: float | None = None,
    ) -> ParseResult:
        """Parse with the extractor.

        When the engine isn't READY, ``wait=True`` initializes (or waits on
        the running initialization) first; otherwise EngineNotReadyError.
        """
        if not self.is_ready:
            if not wait:
                raise EngineNotReadyError()
            self.initialize(timeout=timeout)
        return self._extractor.parse(source_text)

    def _run(self, attempt: _Attempt) -> None:
        logger.debug("Initializing %s", type(self._extractor).__name__)
        try:
            self._extractor.initialize()
        except Exception as e:
            logger.warning("Parsing engine initialization failed: %s", e)
            with self._lock:
                attempt.error = e
                self._last_error = e
                self._state = EngineState.UNINITIALIZED
                self._attempt = None
        else:
            with self._lock:
                self._last_error = None
                self._state = EngineState.READY
            logger.debug("Parsing engine ready")
        finally:
            attempt.done.set()
