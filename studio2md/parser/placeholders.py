"""Detection of the template placeholders left in unfilled exports."""

from __future__ import annotations

import re

from studio2md.parser.models import SourceMessage

PLACEHOLDER_PATTERN = re.compile(r"INSERT_[A-Z_]+_HERE", re.IGNORECASE)

KNOWN_PLACEHOLDERS: frozenset[str] = frozenset(
    {
        "INSERT_INPUT_HERE",
        "INSERT_YOUR_PROMPT_HERE",
        "INSERT_USER_INPUT_HERE",
    }
)


def is_placeholder_text(text: str | None) -> bool:
    """Return True if a text fragment is blank or a template placeholder."""
    if not text or not text.strip():
        return True

    if PLACEHOLDER_PATTERN.search(text):
        return True

    return text.strip().upper() in KNOWN_PLACEHOLDERS


def is_placeholder_message(message: SourceMessage) -> bool:
    """Return True if a message has no parts or only placeholder parts."""
    if not message.parts:
        return True
    return all(is_placeholder_text(part) for part in message.parts)
