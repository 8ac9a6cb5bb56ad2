"""Render parsed conversation turns as a markdown transcript.

Two dialects are produced. The default uses ``## User`` / ``## Assistant``
headings. Claude mode opens with a short system preamble and labels turns
``**Human:**`` / ``**Assistant:**``, wrapping reasoning in ``<thinking>``
tags, so the transcript can be pasted into another assistant as-is.

Only the first part of a user turn is rendered. For model turns with two or
more parts the first is treated as thinking and the last as the response;
anything in between is not rendered.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from studio2md.converter.models import ConversionOptions, FormattedMarkdown
from studio2md.errors import EmptyResultError
from studio2md.parser.models import Role, SourceMessage
from studio2md.parser.placeholders import is_placeholder_message

logger = logging.getLogger(__name__)

DEFAULT_KNOWLEDGE_CUTOFF = "January 2025"

HUMAN_LABEL = "**Human:**"
ASSISTANT_LABEL = "**Assistant:**"
USER_HEADING = "## User"
ASSISTANT_HEADING = "## Assistant"
END_MARKER = "*End of conversation*"


class MarkdownFormatter:
    def __init__(self, knowledge_cutoff: str = DEFAULT_KNOWLEDGE_CUTOFF) -> None:
        self.knowledge_cutoff = knowledge_cutoff

    def format(
        self,
        messages: Sequence[SourceMessage],
        options: ConversionOptions,
    ) -> FormattedMarkdown:
        """Render messages in order. Raises EmptyResultError if none survive filtering."""
        kept = [m for m in messages if not is_placeholder_message(m)]
        if not kept:
            raise EmptyResultError()
        if len(kept) != len(messages):
            logger.debug("Dropped %d placeholder message(s)", len(messages) - len(kept))

        out: list[str] = []
        if options.claude_mode:
            out.append(self._preamble())

        for index, message in enumerate(kept):
            if message.role is Role.user:
                out.append(self._format_user(message, options, index))
            elif message.role is Role.model:
                out.append(self._format_model(message, options))

        if kept[-1].role is Role.model:
            out.append(f"---\n\n{END_MARKER}\n\n")

        return FormattedMarkdown(markdown="".join(out).strip(), message_count=len(kept))

    def _preamble(self) -> str:
        return (
            "**SYSTEM MESSAGE**\n"
            f"Your knowledge cutoff is {self.knowledge_cutoff}.\n\n"
            "---\n\n"
            f"{HUMAN_LABEL}\n\n"
        )

    @staticmethod
    def _format_user(
        message: SourceMessage, options: ConversionOptions, index: int
    ) -> str:
        output = ""
        # The preamble already opened the first Human turn
        if options.claude_mode and index > 0:
            output += f"\n{HUMAN_LABEL}\n\n"
        elif not options.claude_mode:
            output += f"{USER_HEADING}\n\n"

        if message.parts:
            content = message.parts[0].strip()
            if content:
                output += content + "\n\n"
        return output

    @staticmethod
    def _format_model(message: SourceMessage, options: ConversionOptions) -> str:
        output = f"{ASSISTANT_LABEL}\n\n" if options.claude_mode else f"{ASSISTANT_HEADING}\n\n"

        if len(message.parts) == 1:
            content = message.parts[0].strip()
            if content:
                output += content + "\n\n"
            return output

        if len(message.parts) >= 2:
            thinking = message.parts[0].strip()
            response = message.parts[-1].strip()

            if options.include_thinking and thinking:
                if options.claude_mode:
                    output += f"<thinking>\n{thinking}\n</thinking>\n\n"
                else:
                    output += f"### Thinking\n\n{thinking}\n\n### Response\n\n"

            if response:
                output += response + "\n\n"
        return output


def format_markdown(
    messages: Sequence[SourceMessage],
    options: ConversionOptions,
    knowledge_cutoff: str = DEFAULT_KNOWLEDGE_CUTOFF,
) -> FormattedMarkdown:
    """Shortcut for ``MarkdownFormatter(knowledge_cutoff).format(...)``."""
    return MarkdownFormatter(knowledge_cutoff).format(messages, options)
