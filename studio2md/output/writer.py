"""MarkdownWriter: saves converted transcripts as .md files."""

from __future__ import annotations

import logging
import re
from datetime import datetime
from pathlib import Path

from studio2md.config.models import OutputConfig

logger = logging.getLogger(__name__)


def _sanitize_name(name: str) -> str:
    """Make a conversation name safe for use as a filename stem."""
    name = name.strip().replace("/", "-").replace("\\", "-")
    name = name.replace("..", "")
    name = re.sub(r"\s+", "-", name)
    # Keep alphanumerics, dash, underscore and dot
    name = re.sub(r"[^\w\-\.]", "", name)
    name = re.sub(r"-{2,}", "-", name).strip("-")
    if not name or name.strip(".-") == "":
        name = "conversation"
    return name


class MarkdownWriter:
    """Writes markdown text to ``<base_dir>/<name>-<timestamp>.md`` as UTF-8."""

    def __init__(self, config: OutputConfig) -> None:
        self.config = config
        self.base_dir = Path(config.base_dir).expanduser()

    def default_filename(
        self, name: str | None = None, now: datetime | None = None
    ) -> str:
        stem = _sanitize_name(name or self.config.name)
        stamp = (now or datetime.now()).strftime(self.config.timestamp_format)
        return f"{stem}-{stamp}.md"

    def write(
        self,
        markdown: str,
        filename: str | None = None,
        *,
        dry_run: bool = False,
    ) -> Path:
        """Write markdown to disk. Returns the Path of the written (or would-be) file."""
        dest = Path(filename) if filename else self.base_dir / self.default_filename()
        if not dest.suffix:
            dest = dest.with_suffix(".md")

        if dry_run:
            logger.debug("dry-run: would write %s", dest)
            return dest

        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_text(markdown, encoding="utf-8")
        logger.info("wrote %s (%d bytes)", dest, len(markdown.encode("utf-8")))
        return dest
