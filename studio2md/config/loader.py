"""Locate and load studio2md.yaml."""

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import Studio2MdConfig

logger = logging.getLogger(__name__)

PROJECT_CONFIG = "studio2md.yaml"
USER_CONFIG = Path(".studio2md") / "config.yaml"


def _candidate_paths(cli_path: str | None) -> list[Path]:
    paths = [Path(cli_path)] if cli_path else []
    paths.append(Path(PROJECT_CONFIG))
    paths.append(Path.home() / USER_CONFIG)
    return paths


def _read_settings(path: Path) -> dict | None:
    """Return the top-level mapping in ``path``, or None for an empty file."""
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise ValueError(
            f"Invalid config in {path}: expected a mapping, got {type(raw).__name__}"
        )
    return raw


def load_config(cli_path: str | None = None) -> Studio2MdConfig:
    """Resolve config from the first non-empty file found.

    Order: ``--config`` path, ``./studio2md.yaml``, ``~/.studio2md/config.yaml``,
    then built-in defaults. Files are not merged.
    """
    for path in _candidate_paths(cli_path):
        if not path.is_file():
            continue
        settings = _read_settings(path)
        if settings is None:
            continue
        try:
            config = Studio2MdConfig.model_validate(settings)
        except ValidationError as e:
            raise ValueError(f"Invalid config in {path}: {e}") from e
        logger.debug("Loaded config from %s", path)
        return config

    return Studio2MdConfig()


# Default YAML template for `studio2md config init`
DEFAULT_CONFIG_TEMPLATE = """\
# studio2md.yaml

# Markdown rendering
conversion:
  include_thinking: false      # render the first part of multi-part model turns
  claude_mode: false           # Human:/Assistant: labels instead of headings
  knowledge_cutoff: "January 2025"

# Parsing engine
engine:
  wait_for_ready: true         # block until ready instead of failing
  init_timeout: 30

# Saved transcripts
output:
  base_dir: "."                # "~" is expanded
  name: "gemini-conversation"
  timestamp_format: "%Y%m%d-%H%M%S"

# Logging
log_level: "info"              # debug | info | warn | error
log_format: "text"             # text | json
"""
