from pydantic import BaseModel, Field
from typing import Literal


class ConversionConfig(BaseModel):
    include_thinking: bool = False
    claude_mode: bool = False
    knowledge_cutoff: str = "January 2025"


class EngineConfig(BaseModel):
    wait_for_ready: bool = True
    init_timeout: float = Field(default=30.0, gt=0)


class OutputConfig(BaseModel):
    base_dir: str = "."
    name: str = "gemini-conversation"
    timestamp_format: str = "%Y%m%d-%H%M%S"


class Studio2MdConfig(BaseModel):
    conversion: ConversionConfig = Field(default_factory=ConversionConfig)
    engine: EngineConfig = Field(default_factory=EngineConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    log_level: Literal["debug", "info", "warn", "error"] = "info"
    log_format: Literal["text", "json"] = "text"
