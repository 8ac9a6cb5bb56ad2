from .loader import load_config
from .models import (
    ConversionConfig,
    EngineConfig,
    OutputConfig,
    Studio2MdConfig,
)

__all__ = [
    "ConversionConfig",
    "EngineConfig",
    "OutputConfig",
    "Studio2MdConfig",
    "load_config",
]
