from .loader import load_config
from .models import (
    DiagramConfig,
    OutputConfig,
    PandocConfig,
    RustitectConfig,
)

__all__ = [
    "DiagramConfig",
    "OutputConfig",
    "PandocConfig",
    "RustitectConfig",
    "load_config",
]
