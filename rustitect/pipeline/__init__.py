"""Document generation pipeline."""

from rustitect.pipeline.controller import Pipeline
from rustitect.pipeline.models import BUNDLE_KEYS, OutputBundle, OutputFormat

__all__ = [
    "BUNDLE_KEYS",
    "OutputBundle",
    "OutputFormat",
    "Pipeline",
]
