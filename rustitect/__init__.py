"""Rustitect - Rust-to-arc42 documentation generator (Markdown, AsciiDoc, PlantUML)."""

from rustitect.config import RustitectConfig, load_config
from rustitect.converter import ConversionError, PandocConverter
from rustitect.diagram import PlantumlRenderer
from rustitect.extractor import DocItem, ParsedType, SourceParseError, extract_types
from rustitect.output import OutputWriter
from rustitect.pipeline import OutputBundle, OutputFormat, Pipeline

__version__ = "0.1.0"

__all__ = [
    "ConversionError",
    "DocItem",
    "OutputBundle",
    "OutputFormat",
    "OutputWriter",
    "PandocConverter",
    "ParsedType",
    "Pipeline",
    "PlantumlRenderer",
    "RustitectConfig",
    "SourceParseError",
    "extract_types",
    "load_config",
]
