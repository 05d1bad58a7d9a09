"""Document conversion subsystem — wraps pandoc and splits out PlantUML diagrams."""

from rustitect.converter.converter import PandocConverter, normalize_plantuml_blocks
from rustitect.converter.models import ConversionError, PandocFormat
from rustitect.converter.plantuml import (
    INCLUDE_DIRECTIVE,
    INCLUDE_PLACEHOLDER,
    extract_diagram,
    replace_diagram_with_include,
    split_diagram,
)

__all__ = [
    "ConversionError",
    "INCLUDE_DIRECTIVE",
    "INCLUDE_PLACEHOLDER",
    "PandocConverter",
    "PandocFormat",
    "extract_diagram",
    "normalize_plantuml_blocks",
    "replace_diagram_with_include",
    "split_diagram",
]
