"""Output subsystem — names and writes generated documents."""

from rustitect.output.writer import EXTENSIONS, OutputWriter, preserved_output_name

__all__ = [
    "EXTENSIONS",
    "OutputWriter",
    "preserved_output_name",
]
