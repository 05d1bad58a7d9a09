"""OutputWriter — writes rendered bundles to disk or stdout."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TextIO

from rustitect.config.models import OutputConfig
from rustitect.converter import INCLUDE_PLACEHOLDER
from rustitect.pipeline.models import OutputBundle, OutputFormat

logger = logging.getLogger(__name__)

EXTENSIONS: dict[OutputFormat, str] = {
    OutputFormat.ASCIIDOC: ".adoc",
    OutputFormat.ASCIIDOC_PLANTUML: ".puml",
    OutputFormat.MARKDOWN: ".md",
    OutputFormat.PLANTUML: ".puml",
}

STDIN_MARKER = "-"


def preserved_output_name(input_file: str | None, output_format: OutputFormat) -> str:
    """Output file name carrying the input's stem and the format's extension.

    Raises ValueError when the input is stdin, which has no name to keep.
    """
    if input_file is None or input_file == STDIN_MARKER:
        raise ValueError("Can't preserve names when input is stdin")
    return f"{Path(input_file).stem}{EXTENSIONS[output_format]}"


class OutputWriter:
    """Writes each document of an OutputBundle to its own file.

    Files are named ``{prefix}{stem}{extension}`` under ``base_dir``, where
    ``stem`` comes from the requested output file. For combined bundles the
    AsciiDoc include directive is pointed at the ``.puml`` written alongside.
    """

    def __init__(self, config: OutputConfig) -> None:
        self.config = config
        self.base_dir = Path(config.base_dir)

    def write(
        self,
        bundle: OutputBundle,
        output_file: str,
        *,
        prefix: str | None = None,
        dry_run: bool = False,
    ) -> list[Path]:
        """Write all documents. Returns their paths in bundle order.

        If any write fails, files already written by this call are removed
        before the OSError propagates.
        """
        prefix = self.config.prefix if prefix is None else prefix
        stem = Path(output_file).stem

        planned: list[tuple[Path, str]] = []
        for fmt, content in bundle.documents.items():
            if bundle.is_combined and fmt is OutputFormat.ASCIIDOC:
                content = content.replace(INCLUDE_PLACEHOLDER, stem)
            dest = self.base_dir / f"{prefix}{stem}{EXTENSIONS[fmt]}"
            planned.append((dest, content))

        if dry_run:
            for dest, _ in planned:
                logger.debug("dry-run: would write %s", dest)
            return [dest for dest, _ in planned]

        written: list[Path] = []
        try:
            for dest, content in planned:
                dest.parent.mkdir(parents=True, exist_ok=True)
                dest.write_text(content, encoding="utf-8")
                written.append(dest)
                logger.info("wrote %s (%d bytes)", dest, len(content))
        except OSError:
            # All documents of a bundle are written, or none are.
            for dest in written:
                logger.warning("removing partial output %s", dest)
                dest.unlink(missing_ok=True)
            raise

        return [dest for dest, _ in planned]

    @staticmethod
    def write_stdout(bundle: OutputBundle, stream: TextIO | None = None) -> None:
        """Print all documents, newline-separated, to stdout."""
        stream = stream or sys.stdout
        stream.write("\n".join(bundle.documents.values()))
        stream.flush()
