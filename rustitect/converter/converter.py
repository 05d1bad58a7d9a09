"""Markdown-to-AsciiDoc conversion by shelling out to pandoc."""

from __future__ import annotations

import logging
import subprocess

from rustitect.config.models import PandocConfig
from rustitect.converter.models import ConversionError, PandocFormat

logger = logging.getLogger(__name__)


def normalize_plantuml_blocks(asciidoc: str) -> str:
    """Turn pandoc's ``[source,plantuml]`` listings into ``[plantuml]`` diagram blocks."""
    return asciidoc.replace("[source,plantuml]", "[plantuml]")


class PandocConverter:
    """Runs pandoc as a filter: text in on stdin, converted text out on stdout.

    The executable comes from the config (which defaults to ``$PANDOC_PATH``,
    then ``pandoc``). Calls block until pandoc exits unless a timeout is set.
    """

    def __init__(self, config: PandocConfig | None = None) -> None:
        self._config = config or PandocConfig()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def markdown_to_asciidoc(self, markdown: str) -> str:
        """Convert Markdown to AsciiDoc, normalizing PlantUML blocks.

        Raises ConversionError if pandoc is missing or exits non-zero.
        """
        try:
            asciidoc = self.convert(markdown, PandocFormat.MARKDOWN, PandocFormat.ASCIIDOC)
        except ConversionError as e:
            logger.error("Error while converting Markdown to AsciiDoc: %s", e)
            raise
        return normalize_plantuml_blocks(asciidoc)

    def convert(self, text: str, source: PandocFormat, target: PandocFormat) -> str:
        cmd = [
            self._config.path,
            "-f", source.value,
            "-t", target.value,
            *self._config.extra_args,
        ]
        logger.debug("running %s (%d chars in)", " ".join(cmd), len(text))

        try:
            result = subprocess.run(
                cmd,
                input=text,
                capture_output=True,
                encoding="utf-8",
                timeout=self._config.timeout,
            )
        except FileNotFoundError as e:
            raise ConversionError(f"pandoc executable not found: {self._config.path}") from e
        except subprocess.TimeoutExpired as e:
            raise ConversionError(f"pandoc timed out after {self._config.timeout}s") from e
        except OSError as e:
            raise ConversionError(f"Could not start pandoc ({self._config.path}): {e}") from e

        if result.returncode != 0:
            raise ConversionError(
                f"pandoc exited with status {result.returncode}", stderr=result.stderr
            )
        return result.stdout
