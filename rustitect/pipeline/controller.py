"""Pipeline controller: picks the output mode and runs the stages it needs."""

from __future__ import annotations

import logging

from rustitect.assembler import render_document, render_summary
from rustitect.config.models import RustitectConfig
from rustitect.converter import PandocConverter, split_diagram
from rustitect.diagram import PlantumlRenderer
from rustitect.extractor import extract_types, parse_source
from rustitect.pipeline.models import OutputBundle, OutputFormat

logger = logging.getLogger(__name__)


class Pipeline:
    """Turns one Rust source document into an OutputBundle.

    Modes:
    - ``plantuml_only`` (or format ``plantuml``): diagram text only.
    - ``markdown_only``: headline plus struct documentation, no diagram.
    - otherwise the full document as Markdown, AsciiDoc, or AsciiDoc with
      the diagram split into its own document.

    Any stage failure propagates; nothing partial is returned.
    """

    def __init__(
        self,
        config: RustitectConfig | None = None,
        converter: PandocConverter | None = None,
    ) -> None:
        self.config = config or RustitectConfig()
        self.renderer = PlantumlRenderer(self.config.diagram)
        self.converter = converter or PandocConverter(self.config.pandoc)

    def run(
        self,
        source_text: str,
        output_format: OutputFormat = OutputFormat.ASCIIDOC,
        *,
        plantuml_only: bool = False,
        markdown_only: bool = False,
    ) -> OutputBundle:
        if plantuml_only and markdown_only:
            raise ValueError("plantuml-only and markdown-only are mutually exclusive")

        tree = parse_source(source_text)

        if plantuml_only or (output_format is OutputFormat.PLANTUML and not markdown_only):
            logger.info("rendering diagram only")
            return OutputBundle(
                mode=OutputFormat.PLANTUML,
                documents={OutputFormat.PLANTUML: self.renderer.render(tree)},
            )

        types = extract_types(tree)

        if markdown_only:
            logger.info("rendering extracted documentation only")
            return OutputBundle(
                mode=OutputFormat.MARKDOWN,
                documents={OutputFormat.MARKDOWN: render_summary(types)},
            )

        diagram = self.renderer.render(tree)
        for parsed in types:
            parsed.diagram = diagram
        markdown = render_document(types, diagram)

        if output_format is OutputFormat.MARKDOWN:
            return OutputBundle(mode=output_format, documents={OutputFormat.MARKDOWN: markdown})

        logger.info("converting %d chars of Markdown to AsciiDoc", len(markdown))
        asciidoc = self.converter.markdown_to_asciidoc(markdown)

        if output_format is OutputFormat.ASCIIDOC_PLANTUML:
            document, diagram_file = split_diagram(asciidoc)
            return OutputBundle(
                mode=output_format,
                documents={
                    OutputFormat.ASCIIDOC: document,
                    OutputFormat.PLANTUML: diagram_file,
                },
            )

        return OutputBundle(mode=OutputFormat.ASCIIDOC, documents={OutputFormat.ASCIIDOC: asciidoc})
