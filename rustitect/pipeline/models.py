"""Output format selection and the bundle of rendered documents."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, model_validator


class OutputFormat(str, Enum):
    MARKDOWN = "markdown"
    ASCIIDOC = "asciidoc"
    ASCIIDOC_PLANTUML = "asciidoc-plantuml"
    PLANTUML = "plantuml"


# Documents produced per mode, in output order. Must cover every OutputFormat.
BUNDLE_KEYS: dict[OutputFormat, tuple[OutputFormat, ...]] = {
    OutputFormat.MARKDOWN: (OutputFormat.MARKDOWN,),
    OutputFormat.ASCIIDOC: (OutputFormat.ASCIIDOC,),
    OutputFormat.ASCIIDOC_PLANTUML: (OutputFormat.ASCIIDOC, OutputFormat.PLANTUML),
    OutputFormat.PLANTUML: (OutputFormat.PLANTUML,),
}


class OutputBundle(BaseModel):
    """Rendered documents for one run, keyed by the format of each document.

    The key set is fixed by ``mode``; any other combination is rejected.
    """

    mode: OutputFormat
    documents: dict[OutputFormat, str]

    @model_validator(mode="after")
    def _check_keys(self) -> OutputBundle:
        expected = BUNDLE_KEYS[self.mode]
        if set(self.documents) != set(expected):
            got = sorted(f.value for f in self.documents)
            want = [f.value for f in expected]
            raise ValueError(f"{self.mode.value} bundle needs documents {want}, got {got}")
        self.documents = {fmt: self.documents[fmt] for fmt in expected}
        return self

    @property
    def is_combined(self) -> bool:
        return self.mode is OutputFormat.ASCIIDOC_PLANTUML
