import os
from typing import Literal

from pydantic import BaseModel, Field


def _default_pandoc_path() -> str:
    return os.environ.get("PANDOC_PATH", "pandoc")


class PandocConfig(BaseModel):
    path: str = Field(default_factory=_default_pandoc_path)
    timeout: float | None = None
    extra_args: list[str] = []


class DiagramConfig(BaseModel):
    show_methods: bool = True
    show_relations: bool = True


class OutputConfig(BaseModel):
    base_dir: str = "."
    format: Literal["asciidoc", "asciidoc-plantuml", "markdown", "plantuml"] = "asciidoc"
    prefix: str = ""


class RustitectConfig(BaseModel):
    pandoc: PandocConfig = Field(default_factory=PandocConfig)
    diagram: DiagramConfig = Field(default_factory=DiagramConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    log_level: Literal["debug", "info", "warn", "error"] = "warn"
