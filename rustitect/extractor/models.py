"""Pydantic models for extracted Rust documentation."""

from __future__ import annotations

from pydantic import BaseModel, Field


class SourceParseError(Exception):
    """Raised when the input is not valid Rust syntax."""

    def __init__(self, message: str, line: int = 0, column: int = 0) -> None:
        self.line = line
        self.column = column
        super().__init__(f"{message} (line {line}, column {column})")


class DocItem(BaseModel):
    """A documented member of a type: a named field or an inherent method.

    For methods ``name`` is the rendered signature, e.g.
    ``new(name: String, age: u32)``.
    """

    name: str
    documentation: str = ""


class ParsedType(BaseModel):
    """Documentation record for one struct.

    ``documentation`` holds the trimmed doc-comment lines, each followed by a
    newline, plus one blank line when at least one line was found.
    ``diagram`` is filled in by the pipeline after extraction.
    """

    name: str
    documentation: str = ""
    fields: list[DocItem] = Field(default_factory=list)
    methods: list[DocItem] = Field(default_factory=list)
    diagram: str = ""
