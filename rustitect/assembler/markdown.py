"""Markdown document assembly from extracted docs and diagram text."""

from __future__ import annotations

from rustitect.extractor.models import ParsedType


def _or_placeholder(types: list[ParsedType]) -> list[ParsedType]:
    # An input without structs still renders one (empty) headline.
    return types or [ParsedType(name="")]


def render_document(types: list[ParsedType], diagram: str) -> str:
    """Assemble the full Markdown document.

    Each struct gets a ``##`` section with its documentation and one ``###``
    subsection per method. The fenced ``plantuml`` block is emitted once,
    under the first heading, since the diagram already covers every type.
    """
    sections = []
    for index, parsed in enumerate(_or_placeholder(types)):
        parts = [f"## {parsed.name}\n"]
        if index == 0:
            parts.append(f"```plantuml\n{diagram}\n```\n")
        parts.append(f"\n{parsed.documentation}\n")
        for method in parsed.methods:
            parts.append(f"### {method.name}\n{method.documentation}\n")
        sections.append("".join(parts))
    return "".join(sections)


def render_summary(types: list[ParsedType]) -> str:
    """Headline plus struct documentation only: no diagram, no methods."""
    return "".join(
        f"## {parsed.name}\n\n{parsed.documentation}" for parsed in _or_placeholder(types)
    )
