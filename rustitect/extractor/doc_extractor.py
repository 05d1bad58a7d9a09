"""Doc-comment extraction for Rust structs, their fields and inherent methods."""

from __future__ import annotations

import logging

import tree_sitter

from rustitect.extractor.models import DocItem, ParsedType
from rustitect.extractor.syntax import (
    base_type_name,
    doc_lines,
    node_text,
    parse_source,
    render_signature,
)

logger = logging.getLogger(__name__)


def extract_types(tree: tree_sitter.Tree) -> list[ParsedType]:
    """Build one ParsedType per top-level struct, in source order.

    Methods come from inherent ``impl`` blocks whose self type names the
    struct; trait implementations are ignored. An impl may appear before or
    after the struct it belongs to.
    """
    root = tree.root_node
    types = [_parse_struct(node) for node in root.named_children if node.type == "struct_item"]

    for node in root.named_children:
        if node.type != "impl_item" or node.child_by_field_name("trait") is not None:
            continue
        target = base_type_name(node.child_by_field_name("type"))
        methods = _collect_methods(node)
        for parsed in types:
            if parsed.name == target:
                parsed.methods.extend(methods)

    logger.debug("extracted %d struct(s): %s", len(types), [t.name for t in types])
    return types


def extract_types_from_source(source_text: str) -> list[ParsedType]:
    """Parse and extract in one step. Raises SourceParseError on bad input."""
    return extract_types(parse_source(source_text))


def _join(lines: list[str]) -> str:
    return "".join(f"{line}\n" for line in lines)


def _parse_struct(node: tree_sitter.Node) -> ParsedType:
    lines = doc_lines(node)
    documentation = _join(lines)
    if lines:
        documentation += "\n"

    fields: list[DocItem] = []
    body = node.child_by_field_name("body")
    if body is not None and body.type == "field_declaration_list":
        for field in body.named_children:
            if field.type != "field_declaration":
                continue
            fields.append(
                DocItem(
                    name=node_text(field.child_by_field_name("name")),
                    documentation=_join(doc_lines(field)),
                )
            )

    return ParsedType(
        name=node_text(node.child_by_field_name("name")),
        documentation=documentation,
        fields=fields,
    )


def _collect_methods(impl: tree_sitter.Node) -> list[DocItem]:
    body = impl.child_by_field_name("body")
    if body is None:
        return []
    return [
        DocItem(name=render_signature(item), documentation=_join(doc_lines(item)))
        for item in body.named_children
        if item.type == "function_item"
    ]
