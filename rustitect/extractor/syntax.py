"""tree-sitter front end for Rust source.

Parses raw text into a tree and offers the small node helpers shared by the
doc extractor and the diagram renderer.
"""

from __future__ import annotations

import logging
import re

import tree_sitter
import tree_sitter_rust

from rustitect.extractor.models import SourceParseError

logger = logging.getLogger(__name__)

# Create the Language object once (wraps the PyCapsule)
_RUST_LANGUAGE = tree_sitter.Language(tree_sitter_rust.language())

_COMMENT_TYPES = ("line_comment", "block_comment", "attribute_item")
_DOC_ATTRIBUTE = re.compile(r'^#\[\s*doc\s*=\s*(r#*)?"(.*)"#*\s*\]$', re.DOTALL)

# \xNN, \u{...}, backslash-newline continuation, or a single-character escape
_STRING_ESCAPE = re.compile(
    r"\\(?:x([0-7][0-9a-fA-F])|u\{([0-9a-fA-F_]{1,8})\}|\n\s*|(.))", re.DOTALL
)
_SIMPLE_ESCAPES = {"n": "\n", "r": "\r", "t": "\t", "0": "\0", "\\": "\\", '"': '"', "'": "'"}


def parse_source(source_text: str) -> tree_sitter.Tree:
    """Parse Rust source into a tree-sitter tree.

    Raises SourceParseError if tree-sitter had to recover from errors
    anywhere in the input.
    """
    source_bytes = source_text.encode("utf-8")
    parser = tree_sitter.Parser(_RUST_LANGUAGE)
    tree = parser.parse(source_bytes)

    if tree.root_node.has_error:
        node = _first_error(tree.root_node) or tree.root_node
        line = node.start_point[0] + 1
        column = node.start_point[1] + 1
        if node.is_missing:
            message = f"Missing '{node.type}'"
        else:
            snippet = node_text(node).strip().splitlines()
            near = snippet[0][:40] if snippet else ""
            message = f"Unexpected syntax near '{near}'"
        logger.debug("tree-sitter error node %s at %d:%d", node.type, line, column)
        raise SourceParseError(message, line, column)

    logger.debug("parsed %d bytes of Rust source", len(source_bytes))
    return tree


def _first_error(node: tree_sitter.Node) -> tree_sitter.Node | None:
    if node.type == "ERROR" or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            found = _first_error(child)
            if found is not None:
                return found
    return None


# =========================================================================
# Node helpers
# =========================================================================


def node_text(node: tree_sitter.Node | None) -> str:
    if node is None:
        return ""
    return node.text.decode("utf-8", errors="replace")


def collapse_whitespace(text: str) -> str:
    return " ".join(text.split())


def child_by_type(node: tree_sitter.Node, type_name: str) -> tree_sitter.Node | None:
    """Find first child of a given type."""
    for child in node.children:
        if child.type == type_name:
            return child
    return None


def visibility_marker(node: tree_sitter.Node) -> str:
    """PlantUML marker for the item's visibility: `+` pub, `~` restricted, `-` private."""
    return modifier_marker(child_by_type(node, "visibility_modifier"))


def modifier_marker(modifier: tree_sitter.Node | None) -> str:
    if modifier is None:
        return "-"
    if collapse_whitespace(node_text(modifier)) == "pub":
        return "+"
    return "~"


def base_type_name(node: tree_sitter.Node | None) -> str:
    """Name of a type with generic arguments and path qualifiers removed.

    ``Wrapper<T>`` gives ``Wrapper``; ``crate::model::Person`` gives ``Person``.
    """
    if node is None:
        return ""
    if node.type == "generic_type":
        return base_type_name(node.child_by_field_name("type"))
    if node.type == "scoped_type_identifier":
        return node_text(node.child_by_field_name("name"))
    return node_text(node)


def type_identifiers(node: tree_sitter.Node) -> list[str]:
    """All type identifiers mentioned anywhere inside a type node, in order."""
    names: list[str] = []
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type == "type_identifier":
            names.append(node_text(current))
        stack.extend(reversed(current.children))
    return names


def render_parameters(function: tree_sitter.Node) -> str:
    """Render `name: Type` pairs for the typed, by-name parameters of a function.

    Receivers (`self`, `&mut self`, `self: Box<Self>`) and destructuring
    patterns are left out.
    """
    params = function.child_by_field_name("parameters")
    if params is None:
        return ""
    rendered: list[str] = []
    for param in params.named_children:
        if param.type != "parameter":
            continue
        pattern = param.child_by_field_name("pattern")
        if pattern is None or pattern.type != "identifier":
            continue
        type_text = collapse_whitespace(node_text(param.child_by_field_name("type")))
        rendered.append(f"{node_text(pattern)}: {type_text}")
    return ", ".join(rendered)


def render_signature(function: tree_sitter.Node) -> str:
    """`name(p: T, ...)` for a function or function signature item."""
    name = node_text(function.child_by_field_name("name"))
    return f"{name}({render_parameters(function)})"


def return_type(function: tree_sitter.Node) -> str:
    return collapse_whitespace(node_text(function.child_by_field_name("return_type")))


# =========================================================================
# Doc comments
# =========================================================================


def doc_lines(node: tree_sitter.Node) -> list[str]:
    """Trimmed outer doc-comment lines attached to an item.

    Walks back over the comments and attributes directly preceding the item.
    `///` lines, `/** */` blocks and `#[doc = "..."]` attributes count;
    ordinary comments and other attributes are skipped.
    """
    chunks: list[list[str]] = []
    sibling = node.prev_sibling
    while sibling is not None and sibling.type in _COMMENT_TYPES:
        chunks.append(_doc_comment_lines(sibling))
        sibling = sibling.prev_sibling

    lines: list[str] = []
    for chunk in reversed(chunks):
        lines.extend(chunk)
    return lines


def _doc_comment_lines(node: tree_sitter.Node) -> list[str]:
    text = node_text(node)

    if node.type == "line_comment":
        if text.startswith("///") and not text.startswith("////"):
            return [text[3:].strip()]
        return []

    if node.type == "block_comment":
        if not text.startswith("/**") or text.startswith("/***") or text == "/**/":
            return []
        lines = []
        for raw in text[3:-2].splitlines():
            line = raw.strip()
            if line.startswith("*"):
                line = line[1:].strip()
            lines.append(line)
        while lines and not lines[0]:
            lines.pop(0)
        while lines and not lines[-1]:
            lines.pop()
        return lines

    match = _DOC_ATTRIBUTE.match(text.strip())
    if match:
        raw, value = match.groups()
        if raw is None:
            value = unescape_string(value)
        return [value.strip()]
    return []


def unescape_string(body: str) -> str:
    """Decode the escape sequences of a (non-raw) Rust string literal body.

    Unknown escapes are kept verbatim.
    """

    def _decode(match: re.Match[str]) -> str:
        hex_byte, code_point, simple = match.groups()
        if hex_byte is not None:
            return chr(int(hex_byte, 16))
        if code_point is not None:
            value = int(code_point.replace("_", ""), 16)
            return chr(value) if value <= 0x10FFFF else match.group(0)
        if simple is None:
            return ""
        return _SIMPLE_ESCAPES.get(simple, match.group(0))

    return _STRING_ESCAPE.sub(_decode, body)
