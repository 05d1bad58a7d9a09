"""Rust doc-comment extraction — tree-sitter parsing plus struct/field/method docs."""

from rustitect.extractor.doc_extractor import extract_types, extract_types_from_source
from rustitect.extractor.models import DocItem, ParsedType, SourceParseError
from rustitect.extractor.syntax import parse_source

__all__ = [
    "DocItem",
    "ParsedType",
    "SourceParseError",
    "extract_types",
    "extract_types_from_source",
    "parse_source",
]
