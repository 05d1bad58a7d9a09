"""PlantUML class-diagram rendering for Rust structs, enums and traits."""

from __future__ import annotations

import logging

import tree_sitter

from rustitect.config.models import DiagramConfig
from rustitect.extractor.syntax import (
    base_type_name,
    collapse_whitespace,
    modifier_marker,
    node_text,
    render_signature,
    return_type,
    type_identifiers,
    visibility_marker,
)

logger = logging.getLogger(__name__)

STARTUML = "@startuml"
ENDUML = "@enduml"

_ENTITY_KEYWORDS: dict[str, str] = {
    "struct_item": "class",
    "enum_item": "enum",
    "trait_item": "interface",
}

_SKIPPED_TUPLE_CHILDREN = ("attribute_item", "line_comment", "block_comment")


class PlantumlRenderer:
    """Renders the top-level types of a parsed file as one PlantUML diagram.

    The output is always wrapped in ``@startuml``/``@enduml`` with a blank
    line on each side of the body, so an input without types still gives a
    well-formed, empty diagram.
    """

    def __init__(self, config: DiagramConfig | None = None) -> None:
        self.config = config or DiagramConfig()

    def render(self, tree: tree_sitter.Tree) -> str:
        root = tree.root_node
        entities = [n for n in root.named_children if n.type in _ENTITY_KEYWORDS]
        declared = {node_text(n.child_by_field_name("name")) for n in entities}

        methods: dict[str, list[tree_sitter.Node]] = {}
        realizations: list[tuple[str, str]] = []
        for node in root.named_children:
            if node.type != "impl_item":
                continue
            target = base_type_name(node.child_by_field_name("type"))
            trait = node.child_by_field_name("trait")
            if trait is not None:
                realizations.append((base_type_name(trait), target))
                continue
            body = node.child_by_field_name("body")
            if body is not None:
                methods.setdefault(target, []).extend(
                    item for item in body.named_children if item.type == "function_item"
                )

        blocks = [self._render_entity(node, methods) for node in entities]
        if self.config.show_relations:
            relations = self._relations(entities, declared, realizations)
            if relations:
                blocks.append("\n".join(relations))

        logger.debug("rendered %d diagram block(s)", len(blocks))
        return f"{STARTUML}\n\n" + "\n\n".join(blocks) + f"\n\n{ENDUML}"

    # ------------------------------------------------------------------
    # Entities
    # ------------------------------------------------------------------

    def _render_entity(
        self, node: tree_sitter.Node, methods: dict[str, list[tree_sitter.Node]]
    ) -> str:
        name = node_text(node.child_by_field_name("name"))
        keyword = _ENTITY_KEYWORDS[node.type]

        if node.type == "struct_item":
            members = [
                f"{marker} {field}: {type_text}"
                for marker, field, type_text, _ in _struct_fields(node)
            ]
            if self.config.show_methods:
                members.extend(
                    f"{visibility_marker(fn)} {_method_line(fn)}" for fn in methods.get(name, [])
                )
        elif node.type == "enum_item":
            members = _enum_variants(node)
        else:
            members = [f"+ {_method_line(fn)}" for fn in _trait_functions(node)]

        lines = [f'{keyword} "{name}" {{']
        lines.extend(f"    {member}" for member in members)
        lines.append("}")
        return "\n".join(lines)

    # ------------------------------------------------------------------
    # Relations
    # ------------------------------------------------------------------

    @staticmethod
    def _relations(
        entities: list[tree_sitter.Node],
        declared: set[str],
        realizations: list[tuple[str, str]],
    ) -> list[str]:
        relations: list[str] = []

        def add(line: str) -> None:
            if line not in relations:
                relations.append(line)

        for node in entities:
            if node.type != "struct_item":
                continue
            owner = node_text(node.child_by_field_name("name"))
            for _, _, _, type_node in _struct_fields(node):
                for part in type_identifiers(type_node):
                    if part in declared and part != owner:
                        add(f'"{owner}" *-- "{part}"')

        for trait, target in realizations:
            if trait in declared and target in declared:
                add(f'"{trait}" <|.. "{target}"')

        return relations


def _method_line(function: tree_sitter.Node) -> str:
    returned = return_type(function)
    signature = render_signature(function)
    return f"{signature}: {returned}" if returned else signature


def _struct_fields(
    node: tree_sitter.Node,
) -> list[tuple[str, str, str, tree_sitter.Node]]:
    """(marker, field name, type text, type node) per field; tuple fields are numbered."""
    body = node.child_by_field_name("body")
    if body is None:
        return []

    fields: list[tuple[str, str, str, tree_sitter.Node]] = []
    if body.type == "field_declaration_list":
        for field in body.named_children:
            if field.type != "field_declaration":
                continue
            type_node = field.child_by_field_name("type")
            fields.append((
                visibility_marker(field),
                node_text(field.child_by_field_name("name")),
                collapse_whitespace(node_text(type_node)),
                type_node,
            ))
    elif body.type == "ordered_field_declaration_list":
        modifier = None
        for child in body.named_children:
            if child.type == "visibility_modifier":
                modifier = child
                continue
            if child.type in _SKIPPED_TUPLE_CHILDREN:
                continue
            fields.append((
                modifier_marker(modifier),
                str(len(fields)),
                collapse_whitespace(node_text(child)),
                child,
            ))
            modifier = None
    return fields


def _enum_variants(node: tree_sitter.Node) -> list[str]:
    body = node.child_by_field_name("body")
    if body is None:
        return []
    return [
        node_text(variant.child_by_field_name("name"))
        for variant in body.named_children
        if variant.type == "enum_variant"
    ]


def _trait_functions(node: tree_sitter.Node) -> list[tree_sitter.Node]:
    body = node.child_by_field_name("body")
    if body is None:
        return []
    return [
        item
        for item in body.named_children
        if item.type in ("function_signature_item", "function_item")
    ]
