"""Split an embedded PlantUML diagram out of converted AsciiDoc.

The combined output mode writes the diagram to its own ``.puml`` file and
leaves an include directive in the AsciiDoc document. The directive names the
file through the ``FILENAME`` placeholder, which the output writer replaces
with the real base name.
"""

from __future__ import annotations

import re

from rustitect.converter.models import ConversionError
from rustitect.diagram import ENDUML, STARTUML

INCLUDE_PLACEHOLDER = "FILENAME"
INCLUDE_DIRECTIVE = f"plantuml::{INCLUDE_PLACEHOLDER}.puml[]"

# [plantuml] / ---- / ... @enduml / ----
_PLANTUML_BLOCK = re.compile(r"\[plantuml\]\r?\n----\r?\n.*?@enduml\r?\n----", re.DOTALL)


def extract_diagram(asciidoc: str) -> str:
    """Return the first ``@startuml`` … ``@enduml`` region of the document.

    Lines are matched on their stripped text. Collection starts at the first
    line beginning with ``@startuml`` and stops before the next line
    beginning with ``@enduml``; a fresh ``@enduml`` line is appended.
    """
    collected: list[str] = []
    capturing = False
    for line in asciidoc.splitlines():
        stripped = line.strip()
        if not capturing:
            if stripped.startswith(STARTUML):
                capturing = True
                collected.append(line)
            continue
        if stripped.startswith(ENDUML):
            break
        collected.append(line)

    if not capturing:
        raise ConversionError(f"No {STARTUML} block found in converted document")

    collected.append(ENDUML)
    return "\n".join(collected)


def replace_diagram_with_include(asciidoc: str) -> str:
    """Swap the fenced ``[plantuml]`` block for ``plantuml::FILENAME.puml[]``."""
    return _PLANTUML_BLOCK.sub(lambda _: INCLUDE_DIRECTIVE, asciidoc)


def split_diagram(asciidoc: str) -> tuple[str, str]:
    """(document with include directive, standalone diagram text)."""
    diagram = extract_diagram(asciidoc)
    return replace_diagram_with_include(asciidoc), diagram
