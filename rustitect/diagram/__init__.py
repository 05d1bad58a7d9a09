"""PlantUML diagram rendering."""

from rustitect.diagram.renderer import ENDUML, STARTUML, PlantumlRenderer

__all__ = [
    "ENDUML",
    "PlantumlRenderer",
    "STARTUML",
]
