from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Literal, Optional, Tuple

EdgeType = Literal["spouse", "parent-child", "distribution"]

PARENT_TYPES = ("parent", "adoptive-parent", "step-parent")
CHILD_TYPES = ("child", "adoptive-child", "step-child")
SPOUSE_TYPES = ("spouse", "partner")
NON_BIOLOGICAL_TYPES = ("adoptive-parent", "step-parent", "adoptive-child", "step-child")


@dataclass(frozen=True)
class Person:
    id: str
    parent_ids: Tuple[str, ...] = ()
    spouse_ids: Tuple[str, ...] = ()
    name: str = ""
    sex: Optional[str] = None  # "m" | "f" | None
    birth_date: Optional[date] = None
    death_date: Optional[date] = None
    adoptive_parent_ids: frozenset = frozenset()
    attributes: Dict[str, str] = field(default_factory=dict, compare=False, hash=False)


@dataclass(frozen=True)
class Relationship:
    from_id: str
    to_id: str
    type: str = "parent"


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class FamilyUnit:
    """Children sharing the same parent or parent pair.

    Parents are referenced by id only; a person who remarried is a parent of
    several units and owns none of them.
    """

    id: str
    parent_ids: Tuple[str, ...]  # one or two ids, ordered by input position
    child_ids: Tuple[str, ...]

    @property
    def key(self) -> frozenset:
        return frozenset(self.parent_ids)

    @property
    def is_single_parent(self) -> bool:
        return len(self.parent_ids) == 1


@dataclass(frozen=True)
class TreeNodeLayout:
    id: str
    person: Person
    generation: int
    position: Point
    width: float
    height: float
    family_unit_id: Optional[str] = None
    is_root: bool = False
    kind: Literal["person"] = "person"

    @property
    def center(self) -> Point:
        return Point(self.position.x + self.width / 2, self.position.y + self.height / 2)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "kind": self.kind,
            "person": {"id": self.person.id, "name": self.person.name},
            "generation": self.generation,
            "position": {"x": self.position.x, "y": self.position.y},
            "size": {"width": self.width, "height": self.height},
            "familyUnitId": self.family_unit_id,
            "isRoot": self.is_root,
        }


@dataclass(frozen=True)
class JunctionNode:
    id: str
    position: Point
    parent_ids: Tuple[str, Optional[str]]
    child_ids: Tuple[str, ...]
    family_unit_id: str
    kind: Literal["junction"] = "junction"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.kind,
            "position": {"x": self.position.x, "y": self.position.y},
            "parentIds": list(self.parent_ids),
            "childIds": list(self.child_ids),
        }


@dataclass(frozen=True)
class EdgeStyle:
    stroke: str
    stroke_width: float
    stroke_dasharray: Optional[str] = None

    def to_dict(self) -> dict:
        style = {"stroke": self.stroke, "strokeWidth": self.stroke_width}
        if self.stroke_dasharray:
            style["strokeDasharray"] = self.stroke_dasharray
        return style


@dataclass(frozen=True)
class OrthogonalEdge:
    id: str
    source: str
    target: str
    type: EdgeType
    points: Tuple[Point, ...]
    style: EdgeStyle

    @property
    def d(self) -> str:
        """SVG path data, e.g. ``M 0 0 L 0 50 L 80 50``."""
        head, *tail = self.points
        return " ".join(
            [f"M {head.x:g} {head.y:g}"] + [f"L {p.x:g} {p.y:g}" for p in tail]
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "type": self.type,
            "path": self.d,
            "points": [[p.x, p.y] for p in self.points],
            "style": self.style.to_dict(),
        }


@dataclass(frozen=True)
class GenerationRow:
    level: int
    y: float
    height: float
    label: str
    label_visible: bool

    def to_dict(self) -> dict:
        return {
            "level": self.level,
            "y": self.y,
            "height": self.height,
            "label": self.label,
            "labelVisible": self.label_visible,
        }


@dataclass(frozen=True)
class LayoutResult:
    nodes: Tuple[TreeNodeLayout, ...] = ()
    junctions: Tuple[JunctionNode, ...] = ()
    edges: Tuple[OrthogonalEdge, ...] = ()
    generation_rows: Tuple[GenerationRow, ...] = ()

    def node(self, person_id: str) -> TreeNodeLayout:
        for n in self.nodes:
            if n.id == person_id:
                return n
        raise KeyError(person_id)

    def edges_of_type(self, edge_type: EdgeType) -> Tuple[OrthogonalEdge, ...]:
        return tuple(e for e in self.edges if e.type == edge_type)

    def to_dict(self) -> dict:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "junctions": [j.to_dict() for j in self.junctions],
            "edges": [e.to_dict() for e in self.edges],
            "generationRows": [r.to_dict() for r in self.generation_rows],
        }
