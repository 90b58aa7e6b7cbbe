"""Orthogonal family tree layout: generation rows, junctions and right-angle edges."""

from .engine import compute_layout
from .errors import (
    ConfigurationError,
    CycleDetectedError,
    DuplicatePersonError,
    GenerationConflictError,
    InvalidPersonError,
    InvalidRelationshipError,
    OrphanReferenceError,
    StammbaumError,
)
from .model import (
    EdgeStyle,
    FamilyUnit,
    GenerationRow,
    JunctionNode,
    LayoutResult,
    OrthogonalEdge,
    Person,
    Point,
    Relationship,
    TreeNodeLayout,
)
from .options import LayoutOptions

__version__ = "0.1.0"

__all__ = [
    "compute_layout",
    "LayoutOptions",
    "Person",
    "Relationship",
    "Point",
    "FamilyUnit",
    "TreeNodeLayout",
    "JunctionNode",
    "EdgeStyle",
    "OrthogonalEdge",
    "GenerationRow",
    "LayoutResult",
    "StammbaumError",
    "OrphanReferenceError",
    "CycleDetectedError",
    "DuplicatePersonError",
    "InvalidPersonError",
    "InvalidRelationshipError",
    "GenerationConflictError",
    "ConfigurationError",
]
