from typing import Dict, List, Sequence

from .model import FamilyUnit, JunctionNode, Point
from .options import LayoutOptions


def junction_id(unit: FamilyUnit) -> str:
    return f"junction-{unit.id}"


def synthesize_junctions(
    units: Sequence[FamilyUnit], positions: Dict[str, Point], options: LayoutOptions
) -> List[JunctionNode]:
    """One merge point per family unit.

    The junction sits below the midpoint of the parents' centers, halfway
    between the bottom of the parent row and the top of the nearest child row.
    """
    junctions = []
    for unit in units:
        centers = [positions[p].x + options.node_width / 2 for p in unit.parent_ids]
        parent_bottom = max(positions[p].y for p in unit.parent_ids) + options.node_height
        child_top = min(positions[c].y for c in unit.child_ids)
        parent_ids = unit.parent_ids if len(unit.parent_ids) == 2 else (unit.parent_ids[0], None)
        junctions.append(
            JunctionNode(
                id=junction_id(unit),
                position=Point(sum(centers) / len(centers), (parent_bottom + child_top) / 2),
                parent_ids=tuple(parent_ids),
                child_ids=unit.child_ids,
                family_unit_id=unit.id,
            )
        )
    return junctions
