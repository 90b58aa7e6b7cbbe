import logging
from datetime import date
from typing import Dict, List

from .graph import FamilyGraph
from .model import FamilyUnit

logger = logging.getLogger(__name__)


def unit_id(parent_ids) -> str:
    """``family-`` plus the parent ids joined by ``+``.

    ``%`` and ``+`` inside an id are percent-escaped, so ids like ``a+b`` can
    not collide with the couple ``a``, ``b``.
    """
    return "family-" + "+".join(_escape(p) for p in parent_ids)


def _escape(person_id: str) -> str:
    return person_id.replace("%", "%25").replace("+", "%2B")



def resolve_family_units(
    graph: FamilyGraph, generations: Dict[str, int], child_order: str = "input"
) -> List[FamilyUnit]:
    """Group every person with parents under its parent set.

    Units are ordered by parent generation and then by the input position of
    their first child, so the result does not depend on dict iteration.
    """
    groups = {}
    for pid in graph.persons:
        parent_ids = graph.parents[pid]
        if not parent_ids:
            continue
        key = tuple(sorted(parent_ids, key=graph.order.__getitem__))
        groups.setdefault(key, []).append(pid)

    units = []
    for parent_ids, child_ids in groups.items():
        if child_order == "birth_date":
            child_ids = sorted(child_ids, key=lambda c: _birth_key(graph, c))
        units.append(FamilyUnit(unit_id(parent_ids), parent_ids, tuple(child_ids)))

    units.sort(
        key=lambda u: (
            max(generations[p] for p in u.parent_ids),
            min(graph.order[c] for c in u.child_ids),
        )
    )
    logger.debug("resolved %d family units", len(units))
    return units


def _birth_key(graph: FamilyGraph, person_id: str):
    born = graph.persons[person_id].birth_date
    # undated siblings go last, ties keep input order
    return (born is None, born or date.min, graph.order[person_id])
