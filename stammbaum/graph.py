import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import igraph as ig

from .errors import (
    CycleDetectedError,
    DuplicatePersonError,
    InvalidPersonError,
    InvalidRelationshipError,
    OrphanReferenceError,
)
from .model import (
    CHILD_TYPES,
    NON_BIOLOGICAL_TYPES,
    PARENT_TYPES,
    SPOUSE_TYPES,
    Person,
    Relationship,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FamilyGraph:
    """Validated adjacency of one input set.

    ``graph`` holds one vertex per person (in input order, vertex attribute
    ``name`` is the person id) and one directed edge per parent -> child link.
    """

    persons: Dict[str, Person]
    order: Dict[str, int]
    parents: Dict[str, Tuple[str, ...]]
    children: Dict[str, Tuple[str, ...]]
    spouses: Dict[str, Tuple[str, ...]]
    spouse_pairs: Tuple[Tuple[str, str], ...]
    couples: Tuple[Tuple[str, str], ...]
    partner_ids: Dict[str, Tuple[str, ...]]
    adoptive: Dict[str, frozenset]
    graph: ig.Graph
    root_id: Optional[str] = None

    def roots(self) -> List[str]:
        return [pid for pid in self.persons if not self.parents[pid]]

    def descendants(self, person_id: str) -> List[str]:
        """All descendants of ``person_id`` (itself included), in input order."""
        reached = self.graph.subcomponent(self.order[person_id], mode="out")
        names = self.graph.vs["name"]
        return [names[idx] for idx in sorted(reached)]

    def partners(self, person_id: str) -> List[str]:
        """Recorded spouses first, then co-parents, without duplicates."""
        return list(self.partner_ids[person_id])


def _pair(a, b, order):
    return tuple(sorted((a, b), key=order.__getitem__))


def _add_unique(values, value):
    if value not in values:
        values.append(value)


def build_graph(
    persons: Sequence[Person],
    relationships: Sequence[Relationship] = (),
    root_id: Optional[str] = None,
) -> FamilyGraph:
    order = {}
    by_id = {}
    for p in persons:
        if p.id in by_id:
            raise DuplicatePersonError(p.id)
        order[p.id] = len(order)
        by_id[p.id] = p

    parents = {pid: [] for pid in by_id}
    spouses = {pid: [] for pid in by_id}
    adoptive = defaultdict(set)

    def check(person_id, other_id, relation):
        if other_id not in by_id:
            raise OrphanReferenceError(person_id, other_id, relation)
        if other_id == person_id:
            if relation == "parent":
                raise CycleDetectedError((person_id, person_id))
            raise InvalidPersonError(f"person {person_id!r} is listed as their own {relation}")

    for p in persons:
        for parent_id in list(p.parent_ids) + sorted(p.adoptive_parent_ids - set(p.parent_ids)):
            check(p.id, parent_id, "parent")
            _add_unique(parents[p.id], parent_id)
        adoptive[p.id].update(p.adoptive_parent_ids)
        for spouse_id in p.spouse_ids:
            check(p.id, spouse_id, "spouse")
            _add_unique(spouses[p.id], spouse_id)
            _add_unique(spouses[spouse_id], p.id)

    for rel in relationships:
        for end, other in ((rel.from_id, rel.to_id), (rel.to_id, rel.from_id)):
            if end not in by_id:
                raise OrphanReferenceError(other, end, rel.type)
        if rel.type in PARENT_TYPES:
            parent_id, child_id = rel.from_id, rel.to_id
        elif rel.type in CHILD_TYPES:
            parent_id, child_id = rel.to_id, rel.from_id
        elif rel.type in SPOUSE_TYPES:
            check(rel.from_id, rel.to_id, rel.type)
            _add_unique(spouses[rel.from_id], rel.to_id)
            _add_unique(spouses[rel.to_id], rel.from_id)
            continue
        elif rel.type == "sibling":
            logger.debug("ignoring sibling relationship %s -> %s", rel.from_id, rel.to_id)
            continue
        else:
            raise InvalidRelationshipError(f"unsupported relationship type {rel.type!r}")
        check(child_id, parent_id, "parent")
        _add_unique(parents[child_id], parent_id)
        if rel.type in NON_BIOLOGICAL_TYPES:
            adoptive[child_id].add(parent_id)

    for pid, ids in parents.items():
        if len(ids) > 2:
            raise InvalidPersonError(f"person {pid!r} has more than two parents: {ids}")
        if set(ids) & set(spouses[pid]):
            logger.warning("person %s is recorded as spouse of their own parent", pid)

    if root_id is not None and root_id not in by_id:
        raise OrphanReferenceError(root_id, root_id, "root")

    children = defaultdict(list)
    edges = []
    for pid in by_id:
        for parent_id in parents[pid]:
            children[parent_id].append(pid)
            edges.append((order[parent_id], order[pid]))

    g = ig.Graph(n=len(order), edges=edges, directed=True)
    g.vs["name"] = list(by_id)
    cycle = _find_cycle(g)
    if cycle:
        raise CycleDetectedError(cycle)

    spouse_pairs = list(
        dict.fromkeys(_pair(pid, s, order) for pid in by_id for s in spouses[pid])
    )
    # two people sharing a child form a couple even without a recorded marriage
    co_parents = [_pair(*parents[pid], order) for pid in by_id if len(parents[pid]) == 2]
    couples = list(dict.fromkeys(spouse_pairs + co_parents))
    partner_ids = {pid: list(spouses[pid]) for pid in by_id}
    for a, b in couples[len(spouse_pairs):]:
        partner_ids[a].append(b)
        partner_ids[b].append(a)

    logger.debug(
        "built graph: %d persons, %d parent links, %d couples",
        len(order),
        len(edges),
        len(couples),
    )
    return FamilyGraph(
        persons=dict(by_id),
        order=order,
        parents={pid: tuple(ids) for pid, ids in parents.items()},
        children={pid: tuple(children[pid]) for pid in by_id},
        spouses={pid: tuple(ids) for pid, ids in spouses.items()},
        spouse_pairs=tuple(spouse_pairs),
        couples=tuple(couples),
        partner_ids={pid: tuple(ids) for pid, ids in partner_ids.items()},
        adoptive={pid: frozenset(adoptive[pid]) for pid in by_id},
        graph=g,
        root_id=root_id,
    )


def _find_cycle(g: ig.Graph) -> Optional[List[str]]:
    """Depth-first search for an ancestor revisited on the current path."""
    if g.is_dag():
        return None

    names = g.vs["name"]
    # 0 = unvisited, 1 = on current path, 2 = done
    state = [0] * g.vcount()
    for start in range(g.vcount()):
        if state[start]:
            continue
        state[start] = 1
        path = [start]
        stack = [iter(g.neighbors(start, mode="out"))]
        while stack:
            for nxt in stack[-1]:
                if state[nxt] == 1:
                    return [names[v] for v in path[path.index(nxt):]] + [names[nxt]]
                if state[nxt] == 0:
                    state[nxt] = 1
                    path.append(nxt)
                    stack.append(iter(g.neighbors(nxt, mode="out")))
                    break
            else:
                state[path.pop()] = 2
                stack.pop()
    return None
