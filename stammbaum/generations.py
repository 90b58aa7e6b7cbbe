import logging
from collections import defaultdict, deque
from typing import Dict, List

from .errors import GenerationConflictError
from .graph import FamilyGraph

logger = logging.getLogger(__name__)


def assign_generations(graph: FamilyGraph) -> Dict[str, int]:
    """Generation (depth) of every person.

    Every root starts at 0, a child sits one row below its deepest parent and
    the two members of a couple always share a row.
    """
    generation, topo = _level_by_level(graph)
    _align_couples(graph, generation, topo)
    return generation


def _level_by_level(graph: FamilyGraph):
    g = graph.graph
    names = g.vs["name"]
    pending = g.degree(mode="in")
    generation = {}
    queue = deque(v for v in range(g.vcount()) if pending[v] == 0)
    for v in queue:
        generation[names[v]] = 0

    topo = []
    while queue:
        v = queue.popleft()
        topo.append(names[v])
        for child in g.neighbors(v, mode="out"):
            pending[child] -= 1
            # deferred until the last parent is resolved
            if pending[child] == 0:
                generation[names[child]] = (
                    max(generation[names[p]] for p in g.neighbors(child, mode="in")) + 1
                )
                queue.append(child)
    return generation, topo


def _align_couples(graph: FamilyGraph, generation: Dict[str, int], topo: List[str]):
    position = {pid: i for i, pid in enumerate(topo)}
    couples_of = defaultdict(list)
    for couple in graph.couples:
        for pid in couple:
            couples_of[pid].append(couple)

    def mismatched(couple):
        return generation[couple[0]] != generation[couple[1]]

    worklist = deque(c for c in graph.couples if mismatched(c))
    queued = set(worklist)
    floor = {}
    limit = len(graph.couples) * (len(graph.persons) + 1)
    steps = 0
    while worklist:
        couple = worklist.popleft()
        queued.discard(couple)
        if not mismatched(couple):
            continue
        steps += 1
        if steps > limit:
            raise GenerationConflictError(*couple)

        low, high = sorted(couple, key=generation.__getitem__)
        subtree = graph.descendants(low)
        if high in subtree:
            raise GenerationConflictError(low, high)
        logger.debug(
            "raising %s from generation %d to %d (%d persons in subtree)",
            low,
            generation[low],
            generation[high],
            len(subtree),
        )
        floor[low] = generation[high]

        shifted = []
        for pid in sorted(subtree, key=position.__getitem__):
            parents = graph.parents[pid]
            base = max(generation[p] for p in parents) + 1 if parents else 0
            value = max(base, floor.get(pid, 0))
            if value != generation[pid]:
                generation[pid] = value
                shifted.append(pid)

        for pid in shifted:
            for other in couples_of[pid]:
                if other not in queued and mismatched(other):
                    worklist.append(other)
                    queued.add(other)
