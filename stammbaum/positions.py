import logging
from typing import Dict, List, Sequence

import igraph as ig

from .graph import FamilyGraph
from .model import FamilyUnit, GenerationRow, Point
from .options import LayoutOptions

logger = logging.getLogger(__name__)


def plan_positions(
    graph: FamilyGraph,
    generations: Dict[str, int],
    units: Sequence[FamilyUnit],
    options: LayoutOptions,
) -> Dict[str, Point]:
    """Top-left corner of every person box, keyed by person id in input order."""
    xs = _Planner(graph, generations, units, options).run()
    return {
        pid: Point(xs[pid], generations[pid] * options.row_pitch) for pid in graph.persons
    }


def generation_rows(generations: Dict[str, int], options: LayoutOptions) -> List[GenerationRow]:
    deepest = max(generations.values(), default=-1)
    return [
        GenerationRow(
            level=level,
            y=level * options.row_pitch,
            height=options.node_height,
            label=f"Generation {_roman(level + 1)}",
            label_visible=options.show_generation_labels,
        )
        for level in range(deepest + 1)
    ]


def _roman(value: int) -> str:
    numerals = [
        (1000, "M"), (900, "CM"), (500, "D"), (400, "CD"), (100, "C"), (90, "XC"),
        (50, "L"), (40, "XL"), (10, "X"), (9, "IX"), (5, "V"), (4, "IV"), (1, "I"),
    ]
    result = ""
    for number, numeral in numerals:
        while value >= number:
            result += numeral
            value -= number
    return result


class _Block:
    """A couple and everything laid out beneath it, in block-local x coordinates.

    Sub-blocks are kept with their offset instead of being shifted in place;
    the contour maps each generation to the [left, right] extent it occupies.
    """

    def __init__(self):
        self.placements = []
        self.children = []
        self.contour = {}
        self.head_x = 0.0

    def add_contour(self, generation, left, right):
        span = self.contour.get(generation)
        if span is None:
            self.contour[generation] = [left, right]
        else:
            span[0] = min(span[0], left)
            span[1] = max(span[1], right)

    def absorb(self, block, dx):
        self.children.append((block, dx))
        for generation, (left, right) in block.contour.items():
            self.add_contour(generation, left + dx, right + dx)


def _offset_after(contour, block, gap):
    """Smallest shift that puts ``block`` right of ``contour`` on every shared row."""
    if not contour:
        return 0.0
    shared = [g for g in block.contour if g in contour]
    if shared:
        return max(contour[g][1] + gap - block.contour[g][0] for g in shared)
    right = max(r for _, r in contour.values())
    left = min(l for l, _ in block.contour.values())
    return right + gap - left


class _Planner:
    def __init__(self, graph, generations, units, options):
        self.graph = graph
        self.generations = generations
        self.options = options
        self.pitch_x = options.node_width + options.spouse_gap
        self.units_of = {pid: [] for pid in graph.persons}
        for unit in units:
            for parent_id in unit.parent_ids:
                self.units_of[parent_id].append(unit)
        self.placed = set()
        self.claimed = set()

    def run(self) -> Dict[str, float]:
        forest = _Block()
        trees = 0
        for pid in self._start_order():
            if pid in self.placed:
                continue
            block = self._layout(pid)
            dx = _offset_after(forest.contour, block, self.options.horizontal_spacing)
            forest.absorb(block, dx)
            trees += 1
        logger.debug("placed %d persons in %d trees", len(self.placed), trees)
        return self._flatten(forest)

    def _start_order(self) -> List[str]:
        graph = self.graph
        roots = graph.roots()
        # roots married to someone with parents are placed beside their partner
        married_in = {
            pid for pid in roots if any(graph.parents[q] for q in graph.partners(pid))
        }
        primary = [pid for pid in roots if pid not in married_in]
        if graph.root_id is not None:
            membership = _components(graph)
            home = membership[graph.root_id]
            primary.sort(key=lambda pid: membership[pid] != home)
        deferred = [pid for pid in roots if pid in married_in]
        return primary + deferred + list(graph.persons)

    def _cluster(self, pid) -> List[str]:
        partners = [
            q
            for q in self.graph.partners(pid)
            if q not in self.placed and self.generations[q] == self.generations[pid]
        ]
        if len(partners) > 1:
            return [partners[0], pid, *partners[1:]]
        if partners and self.graph.persons[pid].sex == "f":
            return [*partners, pid]
        return [pid, *partners]

    def _layout(self, pid) -> _Block:
        options = self.options
        members = self._cluster(pid)
        self.placed.update(members)

        units = []
        for member in members:
            for unit in self.units_of[member]:
                if unit.id in self.claimed:
                    continue
                if all(p in self.placed for p in unit.parent_ids):
                    self.claimed.add(unit.id)
                    units.append(unit)

        block = _Block()
        heads = []
        for unit in units:
            for child_id in unit.child_ids:
                # already placed through another unit or as a spouse
                if child_id in self.placed:
                    continue
                sub = self._layout(child_id)
                dx = _offset_after(block.contour, sub, options.horizontal_spacing)
                block.absorb(sub, dx)
                heads.append(sub.head_x + dx)

        couple = _Block()
        for i, member in enumerate(members):
            x = i * self.pitch_x
            couple.placements.append((member, x))
            couple.add_contour(self.generations[member], x, x + options.node_width)

        origin = 0.0
        if heads:
            width = len(members) * self.pitch_x - options.spouse_gap
            origin = (min(heads) + max(heads) + options.node_width) / 2 - width / 2
        if any(g in block.contour for g in couple.contour):
            origin = max(origin, _offset_after(block.contour, couple, options.horizontal_spacing))
        block.absorb(couple, origin)
        block.head_x = origin + members.index(pid) * self.pitch_x
        return block

    def _flatten(self, forest) -> Dict[str, float]:
        xs = {}
        stack = [(forest, 0.0)]
        while stack:
            block, offset = stack.pop()
            for pid, x in block.placements:
                xs[pid] = x + offset
            for child, dx in block.children:
                stack.append((child, offset + dx))
        shift = min(xs.values(), default=0.0)
        return {pid: x - shift for pid, x in xs.items()}


def _components(graph: FamilyGraph) -> Dict[str, int]:
    """Connected component of every person over parent and couple links."""
    edges = graph.graph.get_edgelist()
    edges += [(graph.order[a], graph.order[b]) for a, b in graph.couples]
    g = ig.Graph(n=len(graph.order), edges=edges)
    membership = g.connected_components().membership
    return {pid: membership[idx] for pid, idx in graph.order.items()}
