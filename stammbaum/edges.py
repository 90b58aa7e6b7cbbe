import logging
from bisect import bisect_left, bisect_right
from collections import defaultdict
from typing import Dict, List, Sequence

from .graph import FamilyGraph
from .model import EdgeStyle, FamilyUnit, JunctionNode, OrthogonalEdge, Point
from .options import LayoutOptions

logger = logging.getLogger(__name__)

SPOUSE_DASH = "5,5"
ADOPTED_DASH = "5 5"


def route_edges(
    graph: FamilyGraph,
    units: Sequence[FamilyUnit],
    junctions: Sequence[JunctionNode],
    positions: Dict[str, Point],
    options: LayoutOptions,
) -> List[OrthogonalEdge]:
    """Orthogonal edges for every family unit, then for childless spouse pairs.

    Per unit: a spouse edge between two parents, one parent-child edge from
    each parent down to the junction and one distribution edge from the
    junction to each child.
    """
    router = _Router(positions, options)
    junction_of = {frozenset(j.parent_ids) - {None}: j for j in junctions}
    edges = []
    drawn = set()

    for unit in units:
        junction = junction_of[unit.key]
        if len(unit.parent_ids) == 2:
            edges.append(router.spouse(*unit.parent_ids))
            drawn.add(unit.key)
        for parent_id in unit.parent_ids:
            edges.append(router.parent_to_junction(parent_id, junction))
        for child_id in unit.child_ids:
            adopted = bool(graph.adoptive[child_id] & unit.key)
            edges.append(router.junction_to_child(junction, child_id, adopted))

    for a, b in graph.spouse_pairs:
        if frozenset((a, b)) not in drawn:
            edges.append(router.spouse(a, b))
            drawn.add(frozenset((a, b)))

    logger.debug("routed %d edges for %d family units", len(edges), len(units))
    return edges


def simplify(points) -> tuple:
    """Drop repeated points and the middle point of straight runs."""
    result = []
    for p in points:
        if result and p == result[-1]:
            continue
        if len(result) >= 2:
            a, b = result[-2], result[-1]
            if (a.x == b.x == p.x) or (a.y == b.y == p.y):
                result[-1] = p
                continue
        result.append(p)
    return tuple(result)


class _Router:
    def __init__(self, positions, options):
        self.positions = positions
        self.width = options.node_width
        self.height = options.node_height
        self.vertical_spacing = options.vertical_spacing
        self.line = EdgeStyle(options.line_stroke, options.stroke_width)
        self.adopted_line = EdgeStyle(options.line_stroke, options.stroke_width, ADOPTED_DASH)
        self.spouse_line = EdgeStyle(options.spouse_stroke, options.stroke_width, SPOUSE_DASH)
        self.rows = defaultdict(list)
        for point in positions.values():
            self.rows[point.y].append(point.x)
        for xs in self.rows.values():
            xs.sort()

    def _center_x(self, person_id):
        return self.positions[person_id].x + self.width / 2

    def _boxes_between(self, y, x1, x2):
        """Number of boxes on row ``y`` reaching into the open span (x1, x2)."""
        xs = self.rows[y]
        return bisect_left(xs, x2) - bisect_right(xs, x1 - self.width)

    def spouse(self, source, target) -> OrthogonalEdge:
        a, b = self.positions[source], self.positions[target]
        left, right = (a, b) if a.x <= b.x else (b, a)
        y1, y2 = left.y + self.height / 2, right.y + self.height / 2
        x1, x2 = left.x + self.width, right.x
        blocked = self._boxes_between(left.y, x1, x2) if left.y == right.y else 0
        if blocked:
            # other partners sit in between: pass under them through the gap below the row,
            # one lane per box passed so that lanes of the same person do not overlap
            bottom = left.y + self.height
            lane = bottom + self.vertical_spacing * blocked / (2 * (blocked + 1))
            start = left.x + self.width * (blocked + 1) / (blocked + 2)
            end = right.x + self.width / (blocked + 2)
            points = [
                Point(start, bottom),
                Point(start, lane),
                Point(end, lane),
                Point(end, bottom),
            ]
        else:
            if x2 < x1:
                # overlapping columns, connect the centers instead
                x1, x2 = left.x + self.width / 2, right.x + self.width / 2
            mid = (x1 + x2) / 2
            points = [Point(x1, y1), Point(mid, y1), Point(mid, y2), Point(x2, y2)]
        if left is b:
            points.reverse()
        return OrthogonalEdge(
            id=f"spouse-{source}-{target}",
            source=source,
            target=target,
            type="spouse",
            points=simplify(points),
            style=self.spouse_line,
        )

    def parent_to_junction(self, parent_id, junction) -> OrthogonalEdge:
        x = self._center_x(parent_id)
        bottom = self.positions[parent_id].y + self.height
        j = junction.position
        return OrthogonalEdge(
            id=f"edge-{parent_id}-{junction.id}",
            source=parent_id,
            target=junction.id,
            type="parent-child",
            points=simplify([Point(x, bottom), Point(x, j.y), Point(j.x, j.y)]),
            style=self.line,
        )

    def junction_to_child(self, junction, child_id, adopted=False) -> OrthogonalEdge:
        x = self._center_x(child_id)
        top = self.positions[child_id].y
        j = junction.position
        return OrthogonalEdge(
            id=f"edge-{junction.id}-{child_id}",
            source=junction.id,
            target=child_id,
            type="distribution",
            points=simplify([Point(j.x, j.y), Point(x, j.y), Point(x, top)]),
            style=self.adopted_line if adopted else self.line,
        )
