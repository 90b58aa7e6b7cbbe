import logging
from typing import Optional, Sequence

from .edges import route_edges
from .families import resolve_family_units
from .generations import assign_generations
from .graph import build_graph
from .junctions import synthesize_junctions
from .model import LayoutResult, Person, Relationship, TreeNodeLayout
from .options import LayoutOptions
from .positions import generation_rows, plan_positions

logger = logging.getLogger(__name__)


def compute_layout(
    persons: Sequence[Person],
    relationships: Sequence[Relationship] = (),
    options: Optional[LayoutOptions] = None,
    root_id: Optional[str] = None,
) -> LayoutResult:
    """Lay out a family tree (or forest) as generation rows with orthogonal edges.

    Inputs are never modified and the result depends only on the arguments.
    Invalid data raises a ``StammbaumError`` subclass; no partial layout is
    ever returned.
    """
    if options is None:
        options = LayoutOptions()
    elif not isinstance(options, LayoutOptions):
        options = LayoutOptions.from_mapping(options)

    graph = build_graph(persons, relationships, root_id=root_id)
    generations = assign_generations(graph)
    units = resolve_family_units(graph, generations, options.child_order)
    positions = plan_positions(graph, generations, units, options)
    junctions = synthesize_junctions(units, positions, options)
    edges = route_edges(graph, units, junctions, positions, options)

    owner = {child_id: unit.id for unit in units for child_id in unit.child_ids}
    nodes = tuple(
        TreeNodeLayout(
            id=pid,
            person=person,
            generation=generations[pid],
            position=positions[pid],
            width=options.node_width,
            height=options.node_height,
            family_unit_id=owner.get(pid),
            is_root=not graph.parents[pid],
        )
        for pid, person in graph.persons.items()
    )
    logger.info(
        "computed layout: %d persons, %d family units, %d edges",
        len(nodes),
        len(units),
        len(edges),
    )
    return LayoutResult(
        nodes=nodes,
        junctions=tuple(junctions),
        edges=tuple(edges),
        generation_rows=tuple(generation_rows(generations, options)),
    )
