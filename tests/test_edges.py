from stammbaum import LayoutOptions, Person, Point, compute_layout
from stammbaum.edges import simplify


def is_orthogonal(points):
    return all(a.x == b.x or a.y == b.y for a, b in zip(points, points[1:]))


def test_simplify_drops_repeats_and_straight_runs():
    points = [Point(0, 0), Point(0, 0), Point(0, 5), Point(0, 10), Point(4, 10), Point(4, 10)]

    assert simplify(points) == (Point(0, 0), Point(0, 10), Point(4, 10))


def test_edge_geometry():
    opts = LayoutOptions()
    layout = compute_layout(
        [
            Person("a", spouse_ids=("b",)),
            Person("b"),
            Person("c", parent_ids=("a", "b")),
            Person("d", parent_ids=("a", "b")),
        ],
        options=opts,
    )
    a, b, c = layout.node("a"), layout.node("b"), layout.node("c")
    junction = layout.junctions[0]

    (spouse,) = layout.edges_of_type("spouse")
    assert spouse.points == (
        Point(a.position.x + opts.node_width, opts.node_height / 2),
        Point(b.position.x, opts.node_height / 2),
    )

    down = next(e for e in layout.edges if e.id == "edge-a-junction-family-a+b")
    assert down.points[0] == Point(a.center.x, opts.node_height)
    assert down.points[-1] == junction.position

    to_c = next(e for e in layout.edges if e.id == "edge-junction-family-a+b-c")
    assert to_c.points[0] == junction.position
    assert to_c.points[-1] == Point(c.center.x, c.position.y)

    for edge in layout.edges:
        assert len(edge.points) >= 2
        assert is_orthogonal(edge.points)


def test_edge_styles():
    layout = compute_layout(
        [
            Person("a", spouse_ids=("b",)),
            Person("b"),
            Person("own", parent_ids=("a", "b")),
            Person("adopted", parent_ids=("a", "b"), adoptive_parent_ids=frozenset({"a", "b"})),
        ],
        options=LayoutOptions(line_stroke="#000000", stroke_width=1.5),
    )
    styles = {e.target: e.style for e in layout.edges}

    assert styles["b"].stroke == "#f472b6"
    assert styles["b"].stroke_dasharray == "5,5"
    assert styles["own"].stroke == "#000000"
    assert styles["own"].stroke_width == 1.5
    assert styles["own"].stroke_dasharray is None
    assert styles["adopted"].stroke_dasharray == "5 5"


def test_single_parent_edge_is_straight():
    layout = compute_layout([Person("p"), Person("c", parent_ids=("p",))])

    (down,) = layout.edges_of_type("parent-child")
    (to_c,) = layout.edges_of_type("distribution")
    assert len(down.points) == 2
    assert len(to_c.points) == 2
    assert down.d == "M 80 100 L 80 150"
    assert to_c.d == "M 80 150 L 80 200"


def test_childless_spouses_still_get_a_spouse_edge():
    layout = compute_layout([Person("a", spouse_ids=("b",)), Person("b")])

    assert layout.junctions == ()
    assert [e.id for e in layout.edges] == ["spouse-a-b"]


def crosses_box(a, b, box, width, height):
    """True if the axis-parallel segment a-b runs through the inside of ``box``."""
    left, top = box.x, box.y
    right, bottom = left + width, top + height
    if a.y == b.y:
        lo, hi = sorted((a.x, b.x))
        return top < a.y < bottom and lo < right and hi > left
    lo, hi = sorted((a.y, b.y))
    return left < a.x < right and lo < bottom and hi > top


def test_spouse_edge_passes_under_partners_in_between():
    opts = LayoutOptions()
    layout = compute_layout(
        [Person("p", spouse_ids=("q1", "q2", "q3")), Person("q1"), Person("q2"), Person("q3")],
        options=opts,
    )
    xs = [layout.node(pid).position.x for pid in ("q1", "p", "q2", "q3")]
    assert xs == sorted(xs)

    spouses = {e.id: e for e in layout.edges_of_type("spouse")}
    far = spouses["spouse-p-q3"]
    assert is_orthogonal(far.points)
    assert min(point.y for point in far.points) >= opts.node_height
    for edge in spouses.values():
        for a, b in zip(edge.points, edge.points[1:]):
            for node in layout.nodes:
                assert not crosses_box(a, b, node.position, opts.node_width, opts.node_height)

    # lanes of the same person stay apart
    lanes = {e.id: max(point.y for point in e.points) for e in spouses.values()}
    assert lanes["spouse-p-q3"] > opts.node_height
    assert lanes["spouse-p-q2"] == lanes["spouse-p-q1"] == opts.node_height / 2


def test_person_ids_with_plus_get_their_own_junction():
    layout = compute_layout(
        [
            Person("a"),
            Person("b"),
            Person("a+b"),
            Person("c1", parent_ids=("a", "b")),
            Person("c2", parent_ids=("a+b",)),
        ]
    )
    junctions = {j.parent_ids: j for j in layout.junctions}

    assert len({j.id for j in layout.junctions}) == 2
    assert layout.node("c1").family_unit_id != layout.node("c2").family_unit_id
    couple, single = junctions[("a", "b")], junctions[("a+b", None)]
    for child_id, junction in (("c1", couple), ("c2", single)):
        (edge,) = [e for e in layout.edges_of_type("distribution") if e.target == child_id]
        assert edge.source == junction.id
        assert edge.points[0] == junction.position
