import pytest

from stammbaum import (
    CycleDetectedError,
    DuplicatePersonError,
    InvalidPersonError,
    InvalidRelationshipError,
    OrphanReferenceError,
    Person,
    Relationship,
)
from stammbaum.graph import build_graph


def test_adjacency_indexes(family):
    graph = build_graph(family)

    assert graph.parents["hans"] == ("emil", "frieda")
    assert graph.children["emil"] == ("hans", "grete", "lotte")
    assert graph.children["max"] == ()
    assert graph.roots() == ["karl", "anna", "frieda", "martha", "ida", "wilhelm"]
    assert graph.graph.vcount() == len(family)
    assert graph.graph.ecount() == sum(len(p.parent_ids) for p in family)


def test_spouse_pairs_are_normalized():
    graph = build_graph(
        [
            Person("a", spouse_ids=("b",)),
            Person("b", spouse_ids=("a",)),
            Person("c", spouse_ids=("a",)),
        ]
    )

    assert graph.spouse_pairs == (("a", "b"), ("a", "c"))
    assert graph.spouses["a"] == ("b", "c")


def test_co_parents_form_a_couple():
    graph = build_graph(
        [Person("m"), Person("f"), Person("kid", parent_ids=("f", "m"))]
    )

    assert graph.spouse_pairs == ()
    assert graph.couples == (("m", "f"),)
    assert graph.partners("m") == ["f"]


def test_relationship_records_are_merged():
    graph = build_graph(
        [Person("p"), Person("q"), Person("c", parent_ids=("p",)), Person("s")],
        [
            Relationship("p", "c", "parent"),
            Relationship("c", "q", "adoptive-child"),
            Relationship("c", "s", "partner"),
            Relationship("c", "p", "sibling"),
        ],
    )

    assert graph.parents["c"] == ("p", "q")
    assert graph.adoptive["c"] == frozenset({"q"})
    assert graph.spouses["s"] == ("c",)


def test_descendants(family):
    graph = build_graph(family)

    assert graph.descendants("otto") == ["otto", "fritz", "max"]
    assert graph.descendants("paula") == ["paula", "kurt"]


def test_unknown_parent_is_rejected():
    with pytest.raises(OrphanReferenceError) as exc:
        build_graph([Person("a", parent_ids=("ghost",))])

    assert exc.value.missing_id == "ghost"
    assert exc.value.relation == "parent"


def test_unknown_spouse_in_relationship_is_rejected():
    with pytest.raises(OrphanReferenceError):
        build_graph([Person("a")], [Relationship("a", "ghost", "spouse")])


def test_unknown_root_is_rejected():
    with pytest.raises(OrphanReferenceError):
        build_graph([Person("a")], root_id="b")


def test_cycle_is_detected():
    with pytest.raises(CycleDetectedError) as exc:
        build_graph(
            [
                Person("a", parent_ids=("c",)),
                Person("b", parent_ids=("a",)),
                Person("c", parent_ids=("b",)),
                Person("d"),
            ]
        )

    cycle = exc.value.cycle
    assert cycle[0] == cycle[-1]
    assert set(cycle) == {"a", "b", "c"}


def test_duplicate_person():
    with pytest.raises(DuplicatePersonError):
        build_graph([Person("a"), Person("a")])


def test_too_many_parents():
    with pytest.raises(InvalidPersonError):
        build_graph(
            [Person("a"), Person("b"), Person("c"), Person("d", parent_ids=("a", "b"))],
            [Relationship("c", "d", "step-parent")],
        )


def test_self_reference():
    with pytest.raises(InvalidPersonError):
        build_graph([Person("a", spouse_ids=("a",))])


def test_own_parent_is_a_cycle():
    with pytest.raises(CycleDetectedError) as exc:
        build_graph([Person("a", parent_ids=("a",))])
    assert exc.value.cycle == ("a", "a")

    with pytest.raises(CycleDetectedError):
        build_graph([Person("a")], [Relationship("a", "a", "parent")])


def test_unknown_relationship_type():
    with pytest.raises(InvalidRelationshipError):
        build_graph([Person("a"), Person("b")], [Relationship("a", "b", "godparent")])
