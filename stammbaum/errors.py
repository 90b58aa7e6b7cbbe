class StammbaumError(Exception):
    """Base class for every error raised while building a family tree layout."""


class OrphanReferenceError(StammbaumError):
    """A relationship names a person that is not part of the input."""

    def __init__(self, person_id, missing_id, relation):
        self.person_id = person_id
        self.missing_id = missing_id
        self.relation = relation
        super().__init__(
            f"{relation} of person {person_id!r} references unknown person {missing_id!r}"
        )


class CycleDetectedError(StammbaumError):
    """The parent-child relation contains a cycle."""

    def __init__(self, cycle):
        self.cycle = tuple(cycle)
        super().__init__("parent-child cycle: " + " -> ".join(self.cycle))


class DuplicatePersonError(StammbaumError):
    def __init__(self, person_id):
        self.person_id = person_id
        super().__init__(f"person {person_id!r} is supplied more than once")


class InvalidPersonError(StammbaumError):
    """A person record is inconsistent (too many parents, self references)."""


class InvalidRelationshipError(StammbaumError):
    pass


class GenerationConflictError(StammbaumError):
    """Two spouses cannot share a generation, e.g. one descends from the other."""

    def __init__(self, first_id, second_id):
        self.pair = (first_id, second_id)
        super().__init__(
            f"spouses {first_id!r} and {second_id!r} cannot be aligned to one generation"
        )


class ConfigurationError(StammbaumError, ValueError):
    pass
