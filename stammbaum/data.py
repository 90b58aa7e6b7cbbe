import logging
from datetime import date, datetime
from typing import List, Optional

import pandas as pd

from .model import Person

logger = logging.getLogger(__name__)

# structural columns, everything else (raw dates included) ends up in attributes
_KNOWN_COLUMNS = {"id", "name", "sex", "parent1_id", "parent2_id", "spouse_id"}


def parse_date(value) -> Optional[date]:
    """ISO date or None. ``x`` (killed in action) prefixes are ignored."""
    if value is None or pd.isnull(value) or value == "":
        return None
    value = str(value)
    if value.startswith("x"):
        value = value[1:]
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        return None


def _parent(value):
    """Parent id and whether the link is adoptive (``*`` marked)."""
    if not value:
        return None, False
    return value.replace("*", ""), "*" in value


def load_persons(path, sep: str = ";") -> List[Person]:
    """Read persons from a CSV file with one row per person.

    ``spouse_id`` holds ``:``-separated ids; ``-`` stands for an unknown
    spouse and is skipped.
    """
    df = pd.read_csv(path, sep=sep, dtype=str)
    df = df.astype(object).where(df.notnull(), None)
    if "id" not in df.columns:
        raise ValueError(f"{path}: missing 'id' column")
    logger.info("loaded %d records from %s", len(df), path)
    return [person_from_row(row) for row in df.to_dict("records")]


def person_from_row(row: dict) -> Person:
    parent_ids = []
    adoptive = set()
    for column in ("parent1_id", "parent2_id"):
        parent_id, adopted = _parent(row.get(column))
        if parent_id:
            parent_ids.append(parent_id)
            if adopted:
                adoptive.add(parent_id)

    spouses = row.get("spouse_id") or ""
    spouse_ids = tuple(s for s in spouses.split(":") if s and s != "-")

    sex = row.get("sex")
    return Person(
        id=str(row["id"]),
        parent_ids=tuple(parent_ids),
        spouse_ids=spouse_ids,
        name=row.get("name") or "",
        sex=sex.lower() if sex else None,
        birth_date=parse_date(row.get("birth_date")),
        death_date=parse_date(row.get("death_date")),
        adoptive_parent_ids=frozenset(adoptive),
        attributes={
            key: value
            for key, value in row.items()
            if key not in _KNOWN_COLUMNS and value is not None
        },
    )
