import math
from dataclasses import dataclass, fields

from .errors import ConfigurationError

HORIZONTAL_SPACING = 40.0
VERTICAL_SPACING = 100.0
NODE_WIDTH = 160.0
NODE_HEIGHT = 100.0
SPOUSE_GAP = 20.0

CHILD_ORDERS = ("input", "birth_date")

# camelCase keys used by the rendering layer
_OPTION_KEYS = {
    "horizontalSpacing": "horizontal_spacing",
    "verticalSpacing": "vertical_spacing",
    "nodeWidth": "node_width",
    "nodeHeight": "node_height",
    "showGenerationLabels": "show_generation_labels",
    "spouseGap": "spouse_gap",
    "childOrder": "child_order",
    "spouseStroke": "spouse_stroke",
    "lineStroke": "line_stroke",
    "strokeWidth": "stroke_width",
}


@dataclass(frozen=True)
class LayoutOptions:
    """Geometry and style settings for one layout computation.

    Parameters
    ----------
    horizontal_spacing : float
        Minimum gap between neighbouring nodes that are not spouses.
    vertical_spacing : float
        Gap between the bottom of a generation row and the top of the next.
    node_width, node_height : float
        Size of a person box; ``node_height`` is also the row height.
    show_generation_labels : bool
        Copied into every ``GenerationRow.label_visible``.
    spouse_gap : float
        Gap between spouses placed side by side.
    child_order : str
        ``"input"`` keeps siblings in input order, ``"birth_date"`` sorts
        them by birth date (undated siblings last, input order otherwise).
    """

    horizontal_spacing: float = HORIZONTAL_SPACING
    vertical_spacing: float = VERTICAL_SPACING
    node_width: float = NODE_WIDTH
    node_height: float = NODE_HEIGHT
    show_generation_labels: bool = True
    spouse_gap: float = SPOUSE_GAP
    child_order: str = "input"
    spouse_stroke: str = "#f472b6"
    line_stroke: str = "#cbd5e1"
    stroke_width: float = 2.0

    def __post_init__(self):
        for name in ("horizontal_spacing", "vertical_spacing", "spouse_gap"):
            value = _number(self, name)
            if value < 0:
                raise ConfigurationError(f"{name} must not be negative, got {value}")
        for name in ("node_width", "node_height", "stroke_width"):
            value = _number(self, name)
            if value <= 0:
                raise ConfigurationError(f"{name} must be positive, got {value}")
        if not isinstance(self.show_generation_labels, bool):
            raise ConfigurationError(
                f"show_generation_labels must be a bool, got {self.show_generation_labels!r}"
            )
        for name in ("spouse_stroke", "line_stroke"):
            if not isinstance(getattr(self, name), str):
                raise ConfigurationError(f"{name} must be a string, got {getattr(self, name)!r}")
        if self.child_order not in CHILD_ORDERS:
            raise ConfigurationError(
                f"child_order must be one of {CHILD_ORDERS}, got {self.child_order!r}"
            )

    @property
    def row_pitch(self) -> float:
        return self.node_height + self.vertical_spacing

    @classmethod
    def from_mapping(cls, values) -> "LayoutOptions":
        """Build options from snake_case or camelCase keys, ``None`` meaning default."""
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in (values or {}).items():
            name = _OPTION_KEYS.get(key, key)
            if name not in known:
                raise ConfigurationError(f"unknown layout option {key!r}")
            if value is not None:
                kwargs[name] = value
        return cls(**kwargs)


def _number(options, name):
    value = getattr(options, name)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise ConfigurationError(f"{name} must be finite, got {value}")
    return value
