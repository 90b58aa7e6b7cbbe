import logging

import svgwrite
from babel.dates import format_date

from .data import parse_date
from .model import LayoutResult

logger = logging.getLogger(__name__)

text_font = "Georgia, 'Times New Roman', Times, serif"
margin = 40
label_width = 120


def date2str(value, locale: str = "de") -> str:
    """Format a date for display; free text (``#`` prefixed) is kept as is."""
    if value is None or value == "":
        return ""
    if isinstance(value, str) and value.startswith("#"):
        return value[1:]
    parsed = value if not isinstance(value, str) else parse_date(value)
    if parsed is None:
        return str(value)
    # 'd. MMM y' = e.g., 15. Jan 1880 in German format
    return format_date(parsed, format="d. MMM y", locale=locale)


def get_colors(sex, is_married_in: bool):
    """
    Returns (fill_color, stroke_color) based on sex and whether the person
    married into the family. Married-in persons get a muted variant.
    """
    if sex == "m":
        base_fill, base_stroke = "#E3F2FD", "#4A90E2"  # light blue / blue
    elif sex == "f":
        base_fill, base_stroke = "#FCE4EC", "#FF6EC7"  # light pink / pink
    else:
        base_fill, base_stroke = "#F5F5F5", "#9E9E9E"

    if not is_married_in:
        return base_fill, base_stroke
    return base_fill, "white"


def draw_tree(layout: LayoutResult, filename: str, locale: str = "de") -> str:
    """Write ``layout`` as an SVG file and return the file name."""
    right = max((n.position.x + n.width for n in layout.nodes), default=0)
    bottom = max((n.position.y + n.height for n in layout.nodes), default=0)
    dx = margin + (label_width if any(r.label_visible for r in layout.generation_rows) else 0)
    dy = margin
    # debug=False: person ids need not be valid XML names
    dwg = svgwrite.Drawing(filename, size=(right + dx + margin, bottom + dy + margin), debug=False)

    for row in layout.generation_rows:
        if not row.label_visible:
            continue
        dwg.add(
            dwg.text(
                row.label,
                insert=(margin, row.y + dy + row.height / 2),
                dominant_baseline="middle",
                font_size="12px",
                font_family=text_font,
                fill="#2c3e50",
            )
        )

    # edges below the boxes
    for edge in layout.edges:
        d = " ".join(
            [f"M {edge.points[0].x + dx},{edge.points[0].y + dy}"]
            + [f"L {p.x + dx},{p.y + dy}" for p in edge.points[1:]]
        )
        dwg.add(
            dwg.path(
                d=d,
                id=edge.id,
                stroke=edge.style.stroke,
                fill="none",
                stroke_width=edge.style.stroke_width,
                stroke_dasharray=edge.style.stroke_dasharray or "none",
            )
        )

    for junction in layout.junctions:
        dwg.add(
            dwg.circle(
                center=(junction.position.x + dx, junction.position.y + dy),
                r=3,
                id=junction.id,
                fill="#94a3b8",
            )
        )

    for node in layout.nodes:
        person = node.person
        x, y = node.position.x + dx, node.position.y + dy
        fill, stroke = get_colors(person.sex, node.is_root and node.generation > 0)
        dwg.add(
            dwg.rect(
                insert=(x, y),
                size=(node.width, node.height),
                id=node.id,
                fill=fill,
                stroke=stroke,
                stroke_width=1.5,
                rx=4,  # rounded corners
            )
        )
        cx = x + node.width / 2
        dwg.add(
            dwg.text(
                person.name or person.id,
                insert=(cx, y + node.height / 3),
                text_anchor="middle",
                dominant_baseline="middle",
                font_size="10px",
                font_family=text_font,
                fill="black",
                font_weight="bold",
            )
        )

        born = date2str(person.attributes.get("birth_date") or person.birth_date, locale)
        died = date2str(person.attributes.get("death_date") or person.death_date, locale)
        for k, info in enumerate((f"* {born}" if born else "", f"† {died}" if died else "")):
            if not info:
                continue
            dwg.add(
                dwg.text(
                    info,
                    insert=(cx, y + node.height / 2 + 6 + k * 12),
                    text_anchor="middle",
                    font_size="10px",
                    font_family=text_font,
                    fill="#666666",
                )
            )

    dwg.save()
    logger.info("SVG file created: %s", filename)
    return filename
