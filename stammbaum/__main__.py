import argparse
import json
import logging
import sys
from pathlib import Path

from .data import load_persons
from .engine import compute_layout
from .errors import StammbaumError
from .options import CHILD_ORDERS, LayoutOptions
from .render import draw_tree

logger = logging.getLogger("stammbaum")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stammbaum", description="Lay out a family tree CSV as an orthogonal SVG diagram."
    )
    parser.add_argument("input_csv", type=Path, help="Path to the ';' separated person CSV.")
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path("descendants_tree.svg"),
        help="Path to output SVG file (default: descendants_tree.svg).",
    )
    parser.add_argument("--json", type=Path, help="Also write the layout as JSON.")
    parser.add_argument("--root", help="Person id whose tree is laid out first.")
    parser.add_argument("--child-order", choices=CHILD_ORDERS, default="input")
    parser.add_argument("--no-labels", action="store_true", help="Hide generation labels.")
    parser.add_argument("--locale", default="de", help="Locale for dates (default: de).")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        options = LayoutOptions(
            child_order=args.child_order, show_generation_labels=not args.no_labels
        )
        persons = load_persons(args.input_csv)
        layout = compute_layout(persons, options=options, root_id=args.root)
    except StammbaumError as exc:
        logger.error("%s: %s", args.input_csv, exc)
        return 1

    draw_tree(layout, str(args.output), locale=args.locale)
    if args.json:
        args.json.write_text(json.dumps(layout.to_dict(), indent=2), encoding="utf-8")
        logger.info("layout written to %s", args.json)
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
