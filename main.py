from __future__ import annotations

import argparse
import csv
from datetime import date
import json
import logging
from pathlib import Path
from typing import Any, Sequence

from yielddesk.feed import parse_treasury_xml
from yieldplot import PRESETS, Surface, compute_layout, get_preset, load_chart_config, render
from yieldplot.adapters import normalize_points
from yieldplot.series import YieldPoint


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="yieldcurve")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = parser.add_subparsers(dest="command", required=True)

    draw = sub.add_parser("render", help="Render a yield curve (JSON or CSV term/rate points) to PNG.")
    draw.add_argument("points", type=Path)
    draw.add_argument("--out", type=Path, required=True)
    draw.add_argument("--preset", choices=sorted(PRESETS), default="treasury")
    draw.add_argument("--config", type=Path, default=None, help="TOML chart config; overrides --preset.")
    draw.add_argument("--width", type=int, default=980)
    draw.add_argument("--height", type=int, default=520)
    draw.add_argument("--dpr", type=float, default=1.0, help="Device pixel ratio of the output image.")
    draw.add_argument("--as-of", type=date.fromisoformat, default=None, help="Subtitle date (YYYY-MM-DD).")

    feed = sub.add_parser("parse-feed", help="Parse a Treasury daily yield curve XML document to JSON.")
    feed.add_argument("xml", type=Path)
    feed.add_argument("--on-or-before", type=date.fromisoformat, default=None)

    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    if args.command == "render":
        config = load_chart_config(args.config) if args.config is not None else get_preset(args.preset)
        points = load_points(args.points)
        if not points:
            print(f"no points in {args.points}; nothing rendered")
            return 1
        if compute_layout(args.width, args.height, config.axis, config.margins).is_empty:
            print(f"{args.width}x{args.height} leaves no room inside the chart margins")
            return 1
        surface = Surface(width=args.width, height=args.height, device_pixel_ratio=args.dpr)
        render(points, surface, config, as_of=args.as_of)
        if not surface.is_ready:
            print(f"could not render {args.width}x{args.height} at dpr {args.dpr}; nothing written")
            return 1
        surface.save_png(args.out)
        print(f"wrote {args.out} ({len(points)} points)")
        return 0

    if args.command == "parse-feed":
        on_or_before = args.on_or_before or date.today()
        curve = parse_treasury_xml(args.xml.read_text(encoding="utf-8"), on_or_before)
        print(json.dumps([{"term": p.term, "rate": p.rate} for p in curve], indent=2))
        return 0

    raise RuntimeError(f"unsupported command: {args.command}")


def load_points(path: Path) -> tuple[YieldPoint, ...]:
    if path.suffix.lower() == ".csv":
        with path.open(newline="", encoding="utf-8") as f:
            rows = [{"term": row["term"], "rate": row["rate"]} for row in csv.DictReader(f)]
        return normalize_points(rows)
    raw = json.loads(path.read_text(encoding="utf-8"))
    return normalize_points(_unwrap_curve(raw))


def _unwrap_curve(raw: Any) -> Any:
    # Accept a bare list or a GraphQL `{data: {yieldCurve: [...]}}` response.
    if isinstance(raw, dict):
        if "data" in raw:
            raw = raw["data"]
        if isinstance(raw, dict) and "yieldCurve" in raw:
            return raw["yieldCurve"]
        raise ValueError("expected a list of points or a `yieldCurve` field")
    return raw


if __name__ == "__main__":
    raise SystemExit(main())
