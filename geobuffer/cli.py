from __future__ import annotations

import argparse
import json
from pathlib import Path

from geobuffer.buffer import (
    BufferSettings,
    DistanceAsymmetric,
    DistanceSymmetric,
    EndFlat,
    EndRound,
    GridRescalePolicy,
    JoinMiter,
    JoinRound,
    NoRescalePolicy,
    PieceCollection,
    buffer,
    buffer_geometry,
)
from geobuffer.buffer.config import POINT_CIRCLE_VERTICES, POINTS_PER_CIRCLE, SIMPLIFY_FRACTION
from geobuffer.core.errors import BufferInputError
from geobuffer.core.logging import setup_default_logging
from geobuffer.geometry.io import from_geojson, from_wkt, to_geojson, to_wkt
from geobuffer.geometry.primitives import Geometry


def _read_geometry(source: str) -> Geometry:
    path = Path(source).expanduser()
    try:
        is_file = path.is_file()
    except OSError:
        # long WKT strings are not valid file names
        is_file = False
    if path.suffix.lower() in (".wkt", ".json", ".geojson") or is_file:
        if not path.is_file():
            raise BufferInputError(f"File not found: {path}")
        text = path.read_text(encoding="utf-8")
        if path.suffix.lower() in (".json", ".geojson"):
            return from_geojson(text)
        return from_wkt(text)
    return from_wkt(source)


def _strategies(args: argparse.Namespace):
    fraction = float(args.simplify_fraction)
    if args.left is not None or args.right is not None:
        left = args.left if args.left is not None else args.distance
        right = args.right if args.right is not None else args.distance
        distance = DistanceAsymmetric(float(left), float(right), simplify_fraction=fraction)
    else:
        distance = DistanceSymmetric(float(args.distance), simplify_fraction=fraction)
    join = JoinMiter(float(args.miter_limit)) if args.join == "miter" else JoinRound(int(args.points))
    end = EndFlat() if args.end == "flat" else EndRound(int(args.points))
    robust = GridRescalePolicy(float(args.grid)) if args.grid else NoRescalePolicy()
    settings = BufferSettings(point_circle_vertices=int(args.circle_vertices))
    return distance, join, end, robust, settings


def _cmd_buffer(args: argparse.Namespace) -> int:
    try:
        geom = _read_geometry(args.geometry)
        distance, join, end, robust, settings = _strategies(args)
    except BufferInputError as exc:
        print(f"[ERROR] {exc}")
        return 2

    visitor = None
    if args.plot:
        from geobuffer.plotting.pieces import PiecePlotter

        plot_path = Path(args.plot).expanduser().resolve()
        visitor = PiecePlotter(outdir=plot_path.parent, stem=plot_path.stem)

    result = buffer(geom, distance, join, end, robust, visitor, settings=settings)

    if args.format == "geojson":
        text = json.dumps(to_geojson(result))
    else:
        text = to_wkt(result, rounding_precision=int(args.precision))

    if args.out:
        outpath = Path(args.out).expanduser().resolve()
        outpath.parent.mkdir(parents=True, exist_ok=True)
        outpath.write_text(text + "\n", encoding="utf-8")
        print(f"Saved: {outpath}")
    else:
        print(text)
    if visitor is not None:
        for p in visitor.paths:
            print(f"Saved: {p}")
    return 0


def _cmd_pieces(args: argparse.Namespace) -> int:
    try:
        geom = _read_geometry(args.geometry)
        distance, join, end, robust, settings = _strategies(args)
    except BufferInputError as exc:
        print(f"[ERROR] {exc}")
        return 2

    collection = PieceCollection()
    buffer_geometry(geom, collection, distance, join, end, robust, settings)
    if args.json:
        print(json.dumps(collection.summary(), indent=2, sort_keys=True))
        return 0

    s = collection.summary()
    print("geobuffer pieces")
    print(f"  Rings: {s['rings']}")
    print(f"  Pieces: {s['pieces']}")
    for kind, n in s["by_kind"].items():
        print(f"    {kind}: {n}")
    return 0


def _add_strategy_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("geometry", help="WKT text, or path to a .wkt / .geojson file")
    p.add_argument("--distance", type=float, required=True, help="Buffer distance (negative shrinks areas)")
    p.add_argument("--left", type=float, default=None, help="Distance on the left side (asymmetric)")
    p.add_argument("--right", type=float, default=None, help="Distance on the right side (asymmetric)")
    p.add_argument("--join", choices=["round", "miter"], default="round")
    p.add_argument("--end", choices=["round", "flat"], default="round")
    p.add_argument("--points", type=int, default=POINTS_PER_CIRCLE, help="Points per full circle for round joins/caps")
    p.add_argument("--miter-limit", type=float, default=5.0)
    p.add_argument("--circle-vertices", type=int, default=POINT_CIRCLE_VERTICES, help="Vertices of a buffered point")
    p.add_argument("--simplify-fraction", type=float, default=SIMPLIFY_FRACTION)
    p.add_argument("--grid", type=float, default=0.0, help="Snap grid for duplicate-point tests (0 = exact)")


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="geobuffer")
    p.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    sub = p.add_subparsers(dest="cmd", required=True)

    b = sub.add_parser("buffer", help="Buffer a geometry and print the result.")
    _add_strategy_args(b)
    b.add_argument("--format", choices=["wkt", "geojson"], default="wkt")
    b.add_argument("--precision", type=int, default=6, help="WKT rounding precision")
    b.add_argument("--out", default=None, help="Write the result to this file")
    b.add_argument("--plot", default=None, help="Save piece/ring plots next to this PNG stem")
    b.set_defaults(func=_cmd_buffer)

    pc = sub.add_parser("pieces", help="Generate raw pieces and print a summary.")
    _add_strategy_args(pc)
    pc.add_argument("--json", action="store_true", help="Print the summary as JSON")
    pc.set_defaults(func=_cmd_pieces)

    args = p.parse_args(argv)
    setup_default_logging(args.log_level)
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
