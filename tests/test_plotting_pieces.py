from pathlib import Path

from geobuffer.buffer import DistanceSymmetric, EndRound, JoinRound, buffer
from geobuffer.geometry.primitives import LineString
from geobuffer.plotting.pieces import PiecePlotter


def test_piece_plotter_smoke(tmp_path: Path):
    plotter = PiecePlotter(outdir=tmp_path, stem="smoke")
    line = LineString(points=[(0.0, 0.0), (4.0, 0.0), (4.0, 3.0)])
    buffer(line, DistanceSymmetric(0.5), JoinRound(), EndRound(), visitor=plotter)
    assert [p.name for p in plotter.paths] == ["smoke_pieces.png", "smoke_rings.png"]
    for p in plotter.paths:
        assert p.exists()
        assert p.stat().st_size > 0
