from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List

import matplotlib
matplotlib.use("Agg")  # headless-safe for servers/CI
import matplotlib.pyplot as plt  # noqa: E402

from geobuffer.buffer.pieces import PieceCollection, PieceKind  # noqa: E402


_KIND_COLORS: Dict[PieceKind, str] = {
    PieceKind.SEGMENT: "tab:blue",
    PieceKind.JOIN: "tab:green",
    PieceKind.END_CAP: "tab:orange",
    PieceKind.CIRCLE: "tab:purple",
    PieceKind.CONCAVE: "tab:red",
}


def _ensure_outdir(outdir: Path) -> None:
    outdir.mkdir(parents=True, exist_ok=True)


def plot_pieces(collection: PieceCollection, outpath: Path) -> Path:
    """
    Save the raw pieces, colored by kind, with their originating input points.
    """
    fig = plt.figure()
    ax = fig.add_subplot(111)
    seen = set()
    for piece in collection.pieces:
        xs = [p[0] for p in piece.points]
        ys = [p[1] for p in piece.points]
        label = piece.kind.value if piece.kind not in seen else None
        seen.add(piece.kind)
        ax.plot(xs, ys, color=_KIND_COLORS[piece.kind], linewidth=1.0, label=label)
        ax.plot([p[0] for p in piece.origin], [p[1] for p in piece.origin], ".", color="0.4", markersize=3)
    ax.set_aspect("equal", adjustable="datalim")
    ax.set_title(f"Pieces ({len(collection.pieces)} in {collection.ring_count} rings)")
    if seen:
        ax.legend(loc="best", fontsize="small")
    fig.tight_layout()
    fig.savefig(outpath, dpi=150)
    plt.close(fig)
    return outpath


def plot_rings(collection: PieceCollection, outpath: Path) -> Path:
    """
    Save the resolved output rings.
    """
    fig = plt.figure()
    ax = fig.add_subplot(111)
    for ring in collection.rings:
        ax.fill([p[0] for p in ring], [p[1] for p in ring], alpha=0.3, color="tab:blue")
        ax.plot([p[0] for p in ring], [p[1] for p in ring], color="tab:blue", linewidth=1.0)
    ax.set_aspect("equal", adjustable="datalim")
    ax.set_title(f"Rings ({len(collection.rings)})")
    fig.tight_layout()
    fig.savefig(outpath, dpi=150)
    plt.close(fig)
    return outpath


@dataclass
class PiecePlotter:
    """Buffer visitor saving `<stem>_pieces.png` and `<stem>_rings.png`."""

    outdir: Path
    stem: str = "buffer"
    paths: List[Path] = field(default_factory=list)

    def __call__(self, collection: PieceCollection, phase: int) -> None:
        outdir = Path(self.outdir)
        _ensure_outdir(outdir)
        if phase == 0:
            self.paths.append(plot_pieces(collection, outdir / f"{self.stem}_pieces.png"))
        else:
            self.paths.append(plot_rings(collection, outdir / f"{self.stem}_rings.png"))
