from .pieces import PiecePlotter, plot_pieces, plot_rings

__all__ = ["PiecePlotter", "plot_pieces", "plot_rings"]
