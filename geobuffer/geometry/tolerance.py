from __future__ import annotations

# Positional epsilon for near-zero distance/length checks.
EPS_POS = 1e-12

# Relative epsilon for the turning predicate (cross product vs. edge lengths).
EPS_SIDE = 1e-12

# Relative epsilon below which two offset lines count as parallel.
EPS_PARALLEL = 1e-12

# Area epsilon for degenerate piece polygons.
EPS_AREA = 1e-12

# Default grid size for the rescaling robust policy.
EPS_WELD = 1e-9
