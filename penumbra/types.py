from __future__ import annotations

# =============================================================================
# SPATIAL TYPES
# =============================================================================

type TileCoord = int  # Always integer tile position

# World coordinates - absolute positions on the grid. No inherent bounds;
# whether a position exists is decided by the map being queried.
type WorldTileCoord = TileCoord  # Example: x=5, y=3
type WorldTilePos = tuple[
    WorldTileCoord, WorldTileCoord
]  # Example: (5, 3) = tile 5,3 on map

# =============================================================================
# SHADOWCASTING TYPES
# =============================================================================

# A slope within one octant, measured as column offset over row depth.
# 1.0 is the octant's diagonal edge, 0.0 its axis-aligned edge.
type Slope = float

# Signed-permutation coefficients (xx, xy, yx, yy) that map an octant-local
# (dx, dy) offset onto world axes.
type OctantTransform = tuple[int, int, int, int]
