"""Field-of-view computation using recursive shadowcasting.

Implements Björn Bergström's octant shadowcasting as described at
http://www.roguebasin.com/index.php?title=FOV_using_recursive_shadowcasting

The plane around the origin is split into eight 45-degree octants. A single
scan routine handles all of them; each octant supplies a signed-permutation
transform that maps its local ``(dx, dy)`` offsets onto world axes. Within an
octant, rows are scanned outward from the origin while tracking the wedge
``(start_slope, end_slope)`` that is still unobstructed. Opaque tiles are
themselves visible but narrow the wedge for every row behind them.

Key properties:
- **Map-agnostic**: the engine only reads through the :class:`VisibilityMap`
  capability and never calls ``is_opaque`` on an out-of-bounds position.
- **Euclidean cutoff**: a tile is in range iff ``dx*dx + dy*dy <= radius**2``.
  Tiles at exactly ``radius`` are included.
- **No duplicates**: tiles on octant seams (axes and diagonals) are scanned by
  two octants; a per-call set keeps each tile from being emitted twice.
- **Deterministic**: output order depends only on the inputs.
- **Re-entrant**: no module state, so concurrent calls with separate output
  sequences are safe.
"""

from __future__ import annotations

from typing import Protocol

import numpy as np
from numpy.typing import NDArray

from penumbra import config
from penumbra.environment.visibility_map import ArrayVisibilityMap, VisibilityMap
from penumbra.types import OctantTransform, Slope, WorldTilePos

# Octant transform coefficients: (xx, xy, yx, yy).
# For a given octant, world coordinates are:
#   wx = ox + dx * xx + dy * xy
#   wy = oy + dx * yx + dy * yy
# where dy = -depth and dx runs from -depth to 0 across a row.
_OCTANT_TRANSFORMS: tuple[OctantTransform, ...] = (
    (1, 0, 0, 1),
    (0, 1, 1, 0),
    (0, -1, 1, 0),
    (-1, 0, 0, 1),
    (-1, 0, 0, -1),
    (0, -1, -1, 0),
    (0, 1, -1, 0),
    (1, 0, 0, -1),
)


class VisibleTileSink(Protocol):
    """Append-only output sequence supplied by the caller (e.g. a ``list``)."""

    def append(self, pos: WorldTilePos, /) -> None: ...


def validate_radius(radius: int) -> None:
    """Reject a negative sight radius.

    Raises:
        ValueError: If *radius* is below zero.
    """
    if radius < 0:
        msg = f"FOV radius must be non-negative, got {radius}"
        raise ValueError(msg)


def compute_visible(
    origin: WorldTilePos,
    radius: int,
    vis_map: VisibilityMap,
    out: VisibleTileSink,
) -> None:
    """Append every tile visible from *origin* to *out*.

    Args:
        origin: ``(x, y)`` position of the viewer. If it is out of bounds
            nothing is appended.
        radius: Maximum sight distance. Tiles whose Euclidean distance from
            the origin exceeds this are never visible.
        vis_map: Any object satisfying :class:`VisibilityMap`. Only read.
        out: Caller-owned sequence. Visible tiles are appended; existing
            contents are left untouched.

    Raises:
        ValueError: If *radius* is negative.
    """
    validate_radius(radius)

    if not vis_map.is_in_bounds(origin):
        return

    # The origin tile is always visible, even when it is itself opaque.
    out.append(origin)
    seen: set[WorldTilePos] = {origin}

    ox, oy = origin
    for xx, xy, yx, yy in _OCTANT_TRANSFORMS:
        _scan_octant(ox, oy, radius, xx, xy, yx, yy, vis_map, out, seen)


def compute_fov(
    transparent: NDArray[np.bool_],
    origin: WorldTilePos,
    radius: int = config.DEFAULT_FOV_RADIUS,
) -> NDArray[np.bool_]:
    """Compute the set of tiles visible from *origin* as a boolean mask.

    Args:
        transparent: Boolean array shaped ``(width, height)``.
            ``True`` means the tile is see-through.
        origin: ``(x, y)`` position of the viewer.
        radius: Maximum sight distance.

    Returns:
        Boolean array with the same shape as *transparent*, where ``True``
        marks a visible tile.
    """
    vis_map = ArrayVisibilityMap(transparent)
    points: list[WorldTilePos] = []
    compute_visible(origin, radius, vis_map, points)

    visible = np.zeros(vis_map.transparent.shape, dtype=np.bool_)
    if points:
        xs, ys = zip(*points, strict=True)
        visible[list(xs), list(ys)] = True
    return visible


def _scan_octant(
    ox: int,
    oy: int,
    radius: int,
    xx: int,
    xy: int,
    yx: int,
    yy: int,
    vis_map: VisibilityMap,
    out: VisibleTileSink,
    seen: set[WorldTilePos],
) -> None:
    """Iteratively scan one octant outward from the origin.

    Uses an explicit stack instead of recursion to avoid stack-depth issues
    on large radii. Each entry is a sub-wedge that continues from some row
    behind an obstacle; it is independent of the scan that produced it.
    """
    radius_sq = radius * radius

    # Stack entries: (first_row_depth, start_slope, end_slope).
    # The initial wedge spans the whole octant, diagonal to axis.
    stack: list[tuple[int, Slope, Slope]] = [(1, 1.0, 0.0)]

    while stack:
        first_depth, start_slope, end_slope = stack.pop()

        # The wedge has collapsed; nothing behind it can be seen.
        if start_slope < end_slope:
            continue

        next_start_slope = start_slope

        for depth in range(first_depth, radius + 1):
            dy = -depth
            blocked = False

            for dx in range(-depth, 1):
                # Slopes through the tile's outer corners.
                left_slope = (dx - 0.5) / (dy + 0.5)
                right_slope = (dx + 0.5) / (dy - 0.5)

                if start_slope < right_slope:
                    continue
                if end_slope > left_slope:
                    break

                wx = ox + dx * xx + dy * xy
                wy = oy + dx * yx + dy * yy
                pos = (wx, wy)

                # Tiles outside the map are skipped: never emitted, and they
                # leave the wedge and the blocked state as they were.
                if not vis_map.is_in_bounds(pos):
                    continue

                if dx * dx + dy * dy <= radius_sq and pos not in seen:
                    seen.add(pos)
                    out.append(pos)

                is_wall = vis_map.is_opaque(pos)

                if blocked:
                    if is_wall:
                        # Still in shadow: the wedge reopens past this wall.
                        next_start_slope = right_slope
                    else:
                        # Wall-to-floor: the wedge reopens here.
                        blocked = False
                        start_slope = next_start_slope
                elif is_wall and depth < radius:
                    # Floor-to-wall: a shadow begins. The part of the wedge
                    # before this wall continues on the next row.
                    blocked = True
                    stack.append((depth + 1, start_slope, left_slope))
                    next_start_slope = right_slope

            # A row that ends in shadow hides everything behind it.
            if blocked:
                break
