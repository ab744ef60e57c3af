from __future__ import annotations

import pytest

from penumbra.environment.visibility_map import ArrayVisibilityMap


@pytest.fixture
def pillar_pair_map() -> ArrayVisibilityMap:
    """20x20 open map with opaque tiles at (1, 1) and (2, 1)."""
    return ArrayVisibilityMap.from_opaque_points(20, 20, [(1, 1), (2, 1)])


@pytest.fixture
def enclosed_map() -> ArrayVisibilityMap:
    """20x20 open map where (10, 10) is ringed by eight opaque tiles."""
    ring = [
        (10 + dx, 10 + dy)
        for dx in (-1, 0, 1)
        for dy in (-1, 0, 1)
        if (dx, dy) != (0, 0)
    ]
    return ArrayVisibilityMap.from_opaque_points(20, 20, ring)
