"""Read-only map capability consumed by the FOV engine.

The engine never depends on a concrete map class. Anything exposing
``is_in_bounds`` and ``is_opaque`` satisfies :class:`VisibilityMap`, whether
it is backed by a dense array, a sparse set of walls, or a procedural
generator.

Conforming maps must treat both queries as pure functions of the position
and the map's current content. They are called from concurrently running
FOV jobs, so they must not mutate anything.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

import numpy as np
from numpy.typing import NDArray

from penumbra.types import WorldTilePos


@runtime_checkable
class VisibilityMap(Protocol):
    """A protocol for grids that can answer line-of-sight queries."""

    def is_in_bounds(self, pos: WorldTilePos) -> bool:
        """Return True if *pos* lies inside the map's addressable region."""
        ...

    def is_opaque(self, pos: WorldTilePos) -> bool:
        """Return True if the tile at *pos* blocks line of sight.

        Only defined for in-bounds positions. The FOV engine always checks
        :meth:`is_in_bounds` first.
        """
        ...


@dataclass(frozen=True, slots=True)
class ArrayVisibilityMap:
    """A :class:`VisibilityMap` backed by a boolean transparency array.

    Attributes:
        transparent: Boolean array shaped ``(width, height)``. ``True`` means
            the tile is see-through (floor, open door, etc.). The array is
            copied on construction and marked read-only, so sharing one map
            between threads is safe.
    """

    transparent: NDArray[np.bool_]

    def __post_init__(self) -> None:
        transparent = np.array(self.transparent, dtype=np.bool_)
        if transparent.ndim != 2:
            msg = (
                "transparent must be a 2-D (width, height) array, "
                f"got shape {transparent.shape}"
            )
            raise ValueError(msg)
        transparent.flags.writeable = False
        object.__setattr__(self, "transparent", transparent)

    @classmethod
    def open(cls, width: int, height: int) -> ArrayVisibilityMap:
        """Factory for a map where every tile is see-through."""
        return cls(np.ones((width, height), dtype=np.bool_))

    @classmethod
    def from_opaque_points(
        cls,
        width: int,
        height: int,
        opaque_points: Iterable[WorldTilePos],
    ) -> ArrayVisibilityMap:
        """Factory for an open map with the given tiles marked opaque.

        Raises:
            ValueError: If any point lies outside the ``width`` x ``height``
                grid.
        """
        transparent = np.ones((width, height), dtype=np.bool_)
        for x, y in opaque_points:
            if not (0 <= x < width and 0 <= y < height):
                msg = f"Opaque point ({x}, {y}) is outside a {width}x{height} map"
                raise ValueError(msg)
            transparent[x, y] = False
        return cls(transparent)

    @property
    def width(self) -> int:
        return self.transparent.shape[0]

    @property
    def height(self) -> int:
        return self.transparent.shape[1]

    def is_in_bounds(self, pos: WorldTilePos) -> bool:
        x, y = pos
        width, height = self.transparent.shape
        return 0 <= x < width and 0 <= y < height

    def is_opaque(self, pos: WorldTilePos) -> bool:
        x, y = pos
        return not self.transparent[x, y]
