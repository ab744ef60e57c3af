"""Schedulable unit-of-work wrapper around :func:`compute_visible`.

An :class:`FOVJob` captures the four inputs of an FOV computation so it can
either run inline or be handed to a ``concurrent.futures.Executor``. Both
paths execute exactly the same computation.

Usage::

    points: list[WorldTilePos] = []
    job = visible_points_job((5, 5), 8, game_map, points)

    job.run()  # inline

    with ThreadPoolExecutor() as pool:
        job.schedule(pool).result()  # on a worker thread

Each job must own its output sequence. The map may be shared between any
number of jobs because the engine only reads it.
"""

from __future__ import annotations

import logging
from concurrent.futures import Executor, Future
from dataclasses import dataclass

from penumbra.environment.fov import VisibleTileSink, compute_visible, validate_radius
from penumbra.environment.visibility_map import VisibilityMap
from penumbra.types import WorldTilePos

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FOVJob:
    """A single FOV computation packaged for a job scheduler.

    Attributes:
        origin: ``(x, y)`` position of the viewer.
        radius: Maximum sight distance.
        vis_map: Read-only map the job scans.
        out: Output sequence the job appends visible tiles to. Owned by this
            job until it completes.
    """

    origin: WorldTilePos
    radius: int
    vis_map: VisibilityMap
    out: VisibleTileSink

    def execute(self) -> None:
        """Job body: compute the FOV into ``out``."""
        compute_visible(self.origin, self.radius, self.vis_map, self.out)

    def run(self) -> None:
        """Execute the job synchronously on the calling thread."""
        self.execute()

    def schedule(self, executor: Executor) -> Future[None]:
        """Submit the job to *executor*.

        Returns:
            The executor's future. Calling ``result()`` waits for completion
            and re-raises anything the job raised.
        """
        logger.debug(
            "Scheduling FOV job at %s (radius %d) on %s",
            self.origin,
            self.radius,
            type(executor).__name__,
        )
        return executor.submit(self.execute)


def visible_points_job(
    origin: WorldTilePos,
    radius: int,
    vis_map: VisibilityMap,
    out: VisibleTileSink,
) -> FOVJob:
    """Build an :class:`FOVJob` for the given inputs.

    The radius is validated here so a malformed job is rejected before it
    reaches a scheduler.

    Raises:
        ValueError: If *radius* is negative.
    """
    validate_radius(radius)
    return FOVJob(origin=origin, radius=radius, vis_map=vis_map, out=out)
