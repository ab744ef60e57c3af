"""Tests for running FOV computations as schedulable jobs."""

from __future__ import annotations

import dataclasses
import logging
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from penumbra import config
from penumbra.environment.fov import compute_visible
from penumbra.environment.fov_job import FOVJob, visible_points_job
from penumbra.environment.visibility_map import ArrayVisibilityMap
from penumbra.types import WorldTilePos


def _direct(
    vis_map: ArrayVisibilityMap, origin: WorldTilePos, radius: int
) -> list[WorldTilePos]:
    points: list[WorldTilePos] = []
    compute_visible(origin, radius, vis_map, points)
    return points


def test_inline_job_matches_direct_call(pillar_pair_map: ArrayVisibilityMap) -> None:
    points: list[WorldTilePos] = []
    visible_points_job((0, 0), 5, pillar_pair_map, points).run()

    assert (2, 1) in points
    assert (1, 1) in points
    assert (3, 3) not in points
    assert set(points) == set(_direct(pillar_pair_map, (0, 0), 5))


def test_scheduled_job_matches_direct_call(
    pillar_pair_map: ArrayVisibilityMap,
) -> None:
    points: list[WorldTilePos] = []
    job = FOVJob(origin=(0, 0), radius=5, vis_map=pillar_pair_map, out=points)

    with ThreadPoolExecutor(max_workers=1) as pool:
        assert job.schedule(pool).result() is None

    assert (2, 1) in points
    assert (1, 1) in points
    assert (3, 3) not in points
    assert set(points) == set(_direct(pillar_pair_map, (0, 0), 5))
    assert len(points) == len(set(points))


def test_execute_is_identical_to_compute_visible() -> None:
    rng = np.random.default_rng(12)
    vis_map = ArrayVisibilityMap(rng.random((25, 25)) > 0.3)

    points: list[WorldTilePos] = []
    visible_points_job((12, 12), 9, vis_map, points).execute()

    assert points == _direct(vis_map, (12, 12), 9)


def test_concurrent_jobs_share_one_map() -> None:
    """Many jobs reading the same map in parallel match sequential results."""
    rng = np.random.default_rng(2024)
    vis_map = ArrayVisibilityMap(rng.random((40, 40)) > 0.3)
    origins = [(x, y) for x in range(2, 40, 6) for y in range(3, 40, 7)]

    jobs = [visible_points_job(origin, 10, vis_map, []) for origin in origins]
    with ThreadPoolExecutor(max_workers=config.FOV_JOB_MAX_WORKERS) as pool:
        futures = [job.schedule(pool) for job in jobs]
        for future in futures:
            future.result()

    for job in jobs:
        assert job.out == _direct(vis_map, job.origin, 10), (
            f"Job at {job.origin} diverged from the direct call"
        )


def test_factory_rejects_negative_radius() -> None:
    vis_map = ArrayVisibilityMap.open(5, 5)
    with pytest.raises(ValueError, match="non-negative"):
        visible_points_job((1, 1), -2, vis_map, [])


def test_scheduled_failure_surfaces_through_future() -> None:
    """A malformed job built directly still fails when it runs."""
    vis_map = ArrayVisibilityMap.open(5, 5)
    job = FOVJob(origin=(1, 1), radius=-1, vis_map=vis_map, out=[])

    with ThreadPoolExecutor(max_workers=1) as pool:
        future = job.schedule(pool)
        with pytest.raises(ValueError):
            future.result()


def test_job_is_immutable() -> None:
    job = visible_points_job((0, 0), 3, ArrayVisibilityMap.open(5, 5), [])
    with pytest.raises(dataclasses.FrozenInstanceError):
        job.radius = 4  # type: ignore[misc]


def test_out_of_bounds_origin_job_is_empty() -> None:
    points: list[WorldTilePos] = []
    visible_points_job((-3, 2), 5, ArrayVisibilityMap.open(5, 5), points).run()
    assert points == []


def test_schedule_logs_debug(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="penumbra.environment.fov_job")
    job = visible_points_job((2, 2), 4, ArrayVisibilityMap.open(5, 5), [])

    with ThreadPoolExecutor(max_workers=1) as pool:
        job.schedule(pool).result()

    assert "Scheduling FOV job at (2, 2)" in caplog.text
