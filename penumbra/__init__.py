"""Grid field-of-view engine for tile-based simulations."""

from penumbra.environment.fov import compute_fov, compute_visible
from penumbra.environment.fov_job import FOVJob, visible_points_job
from penumbra.environment.visibility_map import ArrayVisibilityMap, VisibilityMap

__all__ = [
    "ArrayVisibilityMap",
    "FOVJob",
    "VisibilityMap",
    "compute_fov",
    "compute_visible",
    "visible_points_job",
]
