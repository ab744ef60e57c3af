"""
Configuration constants.

Centralizes the tunable defaults used throughout the FOV engine.
Organized by functional area for easy maintenance.
"""

# =============================================================================
# FIELD OF VIEW
# =============================================================================

# Sight radius used by compute_fov() when the caller does not pass one.
DEFAULT_FOV_RADIUS = 15

# =============================================================================
# JOBS
# =============================================================================

# Pool size used by scripts that fan FOV jobs out across a thread pool.
# The engine itself never creates executors.
FOV_JOB_MAX_WORKERS = 4
