# =============================================================================
# AUTOLEVEL CONSTANTS
# =============================================================================
# Centralized defaults for the track prop generator. Track bounds and seed
# defaults are the values a fresh level starts with; the preview section only
# affects `python -m autolevel.preview`.
# =============================================================================

# =============================================================================
# SEED
# =============================================================================

DEFAULT_SEED = 0                        # Feed the level number to reload the same layout

# =============================================================================
# TRACK BOUNDS (world units along +Z)
# =============================================================================

DEFAULT_START_LINE = 0                  # Runner's starting position
DEFAULT_END_LINE = 2000                 # End of the level
DEFAULT_PROP_SPAWN_OFFSET = 50          # Empty run-up before the first prop
DEFAULT_LEVEL_END_OFFSET = 50           # No props spawn beyond end_line - offset

# =============================================================================
# PROP DEFINITIONS
# =============================================================================

VECTOR_DIM = 3                          # Offsets and samples are 3D vectors
UNIFORM_SAMPLE_COUNT = 2                # Uniform mode interpolates between exactly two samples
ZERO_VECTOR = (0.0, 0.0, 0.0)

# =============================================================================
# PREVIEW (PyBullet)
# =============================================================================

PREVIEW_PLANE_URDF = "plane.urdf"       # Ground, from pybullet_data
PREVIEW_LANE_WIDTH = 2.0                # Lateral offset of left/right lanes (meters)
PREVIEW_CAMERA_DISTANCE = 25.0
PREVIEW_CAMERA_YAW = 0.0                # Track runs along PyBullet +Y
PREVIEW_CAMERA_PITCH = -35.0
PREVIEW_HOLD_SEC = 30.0                 # GUI stays open this long with --hold

# Demo palette: (name, pybullet_data URDF, lane samples, min, max, discrete)
PREVIEW_PALETTE = [
    ("crate",   "cube_small.urdf",    "lanes",   8, 16, False),
    ("barrier", "cube.urdf",          "uniform", 12, 12, True),
    ("duck",    "duck_vhacd.urdf",    "none",    5, 10, False),
    ("tray",    "tray/traybox.urdf",  "lanes",   10, 20, False),
]
