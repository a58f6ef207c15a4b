"""Internal constants shared across the library."""

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3180
DEFAULT_INTERVAL_MS = 1000
DEFAULT_TRIPLE_MIN_SCORE = 1
USER_AGENT = "pyautodarts"

#: Upper bound for a single board manager request, in seconds.
REQUEST_TIMEOUT_S: float = 1.5

#: Version and camera config change rarely; refresh every 5 minutes.
METADATA_INTERVAL_S: float = 5 * 60

STATE_ENDPOINT = "/api/state"
VERSION_ENDPOINT = "/api/version"
CONFIG_ENDPOINT = "/api/config"

#: A visit is at most three darts.
DARTS_PER_VISIT = 3
TRIPLE_MULTIPLIER = 3

#: Characters of a raw payload kept in warning logs.
LOG_PAYLOAD_CHARS = 200

# ------------------------------------------------------------------
# Camera defaults used when /api/config omits a value
# ------------------------------------------------------------------

DEFAULT_CAM_WIDTH = 1280
DEFAULT_CAM_HEIGHT = 720
DEFAULT_CAM_FPS = 20
CAMERA_SLOTS: tuple[int, ...] = (0, 1, 2)
