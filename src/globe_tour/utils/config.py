"""Configuration constants for the globe tour engine."""

# =============================================================================
# Autoplay
# =============================================================================

# Milliseconds between automatic advances
DEFAULT_AUTOPLAY_INTERVAL_MS: int = 7000

# Delay before autoplay resumes after an interaction
DEFAULT_RESUME_DELAY_MS: int = 60000

# =============================================================================
# Arcs and Rings
# =============================================================================

# Nominal time for the dash to travel the length of an arc
DEFAULT_FLIGHT_TIME_MS: float = 2000.0

# Fraction of the arc covered by the moving dash
DEFAULT_DASH_LENGTH: float = 0.6

# Fraction of the arc covered by the gap behind the dash
DEFAULT_DASH_GAP: float = 2.0

# Fraction of flight time after which the dash reaches a location
DEFAULT_RELATIVE_LENGTH: float = 0.4

# Concentric pulses per ring
DEFAULT_NUM_RINGS: int = 5

DEFAULT_ARC_COLOR: str = "rgba(255, 255, 255, 1)"
DEFAULT_RING_COLOR: str = "#ffffff"

# =============================================================================
# Labels
# =============================================================================

# Grid cell edge (degrees) used for collision detection
DEFAULT_LABEL_CELL_SIZE_DEG: float = 5.0

# Upper bound on latitude nudges per label before giving up
DEFAULT_MAX_LABEL_NUDGES: int = 32

# Nudge step as a fraction of the cell size
LABEL_NUDGE_FRACTION: float = 0.2

DEFAULT_LABEL_SIZE: float = 0.75
DEFAULT_LABEL_DOT_RADIUS: float = 0.3

# =============================================================================
# Camera
# =============================================================================

DEFAULT_CAMERA_ALTITUDE: float = 0.8
DEFAULT_CAMERA_LATITUDE: float = 36.0
DEFAULT_ANIMATION_DURATION_MS: float = 1000.0

# =============================================================================
# Viewport
# =============================================================================

# Viewport widths (px) at or below this use the small display profile
SMALL_SCREEN_MAX_WIDTH: int = 768

# Max-width breakpoints: a breakpoint matches when width < value
BREAKPOINTS: dict[str, int] = {
    "sm": 640,
    "md": 768,
    "lg": 1024,
    "xl": 1280,
}

# Event bus ring buffer capacity
DEFAULT_MAX_EVENTS: int = 1000
