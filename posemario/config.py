"""
Configuration module for PoseMario.

This module contains all configuration parameters and constants used throughout the application.
Centralizing configuration makes it easier to tune parameters and understand system behavior.

All gesture offsets are expressed in "shoulder units": a wrist position minus the shoulder
midpoint, divided by the shoulder width. Negative x is toward the back of the level, negative
y is above the shoulders.

TUNING:
- Subject keeps getting lost: lower TrackingConfig.LOSE_SCALE_MIN or step closer to the camera
- Reference box shakes: raise SmoothingConfig.JITTER_THRESHOLD
- Jumps are too short: raise JumpConfig.HELD_DURATION
"""

# ==================== Camera Configuration ====================
class CameraConfig:
    """Camera capture configuration parameters."""

    # Camera port (None = auto-select the first working camera)
    PORT = None

    # Capture resolution
    DEFAULT_WIDTH = 1280
    DEFAULT_HEIGHT = 720

    # Camera buffer size (reduce latency)
    BUFFER_SIZE = 1

    # Mirror the image so moving right on screen means moving right in the game
    MIRROR = True

    # Camera backend to use (None for default, or cv.CAP_DSHOW, cv.CAP_MSMF, cv.CAP_ANY)
    BACKEND = None

    # Run without a display window
    HEADLESS = False


# ==================== Pose Model Configuration ====================
class PoseConfig:
    """Configuration for the pose estimation backend."""

    # 'movenet' (ONNX single-pose model) or 'mediapipe'
    BACKEND = 'movenet'

    # Path to the MoveNet ONNX model
    MODEL_PATH = 'models/movenet-lightning.onnx'

    # Square input size of the model (192 for lightning, 256 for thunder)
    INPUT_SIZE = 192

    # Keypoints below this confidence are treated as not detected
    CONFIDENCE_THRESHOLD = 0.3

    # MediaPipe Pose parameters
    MP_MODEL_COMPLEXITY = 0
    MP_MIN_DETECTION_CONFIDENCE = 0.5
    MP_MIN_TRACKING_CONFIDENCE = 0.5


# ==================== Subject Tracking Configuration ====================
class TrackingConfig:
    """Acquisition and loss thresholds for the tracked subject."""

    # Shoulder width (pixels) needed to start tracking
    ACQUIRE_SCALE_MIN = 30.0

    # Shoulder width (pixels) below which tracking is lost (must be < ACQUIRE_SCALE_MIN)
    LOSE_SCALE_MIN = 20.0

    # Max horizontal offset of the shoulder midpoint from frame center (fraction of width)
    CENTER_TOLERANCE = 0.15


# ==================== Smoothing Configuration ====================
class SmoothingConfig:
    """Configuration for the reference frame dead-zone filter."""

    # Changes smaller than this (pixels) are ignored entirely
    JITTER_THRESHOLD = 20.0

    # Fraction of the remaining distance covered per frame
    SMOOTH_ALPHA = 0.8


# ==================== Zone Configuration ====================
class ZoneConfig:
    """Gesture zone boundaries in shoulder units."""

    # Horizontal bands (mirrored for the back direction)
    RUN_START = 0.5          # |nx| > RUN_START -> run / back
    SPRINT_START = 2.0       # |nx| >= SPRINT_START -> sprint / back sprint
    SPRINT_END = 3.0         # outer edge of the drawn sprint zones

    # Vertical bands
    JUMP_END = -2.0          # top edge of the drawn jump zone
    JUMP_START = -1.0        # ny < JUMP_START -> arms raised
    ZONE_LIMIT = 0.8         # ny > ZONE_LIMIT -> arm down, ignored for movement

    # Duck zone (below ZONE_LIMIT, close to the body)
    DUCK_ENABLED = False
    DUCK_BOTTOM = 2.5
    DUCK_HALF_WIDTH = 0.5


# ==================== Jump Configuration ====================
class JumpConfig:
    """Timing of the automatic jump repeat."""

    # Seconds the jump key stays down for each jump
    HELD_DURATION = 0.400

    # Seconds the jump key stays up between jumps
    COOLDOWN_DURATION = 0.075


# ==================== Key Configuration ====================
class KeyConfig:
    """Keyboard keys sent to the game for each action."""

    FORWARD = 'd'
    BACK = 'a'
    SPRINT = 'r'
    JUMP = 'space'
    DUCK = 's'

    # Log key events instead of sending them
    DRY_RUN = False


# ==================== Pause Configuration ====================
class PauseConfig:
    """Pause / resume behaviour."""

    # Seconds of countdown before control resumes
    RESUME_COUNTDOWN = 3.0


# ==================== UI Configuration ====================
class UIConfig:
    """Configuration for user interface elements."""

    WINDOW_NAME = 'PoseMario'

    # Repaint interval of the overlay window (seconds)
    REFRESH_INTERVAL = 0.016

    # Colors (BGR format)
    COLOR_RUN = (120, 255, 0)
    COLOR_SPRINT = (255, 100, 200)
    COLOR_BACK = (50, 100, 255)
    COLOR_JUMP = (0, 200, 255)
    COLOR_DUCK = (0, 200, 255)
    COLOR_IDLE = (40, 40, 40)
    COLOR_WHITE = (255, 255, 255)
    COLOR_SKELETON = (0, 255, 0)
    COLOR_RED = (0, 0, 255)
    COLOR_YELLOW = (0, 255, 255)

    # Opacity of zone fills
    IDLE_ALPHA = 0.6
    ACTIVE_ALPHA = 0.47

    # Text display
    FONT_SCALE = 0.6
    FONT_THICKNESS = 2


# ==================== Worker Thread Configuration ====================
class WorkerConfig:
    """Configuration for background worker threads."""

    # Frame handoff timeout (seconds)
    QUEUE_TIMEOUT = 0.1

    # Thread shutdown timeout (seconds)
    THREAD_SHUTDOWN_TIMEOUT = 2.0

    # Seconds to wait for the first camera frame
    FIRST_FRAME_TIMEOUT = 2.0
