"""
PoseMario - Body pose game controller.

Turns a webcam feed of one person into held keyboard keys for a side-scrolling
game: arms out to the side run or sprint, arms up jump, with an overlay
showing the gesture zones.

Main components:
- config: Centralized configuration
- detection: Keypoint layout and pose estimation backends
- control: Tracking, smoothing, zone classification, jump cadence, key sync
- core: Camera, inference and display threads
- ui: Overlay drawing
- utils: Thread handoff slots and FPS counting
"""

__version__ = "1.0.0"
