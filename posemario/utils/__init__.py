from .fps import FpsCounter
from .slots import FrameHandoff, LatestValue

__all__ = ["FpsCounter", "FrameHandoff", "LatestValue"]
