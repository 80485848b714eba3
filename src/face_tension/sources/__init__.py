"""Frame sources — where landmark frames come from."""

from face_tension.sources.base import FrameSource, FrameSourceError, StaticFrameSource
from face_tension.sources.replay import JsonlFrameSource

__all__ = ["FrameSource", "FrameSourceError", "JsonlFrameSource", "StaticFrameSource"]
