"""Streaming — drive the pipeline from a frame source and forward alerts."""

from face_tension.streaming.runner import FrameRunner, RunSummary

__all__ = ["FrameRunner", "RunSummary"]
