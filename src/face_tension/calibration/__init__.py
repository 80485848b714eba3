"""Calibration — build a personal neutral baseline from a timed sample window."""

from face_tension.calibration.session import CalibrationSession, compute_baseline

__all__ = ["CalibrationSession", "compute_baseline"]
