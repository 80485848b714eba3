"""Facial tension monitor — landmark signals, personal calibration and sustained-tension alerts."""

from face_tension.calibration import CalibrationSession
from face_tension.detection import DetectionConfig, DetectionStateMachine, classify_smile, is_tense
from face_tension.face import MEDIAPIPE_FACE_MESH, LandmarkIndexTable, LandmarkRole, extract_signals
from face_tension.models import AlertEvent, Frame, Landmark, Signals, SmileResult, TickStatus
from face_tension.pipeline import TensionPipeline, TickResult

__all__ = [
    "MEDIAPIPE_FACE_MESH",
    "AlertEvent",
    "CalibrationSession",
    "DetectionConfig",
    "DetectionStateMachine",
    "Frame",
    "Landmark",
    "LandmarkIndexTable",
    "LandmarkRole",
    "Signals",
    "SmileResult",
    "TensionPipeline",
    "TickResult",
    "TickStatus",
    "classify_smile",
    "extract_signals",
    "is_tense",
]
