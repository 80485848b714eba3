"""Face geometry — landmark index table and per-frame signal extraction."""

from face_tension.face.geometry import dist_2d
from face_tension.face.indices import MEDIAPIPE_FACE_MESH, LandmarkIndexTable, LandmarkRole
from face_tension.face.signals import extract_signals

__all__ = [
    "MEDIAPIPE_FACE_MESH",
    "LandmarkIndexTable",
    "LandmarkRole",
    "dist_2d",
    "extract_signals",
]
