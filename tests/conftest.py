"""Shared pytest fixtures."""

from __future__ import annotations

from typing import Callable

import pytest

from face_tension.face.indices import MEDIAPIPE_FACE_MESH, LandmarkRole
from face_tension.models import Landmark, Signals
from face_tension.notifications.handlers import AlertDispatcher

LANDMARK_COUNT = 478


def build_face(
    *,
    eye_gap: float = 0.05,
    brow_gap: float = 0.10,
    mouth_half_width: float = 0.08,
    corner_y: float = 0.65,
    nose_x: float = 0.5,
    left_edge_x: float = 0.25,
    right_edge_x: float = 0.75,
) -> list[Landmark]:
    """Synthetic MediaPipe-sized landmark list for a frontal face.

    With the defaults the face is 0.5 wide, so every ratio is the raw
    distance times two: eye openness 0.1, brow distance 0.2, mouth width 0.32.
    """
    positions = {
        LandmarkRole.LEFT_FACE_EDGE: (left_edge_x, 0.5),
        LandmarkRole.RIGHT_FACE_EDGE: (right_edge_x, 0.5),
        LandmarkRole.LEFT_EYE_TOP: (0.38, 0.40),
        LandmarkRole.LEFT_EYE_BOTTOM: (0.38, 0.40 + eye_gap),
        LandmarkRole.RIGHT_EYE_TOP: (0.62, 0.40),
        LandmarkRole.RIGHT_EYE_BOTTOM: (0.62, 0.40 + eye_gap),
        LandmarkRole.LEFT_INNER_BROW: (0.5 - brow_gap / 2, 0.35),
        LandmarkRole.RIGHT_INNER_BROW: (0.5 + brow_gap / 2, 0.35),
        LandmarkRole.LEFT_MOUTH_CORNER: (0.5 - mouth_half_width, corner_y),
        LandmarkRole.RIGHT_MOUTH_CORNER: (0.5 + mouth_half_width, corner_y),
        LandmarkRole.UPPER_LIP_CENTER: (0.5, 0.63),
        LandmarkRole.LEFT_CHEEK: (0.40, 0.55),
        LandmarkRole.RIGHT_CHEEK: (0.60, 0.55),
        LandmarkRole.NOSE_TIP: (0.5, 0.55),
        LandmarkRole.NOSE_BRIDGE: (nose_x, 0.40),
    }
    landmarks = [Landmark(x=0.5, y=0.5, z=0.0)] * LANDMARK_COUNT
    for role, (x, y) in positions.items():
        landmarks[MEDIAPIPE_FACE_MESH[role]] = Landmark(x=x, y=y, z=0.0)
    return landmarks


@pytest.fixture
def make_face() -> Callable[..., list[Landmark]]:
    return build_face


@pytest.fixture
def neutral_face() -> list[Landmark]:
    return build_face()


@pytest.fixture
def tense_face() -> list[Landmark]:
    # Eyes at 80% of the neutral opening.
    return build_face(eye_gap=0.04)


@pytest.fixture
def neutral_signals() -> Signals:
    return Signals(
        eye_open_avg=0.10,
        brow_inner_dist=0.20,
        mouth_width=0.32,
        mouth_corner_lift=-0.04,
        cheek_raise=0.20,
        head_rotation=0.0,
    )


@pytest.fixture
def dispatcher() -> AlertDispatcher:
    return AlertDispatcher()
