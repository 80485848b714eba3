"""Signal extraction — landmark set → :class:`Signals` or ``None``.

Every distance is divided by the face width (left to right face edge) so
the resulting ratios are independent of how close the user sits to the
camera.  Extraction fails softly: an empty landmark list, a list too short
for the index table, or a zero face width all yield ``None`` for the frame.
"""

from __future__ import annotations

from typing import Sequence

from face_tension.face.geometry import dist_2d
from face_tension.face.indices import MEDIAPIPE_FACE_MESH, LandmarkIndexTable, LandmarkRole
from face_tension.models import Landmark, Signals


def head_rotation(nose_bridge: Landmark, left_edge: Landmark, right_edge: Landmark) -> float:
    """Signed yaw proxy from the nose bridge position between the face edges.

    Maps a symmetric face to 0; bounded in (-1, 1).
    """
    nose_to_left = abs(nose_bridge.x - left_edge.x)
    nose_to_right = abs(right_edge.x - nose_bridge.x)
    asymmetry = nose_to_left / nose_to_right if nose_to_right > 0 else 1.0
    return (asymmetry - 1) / (asymmetry + 1)


def extract_signals(
    landmarks: Sequence[Landmark],
    table: LandmarkIndexTable = MEDIAPIPE_FACE_MESH,
) -> Signals | None:
    """Compute the signal vector for one frame, or ``None`` if unusable."""
    if not landmarks or len(landmarks) < table.required_length:
        return None

    def lm(role: LandmarkRole) -> Landmark:
        return landmarks[table[role]]

    left_edge = lm(LandmarkRole.LEFT_FACE_EDGE)
    right_edge = lm(LandmarkRole.RIGHT_FACE_EDGE)
    face_width = dist_2d(left_edge, right_edge)
    if face_width == 0:
        return None

    # ── Tension indicators
    left_eye_open = dist_2d(lm(LandmarkRole.LEFT_EYE_TOP), lm(LandmarkRole.LEFT_EYE_BOTTOM)) / face_width
    right_eye_open = dist_2d(lm(LandmarkRole.RIGHT_EYE_TOP), lm(LandmarkRole.RIGHT_EYE_BOTTOM)) / face_width
    brow_inner_dist = dist_2d(lm(LandmarkRole.LEFT_INNER_BROW), lm(LandmarkRole.RIGHT_INNER_BROW)) / face_width

    # ── Smile indicators
    left_corner = lm(LandmarkRole.LEFT_MOUTH_CORNER)
    right_corner = lm(LandmarkRole.RIGHT_MOUTH_CORNER)
    upper_lip = lm(LandmarkRole.UPPER_LIP_CENTER)

    mouth_width = dist_2d(left_corner, right_corner) / face_width
    # Image y grows downwards, so a raised corner has a smaller y than the lip.
    left_lift = (upper_lip.y - left_corner.y) / face_width
    right_lift = (upper_lip.y - right_corner.y) / face_width
    left_cheek = dist_2d(left_corner, lm(LandmarkRole.LEFT_CHEEK)) / face_width
    right_cheek = dist_2d(right_corner, lm(LandmarkRole.RIGHT_CHEEK)) / face_width

    return Signals(
        eye_open_avg=(left_eye_open + right_eye_open) / 2,
        brow_inner_dist=brow_inner_dist,
        mouth_width=mouth_width,
        mouth_corner_lift=(left_lift + right_lift) / 2,
        cheek_raise=(left_cheek + right_cheek) / 2,
        head_rotation=head_rotation(lm(LandmarkRole.NOSE_BRIDGE), left_edge, right_edge),
    )
