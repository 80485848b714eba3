"""Anatomical landmark roles and their fixed indices in the landmark sequence.

Indices follow the MediaPipe Face Mesh numbering; see
https://storage.googleapis.com/mediapipe-assets/documentation/mediapipe_face_landmark_fullsize.png
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping


class LandmarkRole(str, Enum):
    """Named landmark positions used by the signal extractor."""

    # normalisation anchors
    LEFT_FACE_EDGE = "left_face_edge"
    RIGHT_FACE_EDGE = "right_face_edge"

    # eye openness
    LEFT_EYE_TOP = "left_eye_top"
    LEFT_EYE_BOTTOM = "left_eye_bottom"
    RIGHT_EYE_TOP = "right_eye_top"
    RIGHT_EYE_BOTTOM = "right_eye_bottom"

    # brow furrow
    LEFT_INNER_BROW = "left_inner_brow"
    RIGHT_INNER_BROW = "right_inner_brow"

    # smile
    LEFT_MOUTH_CORNER = "left_mouth_corner"
    RIGHT_MOUTH_CORNER = "right_mouth_corner"
    UPPER_LIP_CENTER = "upper_lip_center"
    LEFT_CHEEK = "left_cheek"
    RIGHT_CHEEK = "right_cheek"

    # head pose
    NOSE_TIP = "nose_tip"
    NOSE_BRIDGE = "nose_bridge"


class LandmarkIndexTable:
    """Immutable role → index lookup, validated once at construction.

    Raises :class:`ValueError` when a role is missing, an index is out of
    ``range(landmark_count)``, or two roles share an index.
    """

    def __init__(self, indices: Mapping[LandmarkRole, int], landmark_count: int = 478) -> None:
        if landmark_count <= 0:
            raise ValueError(f"landmark_count must be positive, got {landmark_count}")

        missing = [role.value for role in LandmarkRole if role not in indices]
        if missing:
            raise ValueError(f"Index table is missing roles: {missing}")

        unknown = [key for key in indices if not isinstance(key, LandmarkRole)]
        if unknown:
            raise ValueError(f"Index table has unknown roles: {unknown}")

        for role, index in indices.items():
            if not isinstance(index, int) or isinstance(index, bool):
                raise ValueError(f"Index for {role.value} must be an int, got {index!r}")
            if not 0 <= index < landmark_count:
                raise ValueError(
                    f"Index {index} for {role.value} is outside 0..{landmark_count - 1}"
                )

        if len(set(indices.values())) != len(indices):
            raise ValueError("Index table maps several roles to the same landmark")

        self._indices: Mapping[LandmarkRole, int] = MappingProxyType(dict(indices))
        self._landmark_count = landmark_count
        self._required_length = max(self._indices.values()) + 1

    def __getitem__(self, role: LandmarkRole) -> int:
        return self._indices[role]

    def __iter__(self):
        return iter(self._indices)

    def __len__(self) -> int:
        return len(self._indices)

    def __repr__(self) -> str:
        return f"LandmarkIndexTable(roles={len(self)}, landmark_count={self._landmark_count})"

    @property
    def landmark_count(self) -> int:
        return self._landmark_count

    @property
    def required_length(self) -> int:
        """Shortest landmark sequence that covers every role."""
        return self._required_length

    def as_dict(self) -> dict[str, int]:
        return {role.value: index for role, index in self._indices.items()}

    def with_landmark_count(self, landmark_count: int) -> LandmarkIndexTable:
        """Return the same mapping re-validated against another model size."""
        return LandmarkIndexTable(self._indices, landmark_count)


MEDIAPIPE_FACE_MESH = LandmarkIndexTable(
    {
        LandmarkRole.LEFT_FACE_EDGE: 234,
        LandmarkRole.RIGHT_FACE_EDGE: 454,
        LandmarkRole.LEFT_EYE_TOP: 159,
        LandmarkRole.LEFT_EYE_BOTTOM: 145,
        LandmarkRole.RIGHT_EYE_TOP: 386,
        LandmarkRole.RIGHT_EYE_BOTTOM: 374,
        LandmarkRole.LEFT_INNER_BROW: 107,
        LandmarkRole.RIGHT_INNER_BROW: 336,
        LandmarkRole.LEFT_MOUTH_CORNER: 61,
        LandmarkRole.RIGHT_MOUTH_CORNER: 291,
        LandmarkRole.UPPER_LIP_CENTER: 13,
        LandmarkRole.LEFT_CHEEK: 50,
        LandmarkRole.RIGHT_CHEEK: 280,
        LandmarkRole.NOSE_TIP: 1,
        LandmarkRole.NOSE_BRIDGE: 6,
    },
)
