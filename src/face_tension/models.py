"""Shared Pydantic models used across the monitor."""

from __future__ import annotations

import uuid
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# ── Enums ─────────────────────────────────────────────────────


class AlertSeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"


class CalibrationPhase(str, Enum):
    """Lifecycle of a :class:`~face_tension.calibration.session.CalibrationSession`."""

    NOT_STARTED = "not_started"
    COLLECTING = "collecting"
    FINALIZED = "finalized"


class TickStatus(str, Enum):
    """What happened on a single pipeline tick.

    Used for observability only; the alert itself travels separately.
    """

    NO_SIGNAL = "no_signal"
    CALIBRATING = "calibrating"
    CALIBRATION_COMPLETE = "calibration_complete"
    CALIBRATION_FAILED = "calibration_failed"
    UNCALIBRATED = "uncalibrated"
    HEAD_TURNED = "head_turned"
    SMILING = "smiling"
    RELAXED = "relaxed"
    ACCUMULATING = "accumulating"
    ALERT = "alert"


# ── Landmarks & frames ────────────────────────────────────────


class Landmark(BaseModel):
    """A normalised face landmark; ``x``/``y`` are fractions of the frame.

    Coordinates must be finite.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    x: float
    y: float
    z: float | None = None


class Frame(BaseModel):
    """One delivery from the frame source.

    ``landmarks`` may be empty when no face was found in the frame.
    Landmarks are accepted either as objects or as ``[x, y, z?]`` lists.
    """

    model_config = ConfigDict(allow_inf_nan=False)

    timestamp: float  # monotonic milliseconds
    landmarks: list[Landmark] = Field(default_factory=list)

    @field_validator("landmarks", mode="before")
    @classmethod
    def _coerce_landmarks(cls, value: Any) -> Any:
        if value is None:
            return []
        coerced = []
        for item in value:
            if isinstance(item, (list, tuple)):
                if len(item) not in (2, 3):
                    raise ValueError(f"landmark must have 2 or 3 coordinates, got {len(item)}")
                coerced.append(dict(zip(("x", "y", "z"), item)))
            else:
                coerced.append(item)
        return coerced


# ── Signals & classifier outputs ──────────────────────────────


class Signals(BaseModel):
    """Scale-invariant geometric ratios computed from a single frame.

    All distances are divided by the face width, so the values do not
    change as the user moves towards or away from the camera.
    """

    model_config = ConfigDict(frozen=True)

    eye_open_avg: float = Field(description="Mean eyelid gap of both eyes; lower when squinting.")
    brow_inner_dist: float = Field(description="Inner-brow span; lower when furrowing.")
    mouth_width: float = Field(description="Mouth-corner span; higher when smiling.")
    mouth_corner_lift: float = Field(
        description="Corner height above the upper-lip centre; may be negative.",
    )
    cheek_raise: float = Field(description="Corner-to-cheek distance; lower when smiling.")
    head_rotation: float = Field(
        description="Signed nose-bridge asymmetry in (-1, 1); 0 when facing forward.",
    )


class SmileResult(BaseModel):
    """Output of the smile classifier with its contributing indicators."""

    is_smiling: bool
    score: float = Field(ge=0.0, le=1.0)
    mouth_width_ratio: float
    corner_lift_delta: float
    cheek_raise_ratio: float
    indicator_count: int = Field(ge=0, le=3)


# ── Alerts ────────────────────────────────────────────────────


class AlertEvent(BaseModel):
    """Raised once per sustained-tension episode."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: float  # monotonic milliseconds of the firing tick
    sustained_ms: float = 0.0
    severity: AlertSeverity = AlertSeverity.WARNING
    message: str = "Sustained facial tension detected. Take a breath and relax your face."
