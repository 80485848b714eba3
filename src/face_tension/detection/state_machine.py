"""Hysteresis state machine — accumulate sustained tension, fire, reset.

Two states:

* :class:`Idle` — nothing is being accumulated.
* :class:`Accumulating` — tension has been present on every tick since
  ``start_time``.

Any head-turned, smiling or relaxed tick drops back to :class:`Idle` with no
partial credit.  Once ``now - start_time`` reaches ``alert_sustain_ms`` one
:class:`AlertEvent` is emitted and the machine returns to :class:`Idle`, so
the next episode must accumulate from zero again.

:func:`step` is the pure transition; :class:`DetectionStateMachine` owns
the current state for the pipeline.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

import structlog

from face_tension.detection.classifiers import classify_smile, is_tense
from face_tension.models import AlertEvent, Signals, SmileResult, TickStatus

if TYPE_CHECKING:
    from face_tension.config import Settings

logger = structlog.get_logger(__name__)


# ── States ────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class Idle:
    pass


@dataclass(frozen=True, slots=True)
class Accumulating:
    start_time: float


DetectionState = Union[Idle, Accumulating]

IDLE = Idle()


# ── Configuration ─────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class DetectionConfig:
    """Thresholds consumed by :func:`step`; all independently tunable."""

    alert_sustain_ms: float = 3_000.0
    tension_threshold_ratio: float = 0.9
    head_rotation_gate: float = 0.5
    smile_mouth_width_threshold: float = 1.05
    smile_corner_lift_threshold: float = 1.3
    smile_corner_lift_floor: float = 0.002
    smile_cheek_raise_threshold: float = 0.95
    smile_score_threshold: float = 0.3
    smile_min_indicators: int = 2

    def __post_init__(self) -> None:
        for name in (
            "alert_sustain_ms",
            "tension_threshold_ratio",
            "head_rotation_gate",
            "smile_mouth_width_threshold",
            "smile_corner_lift_threshold",
            "smile_corner_lift_floor",
            "smile_cheek_raise_threshold",
            "smile_score_threshold",
        ):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise ValueError(f"{name} must be finite, got {value}")

        # Same bounds as the FACE_TENSION_* settings.
        if self.alert_sustain_ms < 0:
            raise ValueError(f"alert_sustain_ms must be non-negative, got {self.alert_sustain_ms}")
        if self.tension_threshold_ratio <= 0:
            raise ValueError(
                f"tension_threshold_ratio must be positive, got {self.tension_threshold_ratio}"
            )
        if not 0 < self.head_rotation_gate <= 1:
            raise ValueError(f"head_rotation_gate must be in (0, 1], got {self.head_rotation_gate}")
        if self.smile_mouth_width_threshold <= 0:
            raise ValueError(
                f"smile_mouth_width_threshold must be positive, got {self.smile_mouth_width_threshold}"
            )
        if self.smile_cheek_raise_threshold <= 0:
            raise ValueError(
                f"smile_cheek_raise_threshold must be positive, got {self.smile_cheek_raise_threshold}"
            )
        if self.smile_corner_lift_threshold < 1:
            raise ValueError(
                f"smile_corner_lift_threshold must be at least 1, got {self.smile_corner_lift_threshold}"
            )
        if self.smile_corner_lift_floor < 0:
            raise ValueError(
                f"smile_corner_lift_floor must be non-negative, got {self.smile_corner_lift_floor}"
            )
        if not 0 <= self.smile_score_threshold <= 1:
            raise ValueError(
                f"smile_score_threshold must be in [0, 1], got {self.smile_score_threshold}"
            )
        if not 1 <= self.smile_min_indicators <= 3:
            raise ValueError(
                f"smile_min_indicators must be between 1 and 3, got {self.smile_min_indicators}"
            )

    @classmethod
    def from_settings(cls, settings: Settings) -> DetectionConfig:
        return cls(
            alert_sustain_ms=settings.alert_sustain_ms,
            tension_threshold_ratio=settings.tension_threshold_ratio,
            head_rotation_gate=settings.head_rotation_gate,
            smile_mouth_width_threshold=settings.smile_mouth_width_threshold,
            smile_corner_lift_threshold=settings.smile_corner_lift_threshold,
            smile_corner_lift_floor=settings.smile_corner_lift_floor,
            smile_cheek_raise_threshold=settings.smile_cheek_raise_threshold,
            smile_score_threshold=settings.smile_score_threshold,
            smile_min_indicators=settings.smile_min_indicators,
        )


# ── Transition ────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class StepResult:
    """New state plus everything observed on the tick."""

    state: DetectionState
    status: TickStatus
    alert: AlertEvent | None = None
    smile: SmileResult | None = None
    tense: bool | None = None


def step(
    state: DetectionState,
    signal: Signals,
    baseline: Signals | None,
    now: float,
    config: DetectionConfig = DetectionConfig(),
) -> StepResult:
    """Advance the detector by one tick.  Pure: no logging, no clocks."""
    if baseline is None:
        return StepResult(state=IDLE, status=TickStatus.UNCALIBRATED)

    if abs(signal.head_rotation) > config.head_rotation_gate:
        return StepResult(state=IDLE, status=TickStatus.HEAD_TURNED)

    smile = classify_smile(
        signal,
        baseline,
        mouth_width_threshold=config.smile_mouth_width_threshold,
        corner_lift_threshold=config.smile_corner_lift_threshold,
        corner_lift_floor=config.smile_corner_lift_floor,
        cheek_raise_threshold=config.smile_cheek_raise_threshold,
        score_threshold=config.smile_score_threshold,
        min_indicators=config.smile_min_indicators,
    )
    if smile.is_smiling:
        return StepResult(state=IDLE, status=TickStatus.SMILING, smile=smile)

    tense = is_tense(signal, baseline, config.tension_threshold_ratio)
    if not tense:
        return StepResult(state=IDLE, status=TickStatus.RELAXED, smile=smile, tense=False)

    if isinstance(state, Accumulating):
        sustained = now - state.start_time
        if sustained >= config.alert_sustain_ms:
            alert = AlertEvent(timestamp=now, sustained_ms=sustained)
            return StepResult(
                state=IDLE, status=TickStatus.ALERT, alert=alert, smile=smile, tense=True,
            )
        return StepResult(state=state, status=TickStatus.ACCUMULATING, smile=smile, tense=True)

    return StepResult(
        state=Accumulating(start_time=now),
        status=TickStatus.ACCUMULATING,
        smile=smile,
        tense=True,
    )


# ── Stateful wrapper ──────────────────────────────────────────


class DetectionStateMachine:
    """Own the :data:`DetectionState` and advance it once per tick."""

    def __init__(self, config: DetectionConfig | None = None) -> None:
        self._config = config or DetectionConfig()
        self._state: DetectionState = IDLE

    @property
    def state(self) -> DetectionState:
        return self._state

    @property
    def config(self) -> DetectionConfig:
        return self._config

    def reset(self) -> None:
        self._state = IDLE

    def update(self, signal: Signals, baseline: Signals | None, now: float) -> StepResult:
        previous = self._state
        result = step(previous, signal, baseline, now, self._config)
        self._state = result.state

        if result.alert is not None:
            logger.info(
                "detection.alert_fired",
                alert_id=result.alert.id,
                timestamp=now,
                sustained_ms=result.alert.sustained_ms,
            )
        elif isinstance(result.state, Accumulating) and not isinstance(previous, Accumulating):
            logger.debug("detection.accumulating", start=now)
        elif isinstance(previous, Accumulating) and isinstance(result.state, Idle):
            logger.debug("detection.reset", reason=result.status.value, timestamp=now)
        return result
