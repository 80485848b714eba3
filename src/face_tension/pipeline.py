"""Per-tick pipeline — landmarks → signals → calibration or detection.

The pipeline is synchronous and owns all mutable state (calibration
session, baseline, detection state).  Call :meth:`TensionPipeline.tick`
once per delivered frame; it never blocks and never performs I/O.  Alert
delivery happens outside, in :mod:`face_tension.streaming.runner` and
:mod:`face_tension.notifications`.

While a calibration window is collecting, detection does not run; the tick
that closes the window is still a calibration tick.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

import structlog
from pydantic import BaseModel

from face_tension.calibration.session import CalibrationSession
from face_tension.detection.state_machine import (
    Accumulating,
    DetectionConfig,
    DetectionState,
    DetectionStateMachine,
)
from face_tension.face.indices import MEDIAPIPE_FACE_MESH, LandmarkIndexTable
from face_tension.face.signals import extract_signals
from face_tension.models import AlertEvent, Landmark, Signals, TickStatus

if TYPE_CHECKING:
    from face_tension.config import Settings

logger = structlog.get_logger(__name__)


class TickResult(BaseModel):
    """Everything observable about one tick."""

    timestamp: float
    status: TickStatus
    signal: Signals | None = None
    alert: AlertEvent | None = None
    smile_score: float | None = None
    tense: bool | None = None
    calibration_seconds_left: int | None = None


class TensionPipeline:
    """Combine signal extraction, calibration and detection for one face.

    Parameters
    ----------
    table : LandmarkIndexTable
        Role → index mapping for the landmark model in use.
    calibration_duration_ms, sample_interval_ms :
        Calibration window length and sampling gap.
    detection : DetectionConfig
        Thresholds for the classifiers and the alert state machine.  Its
        ``head_rotation_gate`` also gates calibration samples.
    """

    def __init__(
        self,
        table: LandmarkIndexTable = MEDIAPIPE_FACE_MESH,
        *,
        calibration_duration_ms: float = 10_000.0,
        sample_interval_ms: float = 100.0,
        detection: DetectionConfig | None = None,
    ) -> None:
        self._table = table
        self._detection_config = detection or DetectionConfig()
        # Reject invalid calibration parameters at construction.
        CalibrationSession(
            duration_ms=calibration_duration_ms,
            sample_interval_ms=sample_interval_ms,
            head_rotation_gate=self._detection_config.head_rotation_gate,
        )
        self._calibration_duration_ms = calibration_duration_ms
        self._sample_interval_ms = sample_interval_ms

        self._session: CalibrationSession | None = None
        self._baseline: Signals | None = None
        self._detector = DetectionStateMachine(self._detection_config)

    @classmethod
    def from_settings(cls, settings: Settings) -> TensionPipeline:
        """Build a pipeline wired from application settings."""
        return cls(
            MEDIAPIPE_FACE_MESH.with_landmark_count(settings.landmark_count),
            calibration_duration_ms=settings.calibration_duration_ms,
            sample_interval_ms=settings.sample_interval_ms,
            detection=DetectionConfig.from_settings(settings),
        )

    # ── State ─────────────────────────────────────────────────

    @property
    def baseline(self) -> Signals | None:
        return self._baseline

    @property
    def calibration(self) -> CalibrationSession | None:
        return self._session

    @property
    def is_calibrating(self) -> bool:
        return self._session is not None and self._session.is_collecting

    @property
    def detection_state(self) -> DetectionState:
        return self._detector.state

    @property
    def is_accumulating(self) -> bool:
        return isinstance(self._detector.state, Accumulating)

    # ── Control ───────────────────────────────────────────────

    def start_calibration(self, now: float) -> None:
        """Start a new calibration window, discarding the previous baseline."""
        self._baseline = None
        self._detector.reset()
        self._session = CalibrationSession(
            duration_ms=self._calibration_duration_ms,
            sample_interval_ms=self._sample_interval_ms,
            head_rotation_gate=self._detection_config.head_rotation_gate,
        )
        self._session.start(now)

    def reset(self) -> None:
        """Forget the baseline, any calibration in flight and detection progress."""
        self._session = None
        self._baseline = None
        self._detector.reset()

    # ── Tick ──────────────────────────────────────────────────

    def tick(self, landmarks: Sequence[Landmark] | None, now: float) -> TickResult:
        """Process one frame delivered at *now* (monotonic milliseconds)."""
        signal = extract_signals(landmarks or [], self._table)

        if self._session is not None and self._session.is_collecting:
            return self._calibration_tick(self._session, signal, now)

        if signal is None:
            logger.debug("pipeline.no_signal", timestamp=now)
            return TickResult(timestamp=now, status=TickStatus.NO_SIGNAL)

        result = self._detector.update(signal, self._baseline, now)
        return TickResult(
            timestamp=now,
            status=result.status,
            signal=signal,
            alert=result.alert,
            smile_score=result.smile.score if result.smile is not None else None,
            tense=result.tense,
        )

    def _calibration_tick(
        self,
        session: CalibrationSession,
        signal: Signals | None,
        now: float,
    ) -> TickResult:
        if signal is not None:
            session.offer(signal, now)

        if not session.tick(now):
            return TickResult(
                timestamp=now,
                status=TickStatus.CALIBRATING,
                signal=signal,
                calibration_seconds_left=session.seconds_remaining(now),
            )

        self._baseline = session.baseline
        status = TickStatus.CALIBRATION_COMPLETE if session.succeeded else TickStatus.CALIBRATION_FAILED
        return TickResult(
            timestamp=now,
            status=status,
            signal=signal,
            calibration_seconds_left=0,
        )
