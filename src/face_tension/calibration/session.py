"""Calibration session — timed, gated collection of neutral-face samples.

Lifecycle: ``NOT_STARTED → COLLECTING → FINALIZED``.  Samples are accepted
at most once per ``sample_interval_ms`` and only while the head faces the
camera (``|head_rotation| ≤ head_rotation_gate``), so turned-head frames do
not bias the baseline.  When the window closes the baseline is the
component-wise mean of the accepted samples; an empty window finalizes
*without* a baseline and the caller must treat that as a failed calibration.
"""

from __future__ import annotations

import math
import statistics
from typing import Sequence

import structlog

from face_tension.models import CalibrationPhase, Signals

logger = structlog.get_logger(__name__)


def compute_baseline(samples: Sequence[Signals]) -> Signals | None:
    """Component-wise arithmetic mean of *samples*; ``None`` when empty."""
    if not samples:
        return None
    return Signals(
        **{
            name: statistics.fmean(getattr(s, name) for s in samples)
            for name in Signals.model_fields
        }
    )


class CalibrationSession:
    """Accumulate gated signal samples over a fixed window.

    Parameters
    ----------
    duration_ms : float
        Window length (default 10 s).
    sample_interval_ms : float
        Minimum gap between two accepted samples.
    head_rotation_gate : float
        Samples with ``|head_rotation|`` above this are rejected.
    """

    def __init__(
        self,
        duration_ms: float = 10_000.0,
        sample_interval_ms: float = 100.0,
        head_rotation_gate: float = 0.5,
    ) -> None:
        if not duration_ms > 0:
            raise ValueError(f"duration_ms must be positive, got {duration_ms}")
        if not sample_interval_ms >= 0:
            raise ValueError(f"sample_interval_ms must be non-negative, got {sample_interval_ms}")
        if not head_rotation_gate > 0:
            raise ValueError(f"head_rotation_gate must be positive, got {head_rotation_gate}")

        self._duration_ms = duration_ms
        self._sample_interval_ms = sample_interval_ms
        self._head_rotation_gate = head_rotation_gate

        self._phase = CalibrationPhase.NOT_STARTED
        self._samples: list[Signals] = []
        self._start_time: float | None = None
        self._end_time: float | None = None
        self._last_sample_time: float | None = None
        self._baseline: Signals | None = None

    # ── Queries ───────────────────────────────────────────────

    @property
    def phase(self) -> CalibrationPhase:
        return self._phase

    @property
    def is_collecting(self) -> bool:
        return self._phase is CalibrationPhase.COLLECTING

    @property
    def samples(self) -> list[Signals]:
        return list(self._samples)

    @property
    def sample_count(self) -> int:
        return len(self._samples)

    @property
    def end_time(self) -> float | None:
        return self._end_time

    @property
    def baseline(self) -> Signals | None:
        """The computed baseline once finalized; ``None`` before or on failure."""
        return self._baseline

    @property
    def succeeded(self) -> bool:
        return self._phase is CalibrationPhase.FINALIZED and self._baseline is not None

    def seconds_remaining(self, now: float) -> int:
        """Whole seconds left in the window, rounded up and never negative."""
        if self._end_time is None or self._phase is not CalibrationPhase.COLLECTING:
            return 0
        return max(0, math.ceil((self._end_time - now) / 1000))

    # ── Transitions ───────────────────────────────────────────

    def start(self, now: float) -> None:
        """Begin a fresh window at *now*, discarding any earlier state."""
        self._samples = []
        self._last_sample_time = None
        self._baseline = None
        self._start_time = now
        self._end_time = now + self._duration_ms
        self._phase = CalibrationPhase.COLLECTING
        logger.info("calibration.started", start=now, end=self._end_time)

    def offer(self, signal: Signals, now: float) -> bool:
        """Offer a sample; return ``True`` if it was accepted."""
        if self._phase is not CalibrationPhase.COLLECTING:
            return False

        if (
            self._last_sample_time is not None
            and now - self._last_sample_time < self._sample_interval_ms
        ):
            return False

        if abs(signal.head_rotation) > self._head_rotation_gate:
            logger.debug(
                "calibration.sample_rejected",
                reason="head_turned",
                head_rotation=signal.head_rotation,
            )
            return False

        self._samples.append(signal)
        self._last_sample_time = now
        return True

    def tick(self, now: float) -> bool:
        """Close the window if it has expired.  Return ``True`` on the closing tick."""
        if self._phase is not CalibrationPhase.COLLECTING or self._end_time is None:
            return False
        if now < self._end_time:
            return False

        self._baseline = compute_baseline(self._samples)
        self._phase = CalibrationPhase.FINALIZED
        if self._baseline is None:
            logger.warning("calibration.failed", reason="no_accepted_samples")
        else:
            logger.info(
                "calibration.finalized",
                samples=len(self._samples),
                eye_open_avg=round(self._baseline.eye_open_avg, 5),
                brow_inner_dist=round(self._baseline.brow_inner_dist, 5),
            )
        return True
