"""Tests for the calibration session."""

from __future__ import annotations

import pytest

from face_tension.calibration.session import CalibrationSession, compute_baseline
from face_tension.models import CalibrationPhase, Signals


def _turned(signals: Signals, rotation: float) -> Signals:
    return signals.model_copy(update={"head_rotation": rotation})


class TestComputeBaseline:
    def test_empty(self):
        assert compute_baseline([]) is None

    def test_component_wise_mean(self, neutral_signals):
        other = neutral_signals.model_copy(update={"eye_open_avg": 0.20, "head_rotation": 0.2})
        baseline = compute_baseline([neutral_signals, other])
        assert baseline.eye_open_avg == pytest.approx(0.15)
        assert baseline.head_rotation == pytest.approx(0.1)
        assert baseline.brow_inner_dist == pytest.approx(0.20)


class TestCalibrationSession:
    def test_offer_before_start_is_ignored(self, neutral_signals):
        session = CalibrationSession()
        assert session.phase is CalibrationPhase.NOT_STARTED
        assert session.offer(neutral_signals, 0) is False
        assert session.tick(20_000) is False
        assert session.baseline is None

    def test_constant_signal_yields_same_baseline(self, neutral_signals):
        session = CalibrationSession()
        session.start(0)
        for t in range(0, 10_000, 100):
            assert session.offer(neutral_signals, t)
        assert session.tick(10_000) is True

        baseline = session.baseline
        assert session.phase is CalibrationPhase.FINALIZED
        assert session.sample_count == 100
        for name in Signals.model_fields:
            assert getattr(baseline, name) == pytest.approx(getattr(neutral_signals, name))

    def test_sample_interval(self, neutral_signals):
        session = CalibrationSession(sample_interval_ms=100)
        session.start(0)
        assert session.offer(neutral_signals, 0) is True
        assert session.offer(neutral_signals, 50) is False
        assert session.offer(neutral_signals, 99.9) is False
        assert session.offer(neutral_signals, 100) is True
        assert session.sample_count == 2

    def test_turned_head_samples_excluded(self, neutral_signals):
        valid = [
            neutral_signals.model_copy(update={"eye_open_avg": 0.09 + i * 0.005})
            for i in range(5)
        ]

        only_valid = CalibrationSession()
        only_valid.start(0)
        for i, s in enumerate(valid):
            only_valid.offer(s, i * 200)
        only_valid.tick(10_000)

        mixed = CalibrationSession()
        mixed.start(0)
        for i, s in enumerate(valid):
            # Gated samples are offered first, each on its own interval.
            assert mixed.offer(_turned(s, 0.6 if i % 2 else -0.7), i * 200) is False
            assert mixed.offer(s, i * 200 + 100) is True
        mixed.tick(10_000)

        assert mixed.sample_count == 5
        assert mixed.baseline == only_valid.baseline

    def test_gate_is_inclusive(self, neutral_signals):
        session = CalibrationSession(head_rotation_gate=0.5)
        session.start(0)
        assert session.offer(_turned(neutral_signals, 0.5), 0) is True
        assert session.offer(_turned(neutral_signals, -0.5), 100) is True

    def test_window_closes_at_end_time(self, neutral_signals):
        session = CalibrationSession(duration_ms=1_000)
        session.start(500)
        session.offer(neutral_signals, 500)
        assert session.tick(1_499) is False
        assert session.is_collecting
        assert session.tick(1_500) is True
        assert session.succeeded
        # Further ticks and offers are ignored once finalized.
        assert session.tick(2_000) is False
        assert session.offer(neutral_signals, 2_000) is False
        assert session.sample_count == 1

    def test_empty_window_fails(self):
        session = CalibrationSession(duration_ms=1_000)
        session.start(0)
        assert session.tick(1_000) is True
        assert session.phase is CalibrationPhase.FINALIZED
        assert session.baseline is None
        assert session.succeeded is False

    def test_all_turned_window_fails(self, neutral_signals):
        session = CalibrationSession(duration_ms=1_000)
        session.start(0)
        for t in range(0, 1_000, 100):
            session.offer(_turned(neutral_signals, 0.9), t)
        session.tick(1_000)
        assert session.baseline is None

    def test_seconds_remaining(self):
        session = CalibrationSession(duration_ms=10_000)
        assert session.seconds_remaining(0) == 0
        session.start(0)
        assert session.seconds_remaining(0) == 10
        assert session.seconds_remaining(1) == 10
        assert session.seconds_remaining(9_001) == 1
        assert session.seconds_remaining(10_000) == 0
        assert session.seconds_remaining(12_000) == 0

    def test_restart_discards_previous_state(self, neutral_signals):
        session = CalibrationSession(duration_ms=1_000)
        session.start(0)
        session.offer(neutral_signals, 0)
        session.tick(1_000)
        assert session.baseline is not None

        session.start(5_000)
        assert session.is_collecting
        assert session.baseline is None
        assert session.sample_count == 0
        assert session.end_time == 6_000
        # The interval restarts with the new window.
        assert session.offer(neutral_signals, 5_000) is True

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"duration_ms": 0},
            {"duration_ms": -1},
            {"sample_interval_ms": -5},
            {"head_rotation_gate": 0},
            {"duration_ms": float("nan")},
            {"sample_interval_ms": float("nan")},
        ],
    )
    def test_invalid_configuration(self, kwargs):
        with pytest.raises(ValueError):
            CalibrationSession(**kwargs)
