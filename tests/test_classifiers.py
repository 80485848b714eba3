"""Tests for the tension and smile classifiers."""

from __future__ import annotations

import pytest

from face_tension.detection.classifiers import classify_smile, is_tense


class TestIsTense:
    def test_neutral_is_relaxed(self, neutral_signals):
        assert is_tense(neutral_signals, neutral_signals) is False

    def test_eye_boundary(self, neutral_signals):
        narrowed = neutral_signals.model_copy(update={"eye_open_avg": 0.089})
        open_ = neutral_signals.model_copy(update={"eye_open_avg": 0.091})
        assert is_tense(narrowed, neutral_signals, 0.9) is True
        assert is_tense(open_, neutral_signals, 0.9) is False

    def test_brow_alone_is_enough(self, neutral_signals):
        furrowed = neutral_signals.model_copy(update={"brow_inner_dist": 0.17})
        assert is_tense(furrowed, neutral_signals) is True

    def test_custom_ratio(self, neutral_signals):
        narrowed = neutral_signals.model_copy(update={"eye_open_avg": 0.085})
        assert is_tense(narrowed, neutral_signals, 0.8) is False
        assert is_tense(narrowed, neutral_signals, 0.9) is True

    def test_wider_eyes_are_not_tense(self, neutral_signals):
        surprised = neutral_signals.model_copy(update={"eye_open_avg": 0.15, "brow_inner_dist": 0.25})
        assert is_tense(surprised, neutral_signals) is False


class TestClassifySmile:
    def test_neutral_is_not_smiling(self, neutral_signals):
        result = classify_smile(neutral_signals, neutral_signals)
        assert result.is_smiling is False
        assert result.score == 0.0
        assert result.indicator_count == 0
        assert result.mouth_width_ratio == pytest.approx(1.0)

    def test_two_indicators_win_with_low_score(self, neutral_signals):
        # Mouth 5.1% wider and corners lifted just past the 0.002 floor.
        live = neutral_signals.model_copy(
            update={
                "mouth_width": neutral_signals.mouth_width * 1.051,
                "mouth_corner_lift": neutral_signals.mouth_corner_lift + 0.0022,
            },
        )
        result = classify_smile(live, neutral_signals)
        assert result.indicator_count == 2
        assert result.score < 0.3
        assert result.is_smiling is True

    def test_wide_mouth_with_lifted_corners(self, neutral_signals):
        live = neutral_signals.model_copy(
            update={
                "mouth_width": neutral_signals.mouth_width * 1.1,
                "mouth_corner_lift": neutral_signals.mouth_corner_lift + 0.003,
            },
        )
        result = classify_smile(live, neutral_signals)
        assert result.mouth_width_ratio == pytest.approx(1.1)
        assert result.indicator_count == 2
        assert result.is_smiling is True

    def test_score_alone_is_enough(self, neutral_signals):
        live = neutral_signals.model_copy(update={"mouth_width": neutral_signals.mouth_width * 1.2})
        result = classify_smile(live, neutral_signals)
        assert result.indicator_count == 1
        assert result.score == pytest.approx(0.8)
        assert result.is_smiling is True

    def test_single_weak_indicator_is_not_a_smile(self, neutral_signals):
        live = neutral_signals.model_copy(update={"mouth_width": neutral_signals.mouth_width * 1.06})
        result = classify_smile(live, neutral_signals)
        assert result.indicator_count == 1
        assert result.score == pytest.approx(0.24)
        assert result.is_smiling is False

    def test_cheek_raise_indicator(self, neutral_signals):
        live = neutral_signals.model_copy(update={"cheek_raise": neutral_signals.cheek_raise * 0.9})
        result = classify_smile(live, neutral_signals)
        assert result.cheek_raise_ratio == pytest.approx(0.9)
        assert result.indicator_count == 1
        assert result.score == pytest.approx(0.25)

    def test_score_is_clamped(self, neutral_signals):
        live = neutral_signals.model_copy(
            update={
                "mouth_width": neutral_signals.mouth_width * 1.5,
                "cheek_raise": neutral_signals.cheek_raise * 0.5,
                "mouth_corner_lift": 0.05,
            },
        )
        result = classify_smile(live, neutral_signals)
        assert result.score == 1.0
        assert result.indicator_count == 3

    def test_narrower_mouth_does_not_score_negative(self, neutral_signals):
        live = neutral_signals.model_copy(
            update={"mouth_width": 0.2, "cheek_raise": 0.3, "mouth_corner_lift": -0.08},
        )
        result = classify_smile(live, neutral_signals)
        assert result.score == 0.0
        assert result.is_smiling is False

    def test_corner_lift_threshold_scales_with_baseline(self, neutral_signals):
        baseline = neutral_signals.model_copy(update={"mouth_corner_lift": 0.02})
        below = baseline.model_copy(update={"mouth_corner_lift": 0.025})
        above = baseline.model_copy(update={"mouth_corner_lift": 0.027})
        # 30% of 0.02 is 0.006.
        assert classify_smile(below, baseline).indicator_count == 0
        assert classify_smile(above, baseline).indicator_count == 1

    def test_thresholds_are_tunable(self, neutral_signals):
        live = neutral_signals.model_copy(update={"mouth_width": neutral_signals.mouth_width * 1.06})
        result = classify_smile(live, neutral_signals, score_threshold=0.2)
        assert result.is_smiling is True
        strict = classify_smile(
            live.model_copy(update={"cheek_raise": 0.18}),
            neutral_signals,
            score_threshold=1.0,
            min_indicators=3,
        )
        assert strict.indicator_count == 2
        assert strict.is_smiling is False

    def test_zero_baseline_component_does_not_divide(self, neutral_signals):
        baseline = neutral_signals.model_copy(update={"mouth_width": 0.0, "cheek_raise": 0.0})
        result = classify_smile(neutral_signals, baseline)
        assert result.mouth_width_ratio == 1.0
        assert result.cheek_raise_ratio == 1.0
