"""Pure live-vs-baseline classifiers for tension and smiling."""

from __future__ import annotations

from face_tension.models import Signals, SmileResult

# Weights of the three smile components in the continuous score.
_MOUTH_WIDTH_WEIGHT = 0.4
_CORNER_LIFT_WEIGHT = 0.35
_CHEEK_RAISE_WEIGHT = 0.25

# Per-component gains mapping a raw deviation onto roughly [0, 1].
_MOUTH_WIDTH_GAIN = 10.0
_CORNER_LIFT_GAIN = 100.0
_CHEEK_RAISE_GAIN = 10.0


def _ratio(live: float, reference: float) -> float:
    # A zero reference carries no information; treat it as "unchanged".
    return live / reference if reference != 0 else 1.0


def is_tense(signal: Signals, baseline: Signals, threshold_ratio: float = 0.9) -> bool:
    """Return ``True`` when the eyes narrow *or* the inner brows draw together.

    Either indicator alone is enough.
    """
    return (
        signal.eye_open_avg < baseline.eye_open_avg * threshold_ratio
        or signal.brow_inner_dist < baseline.brow_inner_dist * threshold_ratio
    )


def classify_smile(
    signal: Signals,
    baseline: Signals,
    *,
    mouth_width_threshold: float = 1.05,
    corner_lift_threshold: float = 1.3,
    corner_lift_floor: float = 0.002,
    cheek_raise_threshold: float = 0.95,
    score_threshold: float = 0.3,
    min_indicators: int = 2,
) -> SmileResult:
    """Score how much *signal* looks like a smile relative to *baseline*.

    A smile is declared when the weighted score exceeds *score_threshold*
    or at least *min_indicators* of the three binary indicators (wider
    mouth, lifted corners, raised cheeks) are true.

    *corner_lift_threshold* is expressed as a ratio: ``1.3`` means the
    corners must rise by 30% of the baseline lift, but never by less than
    *corner_lift_floor*.
    """
    mouth_width_ratio = _ratio(signal.mouth_width, baseline.mouth_width)
    mouth_width_score = max(0.0, (mouth_width_ratio - 1) * _MOUTH_WIDTH_GAIN)

    corner_lift_delta = signal.mouth_corner_lift - baseline.mouth_corner_lift
    corner_lift_score = max(0.0, corner_lift_delta * _CORNER_LIFT_GAIN)

    cheek_raise_ratio = _ratio(signal.cheek_raise, baseline.cheek_raise)
    cheek_raise_score = max(0.0, (1 - cheek_raise_ratio) * _CHEEK_RAISE_GAIN)

    score = (
        _MOUTH_WIDTH_WEIGHT * mouth_width_score
        + _CORNER_LIFT_WEIGHT * corner_lift_score
        + _CHEEK_RAISE_WEIGHT * cheek_raise_score
    )
    score = min(1.0, max(0.0, score))

    corner_lift_min = max(
        baseline.mouth_corner_lift * (corner_lift_threshold - 1),
        corner_lift_floor,
    )
    indicators = (
        mouth_width_ratio > mouth_width_threshold,
        corner_lift_delta > corner_lift_min,
        cheek_raise_ratio < cheek_raise_threshold,
    )
    indicator_count = sum(indicators)

    return SmileResult(
        is_smiling=score > score_threshold or indicator_count >= min_indicators,
        score=score,
        mouth_width_ratio=mouth_width_ratio,
        corner_lift_delta=corner_lift_delta,
        cheek_raise_ratio=cheek_raise_ratio,
        indicator_count=indicator_count,
    )
