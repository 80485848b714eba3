"""Tension detection — live-vs-baseline classifiers and the alert state machine."""

from face_tension.detection.classifiers import classify_smile, is_tense
from face_tension.detection.state_machine import (
    Accumulating,
    DetectionConfig,
    DetectionState,
    DetectionStateMachine,
    Idle,
    StepResult,
    step,
)

__all__ = [
    "Accumulating",
    "DetectionConfig",
    "DetectionState",
    "DetectionStateMachine",
    "Idle",
    "StepResult",
    "classify_smile",
    "is_tense",
    "step",
]
