"""Centralised monitor settings loaded from environment / .env file."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    """All runtime configuration for the tension monitor.

    Values are read from environment variables first, then from a *.env* file
    located at the project root.  Every variable lives in the flat
    ``FACE_TENSION_`` namespace, e.g. ``FACE_TENSION_ALERT_SUSTAIN_MS=5000``.

    Invalid values (negative durations, non-positive ratios) are rejected
    with :class:`pydantic.ValidationError` when the object is built.
    """

    model_config = SettingsConfigDict(
        env_prefix="FACE_TENSION_",
        env_file=str(_PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Calibration ───────────────────────────────────────────
    calibration_duration_ms: float = Field(10_000.0, gt=0)
    sample_interval_ms: float = Field(100.0, ge=0)

    # ── Tension detection ─────────────────────────────────────
    alert_sustain_ms: float = Field(3_000.0, ge=0)
    tension_threshold_ratio: float = Field(0.9, gt=0)

    # ── Smile suppression ─────────────────────────────────────
    smile_mouth_width_threshold: float = Field(1.05, gt=0)
    smile_corner_lift_threshold: float = Field(1.3, ge=1.0)  # 1.3 → 30% of baseline lift
    smile_corner_lift_floor: float = Field(0.002, ge=0)
    smile_cheek_raise_threshold: float = Field(0.95, gt=0)
    smile_score_threshold: float = Field(0.3, ge=0, le=1)
    smile_min_indicators: int = Field(2, ge=1, le=3)

    # ── Head pose gating ──────────────────────────────────────
    head_rotation_gate: float = Field(0.5, gt=0, le=1)

    # ── Landmark model ────────────────────────────────────────
    landmark_count: int = Field(478, gt=0)  # MediaPipe Face Landmarker with irises

    # ── Notifications ─────────────────────────────────────────
    webhook_url: str = ""
    webhook_timeout_seconds: float = Field(10.0, gt=0)

    # ── Logging ───────────────────────────────────────────────
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Return a cached :class:`Settings` singleton."""
    return Settings()
