"""Async frame loop connecting a frame source → pipeline → alert delivery."""

from __future__ import annotations

import time
from collections import Counter
from dataclasses import dataclass, field
from typing import Awaitable, Callable

import structlog

from face_tension.models import AlertEvent, TickStatus
from face_tension.notifications.handlers import AlertDispatcher, DispatchResult
from face_tension.pipeline import TensionPipeline, TickResult
from face_tension.sources.base import FrameSource

logger = structlog.get_logger(__name__)

AlertConsumer = Callable[[AlertEvent], Awaitable[object]]
TickObserver = Callable[[TickResult], None]


@dataclass(slots=True)
class RunSummary:
    """Counters collected over one :meth:`FrameRunner.run`."""

    frames: int = 0
    alerts: list[AlertEvent] = field(default_factory=list)
    statuses: Counter = field(default_factory=Counter)
    baseline_established: bool = False
    deliveries: list[DispatchResult] = field(default_factory=list)

    @property
    def undelivered(self) -> list[str]:
        """Ids of alerts that at least one channel failed to deliver."""
        return [d.alert_id for d in self.deliveries if not d.all_ok]


class FrameRunner:
    """Pull frames from a source and tick the pipeline once per frame.

    The pipeline itself is synchronous; only the source and alert delivery
    are awaited.  Each alert goes to the *dispatcher* first, whose
    :class:`DispatchResult` is kept in the run summary, then to every
    registered consumer; a consumer that raises is logged and skipped.

    Parameters
    ----------
    pipeline : TensionPipeline
        The per-tick core.
    source : FrameSource
        Where frames come from.
    calibrate_at : float | None
        Start calibration on the first frame whose timestamp is at or after
        this value.  ``None`` starts on the first frame when the pipeline has
        no baseline yet; pass ``float("inf")`` to never calibrate.
    dispatcher : AlertDispatcher | None
        Delivery channels for alerts.
    """

    def __init__(
        self,
        pipeline: TensionPipeline,
        source: FrameSource,
        *,
        calibrate_at: float | None = None,
        dispatcher: AlertDispatcher | None = None,
    ) -> None:
        self._pipeline = pipeline
        self._source = source
        self._dispatcher = dispatcher
        self._calibrate_at = calibrate_at
        self._calibration_requested = False
        self._alert_consumers: list[AlertConsumer] = []
        self._tick_observers: list[TickObserver] = []
        self._running = False

    # ── Configuration ─────────────────────────────────────────

    def add_alert_consumer(self, fn: AlertConsumer) -> None:
        """Register an async callback that receives every alert."""
        self._alert_consumers.append(fn)

    def add_tick_observer(self, fn: TickObserver) -> None:
        """Register a synchronous callback that sees every tick result."""
        self._tick_observers.append(fn)

    # ── Loop ──────────────────────────────────────────────────

    async def run(self) -> RunSummary:
        """Consume the source until it is exhausted or :meth:`stop` is called."""
        self._running = True
        summary = RunSummary()
        logger.info(
            "frame_runner.started",
            source=self._source.name,
            channels=self._dispatcher.handler_names if self._dispatcher else [],
            consumers=len(self._alert_consumers),
        )
        last_stats_time = time.monotonic()

        try:
            async for frame in self._source.frames():
                if not self._running:
                    break

                if self._should_calibrate(frame.timestamp):
                    self._calibration_requested = True
                    self._pipeline.start_calibration(frame.timestamp)

                result = self._pipeline.tick(frame.landmarks, frame.timestamp)
                summary.frames += 1
                summary.statuses[result.status] += 1
                if result.status is TickStatus.CALIBRATION_COMPLETE:
                    summary.baseline_established = True

                for observer in self._tick_observers:
                    observer(result)

                if result.alert is not None:
                    summary.alerts.append(result.alert)
                    if self._dispatcher is not None:
                        summary.deliveries.append(await self._dispatcher.dispatch(result.alert))
                    await self._deliver(result.alert)

                now = time.monotonic()
                if now - last_stats_time >= 60:
                    logger.info(
                        "frame_runner.stats",
                        frames=summary.frames,
                        alerts=len(summary.alerts),
                    )
                    last_stats_time = now
        finally:
            self._running = False
            await self._source.close()
            logger.info(
                "frame_runner.stopped",
                frames=summary.frames,
                alerts=len(summary.alerts),
                undelivered=len(summary.undelivered),
            )
        return summary

    async def stop(self) -> None:
        """Stop after the frame currently being processed."""
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    # ── Internals ─────────────────────────────────────────────

    def _should_calibrate(self, timestamp: float) -> bool:
        if self._calibration_requested:
            return False
        if self._calibrate_at is None:
            return self._pipeline.baseline is None and not self._pipeline.is_calibrating
        return timestamp >= self._calibrate_at

    async def _deliver(self, alert: AlertEvent) -> None:
        for consumer in self._alert_consumers:
            try:
                await consumer(alert)
            except Exception as exc:
                logger.error(
                    "frame_runner.consumer_error",
                    consumer=getattr(consumer, "__qualname__", repr(consumer)),
                    alert_id=alert.id,
                    error=str(exc),
                )
