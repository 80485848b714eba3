"""Delivery of sustained-tension alerts.

The detection core only emits :class:`AlertEvent`; where it goes is decided
here.  A :class:`AlertDispatcher` hands every alert to each configured
channel (the structured log always, a webhook when ``FACE_TENSION_WEBHOOK_URL``
is set) and reports which channels accepted it, so the replay summary can
show delivery failures next to the alerts themselves.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import httpx
import structlog

if TYPE_CHECKING:
    from face_tension.config import Settings
    from face_tension.models import AlertEvent

logger = structlog.get_logger(__name__)

WEBHOOK_EVENT_TYPE = "facial_tension.sustained"


@dataclass(frozen=True, slots=True)
class DispatchResult:
    """Which channels accepted one alert."""

    alert_id: str
    sent: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)

    @property
    def all_ok(self) -> bool:
        return not self.failed


class AlertHandler(ABC):
    """One delivery channel for tension alerts."""

    name: str = "base"

    @abstractmethod
    async def send(self, alert: AlertEvent) -> bool:
        """Deliver *alert*; ``False`` means the channel rejected it."""


class LogHandler(AlertHandler):
    """Report the alert on the structured log."""

    name = "log"

    async def send(self, alert: AlertEvent) -> bool:
        logger.warning(
            "alert.tension",
            alert_id=alert.id,
            at_ms=alert.timestamp,
            sustained_s=round(alert.sustained_ms / 1000, 1),
            message=alert.message,
        )
        return True


def webhook_payload(alert: AlertEvent) -> dict[str, Any]:
    """JSON body posted for *alert*."""
    return {
        "type": WEBHOOK_EVENT_TYPE,
        **alert.model_dump(mode="json"),
    }


class WebhookHandler(AlertHandler):
    """POST each alert to an HTTP endpoint (chat bot, home automation, ...).

    ``transport`` lets tests swap in :class:`httpx.MockTransport`.
    """

    name = "webhook"

    def __init__(
        self,
        url: str,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._url = url
        self._timeout = timeout
        self._transport = transport

    async def send(self, alert: AlertEvent) -> bool:
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                resp = await client.post(self._url, json=webhook_payload(alert))
                resp.raise_for_status()
        except httpx.HTTPError as exc:
            logger.error("alert.webhook_failed", url=self._url, alert_id=alert.id, error=str(exc))
            return False
        logger.info("alert.webhook_sent", url=self._url, alert_id=alert.id, status=resp.status_code)
        return True


class AlertDispatcher:
    """Send each alert to every channel; one broken channel never hides the alert from the rest."""

    def __init__(self, *, handlers: list[AlertHandler] | None = None) -> None:
        self._handlers: list[AlertHandler] = handlers if handlers is not None else [LogHandler()]

    def add_handler(self, handler: AlertHandler) -> None:
        self._handlers.append(handler)

    @property
    def handler_names(self) -> list[str]:
        return [h.name for h in self._handlers]

    async def dispatch(self, alert: AlertEvent) -> DispatchResult:
        result = DispatchResult(alert_id=alert.id)
        for handler in self._handlers:
            try:
                ok = await handler.send(alert)
            except Exception:
                logger.exception("alert.channel_error", channel=handler.name, alert_id=alert.id)
                ok = False
            (result.sent if ok else result.failed).append(handler.name)

        if not result.all_ok:
            logger.warning(
                "alert.delivery_incomplete",
                alert_id=alert.id,
                sent=result.sent,
                failed=result.failed,
            )
        return result


def create_dispatcher(settings: Settings) -> AlertDispatcher:
    """Log channel always; webhook channel when ``settings.webhook_url`` is set."""
    dispatcher = AlertDispatcher()
    if settings.webhook_url:
        dispatcher.add_handler(
            WebhookHandler(settings.webhook_url, timeout=settings.webhook_timeout_seconds),
        )
    return dispatcher
