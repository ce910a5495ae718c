"""Trigger recording: pending -> fired, exactly once per alert."""
import asyncio
import logging
from collections.abc import Callable
from datetime import datetime, timezone

from price_alert_monitor.db import Alert
from price_alert_monitor.db.store import AlertStore

logger = logging.getLogger(__name__)


class TriggerRecorder:
    """Persists trigger state before any notification is sent.

    The write only succeeds while the alert is still untriggered, so an alert
    read by two overlapping runs is recorded (and notified) by one of them.
    """

    def __init__(
        self,
        store: AlertStore,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self._store = store
        self._clock = clock

    async def record(self, alert: Alert) -> bool:
        """Mark one alert fired. Returns False if another run already did."""
        triggered_at = self._clock()
        won = await asyncio.to_thread(self._store.mark_triggered, alert.id, triggered_at)
        if won:
            alert.is_triggered = True
            alert.triggered_at = triggered_at
        else:
            logger.info("Alert %s was already triggered; skipping", alert.id)
        return won

    async def record_all(self, alerts: list[Alert]) -> list[Alert]:
        """Record triggers one by one; returns the alerts this call fired."""
        fired: list[Alert] = []
        for alert in alerts:
            if await self.record(alert):
                fired.append(alert)
        return fired
