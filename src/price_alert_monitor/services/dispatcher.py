"""Notification dispatch for fired alerts, one failure-isolated unit per user."""
import asyncio
import logging
from typing import NamedTuple

from price_alert_monitor.db import Alert
from price_alert_monitor.db.store import AlertStore
from price_alert_monitor.push import PushTransportABC, compose_message
from price_alert_monitor.schemas import DeliveryOutcome, DispatchReport

logger = logging.getLogger(__name__)


class FiredAlert(NamedTuple):
    """An alert recorded as fired in this run and the price that fired it."""

    alert: Alert
    price: float


def _mask(token: str) -> str:
    return f"{token[:20]}..." if len(token) > 20 else token


class NotificationDispatcher:
    """Sends fired-alert notifications and prunes permanently invalid endpoints."""

    def __init__(
        self,
        store: AlertStore,
        transport: PushTransportABC,
        site_url: str = "",
    ) -> None:
        self._store = store
        self._transport = transport
        self._site_url = site_url

    async def dispatch_user(self, user_id: str, fired: list[FiredAlert]) -> DispatchReport:
        """Notify one user about their fired alerts.

        Raises whatever the settings/endpoint lookups or the transport raise;
        dispatch_all isolates those per user.
        """
        report = DispatchReport(user_id=user_id, alerts=len(fired))
        if not await asyncio.to_thread(self._store.is_push_enabled, user_id):
            report.skipped_reason = "push_disabled"
            logger.info("Push disabled for user %s; %d alert(s) not sent", user_id, len(fired))
            return report

        tokens = await asyncio.to_thread(self._store.list_push_tokens, user_id)
        if not tokens:
            report.skipped_reason = "no_endpoints"
            logger.info("No push endpoints for user %s", user_id)
            return report

        messages = [compose_message(f.alert, f.price, self._site_url) for f in fired]
        results = await self._transport.send_multicast(messages, tokens)

        invalid: list[str] = []
        for result in results:
            if result.outcome is DeliveryOutcome.DELIVERED:
                report.delivered += 1
                continue
            report.failed += 1
            if result.outcome is DeliveryOutcome.INVALID:
                if result.token not in invalid:
                    invalid.append(result.token)
            else:
                logger.warning(
                    "Transient push failure for user %s token %s: %s",
                    user_id, _mask(result.token), result.error,
                )

        if invalid:
            report.removed_endpoints = await asyncio.to_thread(
                self._store.delete_push_tokens, user_id, invalid
            )
            logger.info(
                "Removed %d invalid push endpoint(s) for user %s",
                report.removed_endpoints, user_id,
            )

        logger.info(
            "Dispatched %d alert(s) to user %s: delivered=%d failed=%d",
            len(fired), user_id, report.delivered, report.failed,
        )
        return report

    async def _dispatch_isolated(self, user_id: str, fired: list[FiredAlert]) -> DispatchReport:
        try:
            return await self.dispatch_user(user_id, fired)
        except Exception as exc:  # pylint: disable=broad-except
            logger.exception("Dispatch failed for user %s", user_id)
            return DispatchReport(user_id=user_id, alerts=len(fired), error=str(exc))

    async def dispatch_all(
        self, fired_by_user: dict[str, list[FiredAlert]]
    ) -> list[DispatchReport]:
        """Dispatch to every user concurrently; one user's failure never affects another."""
        return list(
            await asyncio.gather(
                *(self._dispatch_isolated(u, f) for u, f in fired_by_user.items())
            )
        )

    async def close(self) -> None:
        await self._transport.close()
