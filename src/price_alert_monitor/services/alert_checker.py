"""Run orchestrator: one pass over every pending price alert.

load -> batch by instrument -> price (chunked, rate-limited) -> evaluate
-> record triggers -> group by user -> dispatch.
"""
import asyncio
import logging
import time
import uuid
from collections.abc import Awaitable, Callable

from price_alert_monitor.db import Alert
from price_alert_monitor.db.store import AlertStore
from price_alert_monitor.schemas import InstrumentKey, PriceSample, RunResult
from price_alert_monitor.services.batcher import (DEFAULT_CHUNK_SIZE,
                                                  TickerBatch, instrument_key)
from price_alert_monitor.services.dispatcher import (FiredAlert,
                                                     NotificationDispatcher)
from price_alert_monitor.services.evaluator import evaluate
from price_alert_monitor.services.price_gateway import PriceLookupGateway
from price_alert_monitor.services.trigger_recorder import TriggerRecorder

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_DELAY_SECONDS = 0.1

# Run-scoped price map; built fresh for every run.
PriceBook = dict[InstrumentKey, PriceSample]


class AlertCheckService:
    """Wires gateway, evaluator, recorder and dispatcher into one run.

    Runs are stateless between invocations; the scheduler decides the cadence
    and is expected not to overlap runs (trigger writes are compare-and-set,
    so overlap cannot double-fire).
    """

    def __init__(
        self,
        store: AlertStore,
        gateway: PriceLookupGateway,
        dispatcher: NotificationDispatcher,
        recorder: TriggerRecorder | None = None,
        *,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        chunk_delay: float = DEFAULT_CHUNK_DELAY_SECONDS,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._store = store
        self._gateway = gateway
        self._dispatcher = dispatcher
        self._recorder = recorder or TriggerRecorder(store)
        self._chunk_size = chunk_size
        self._chunk_delay = chunk_delay
        self._sleep = sleep

    async def fetch_prices(self, batch: TickerBatch, run_id: str = "-") -> PriceBook:
        """Price every distinct instrument once.

        Lookups inside a chunk run concurrently; chunks run one after another
        with chunk_delay between them (none after the last).
        """
        prices: PriceBook = {}
        chunks = batch.chunks
        for index, chunk in enumerate(chunks):
            samples = await asyncio.gather(*(self._gateway.fetch_price(key) for key in chunk))
            for key, sample in zip(chunk, samples):
                if sample is not None:
                    prices[key] = sample
            logger.debug(
                "[%s] chunk %d/%d priced %d/%d",
                run_id, index + 1, len(chunks),
                sum(s is not None for s in samples), len(chunk),
            )
            if index < len(chunks) - 1:
                await self._sleep(self._chunk_delay)
        return prices

    @staticmethod
    def find_due(alerts: list[Alert], prices: PriceBook) -> list[FiredAlert]:
        """Alerts whose condition holds at the run's price for their instrument."""
        due: list[FiredAlert] = []
        for alert in alerts:
            if not alert.is_active or alert.is_triggered:
                continue
            sample = prices.get(instrument_key(alert))
            if sample is None:
                continue
            if evaluate(alert.direction, alert.target_price, sample.price):
                logger.info(
                    "Alert %s condition met: %s %s target=%s current=%s",
                    alert.id, alert.ticker, alert.direction.value,
                    alert.target_price, sample.price,
                )
                due.append(FiredAlert(alert, sample.price))
        return due

    async def run(self) -> RunResult:
        """Execute one monitoring pass and return its counts."""
        run_id = uuid.uuid4().hex[:8]
        started = time.monotonic()
        logger.info("[%s] Alert check started", run_id)

        alerts = await asyncio.to_thread(self._store.list_pending_alerts)
        if not alerts:
            result = RunResult(duration_ms=_elapsed_ms(started))
            logger.info("[%s] No active alerts (%dms)", run_id, result.duration_ms)
            return result

        batch = TickerBatch(alerts, self._chunk_size)
        logger.info(
            "[%s] %d active alert(s) across %d instrument(s), %d chunk(s)",
            run_id, len(alerts), len(batch), len(batch.chunks),
        )

        prices = await self.fetch_prices(batch, run_id)
        unavailable = [str(key) for key in batch.keys if key not in prices]
        if unavailable:
            logger.warning(
                "[%s] No price for %d instrument(s): %s",
                run_id, len(unavailable), ", ".join(unavailable),
            )

        due = self.find_due(alerts, prices)
        fired_alerts = await self._recorder.record_all([f.alert for f in due])
        fired_ids = {alert.id for alert in fired_alerts}
        fired = [f for f in due if f.alert.id in fired_ids]

        fired_by_user: dict[str, list[FiredAlert]] = {}
        for item in fired:
            fired_by_user.setdefault(item.alert.user_id, []).append(item)

        reports = await self._dispatcher.dispatch_all(fired_by_user) if fired_by_user else []

        result = RunResult(
            checked=len(alerts),
            priced=sum(len(group) for key, group in batch.alerts_by_key.items() if key in prices),
            triggered=len(fired),
            instruments=len(batch),
            unavailable=unavailable,
            dispatch=reports,
            duration_ms=_elapsed_ms(started),
        )
        logger.info(
            "[%s] Alert check finished: checked=%d priced=%d triggered=%d users=%d (%dms)",
            run_id, result.checked, result.priced, result.triggered,
            len(reports), result.duration_ms,
        )
        return result


def _elapsed_ms(started: float) -> int:
    return int((time.monotonic() - started) * 1000)
