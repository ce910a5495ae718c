"""Ticker batching: price each distinct instrument once, in bounded chunks."""
from collections.abc import Iterable

from price_alert_monitor.db import Alert
from price_alert_monitor.schemas import InstrumentKey

DEFAULT_CHUNK_SIZE = 5


def instrument_key(alert: Alert) -> InstrumentKey:
    return InstrumentKey(alert.market, alert.ticker)


class TickerBatch:
    """Alerts grouped by instrument plus the chunked order to price them in."""

    def __init__(self, alerts: Iterable[Alert], chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        if chunk_size < 1:
            raise ValueError("chunk_size must be >= 1")
        self.chunk_size = chunk_size
        # dicts keep first-seen order of the keys
        self.alerts_by_key: dict[InstrumentKey, list[Alert]] = {}
        for alert in alerts:
            self.alerts_by_key.setdefault(instrument_key(alert), []).append(alert)

    @property
    def keys(self) -> list[InstrumentKey]:
        return list(self.alerts_by_key)

    @property
    def chunks(self) -> list[list[InstrumentKey]]:
        """Distinct keys partitioned into consecutive chunks of chunk_size."""
        keys = self.keys
        return [
            keys[i : i + self.chunk_size] for i in range(0, len(keys), self.chunk_size)
        ]

    def __len__(self) -> int:
        return len(self.alerts_by_key)
