"""Pydantic schemas for runtime use and the HTTP response. Not persisted to DB."""
from datetime import datetime, timezone
from enum import Enum
from typing import NamedTuple

from pydantic import BaseModel, Field

from price_alert_monitor.db import Market


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InstrumentKey(NamedTuple):
    """Composite (market, ticker) key; value equality, hashable."""

    market: Market
    ticker: str

    def __str__(self) -> str:
        return f"{self.market.value}:{self.ticker}"


class PriceQuote(BaseModel):
    """Latest traded price returned by a vendor provider."""

    market: Market
    ticker: str
    price: float
    timestamp: datetime = Field(default_factory=_utcnow)
    metadata: dict | None = None


class PriceSample(BaseModel):
    """Run-scoped price of one instrument."""

    price: float
    fetched_at: datetime = Field(default_factory=_utcnow)


class PushMessage(BaseModel):
    """One outbound notification for one fired alert."""

    alert_id: int
    title: str
    body: str
    link: str
    data: dict[str, str] = Field(default_factory=dict)


class DeliveryOutcome(str, Enum):
    DELIVERED = "delivered"
    INVALID = "invalid"  # endpoint permanently undeliverable
    TRANSIENT = "transient"


class DeliveryResult(BaseModel):
    """Transport outcome for one (message, endpoint) pair."""

    token: str
    alert_id: int
    outcome: DeliveryOutcome
    error: str | None = None


class DispatchReport(BaseModel):
    """Per-user dispatch summary."""

    user_id: str
    alerts: int
    skipped_reason: str | None = None  # push_disabled | no_endpoints
    delivered: int = 0
    failed: int = 0
    removed_endpoints: int = 0
    error: str | None = None


class RunResult(BaseModel):
    """Outcome of one monitoring run."""

    checked: int = 0
    priced: int = 0
    triggered: int = 0
    instruments: int = 0
    unavailable: list[str] = Field(default_factory=list)
    dispatch: list[DispatchReport] = Field(default_factory=list)
    duration_ms: int = 0


class CheckAlertsResponse(BaseModel):
    """Body returned to the scheduler on success."""

    success: bool = True
    checked: int
    triggered: int
    duration_ms: int
    message: str | None = None


class CheckAlertsError(BaseModel):
    """Body returned to the scheduler on failure."""

    success: bool = False
    error: str


__all__ = [
    "CheckAlertsError",
    "CheckAlertsResponse",
    "DeliveryOutcome",
    "DeliveryResult",
    "DispatchReport",
    "InstrumentKey",
    "PriceQuote",
    "PriceSample",
    "PushMessage",
    "RunResult",
]
