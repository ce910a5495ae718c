"""Database models for the alert monitoring service.

Alerts, push endpoints and push settings are created and edited by the
alert/registration APIs; the monitoring run only flips trigger state and
deletes endpoints the push transport reports as permanently invalid.
"""
from datetime import datetime, timezone
from enum import Enum

from sqlmodel import Field, SQLModel, UniqueConstraint


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Market(str, Enum):
    """Instrument market: KR is domestic (KOSPI/KOSDAQ), US is foreign."""

    KR = "KR"
    US = "US"


class AlertDirection(str, Enum):
    """Which side of the target price fires the alert."""

    ABOVE = "above"
    BELOW = "below"


class Alert(SQLModel, table=True):
    """A user's standing price-threshold watch on one instrument."""

    __tablename__ = "price_alert"

    id: int | None = Field(default=None, primary_key=True)
    user_id: str = Field(index=True)
    ticker: str
    market: Market
    stock_name: str
    target_price: float = Field(gt=0)
    direction: AlertDirection
    is_active: bool = Field(default=True, index=True)
    is_triggered: bool = Field(default=False, index=True)
    created_at: datetime = Field(default_factory=utcnow)
    triggered_at: datetime | None = None


class PushEndpoint(SQLModel, table=True):
    """One registered push destination (device/browser) of a user."""

    __tablename__ = "push_endpoint"
    __table_args__ = (UniqueConstraint("user_id", "token"),)

    id: int | None = Field(default=None, primary_key=True)
    user_id: str = Field(index=True)
    token: str
    platform: str = Field(default="web")
    user_agent: str | None = None
    created_at: datetime = Field(default_factory=utcnow)


class PushSetting(SQLModel, table=True):
    """Per-user push notification switch. A missing row means disabled."""

    __tablename__ = "push_setting"

    user_id: str = Field(primary_key=True)
    enabled: bool = False
