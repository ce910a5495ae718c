"""Shared fixtures: a file-backed SQLite store and row factories."""
import pytest

from price_alert_monitor.db import (Alert, AlertDirection, Market,
                                    PushEndpoint, PushSetting)
from price_alert_monitor.db.sessions import (build_engine, create_tables,
                                             get_session)
from price_alert_monitor.db.store import AlertStore


@pytest.fixture
def engine(tmp_path):
    eng = build_engine(f"sqlite:///{tmp_path / 'alerts.db'}")
    create_tables(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def store(engine):
    return AlertStore(engine)


@pytest.fixture
def add_alert(engine):
    """Insert an alert and return it (detached, attributes loaded)."""

    def _add(
        user_id: str = "user-1",
        ticker: str = "AAPL",
        market: Market = Market.US,
        target_price: float = 100.0,
        direction: AlertDirection = AlertDirection.ABOVE,
        stock_name: str | None = None,
        is_active: bool = True,
        is_triggered: bool = False,
    ) -> Alert:
        alert = Alert(
            user_id=user_id,
            ticker=ticker,
            market=market,
            stock_name=stock_name or ticker,
            target_price=target_price,
            direction=direction,
            is_active=is_active,
            is_triggered=is_triggered,
        )
        with get_session(engine) as session:
            session.add(alert)
            session.flush()
            session.refresh(alert)
        return alert

    return _add


@pytest.fixture
def add_endpoint(engine):
    def _add(user_id: str, token: str) -> None:
        with get_session(engine) as session:
            session.add(PushEndpoint(user_id=user_id, token=token))

    return _add


@pytest.fixture
def enable_push(engine):
    def _enable(user_id: str, enabled: bool = True) -> None:
        with get_session(engine) as session:
            session.merge(PushSetting(user_id=user_id, enabled=enabled))

    return _enable
