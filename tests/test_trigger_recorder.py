"""Tests for TriggerRecorder."""
from datetime import datetime, timezone

import pytest

from price_alert_monitor.db import Alert
from price_alert_monitor.services import TriggerRecorder

FIXED = datetime(2026, 5, 1, 9, 0, tzinfo=timezone.utc)


@pytest.mark.asyncio
async def test_record_updates_alert_on_win(store, add_alert):
    alert = add_alert()
    recorder = TriggerRecorder(store, clock=lambda: FIXED)

    assert await recorder.record(alert) is True
    assert alert.is_triggered is True
    assert alert.triggered_at == FIXED


@pytest.mark.asyncio
async def test_second_record_loses(store, add_alert):
    alert = add_alert()
    stale_copy = Alert(
        id=alert.id,
        user_id=alert.user_id,
        ticker=alert.ticker,
        market=alert.market,
        stock_name=alert.stock_name,
        target_price=alert.target_price,
        direction=alert.direction,
    )
    recorder = TriggerRecorder(store, clock=lambda: FIXED)

    assert await recorder.record(alert) is True
    assert await recorder.record(stale_copy) is False
    assert stale_copy.is_triggered is False


@pytest.mark.asyncio
async def test_record_all_returns_only_winners(store, add_alert):
    first, second = add_alert(ticker="AAPL"), add_alert(ticker="MSFT")
    recorder = TriggerRecorder(store, clock=lambda: FIXED)
    store.mark_triggered(second.id, FIXED)  # fired by an overlapping run

    fired = await recorder.record_all([first, second])

    assert [a.id for a in fired] == [first.id]
