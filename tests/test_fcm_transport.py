"""Tests for the Firebase push transport (send_each patched out)."""
from types import SimpleNamespace

import pytest
from firebase_admin import exceptions, messaging

from price_alert_monitor.push import fcm
from price_alert_monitor.push.fcm import (FirebasePushTransport,
                                          build_fcm_message, classify_error)
from price_alert_monitor.schemas import DeliveryOutcome, PushMessage


def _message(alert_id: int = 1, link: str = "https://example.com/market/AAPL?market=us") -> PushMessage:
    return PushMessage(alert_id=alert_id, title="t", body="b", link=link, data={"alertId": str(alert_id)})


class _SendEach:
    """Stand-in for messaging.send_each; fails the tokens it is told to."""

    def __init__(self, errors: dict[str, Exception] | None = None) -> None:
        self.errors = errors or {}
        self.batches: list[list[messaging.Message]] = []

    def __call__(self, batch, app=None):
        self.batches.append(list(batch))
        responses = []
        for msg in batch:
            exc = self.errors.get(msg.token)
            responses.append(SimpleNamespace(success=exc is None, exception=exc))
        return SimpleNamespace(responses=responses)


@pytest.fixture
def transport(monkeypatch):
    def _make(errors=None):
        send_each = _SendEach(errors)
        monkeypatch.setattr(fcm.messaging, "send_each", send_each)
        t = FirebasePushTransport("")
        t._app = object()  # skip credential loading
        return t, send_each

    return _make


@pytest.mark.parametrize(
    "exc,expected",
    [
        (messaging.UnregisteredError("gone"), DeliveryOutcome.INVALID),
        (messaging.SenderIdMismatchError("other project"), DeliveryOutcome.INVALID),
        (exceptions.InvalidArgumentError("Message is too big"), DeliveryOutcome.TRANSIENT),
        (exceptions.UnavailableError("try later"), DeliveryOutcome.TRANSIENT),
        (messaging.QuotaExceededError("slow down"), DeliveryOutcome.TRANSIENT),
        (None, DeliveryOutcome.TRANSIENT),
    ],
)
def test_classify_error(exc, expected):
    assert classify_error(exc) is expected


def test_build_message_sets_link_only_for_https():
    secure = build_fcm_message(_message(), "tok")
    local = build_fcm_message(_message(link="/market/AAPL?market=us"), "tok")

    assert secure.token == "tok"
    assert secure.webpush.fcm_options.link == "https://example.com/market/AAPL?market=us"
    assert secure.webpush.notification.icon == fcm.ICON
    assert local.webpush.fcm_options is None


@pytest.mark.asyncio
async def test_send_multicast_maps_outcomes(transport):
    t, send_each = transport({
        "dead": messaging.UnregisteredError("gone"),
        "flaky": exceptions.UnavailableError("later"),
    })

    results = await t.send_multicast([_message(1), _message(2)], ["ok", "dead", "flaky"])

    assert len(send_each.batches) == 1
    assert len(results) == 6
    outcomes = {(r.alert_id, r.token): r.outcome for r in results}
    assert outcomes[(1, "ok")] is DeliveryOutcome.DELIVERED
    assert outcomes[(2, "dead")] is DeliveryOutcome.INVALID
    assert outcomes[(2, "flaky")] is DeliveryOutcome.TRANSIENT


@pytest.mark.asyncio
async def test_send_multicast_splits_large_batches(transport):
    t, send_each = transport()
    tokens = [f"tok-{i}" for i in range(300)]

    results = await t.send_multicast([_message(1), _message(2)], tokens)

    assert [len(b) for b in send_each.batches] == [fcm.FCM_BATCH_LIMIT, 100]
    assert len(results) == 600


@pytest.mark.asyncio
async def test_nothing_to_send(transport):
    t, send_each = transport()
    assert await t.send_multicast([], ["tok"]) == []
    assert await t.send_multicast([_message()], []) == []
    assert send_each.batches == []


@pytest.mark.asyncio
async def test_missing_service_account_raises():
    with pytest.raises(ValueError):
        await FirebasePushTransport("").send_multicast([_message()], ["tok"])
