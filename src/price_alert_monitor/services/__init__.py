"""Service layer: price lookup, evaluation, trigger recording, dispatch, orchestration."""
from price_alert_monitor.services.alert_checker import AlertCheckService
from price_alert_monitor.services.batcher import TickerBatch
from price_alert_monitor.services.dispatcher import (FiredAlert,
                                                     NotificationDispatcher)
from price_alert_monitor.services.evaluator import evaluate
from price_alert_monitor.services.price_gateway import PriceLookupGateway
from price_alert_monitor.services.trigger_recorder import TriggerRecorder

__all__ = [
    "AlertCheckService",
    "FiredAlert",
    "NotificationDispatcher",
    "PriceLookupGateway",
    "TickerBatch",
    "TriggerRecorder",
    "evaluate",
]
