"""Push notification transport and message composition."""
from price_alert_monitor.push.fcm import FirebasePushTransport
from price_alert_monitor.push.formatting import compose_message, format_price
from price_alert_monitor.push.transport_abc import PushTransportABC

__all__ = [
    "FirebasePushTransport",
    "PushTransportABC",
    "compose_message",
    "format_price",
]
