"""Database package: models, session management and the alert store."""
from price_alert_monitor.db.models import (Alert, AlertDirection, Market,
                                           PushEndpoint, PushSetting)

__all__ = ["Alert", "AlertDirection", "Market", "PushEndpoint", "PushSetting"]
