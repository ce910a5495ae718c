"""API routers.

Includes routes for:
- /api/notifications/check-alerts - scheduler-triggered alert monitoring run
"""
from price_alert_monitor.routers.notifications import \
    router as notifications_router

__all__ = ["notifications_router"]
