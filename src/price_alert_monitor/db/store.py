"""Alert store: the queries and writes the monitoring run needs.

All methods are synchronous (SQLModel sessions); async callers run them with
asyncio.to_thread.
"""
from datetime import datetime

from sqlalchemy import delete, update
from sqlalchemy.engine import Engine
from sqlmodel import col, select

from price_alert_monitor.db.models import Alert, PushEndpoint, PushSetting
from price_alert_monitor.db.sessions import get_session


class AlertStore:
    """Reads pending alerts, records triggers, manages push endpoints."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    @property
    def engine(self) -> Engine:
        return self._engine

    def list_pending_alerts(self) -> list[Alert]:
        """Active alerts that have not fired yet, oldest first."""
        statement = (
            select(Alert)
            .where(Alert.is_active == True)  # noqa: E712
            .where(Alert.is_triggered == False)  # noqa: E712
            .order_by(col(Alert.id))
        )
        with get_session(self._engine) as session:
            return list(session.exec(statement).all())

    def mark_triggered(self, alert_id: int, triggered_at: datetime) -> bool:
        """Flip is_triggered to true if it is still false.

        Returns:
            True if this call performed the transition, False if the alert was
            already triggered (or no longer exists).
        """
        statement = (
            update(Alert)
            .where(col(Alert.id) == alert_id)
            .where(Alert.is_triggered == False)  # noqa: E712
            .values(is_triggered=True, triggered_at=triggered_at)
        )
        with get_session(self._engine) as session:
            result = session.execute(statement)
            return result.rowcount == 1

    def is_push_enabled(self, user_id: str) -> bool:
        with get_session(self._engine) as session:
            setting = session.get(PushSetting, user_id)
            return bool(setting and setting.enabled)

    def list_push_tokens(self, user_id: str) -> list[str]:
        """Registered push tokens for a user, in registration order."""
        statement = (
            select(PushEndpoint.token)
            .where(PushEndpoint.user_id == user_id)
            .order_by(col(PushEndpoint.id))
        )
        with get_session(self._engine) as session:
            return [token for token in session.exec(statement).all() if token]

    def delete_push_tokens(self, user_id: str, tokens: list[str]) -> int:
        """Delete the given tokens from a user's registry. Returns rows removed."""
        if not tokens:
            return 0
        statement = (
            delete(PushEndpoint)
            .where(col(PushEndpoint.user_id) == user_id)
            .where(col(PushEndpoint.token).in_(tokens))
        )
        with get_session(self._engine) as session:
            result = session.execute(statement)
            return result.rowcount or 0
