"""Scheduler-facing notification routes.

GET /api/notifications/check-alerts runs one monitoring pass. The external
scheduler calls it on a fixed interval with `Authorization: Bearer <CRON_SECRET>`.
"""
import logging
import secrets

from dependency_injector.wiring import inject
from fastapi import APIRouter, Header
from fastapi.responses import JSONResponse

from price_alert_monitor.config import Settings
from price_alert_monitor.container import AlertCheckServiceDep, SettingsDep
from price_alert_monitor.schemas import CheckAlertsError, CheckAlertsResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/notifications", tags=["notifications"])


def is_authorized(authorization: str | None, settings: Settings) -> bool:
    """Check the scheduler's bearer credential.

    Production requires a configured CRON_SECRET and a matching header; an
    unset secret rejects every request. Outside production requests are
    accepted unauthenticated (local development).
    """
    if not settings.is_production:
        return True
    if not settings.cron_secret or not authorization:
        return False
    return secrets.compare_digest(authorization, f"Bearer {settings.cron_secret}")


@router.get(
    "/check-alerts",
    response_model=CheckAlertsResponse,
    responses={401: {"model": CheckAlertsError}, 500: {"model": CheckAlertsError}},
)
@inject
async def check_alerts(
    service: AlertCheckServiceDep,
    settings: SettingsDep,
    authorization: str | None = Header(default=None),
) -> CheckAlertsResponse | JSONResponse:
    """Evaluate every active price alert and notify owners of fired ones."""
    if not is_authorized(authorization, settings):
        logger.warning("Rejected check-alerts call: unauthorized")
        return JSONResponse(
            status_code=401,
            content=CheckAlertsError(error="Unauthorized").model_dump(),
        )

    try:
        result = await service.run()
    except Exception:  # pylint: disable=broad-except
        logger.exception("Alert check failed")
        return JSONResponse(
            status_code=500,
            content=CheckAlertsError(error="Alert check failed").model_dump(),
        )

    return CheckAlertsResponse(
        checked=result.checked,
        triggered=result.triggered,
        duration_ms=result.duration_ms,
        message="No active alerts" if result.checked == 0 else None,
    )
