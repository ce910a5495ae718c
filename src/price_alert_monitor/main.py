"""Main module for the price alert monitoring service."""
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from price_alert_monitor.config import get_settings
from price_alert_monitor.container import Container, init_container
from price_alert_monitor.routers import notifications_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(fastapi_app: FastAPI):
    """Build the alert checker at startup; close vendor and push clients on shutdown."""
    container: Container = fastapi_app.state.container
    settings = container.settings()
    if settings.is_production and not settings.cron_secret:
        logger.warning("CRON_SECRET is not set; check-alerts will reject every call")
    if settings.is_production and not settings.firebase_service_account_key:
        logger.warning("FIREBASE_SERVICE_ACCOUNT_KEY is not set; push dispatch will fail")
    container.alert_checker()

    yield

    # Close provider resources (e.g. httpx clients)
    for resource in (container.gateway(), container.kis_client(), container.dispatcher()):
        try:
            await resource.close()
        except Exception as exc:  # pylint: disable=broad-except
            logger.warning("Error closing %s: %s", type(resource).__name__, exc)


def create_app(container: Container | None = None) -> FastAPI:
    """Create the FastAPI app around a wired container."""
    fastapi_app = FastAPI(
        title="Price Alert Monitor",
        description="Scheduled price-alert evaluation and push notification dispatch",
        version="0.1.0",
        lifespan=lifespan,
    )
    fastapi_app.state.container = container or init_container()
    fastapi_app.include_router(notifications_router)

    @fastapi_app.get("/")
    def health():
        """Return health check status."""
        return {"status": "ok"}

    return fastapi_app


app = create_app()


def run():
    """Run the server (uvicorn). Use for `start`."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run("price_alert_monitor.main:app", host="0.0.0.0", port=8000)
