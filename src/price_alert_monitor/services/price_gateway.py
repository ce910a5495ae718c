"""Price lookup gateway: one success/unavailable contract over per-market vendors."""
import asyncio
import logging
from datetime import datetime, timezone

import httpx

from price_alert_monitor.db import Market
from price_alert_monitor.providers.core import PriceProviderABC
from price_alert_monitor.schemas import InstrumentKey, PriceSample

logger = logging.getLogger(__name__)

# Vendor failures that mean "no price this run"; all others propagate (bugs).
_PROVIDER_EXCEPTIONS: tuple[type[Exception], ...] = (
    ValueError,
    KeyError,
    TypeError,
    TimeoutError,
    OSError,
    asyncio.TimeoutError,
    httpx.HTTPError,
)


class PriceLookupGateway:
    """Routes (market, ticker) lookups to the vendor for that market.

    Never raises on vendor errors: unavailability is returned as None so one
    failing instrument cannot abort a run.
    """

    def __init__(self, providers: dict[Market, PriceProviderABC]) -> None:
        self._providers = dict(providers)

    async def fetch_price(self, key: InstrumentKey) -> PriceSample | None:
        """Latest price for an instrument, or None when unavailable."""
        provider = self._providers.get(key.market)
        if provider is None:
            logger.warning("No price provider for market %s (%s)", key.market.value, key)
            return None
        try:
            quote = await provider.get_price(key.ticker)
        except _PROVIDER_EXCEPTIONS as exc:
            logger.warning("Price unavailable for %s: %s", key, exc)
            return None
        return PriceSample(price=quote.price, fetched_at=datetime.now(timezone.utc))

    async def close(self) -> None:
        """Close all providers. Call from app lifespan shutdown."""
        for provider in self._providers.values():
            try:
                await provider.close()
            except Exception as exc:  # pylint: disable=broad-except
                logger.warning("Error closing provider %s: %s", type(provider).__name__, exc)
