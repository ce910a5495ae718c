"""Finnhub price provider for US stocks."""
import os
from datetime import datetime, timezone

import httpx

from price_alert_monitor.db import Market
from price_alert_monitor.providers.core import (PriceProviderABC,
                                                normalize_foreign_ticker,
                                                parse_price)
from price_alert_monitor.providers.finnhub.models import FinnhubQuote
from price_alert_monitor.schemas import PriceQuote


class FinnhubProvider(PriceProviderABC):
    """Latest US stock price via Finnhub /quote.

    Alternative to KIS for foreign instruments (FOREIGN_PRICE_VENDOR=finnhub).
    The free plan covers US listings only.
    """

    market = Market.US
    BASE_URL = "https://finnhub.io/api/v1"

    def __init__(
        self,
        api_key: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the Finnhub provider.

        Args:
            api_key: Finnhub token. Defaults to FINNHUB_API_KEY env var.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport (tests).
        """
        self._api_key = api_key or os.getenv("FINNHUB_API_KEY", "")
        self._client = httpx.AsyncClient(
            base_url=self.BASE_URL,
            timeout=timeout,
            headers={"Accept": "application/json"},
            transport=transport,
        )

    async def get_price(self, ticker: str) -> PriceQuote:
        symbol = normalize_foreign_ticker(ticker)
        if not self._api_key:
            raise ValueError("FINNHUB_API_KEY is not configured")
        response = await self._client.get(
            "/quote", params={"symbol": symbol, "token": self._api_key}
        )
        response.raise_for_status()
        quote = FinnhubQuote.model_validate(response.json())
        timestamp = (
            datetime.fromtimestamp(quote.t, tz=timezone.utc)
            if quote.t
            else datetime.now(timezone.utc)
        )
        return PriceQuote(
            market=self.market,
            ticker=symbol,
            price=parse_price(quote.c, symbol),
            timestamp=timestamp,
            metadata={"provider": "finnhub", "change_24h": quote.dp},
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()
