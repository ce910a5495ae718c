"""KIS provider for foreign (US) stock prices."""
import logging

from price_alert_monitor.db import Market
from price_alert_monitor.providers.core import (PriceProviderABC,
                                                normalize_foreign_ticker,
                                                parse_price)
from price_alert_monitor.providers.kis.client import KisClient
from price_alert_monitor.providers.kis.models import KisOverseasPriceParams
from price_alert_monitor.schemas import PriceQuote

logger = logging.getLogger(__name__)


class KisOverseasProvider(PriceProviderABC):
    """Current price of US stocks (USD) via KIS overseas quotations.

    KIS needs the listing exchange; an unknown symbol on the wrong exchange
    comes back with an empty `last`, so exchanges are tried in order.
    """

    market = Market.US
    PATH = "/uapi/overseas-price/v1/quotations/price"
    TR_ID = "HHDFS00000300"
    EXCHANGES = ("NAS", "NYS", "AMS")

    def __init__(
        self, client: KisClient, exchanges: tuple[str, ...] = EXCHANGES
    ) -> None:
        self._client = client
        self._exchanges = exchanges

    async def get_price(self, ticker: str) -> PriceQuote:
        symbol = normalize_foreign_ticker(ticker)
        for exchange in self._exchanges:
            params = KisOverseasPriceParams(exchange=exchange, symbol=symbol)
            output = await self._client.get(
                self.PATH, self.TR_ID, params.model_dump(by_alias=True)
            )
            if not output.get("last"):
                logger.debug("No %s quote on %s", symbol, exchange)
                continue
            return PriceQuote(
                market=self.market,
                ticker=symbol,
                price=parse_price(output.get("last"), symbol),
                metadata={"provider": "kis", "exchange": exchange},
            )
        raise ValueError(f"Stock '{symbol}' not found on {', '.join(self._exchanges)}")
