"""KIS provider for domestic (KRX) stock prices."""
from price_alert_monitor.db import Market
from price_alert_monitor.providers.core import (PriceProviderABC,
                                                normalize_domestic_ticker,
                                                parse_price)
from price_alert_monitor.providers.kis.client import KisClient
from price_alert_monitor.providers.kis.models import KisDomesticPriceParams
from price_alert_monitor.schemas import PriceQuote


class KisDomesticProvider(PriceProviderABC):
    """Current price of KOSPI/KOSDAQ stocks (KRW) via KIS inquire-price."""

    market = Market.KR
    PATH = "/uapi/domestic-stock/v1/quotations/inquire-price"
    TR_ID = "FHKST01010100"

    def __init__(self, client: KisClient) -> None:
        self._client = client

    async def get_price(self, ticker: str) -> PriceQuote:
        code = normalize_domestic_ticker(ticker)
        params = KisDomesticPriceParams(ticker=code).model_dump(by_alias=True)
        output = await self._client.get(self.PATH, self.TR_ID, params)
        return PriceQuote(
            market=self.market,
            ticker=code,
            price=parse_price(output.get("stck_prpr"), code),
            metadata={"provider": "kis", "change_rate": output.get("prdy_ctrt")},
        )
