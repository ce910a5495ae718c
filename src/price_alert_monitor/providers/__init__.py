"""Price vendors for domestic and foreign instruments.

- KisDomesticProvider: KRX stocks via Korea Investment Open API
- KisOverseasProvider: US stocks via Korea Investment Open API
- FinnhubProvider: US stocks via Finnhub (optional alternative)

All providers implement PriceProviderABC and return PriceQuote objects.

Example:
    client = KisClient(app_key, app_secret)
    provider = KisDomesticProvider(client)
    quote = await provider.get_price("005930")
    print(f"{quote.ticker}: {quote.price}")
"""
from price_alert_monitor.providers.core import PriceProviderABC
from price_alert_monitor.providers.finnhub import FinnhubProvider
from price_alert_monitor.providers.kis import (KisClient, KisDomesticProvider,
                                               KisOverseasProvider)

__all__ = [
    "PriceProviderABC",
    "KisClient",
    "KisDomesticProvider",
    "KisOverseasProvider",
    "FinnhubProvider",
]
