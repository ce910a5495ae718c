"""Korea Investment & Securities Open API providers."""
from price_alert_monitor.providers.kis.client import KisClient
from price_alert_monitor.providers.kis.domestic import KisDomesticProvider
from price_alert_monitor.providers.kis.overseas import KisOverseasProvider

__all__ = ["KisClient", "KisDomesticProvider", "KisOverseasProvider"]
