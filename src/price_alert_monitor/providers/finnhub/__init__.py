"""Finnhub provider."""
from price_alert_monitor.providers.finnhub.finnhub_provider import \
    FinnhubProvider

__all__ = ["FinnhubProvider"]
