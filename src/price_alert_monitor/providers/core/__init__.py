"""Core provider abstractions."""
from price_alert_monitor.providers.core.price_provider_abc import \
    PriceProviderABC
from price_alert_monitor.providers.core.utils import (
    normalize_domestic_ticker, normalize_foreign_ticker, parse_price)

__all__ = [
    "PriceProviderABC",
    "normalize_domestic_ticker",
    "normalize_foreign_ticker",
    "parse_price",
]
