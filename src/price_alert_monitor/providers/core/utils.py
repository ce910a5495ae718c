"""Shared utilities for price vendors."""


def normalize_domestic_ticker(ticker: str) -> str:
    """Normalize a KRX ticker (six-digit code, whitespace stripped)."""
    return ticker.strip()


def normalize_foreign_ticker(ticker: str) -> str:
    """Normalize a US ticker (uppercase)."""
    return ticker.strip().upper()


def parse_price(raw: object, ticker: str) -> float:
    """Parse a vendor price field; raises ValueError when missing or not positive."""
    if raw is None or raw == "":
        raise ValueError(f"No price data for '{ticker}'")
    price = float(str(raw).replace(",", ""))
    if price <= 0:
        raise ValueError(f"No price data for '{ticker}'")
    return price
