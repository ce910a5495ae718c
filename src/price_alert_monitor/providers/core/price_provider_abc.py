"""Abstract base class for price vendors."""
from abc import ABC, abstractmethod

from price_alert_monitor.db import Market
from price_alert_monitor.schemas import PriceQuote


class PriceProviderABC(ABC):
    """Base interface for vendor backends that quote the latest traded price.

    One instance serves one market. Implementations raise on failure
    (httpx.HTTPStatusError from raise_for_status, ValueError when the payload
    carries no price); the price gateway turns those into "unavailable".
    """

    market: Market

    @abstractmethod
    async def get_price(self, ticker: str) -> PriceQuote:
        """Fetch the latest traded price for a ticker.

        Args:
            ticker: Instrument code (e.g. "005930" for KR, "AAPL" for US).

        Returns:
            A PriceQuote for this provider's market.
        """

    async def close(self) -> None:
        """Clean up resources (HTTP clients).

        Override in subclasses if cleanup is needed.
        """

    async def __aenter__(self) -> "PriceProviderABC":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        await self.close()
