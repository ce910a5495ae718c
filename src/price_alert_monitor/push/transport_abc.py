"""Abstract push transport."""
from abc import ABC, abstractmethod

from price_alert_monitor.schemas import DeliveryResult, PushMessage


class PushTransportABC(ABC):
    """Delivers notifications to registered push endpoints."""

    @abstractmethod
    async def send_multicast(
        self, messages: list[PushMessage], tokens: list[str]
    ) -> list[DeliveryResult]:
        """Send every message to every token in one batch call.

        Returns:
            One DeliveryResult per (message, token) pair. Raises only when the
            call as a whole fails (credentials, network).
        """

    async def close(self) -> None:
        """Release transport resources. Override if needed."""
