"""Alert condition evaluation."""
from price_alert_monitor.db import AlertDirection


def evaluate(direction: AlertDirection, target: float, current: float) -> bool:
    """Return True if the current price satisfies the alert condition.

    Equality triggers in both directions; comparison is exact (no tolerance).
    """
    if direction is AlertDirection.ABOVE:
        return current >= target
    if direction is AlertDirection.BELOW:
        return current <= target
    raise ValueError(f"Unknown alert direction: {direction!r}")
