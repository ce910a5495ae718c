"""Models for the Finnhub provider."""
from pydantic import BaseModel


class FinnhubQuote(BaseModel):
    """Payload of /quote. A zero current price means the symbol is unknown."""

    c: float = 0.0  # current price
    d: float | None = None  # change
    dp: float | None = None  # percent change
    pc: float | None = None  # previous close
    t: int | None = None  # unix timestamp
