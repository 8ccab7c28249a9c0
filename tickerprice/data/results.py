"""Per-ticker fetch results."""

from dataclasses import dataclass
from typing import Optional


TICKER_NOT_FOUND = "Ticker not found"


@dataclass
class FetchResult:
    """Outcome of fetching a price for one ticker.
    
    ``price`` and ``currency`` are set only on success, ``error`` only on
    failure. ``name`` is optional either way.
    """
    ticker: str
    success: bool
    price: Optional[float] = None
    currency: Optional[str] = None
    name: Optional[str] = None
    error: Optional[str] = None
    
    @classmethod
    def ok(
        cls,
        ticker: str,
        price: float,
        currency: str,
        name: Optional[str] = None,
    ) -> "FetchResult":
        """Build a successful result."""
        return cls(ticker=ticker, success=True, price=price, currency=currency, name=name)
    
    @classmethod
    def failure(cls, ticker: str, error: str) -> "FetchResult":
        """Build a failed result."""
        return cls(ticker=ticker, success=False, error=error)
