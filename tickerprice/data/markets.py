"""Market classification for ticker symbols."""

from enum import Enum
import re


_NUMERIC_TICKER = re.compile(r"^\d+$")


class Market(Enum):
    """Markets a ticker can be routed to."""
    US = "US"
    IL = "IL"


def detect_market(ticker: str) -> Market:
    """Classify a ticker by its shape.
    
    Israeli securities are identified by a purely numeric id; everything
    else is treated as a US symbol.
    """
    if _NUMERIC_TICKER.match(ticker):
        return Market.IL
    return Market.US
