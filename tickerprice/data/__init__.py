"""Price sources for tickerprice."""

from .israel_client import IsraeliPriceClient
from .markets import Market, detect_market
from .results import FetchResult
from .yahoo_client import YahooFinanceClient

__all__ = ["IsraeliPriceClient", "Market", "detect_market", "FetchResult", "YahooFinanceClient"]
