"""Routes tickers to the right market client."""

from typing import Optional
import logging

import httpx

from tickerprice.config import get_settings, Settings
from tickerprice.data.israel_client import IsraeliPriceClient
from tickerprice.data.markets import Market, detect_market
from tickerprice.data.results import FetchResult
from tickerprice.data.yahoo_client import YahooFinanceClient

logger = logging.getLogger(__name__)


class QuoteService:
    """Fetches prices for a mix of US and Israeli tickers, one at a time."""
    
    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or get_settings()
        self.us = YahooFinanceClient(self.settings, transport)
        self.il = IsraeliPriceClient(self.settings, transport)
    
    async def fetch(self, ticker: str) -> FetchResult:
        """Fetch one ticker from the client for its market."""
        market = detect_market(ticker)
        logger.debug(f"{ticker} classified as {market.value}")
        
        if market is Market.US:
            return await self.us.fetch_price(ticker)
        return await self.il.fetch_price(ticker)
    
    async def fetch_all(self, tickers: list[str]) -> list[FetchResult]:
        """Fetch tickers sequentially, in the given order."""
        results = []
        for ticker in tickers:
            results.append(await self.fetch(ticker))
        return results
    
    async def close(self):
        """Close all HTTP clients."""
        await self.us.close()
        await self.il.close()
