"""Israeli market price client with a primary and a fallback source."""

from typing import Optional
import logging

import httpx

from tickerprice.config import get_settings, Settings
from tickerprice.data.bizportal import BizportalSource
from tickerprice.data.results import FetchResult, TICKER_NOT_FOUND
from tickerprice.data.themarker import TheMarkerSource

logger = logging.getLogger(__name__)


class IsraeliPriceClient:
    """Fetches shekel prices for numeric TASE security ids.
    
    TheMarker is tried first (cleaner data, explicit agorot indicators);
    Bizportal is only queried when TheMarker fails.
    """
    
    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the client and its sources.
        
        Args:
            settings: Settings to use. If not provided, uses the global settings.
            transport: Optional httpx transport shared by both sources.
        """
        self.settings = settings or get_settings()
        self.primary = TheMarkerSource(self.settings, transport)
        self.fallback = BizportalSource(self.settings, transport)
    
    async def fetch_price(self, ticker: str) -> FetchResult:
        """Get the current price of an Israeli security.
        
        Args:
            ticker: Numeric security id (e.g., '1184076').
            
        Returns:
            The first successful result, or a failure carrying the fallback's
            error, else the primary's.
        """
        primary_result = await self.primary.fetch_price(ticker)
        if primary_result.success:
            return primary_result
        
        logger.debug(f"{ticker}: primary source failed ({primary_result.error}), trying fallback")
        fallback_result = await self.fallback.fetch_price(ticker)
        if fallback_result.success:
            return fallback_result
        
        error = fallback_result.error or primary_result.error or TICKER_NOT_FOUND
        logger.info(f"No price for {ticker}: {error}")
        return FetchResult.failure(ticker, error)
    
    async def close(self):
        """Close both sources."""
        await self.primary.close()
        await self.fallback.close()
