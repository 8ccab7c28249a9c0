"""Yahoo Finance client for US market prices."""

from typing import Any, Optional
import logging

import httpx

from tickerprice.data.results import FetchResult, TICKER_NOT_FOUND
from tickerprice.data.scraping import AsyncHttpSource, describe_error, status_code

logger = logging.getLogger(__name__)


class YahooFinanceClient(AsyncHttpSource):
    """Client for the Yahoo Finance v8 chart endpoint."""
    
    # Yahoo answers unknown or malformed symbols with these
    NOT_FOUND_STATUSES = (400, 404)
    DEFAULT_CURRENCY = "USD"
    
    def _client_options(self) -> dict:
        return {
            'headers': {
                'User-Agent': self.settings.user_agent,
                'Accept': 'application/json',
                'Accept-Language': 'en-US,en;q=0.9',
            },
            'timeout': self.settings.us_timeout_seconds,
            'follow_redirects': True,
        }
    
    @staticmethod
    def _extract_meta(payload: Any) -> Optional[dict]:
        """Pull ``chart.result[0].meta`` out of a chart response."""
        if not isinstance(payload, dict):
            return None
        chart = payload.get('chart')
        if not isinstance(chart, dict):
            return None
        results = chart.get('result')
        if not results or not isinstance(results[0], dict):
            return None
        meta = results[0].get('meta')
        return meta if isinstance(meta, dict) else None
    
    async def fetch_price(self, ticker: str) -> FetchResult:
        """Get the current price for a US ticker.
        
        Args:
            ticker: Stock symbol (e.g., 'GOOG', 'VTI')
            
        Returns:
            FetchResult with regularMarketPrice and currency, or a failure.
        """
        url = self.settings.yahoo_chart_url.format(ticker=ticker)
        
        try:
            client = await self._get_client()
            response = await client.get(url)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as e:
            if status_code(e) in self.NOT_FOUND_STATUSES:
                logger.info(f"No data found for {ticker}")
                return FetchResult.failure(ticker, TICKER_NOT_FOUND)
            logger.warning(f"Error fetching quote for {ticker}: {e}")
            return FetchResult.failure(ticker, describe_error(e, default="Failed to fetch price"))
        except ValueError:
            logger.info(f"Non-JSON chart response for {ticker}")
            return FetchResult.failure(ticker, TICKER_NOT_FOUND)
        
        meta = self._extract_meta(payload)
        if meta is None or meta.get('regularMarketPrice') is None:
            logger.info(f"No data found for {ticker}")
            return FetchResult.failure(ticker, TICKER_NOT_FOUND)
        
        return FetchResult.ok(
            ticker,
            float(meta['regularMarketPrice']),
            meta.get('currency') or self.DEFAULT_CURRENCY,
        )
