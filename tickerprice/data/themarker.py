"""TheMarker Finance scraper, the primary source for Israeli prices."""

from typing import Optional
import logging
import re

import httpx
from bs4 import BeautifulSoup

from tickerprice.data.results import FetchResult, TICKER_NOT_FOUND
from tickerprice.data.scraping import (
    AsyncHttpSource,
    PriceStrategy,
    body_text,
    describe_error,
    first_price,
    html_headers,
    iter_leaf_texts,
    status_code,
)

logger = logging.getLogger(__name__)

# Main quote field ("שער"), e.g. "1,234.50"
DECIMAL_PRICE = re.compile(r"^[0-9,]+\.\d+$")
BOND_TITLE = re.compile(r"אג[\"׳']ח|bond", re.IGNORECASE)
AGOROT_CHANGE = re.compile(r"שינוי\s*באגורות|שינוי\s*באג[׳']", re.IGNORECASE)


def page_title(soup: BeautifulSoup) -> str:
    """Text of every ``<title>`` element joined together, stripped.

    Inline SVG titles are included, so the document title must come first
    for the name split to work.
    """
    return "".join(title.get_text() for title in soup.find_all('title')).strip()


def first_decimal_leaf(soup: BeautifulSoup, text: str) -> Optional[float]:
    """First leaf element whose whole text is a decimal number."""
    for leaf in iter_leaf_texts(soup):
        if len(leaf) >= 2 and DECIMAL_PRICE.match(leaf):
            return float(leaf.replace(",", ""))
    return None


class TheMarkerSource(AsyncHttpSource):
    """Reads security name and last price from finance.themarker.com."""
    
    SOURCE_NAME = "TheMarker"
    PRICE_STRATEGIES: tuple[PriceStrategy, ...] = (first_decimal_leaf,)
    
    def _client_options(self) -> dict:
        return {
            'headers': html_headers(self.settings),
            'timeout': self.settings.il_timeout_seconds,
            'follow_redirects': True,
        }
    
    async def fetch_price(self, ticker: str) -> FetchResult:
        """Fetch the price page for a security id and parse it.
        
        Args:
            ticker: Numeric security id (e.g., '1184076').
            
        Returns:
            FetchResult in shekels, or a failure prefixed with the source name.
        """
        url = self.settings.themarker_url.format(ticker=ticker)
        
        try:
            client = await self._get_client()
            response = await client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.debug(f"{self.SOURCE_NAME} request for {ticker} failed: {e}")
            if status_code(e) == 404:
                return FetchResult.failure(ticker, f"{self.SOURCE_NAME}: {TICKER_NOT_FOUND}")
            return FetchResult.failure(ticker, f"{self.SOURCE_NAME}: {describe_error(e)}")
        
        return self.parse_page(ticker, response.text)
    
    def parse_page(self, ticker: str, html: str) -> FetchResult:
        """Extract name and price from a TheMarker security page."""
        soup = BeautifulSoup(html, 'lxml')
        text = body_text(soup)
        
        # Title format: "SecurityName - Category - TheMarker Finance"
        title = page_title(soup)
        name = title.split(" - ")[0].strip() or None
        
        price = first_price(self.PRICE_STRATEGIES, soup, text)
        if price is None:
            return FetchResult.failure(ticker, "No price found on TheMarker")
        
        is_bond = bool(BOND_TITLE.search(title))
        has_agorot_indicator = bool(AGOROT_CHANGE.search(text))
        
        # Bonds are quoted as % of par, so a bond above 10 is already in shekels
        if is_bond and price > 10:
            pass
        elif has_agorot_indicator:
            price = price / 100
        
        return FetchResult.ok(ticker, price, "ILS", name=name)
