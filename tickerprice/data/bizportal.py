"""Bizportal scraper, the fallback source for Israeli prices.

Bizportal redirects ``/capitalmarket/quote/generalview/{id}`` to the page of
the security's real category (``bonds``, ``mutualfunds``, ``tradedfund``,
``capitalmarket``), and the category decides how the quoted price is read.
"""

from typing import Optional
import logging
import math
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
    parse_number,
    status_code,
)

logger = logging.getLogger(__name__)

SEARCH_PAGE_TITLE = "חיפוש ניירות ערך"

CATEGORY_FROM_URL = re.compile(r"bizportal\.co\.il/(\w+)/")
MUTUAL_FUNDS = "mutualfunds"
BONDS = "bonds"

REDEMPTION_PRICE = re.compile(r"מחיר פדיון\s*[:\s]*([0-9,.]+)")
# Closing price, base price, last price
PRICE_LABELS = ("שער נעילה", "שער בסיס", "שער אחרון")
STANDALONE_NUMBER = re.compile(r"^\d+\.?\d*$")
AGOROT_MARKER = re.compile(r"באגורות|באג[׳']", re.IGNORECASE)


def redemption_price(soup: BeautifulSoup, text: str) -> Optional[float]:
    """Mutual funds publish a redemption price ("מחיר פדיון").
    
    A label followed by an unreadable value (e.g. ".") yields NaN, so the
    later strategies do not run for a page that has the field.
    """
    match = REDEMPTION_PRICE.search(text)
    if not match:
        return None
    price = parse_number(match.group(1))
    return math.nan if price is None else price


def labeled_price(soup: BeautifulSoup, text: str) -> Optional[float]:
    """First positive value following one of the quote labels, in label order."""
    for label in PRICE_LABELS:
        match = re.search(label + r"[^0-9]{0,10}?([0-9,]+\.?\d*)", text)
        if not match:
            continue
        price = parse_number(match.group(1))
        if price is not None and price > 0:
            return price
    return None


def heading_number(soup: BeautifulSoup, text: str) -> Optional[float]:
    """First standalone number inside any element that holds an ``<h1>``.

    Every heading counts, not only the first; leaves are scanned in
    document order across all of their containers.
    """
    containers = {id(h.parent) for h in soup.find_all('h1') if h.parent is not None}
    if not containers:
        return None
    for element in soup.find_all(True):
        if element.find(True) is not None:
            continue
        if not any(id(parent) in containers for parent in element.parents):
            continue
        leaf = element.get_text().strip()
        if STANDALONE_NUMBER.match(leaf):
            return float(leaf)
    return None


def to_shekels(price: float, category: str, is_agorot: bool) -> float:
    """Normalize a Bizportal quote to shekels.
    
    Mutual funds are always quoted in shekels. Bonds are converted only when
    explicitly marked as agorot and priced at 10 or less. Stocks and ETFs
    default to agorot unless the page says otherwise.
    """
    if category == MUTUAL_FUNDS:
        return price
    if category == BONDS:
        if is_agorot and price <= 10:
            return price / 100
        return price
    if not is_agorot:
        return price / 100
    return price


class BizportalSource(AsyncHttpSource):
    """Reads security name and price from www.bizportal.co.il."""
    
    SOURCE_NAME = "Bizportal"
    PRICE_STRATEGIES: tuple[PriceStrategy, ...] = (
        redemption_price,
        labeled_price,
        heading_number,
    )
    
    def _client_options(self) -> dict:
        return {
            'headers': html_headers(self.settings),
            'timeout': self.settings.il_timeout_seconds,
            'follow_redirects': True,
            'max_redirects': self.settings.max_redirects,
        }
    
    async def fetch_price(self, ticker: str) -> FetchResult:
        """Fetch the general view page for a security id and parse it.
        
        Args:
            ticker: Numeric security id (e.g., '5130067').
            
        Returns:
            FetchResult in shekels, or a failure.
        """
        url = self.settings.bizportal_url.format(ticker=ticker)
        
        try:
            client = await self._get_client()
            response = await client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.debug(f"{self.SOURCE_NAME} request for {ticker} failed: {e}")
            if status_code(e) == 404:
                return FetchResult.failure(ticker, TICKER_NOT_FOUND)
            return FetchResult.failure(ticker, f"{self.SOURCE_NAME}: {describe_error(e)}")
        
        return self.parse_page(ticker, response.text, str(response.url))
    
    def parse_page(self, ticker: str, html: str, final_url: str = "") -> FetchResult:
        """Extract name and price from a Bizportal page.
        
        Args:
            ticker: Security id the page was requested for.
            html: Page body.
            final_url: URL after redirects, which carries the category.
        """
        soup = BeautifulSoup(html, 'lxml')
        text = body_text(soup)
        
        heading = soup.find('h1')
        name = heading.get_text().strip() if heading else ""
        
        # Unknown ids land on the securities search page
        if not name or name == SEARCH_PAGE_TITLE:
            return FetchResult.failure(ticker, TICKER_NOT_FOUND)
        
        match = CATEGORY_FROM_URL.search(final_url)
        category = match.group(1) if match else ""
        
        price = first_price(self.PRICE_STRATEGIES, soup, text)
        if price is None or math.isnan(price):
            return FetchResult.failure(ticker, f'Found "{name}" but could not extract price')
        
        is_agorot = bool(AGOROT_MARKER.search(text))
        price = to_shekels(price, category, is_agorot)
        logger.debug(f"{ticker}: category={category or 'unknown'} agorot={is_agorot} price={price}")
        
        return FetchResult.ok(ticker, price, "ILS", name=name)
