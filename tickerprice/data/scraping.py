"""Shared HTTP and HTML helpers for the price sources."""

from typing import Callable, Iterable, Iterator, Optional
import logging
import re

import httpx
from bs4 import BeautifulSoup, Tag

from tickerprice.config import get_settings, Settings

logger = logging.getLogger(__name__)

# A price strategy inspects the parsed page and its body text and returns a
# price, or None to let the next strategy try.
PriceStrategy = Callable[[BeautifulSoup, str], Optional[float]]

_LEADING_NUMBER = re.compile(r"\d*\.?\d+")


class AsyncHttpSource:
    """Base for sources that talk HTTP through a lazily created httpx client."""
    
    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the source.
        
        Args:
            settings: Settings to use. If not provided, uses the global settings.
            transport: Optional httpx transport, used to stub the network.
        """
        self.settings = settings or get_settings()
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
    
    def _client_options(self) -> dict:
        """Keyword arguments for the httpx client (headers, timeout, redirects)."""
        raise NotImplementedError
    
    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                transport=self._transport,
                **self._client_options(),
            )
        return self._client
    
    async def close(self):
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()


def html_headers(settings: Settings) -> dict[str, str]:
    """Browser-like headers for the Hebrew HTML sources."""
    return {
        'User-Agent': settings.user_agent,
        'Accept': 'text/html,application/xhtml+xml',
        'Accept-Language': 'he-IL,he;q=0.9,en-US;q=0.8,en;q=0.7',
    }


def describe_error(error: Exception, default: Optional[str] = None) -> str:
    """Short human-readable message for an httpx error.
    
    Falls back to ``default``, then the exception class name, when the
    exception carries no text (httpx timeouts often do not).
    """
    if isinstance(error, httpx.HTTPStatusError):
        return f"Request failed with status code {error.response.status_code}"
    return str(error) or default or error.__class__.__name__


def status_code(error: Exception) -> Optional[int]:
    """HTTP status of a failed request, or None for transport errors."""
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code
    return None


def body_text(soup: BeautifulSoup) -> str:
    """Text of the page body (whole document if there is no body).

    Text nodes are joined as-is, without a separator, so a label and its
    value stay as close together as they are in the markup.
    """
    root = soup.body or soup
    return root.get_text()


def iter_leaf_texts(root: Tag) -> Iterator[str]:
    """Yield stripped text of every element without child elements, in document order."""
    for element in root.find_all(True):
        if element.find(True) is None:
            yield element.get_text().strip()


def parse_number(text: str) -> Optional[float]:
    """Parse the leading number of a scraped value such as '1,234.50'.
    
    Thousands separators are dropped; trailing garbage is ignored.
    """
    match = _LEADING_NUMBER.match(text.replace(",", ""))
    if not match:
        return None
    return float(match.group(0))


def first_price(
    strategies: Iterable[PriceStrategy],
    soup: BeautifulSoup,
    text: str,
) -> Optional[float]:
    """Run price strategies in order and return the first price found.
    
    A strategy that finds its field but cannot read the value returns NaN,
    which ends the search as well; callers treat NaN as no price.
    """
    for strategy in strategies:
        price = strategy(soup, text)
        if price is not None:
            logger.debug(f"Price {price} found by {strategy.__name__}")
            return price
    return None
