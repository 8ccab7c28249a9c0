"""Probe for public TASE JSON endpoints.

TASE does not document a public quote API. This checks a list of candidate
endpoints for a security id and reports which ones answer, as groundwork for
replacing the HTML scrapers.
"""

from dataclasses import dataclass
from typing import Optional
import json
import logging

import httpx

from tickerprice.data.scraping import AsyncHttpSource, describe_error, status_code

logger = logging.getLogger(__name__)


@dataclass
class ProbeResult:
    """Outcome of probing one endpoint."""
    url: str
    ok: bool
    status: Optional[int] = None
    preview: str = ""
    error: str = ""


class TASEApiProbe(AsyncHttpSource):
    """Tries each candidate TASE API endpoint for a security id."""
    
    ENDPOINTS = [
        "https://api.tase.co.il/api/market-data/securities/{ticker}",
        "https://api.tase.co.il/api/quote/{ticker}",
        "https://market.tase.co.il/api/market-data/security/{ticker}",
        "https://www.tase.co.il/api/security/{ticker}/quote",
        "https://www.tase.co.il/api/v1/security/{ticker}",
        "https://market.tase.co.il/api/data/security/{ticker}",
    ]
    PREVIEW_LENGTH = 200
    
    def _client_options(self) -> dict:
        return {
            'headers': {
                'User-Agent': 'Mozilla/5.0',
                'Accept': 'application/json',
            },
            'timeout': self.settings.probe_timeout_seconds,
        }
    
    def _preview(self, response: httpx.Response) -> str:
        try:
            body = json.dumps(response.json(), ensure_ascii=False)
        except ValueError:
            body = response.text
        return body[:self.PREVIEW_LENGTH]
    
    async def probe(self, ticker: str) -> list[ProbeResult]:
        """Request every candidate endpoint for a ticker, in order.
        
        Args:
            ticker: Numeric security id.
            
        Returns:
            One ProbeResult per endpoint.
        """
        client = await self._get_client()
        results = []
        
        for template in self.ENDPOINTS:
            url = template.format(ticker=ticker)
            try:
                response = await client.get(url)
                response.raise_for_status()
            except httpx.HTTPError as e:
                status = status_code(e)
                logger.debug(f"Probe {url} failed: {e}")
                results.append(ProbeResult(
                    url=url,
                    ok=False,
                    status=status,
                    error=str(status) if status is not None else describe_error(e),
                ))
                continue
            
            results.append(ProbeResult(
                url=url,
                ok=True,
                status=response.status_code,
                preview=self._preview(response),
            ))
        
        return results
