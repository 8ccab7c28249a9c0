"""Pytest configuration and shared fixtures."""

import pytest
import sys
from pathlib import Path
from typing import Any, Callable, Optional, Union

import httpx

# Add the project root to path for imports
root_path = Path(__file__).parent.parent
sys.path.insert(0, str(root_path))

from tickerprice.config import Settings


Route = Union[dict, Callable[[httpx.Request], httpx.Response]]


class Router:
    """Canned responses keyed by full URL, served through httpx.MockTransport.
    
    Unknown URLs answer 404. Every request is recorded in ``requests``.
    """
    
    def __init__(self):
        self.routes: dict[str, Route] = {}
        self.requests: list[httpx.Request] = []
    
    def add(
        self,
        url: str,
        status: int = 200,
        text: Optional[str] = None,
        json: Any = None,
        headers: Optional[dict] = None,
        error: Optional[Exception] = None,
    ):
        self.routes[url] = {
            'status': status,
            'text': text,
            'json': json,
            'headers': headers,
            'error': error,
        }
    
    def redirect(self, url: str, location: str, status: int = 301):
        self.add(url, status=status, headers={'Location': location})
    
    def requested(self, fragment: str) -> bool:
        return any(fragment in str(request.url) for request in self.requests)
    
    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(str(request.url))
        if route is None:
            return httpx.Response(404, text="Not Found")
        if callable(route):
            return route(request)
        if route['error'] is not None:
            raise route['error']
        kwargs = {'headers': route['headers']}
        if route['json'] is not None:
            kwargs['json'] = route['json']
        elif route['text'] is not None:
            kwargs['text'] = route['text']
        return httpx.Response(route['status'], **kwargs)
    
    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def settings():
    """Default settings, ignoring any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def router():
    """Provide an empty URL router for stubbing HTTP."""
    return Router()


@pytest.fixture
def sample_tickers():
    """Provide a mix of US symbols and Israeli security ids."""
    return ["GOOG", "VTI", "1160985", "5130067"]
