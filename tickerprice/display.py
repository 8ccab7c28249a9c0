"""Console rendering of fetch results."""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

from rich.console import Console

from tickerprice.data.results import FetchResult


CURRENCY_SYMBOLS = {
    'USD': '$',
    'ILS': '₪',
    'EUR': '€',
    'GBP': '£',
    'JPY': '¥',
}


def format_price(price: float) -> str:
    """Two decimals, rounding exact ties away from zero (0.125 -> "0.13").
    
    Decimal(price) is the exact binary value, so 1.005 (stored just below)
    still gives "1.00".
    """
    return str(Decimal(price).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def get_currency_symbol(currency: Optional[str]) -> str:
    """Get the display symbol for a currency code ('' when unknown)."""
    return CURRENCY_SYMBOLS.get(currency or "", "")


def format_result(result: FetchResult) -> str:
    """Render one result as a single line.
    
    Success: ``GOOG: $150.25 USD`` or ``1184076 (Name): ₪12.34 ILS``.
    Failure: ``Error: GOOG - Ticker not found``.
    """
    if not result.success:
        return f"Error: {result.ticker} - {result.error}"
    
    symbol = get_currency_symbol(result.currency)
    name_label = f" ({result.name})" if result.name else ""
    return f"{result.ticker}{name_label}: {symbol}{format_price(result.price)} {result.currency}"


def format_results(results: Iterable[FetchResult]) -> list[str]:
    """Render every result, preserving order."""
    return [format_result(result) for result in results]


def print_line(console: Console, line: str = ""):
    """Print text verbatim: no markup, highlighting, emoji codes or wrapping."""
    console.print(line, markup=False, highlight=False, emoji=False, soft_wrap=True)


def display_results(results: Iterable[FetchResult], console: Optional[Console] = None):
    """Print every result on its own line."""
    console = console or Console()
    for line in format_results(results):
        print_line(console, line)
