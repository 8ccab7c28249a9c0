"""CLI entry point for tickerprice."""

import asyncio
import logging
import sys

import click
from rich.console import Console

from tickerprice.config import get_settings
from tickerprice.data.tase_probe import TASEApiProbe
from tickerprice.display import display_results, print_line
from tickerprice.quotes import QuoteService

# Setup logging (stderr, so stdout carries only results)
logging.basicConfig(
    level=get_settings().log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Rich consoles
console = Console()
err_console = Console(stderr=True)

USAGE = (
    "Usage: tickerprice TICKER1 TICKER2 ...",
    "Example: tickerprice GOOG VTI 1160985 5130067",
    "",
    "Note: Numeric tickers are treated as Israeli market, alphanumeric as US market.",
)


async def run_fetch(tickers: list[str]):
    """Fetch every ticker in order, then print all results."""
    print_line(console, f"Fetching prices for {len(tickers)} ticker(s)...")
    print_line(console)
    
    service = QuoteService(get_settings())
    try:
        results = await service.fetch_all(tickers)
    finally:
        await service.close()
    
    display_results(results, console)


async def run_probe(tickers: list[str]):
    """Report which candidate TASE API endpoints answer for each ticker."""
    probe = TASEApiProbe(get_settings())
    try:
        for ticker in tickers:
            print_line(console, f"Probing TASE API endpoints for {ticker}")
            for result in await probe.probe(ticker):
                if result.ok:
                    print_line(console, f"✓ {result.url}")
                    print_line(console, f"Response: {result.preview}")
                else:
                    print_line(console, f"✗ {result.url} - {result.error}")
    finally:
        await probe.close()


@click.command(context_settings={'help_option_names': ['-h', '--help']})
@click.argument('tickers', nargs=-1)
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.option('--probe-tase', is_flag=True,
              help='Probe candidate TASE API endpoints instead of fetching prices')
def cli(tickers: tuple[str, ...], debug: bool, probe_tase: bool):
    """Print current prices for US and Israeli tickers.
    
    Numeric tickers are Israeli security ids (TheMarker, then Bizportal);
    anything else is looked up on Yahoo Finance.
    
    Example: tickerprice GOOG VTI 1160985 5130067
    """
    if debug:
        logging.getLogger().setLevel(logging.DEBUG)
    
    if not tickers:
        for line in USAGE:
            print_line(console, line)
        sys.exit(1)
    
    try:
        if probe_tase:
            asyncio.run(run_probe(list(tickers)))
        else:
            asyncio.run(run_fetch(list(tickers)))
    except Exception as e:
        logger.debug("Unexpected error", exc_info=True)
        print_line(err_console, f"Unexpected error: {e}")
        sys.exit(1)


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
