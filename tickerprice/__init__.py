"""Command-line price lookup for US and Israeli tickers."""

__version__ = "0.1.0"
