"""Command-line interface for the Typesense multi-search client.

Usage:
    python -m src.cli.main multi-search -s "companies:stark:company_name"
    python -m src.cli.main multi-search -f searches.json --json
    python -m src.cli.main config
"""

from src.cli.main import app

__all__ = ["app"]
