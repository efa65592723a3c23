"""
Command-line entry point: fetch the Logseq marketplace into a JSON file.

Usage: logseq-marketplace-fetch [--limit N] [--verbose]
"""
from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional

import click

from logseq_marketplace.core.errors import MarketplaceFetchError
from logseq_marketplace.core.settings import load_settings
from logseq_marketplace.services.aggregator import run

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
    )
    # httpx logs every request at INFO; keep that for --verbose only.
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)


@click.command()
@click.option("--limit", "-n", type=click.IntRange(min=0), default=None, help="Stop after this many packages")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for the output JSON (must exist)",
)
@click.option(
    "--icons-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for downloaded icons",
)
@click.pass_context
def main(
    ctx: click.Context,
    limit: Optional[int],
    verbose: bool,
    output_dir: Optional[Path],
    icons_dir: Optional[Path],
) -> None:
    """Fetch Logseq marketplace plugin details from GitHub."""
    configure_logging(verbose)
    settings = load_settings(output_dir=output_dir, icons_dir=icons_dir)

    try:
        asyncio.run(run(settings, limit=limit))
    except MarketplaceFetchError as e:
        logger.error(str(e))
        ctx.exit(1)
    except Exception as e:
        logger.error(f"Marketplace fetch failed: {e}", exc_info=True)
        ctx.exit(1)


if __name__ == "__main__":
    main()
