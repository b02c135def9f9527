"""Command-line entry point: ``grok-search`` runs the MCP server on stdio."""

from __future__ import annotations

import asyncio
import logging

import click

from grok_search import __version__
from grok_search.config import ConfigStore
from grok_search.logfile import configure_logging
from grok_search.server import serve
from grok_search.tools import build_registry

_logger = logging.getLogger(__name__)


@click.command()
@click.option("--config", "-c", "config_path", default=None,
              type=click.Path(dir_okay=False),
              help="Path to config.json (default: ~/.config/grok-search/config.json)")
@click.option("--verbose", "-v", is_flag=True, help="Log DEBUG records to stderr")
@click.version_option(__version__, prog_name="grok-search")
def main(config_path: str | None, verbose: bool) -> None:
    """Grok Search - web search and web fetch for MCP clients."""
    store = ConfigStore(config_path)
    configure_logging(
        store.log_dir,
        debug=store.debug_enabled,
        level=store.log_level,
        verbose=verbose,
    )

    valid, error = store.validate()
    if not valid:
        # Tool calls will report the error; the server still starts.
        _logger.warning("%s", error)

    try:
        asyncio.run(serve(build_registry(store)))
    except KeyboardInterrupt:
        _logger.info("Interrupted, shutting down")


if __name__ == "__main__":
    main()
