#!/usr/bin/env python
"""Main entry point for the Dev Notes MCP server."""
import argparse
import logging
import sys
from pathlib import Path

from devnotes_mcp.config import config
from devnotes_mcp.observability import configure_logging
from devnotes_mcp.server.mcp_server import DevNotesMcpServer


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Dev Notes MCP Server")
    parser.add_argument(
        "--notes-dir",
        help="Directory for storing note files",
        type=str,
        default=None
    )
    parser.add_argument(
        "--log-level",
        help="Logging level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=config.log_level
    )
    return parser.parse_args(argv)


def update_config(args):
    """Update the global config with command line arguments."""
    if args.notes_dir:
        config.notes_dir = Path(args.notes_dir)
    config.log_level = args.log_level


def main(argv=None):
    """Run the Dev Notes MCP server."""
    args = parse_args(argv)
    update_config(args)

    # Logs go to stderr (and optionally a file); stdout carries the protocol
    log_level = logging.getLevelName(config.log_level.upper())
    try:
        log_file = configure_logging(level=log_level, log_dir=config.get_log_dir())
    except OSError as e:
        configure_logging(level=log_level)
        logging.getLogger(__name__).warning(f"Failed to configure file logging: {e}")
        log_file = None

    logger = logging.getLogger(__name__)
    if log_file:
        logger.info(f"Persistent logging enabled: {log_file}")

    try:
        server = DevNotesMcpServer(config=config)
        server.store.ensure_directory()
    except Exception as e:
        logger.critical(f"Fatal error: failed to initialize server: {e}")
        sys.exit(1)

    try:
        logger.info(f"Starting Dev Notes MCP server (notes: {server.store.notes_dir})")
        server.run()
    except Exception as e:
        logger.critical(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
