"""
Dev Notes MCP - a markdown note store exposed as an MCP server.
This package implements a Model Context Protocol (MCP) server with three tools
for saving, listing and reading markdown notes kept as flat files in a single
directory.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("dev-notes-mcp")
except PackageNotFoundError:
    __version__ = "1.0.0"
