"""MCP server implementation for Dev Notes."""

import asyncio
import logging
from enum import Enum
from typing import Any, Dict, List, Optional

from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from devnotes_mcp.config import DevNotesConfig, config as default_config
from devnotes_mcp.observability import metrics
from devnotes_mcp.server.dispatcher import ToolDispatcher
from devnotes_mcp.server.tools import list_mcp_tools
from devnotes_mcp.storage.note_store import NoteStore

logger = logging.getLogger(__name__)


class ServerState(str, Enum):
    """Lifecycle of a DevNotesMcpServer."""

    UNINITIALIZED = "uninitialized"
    CONNECTED = "connected"
    SERVING = "serving"
    TERMINATED = "terminated"


class DevNotesMcpServer:
    """MCP server exposing the note tools over a duplex channel."""

    def __init__(
        self,
        config: Optional[DevNotesConfig] = None,
        store: Optional[NoteStore] = None,
    ):
        """Initialize the MCP server.

        Args:
            config: Server configuration. Defaults to the global config.
            store: Pre-built note store. When None, one is created for
                   ``config.get_notes_dir()``.
        """
        self.state = ServerState.UNINITIALIZED
        self.config = config or default_config
        self.store = store or NoteStore(
            self.config.get_notes_dir(), extension=self.config.note_extension
        )
        self.dispatcher = ToolDispatcher(self.store)
        self.server = Server(self.config.server_name, version=self.config.server_version)
        self._register_handlers()
        self.state = ServerState.CONNECTED
        logger.info(
            f"{self.config.server_name} {self.config.server_version} initialized "
            f"(notes: {self.store.notes_dir})"
        )

    def _register_handlers(self) -> None:
        """Register the tools/list and tools/call handlers."""

        @self.server.list_tools()
        async def list_tools() -> List[Tool]:
            return list_mcp_tools()

        @self.server.call_tool()
        async def call_tool(name: str, arguments: Dict[str, Any]) -> List[TextContent]:
            result = await self.dispatcher.dispatch(name, arguments)
            return [TextContent(type="text", text=result.text)]

    async def run_stdio(self) -> None:
        """Serve requests over stdin/stdout until the client disconnects."""
        try:
            async with stdio_server() as (read_stream, write_stream):
                self.state = ServerState.SERVING
                logger.info("Dev Notes MCP Server started successfully")
                await self.server.run(
                    read_stream,
                    write_stream,
                    self.server.create_initialization_options(),
                )
        finally:
            self.state = ServerState.TERMINATED
            self._log_metrics_summary()
            logger.info("Dev Notes MCP Server stopped")

    def _log_metrics_summary(self) -> None:
        """Write the session's tool-call metrics to the log on shutdown."""
        summary = metrics.get_summary()
        logger.info(
            f"Session metrics: {summary['total_operations']} tool calls, "
            f"{summary['total_errors']} errors in {summary['uptime_seconds']:.1f}s"
        )
        for name, m in metrics.get_metrics().items():
            logger.info(
                f"  {name}: {m['count']} calls ({m['error_count']} errors), "
                f"avg {m['avg_duration_ms']}ms, max {m['max_duration_ms']}ms"
            )

    def run(self) -> None:
        """Run the server on stdio, blocking until the channel closes."""
        asyncio.run(self.run_stdio())
