# tests/test_mcp_server.py
"""Tests for the MCP server implementation."""
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from mcp import types

from devnotes_mcp.server.mcp_server import DevNotesMcpServer, ServerState
from devnotes_mcp.storage.note_store import NoteStore


class TestMcpServer:
    """Tests for the DevNotesMcpServer class."""

    def test_server_identity(self, mcp_server, test_config):
        assert mcp_server.server.name == "dev-notes-test"
        assert mcp_server.server.version == test_config.server_version

    def test_constructed_server_is_connected(self, mcp_server):
        assert mcp_server.state == ServerState.CONNECTED

    def test_store_uses_configured_directory(self, mcp_server, notes_dir):
        assert mcp_server.store.notes_dir == notes_dir.absolute()
        assert mcp_server.dispatcher.store is mcp_server.store

    def test_construction_does_not_touch_disk(self, mcp_server, notes_dir):
        assert not notes_dir.exists()

    def test_explicit_store_is_used(self, test_config, tmp_path):
        store = NoteStore(tmp_path / "custom")
        server = DevNotesMcpServer(config=test_config, store=store)
        assert server.store is store

    def test_handlers_registered(self, mcp_server):
        handlers = mcp_server.server.request_handlers
        assert types.ListToolsRequest in handlers
        assert types.CallToolRequest in handlers

    def test_capabilities_offer_tools(self, mcp_server):
        options = mcp_server.server.create_initialization_options()
        assert options.server_name == "dev-notes-test"
        assert options.capabilities.tools is not None

    @pytest.mark.anyio
    async def test_run_stdio_moves_through_states(self, mcp_server):
        seen_states = []

        async def fake_run(read_stream, write_stream, init_options):
            seen_states.append(mcp_server.state)

        stdio_cm = MagicMock()
        stdio_cm.__aenter__ = AsyncMock(return_value=(MagicMock(), MagicMock()))
        stdio_cm.__aexit__ = AsyncMock(return_value=False)

        with patch(
            "devnotes_mcp.server.mcp_server.stdio_server", return_value=stdio_cm
        ), patch.object(mcp_server.server, "run", side_effect=fake_run):
            await mcp_server.run_stdio()

        assert seen_states == [ServerState.SERVING]
        assert mcp_server.state == ServerState.TERMINATED

    @pytest.mark.anyio
    async def test_connection_failure_terminates(self, mcp_server):
        stdio_cm = MagicMock()
        stdio_cm.__aenter__ = AsyncMock(side_effect=OSError("stdin closed"))
        stdio_cm.__aexit__ = AsyncMock(return_value=False)

        with patch(
            "devnotes_mcp.server.mcp_server.stdio_server", return_value=stdio_cm
        ):
            with pytest.raises(OSError):
                await mcp_server.run_stdio()

        assert mcp_server.state == ServerState.TERMINATED

    @pytest.mark.anyio
    async def test_metrics_summary_logged_on_shutdown(self, mcp_server):
        async def fake_run(read_stream, write_stream, init_options):
            await mcp_server.dispatcher.dispatch("save_note", {"title": "A", "content": "x"})
            await mcp_server.dispatcher.dispatch("save_note", {"title": "???", "content": "x"})

        stdio_cm = MagicMock()
        stdio_cm.__aenter__ = AsyncMock(return_value=(MagicMock(), MagicMock()))
        stdio_cm.__aexit__ = AsyncMock(return_value=False)

        with patch(
            "devnotes_mcp.server.mcp_server.stdio_server", return_value=stdio_cm
        ), patch.object(mcp_server.server, "run", side_effect=fake_run), patch(
            "devnotes_mcp.server.mcp_server.logger"
        ) as mock_logger:
            await mcp_server.run_stdio()

        messages = [c.args[0] for c in mock_logger.info.call_args_list]
        assert any(
            m.startswith("Session metrics: 2 tool calls, 1 errors") for m in messages
        )
        assert any(m.startswith("  save_note: 2 calls (1 errors)") for m in messages)
