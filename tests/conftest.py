"""Common test fixtures for the Dev Notes MCP server."""

import pytest
from mcp.shared.memory import create_connected_server_and_client_session

from devnotes_mcp.config import DevNotesConfig
from devnotes_mcp.observability import metrics
from devnotes_mcp.server.dispatcher import ToolDispatcher
from devnotes_mcp.server.mcp_server import DevNotesMcpServer
from devnotes_mcp.storage.note_store import NoteStore


@pytest.fixture(params=["asyncio"])
def anyio_backend(request):
    """Restrict anyio tests to asyncio only (trio is not installed)."""
    return request.param


@pytest.fixture(autouse=True)
def _reset_metrics():
    """Keep the global metrics collector isolated between tests."""
    metrics.reset()
    yield
    metrics.reset()


@pytest.fixture
def notes_dir(tmp_path):
    """Path for the notes directory (not created yet)."""
    return tmp_path / "notes"


@pytest.fixture
def test_config(notes_dir):
    """Config pointing at a temporary notes directory."""
    return DevNotesConfig(notes_dir=notes_dir, server_name="dev-notes-test")


@pytest.fixture
def note_store(notes_dir):
    """A NoteStore over an existing, empty temporary directory."""
    store = NoteStore(notes_dir)
    store.ensure_directory()
    return store


@pytest.fixture
def dispatcher(note_store):
    """A ToolDispatcher backed by the temporary note store."""
    return ToolDispatcher(note_store)


@pytest.fixture
def mcp_server(test_config):
    """A real DevNotesMcpServer backed by the temporary notes directory."""
    return DevNotesMcpServer(config=test_config)


@pytest.fixture
async def mcp_client(mcp_server):
    """Provide a ClientSession connected to the server via memory transport.

    The session is fully initialised (handshake complete) and ready for
    ``call_tool``, ``list_tools``, etc.
    """
    async with create_connected_server_and_client_session(
        mcp_server.server,
        raise_exceptions=True,
    ) as client_session:
        yield client_session
