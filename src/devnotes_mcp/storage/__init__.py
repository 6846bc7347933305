"""Storage layer for the Dev Notes MCP server."""

from devnotes_mcp.storage.note_store import NoteStore

__all__ = [
    "NoteStore",
]
