"""Data models for the Dev Notes MCP server."""
