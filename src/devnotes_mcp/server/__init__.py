"""MCP server, tool registry and dispatcher."""
