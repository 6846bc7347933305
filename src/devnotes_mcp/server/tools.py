"""Tool registry for the Dev Notes MCP server.

The registry is a fixed, ordered tuple of descriptors built at import time.
Each descriptor carries the JSON Schema advertised to clients; the MCP SDK
checks call arguments against it before they reach the dispatcher.
"""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from mcp.types import Tool


@dataclass(frozen=True)
class ToolParameter:
    """One named parameter in a tool's input schema."""

    name: str
    type: str
    description: str
    required: bool = True


@dataclass(frozen=True)
class ToolDescriptor:
    """Declarative metadata for one callable tool."""

    name: str
    description: str
    parameters: Tuple[ToolParameter, ...] = field(default_factory=tuple)

    @property
    def input_schema(self) -> Dict[str, Any]:
        """JSON Schema object describing the tool's arguments."""
        return {
            "type": "object",
            "properties": {
                p.name: {"type": p.type, "description": p.description}
                for p in self.parameters
            },
            "required": [p.name for p in self.parameters if p.required],
        }

    def to_mcp_tool(self) -> Tool:
        return Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.input_schema,
        )


SAVE_NOTE = ToolDescriptor(
    name="save_note",
    description=(
        "Save a note with a title and content. Creates a markdown file in the "
        "notes directory"
    ),
    parameters=(
        ToolParameter(
            name="title",
            type="string",
            description="The title of the note (will be converted to filename)",
        ),
        ToolParameter(
            name="content",
            type="string",
            description="The content of the note in markdown format",
        ),
    ),
)

LIST_NOTES = ToolDescriptor(
    name="list_notes",
    description=(
        "List all available notes with their titles and last-modified dates"
    ),
)

READ_NOTE = ToolDescriptor(
    name="read_note",
    description="Read and return the contents of a specific note",
    parameters=(
        ToolParameter(
            name="title",
            type="string",
            description="The title of the note to read",
        ),
    ),
)

TOOL_REGISTRY: Tuple[ToolDescriptor, ...] = (SAVE_NOTE, LIST_NOTES, READ_NOTE)

_TOOLS_BY_NAME: Mapping[str, ToolDescriptor] = MappingProxyType(
    {tool.name: tool for tool in TOOL_REGISTRY}
)


def get_tool(name: str) -> Optional[ToolDescriptor]:
    """Look up a tool by exact name, or None if it is not registered."""
    return _TOOLS_BY_NAME.get(name)


def list_mcp_tools() -> List[Tool]:
    """The full registry as MCP ``Tool`` objects, in registry order."""
    return [tool.to_mcp_tool() for tool in TOOL_REGISTRY]
