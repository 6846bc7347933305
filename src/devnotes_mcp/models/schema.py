"""Data models for the Dev Notes MCP server."""

import datetime
from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


@dataclass(frozen=True)
class NoteEntry:
    """One row of a note listing."""

    title: str
    filename: str
    modified: datetime.date

    def to_markdown(self) -> str:
        """Render the entry as a markdown bullet."""
        return (
            f"- **{self.title}** ({self.filename}) - "
            f"Modified: {self.modified.isoformat()}"
        )


@dataclass(frozen=True)
class ReadResult:
    """Outcome of reading a note by title.

    A missing note is a normal outcome, not an error: ``found`` is False,
    ``content`` is None and ``filename`` names the file that was looked for.
    """

    found: bool
    filename: str
    content: Optional[str] = None


class ResultStatus(str, Enum):
    """Outcome category of a tool invocation."""

    OK = "ok"
    EMPTY = "empty"
    NOT_FOUND = "not_found"
    UNKNOWN_TOOL = "unknown_tool"
    INVALID_ARGUMENTS = "invalid_arguments"
    ERROR = "error"


# Statuses where the requested operation itself completed
_SUCCESS_STATUSES = frozenset(
    {ResultStatus.OK, ResultStatus.EMPTY, ResultStatus.NOT_FOUND}
)


@dataclass(frozen=True)
class ToolResult:
    """Result of dispatching one tool call.

    Every result is delivered to the client as a single text item; the
    status lets callers tell outcomes apart without matching on text.
    """

    status: ResultStatus
    text: str

    @property
    def ok(self) -> bool:
        return self.status in _SUCCESS_STATUSES


class _ToolArgs(BaseModel):
    """Base class for validated tool arguments."""

    model_config = ConfigDict(frozen=True, extra="ignore")


class SaveNoteArgs(_ToolArgs):
    """Arguments for ``save_note``."""

    tool: Literal["save_note"] = "save_note"
    title: str
    content: str


class ListNotesArgs(_ToolArgs):
    """Arguments for ``list_notes`` (none)."""

    tool: Literal["list_notes"] = "list_notes"


class ReadNoteArgs(_ToolArgs):
    """Arguments for ``read_note``."""

    tool: Literal["read_note"] = "read_note"
    title: str


ToolArguments = Annotated[
    Union[SaveNoteArgs, ListNotesArgs, ReadNoteArgs],
    Field(discriminator="tool"),
]

tool_arguments_adapter: TypeAdapter[ToolArguments] = TypeAdapter(ToolArguments)


def parse_tool_arguments(tool_name: str, arguments: Optional[dict]) -> ToolArguments:
    """Validate a raw argument mapping into the model for ``tool_name``.

    Raises:
        pydantic.ValidationError: If a required field is missing or has the
            wrong type, or if ``tool_name`` names no argument model.
    """
    payload = dict(arguments or {})
    payload["tool"] = tool_name
    return tool_arguments_adapter.validate_python(payload)
