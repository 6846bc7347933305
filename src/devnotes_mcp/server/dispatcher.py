"""Routes tool calls to their handlers.

Every call yields a ToolResult. Unknown tools, bad arguments, missing notes
and filesystem failures are all reported as result text so that one bad
request never stops the server.
"""
import logging
import uuid
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional

from pydantic import ValidationError as PydanticValidationError

from devnotes_mcp.exceptions import DevNotesError, ValidationError
from devnotes_mcp.models.schema import (
    ListNotesArgs,
    ReadNoteArgs,
    ResultStatus,
    SaveNoteArgs,
    ToolResult,
    parse_tool_arguments,
)
from devnotes_mcp.observability import timed_operation
from devnotes_mcp.server.tools import TOOL_REGISTRY, get_tool
from devnotes_mcp.storage.note_store import NoteStore

logger = logging.getLogger(__name__)

Handler = Callable[[Any], Awaitable[ToolResult]]


def _describe_validation_error(tool_name: str, error: PydanticValidationError) -> str:
    """Summarize pydantic errors as 'field: message' pairs."""
    parts = []
    for err in error.errors():
        # The discriminated union prefixes each location with the tool name
        loc = ".".join(
            str(p) for p in err["loc"] if p not in (tool_name, "tool")
        ) or "arguments"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)


class ToolDispatcher:
    """Dispatch tool calls against a NoteStore."""

    def __init__(self, store: NoteStore):
        self.store = store
        self._handlers: Dict[str, Handler] = {
            "save_note": self._save_note,
            "list_notes": self._list_notes,
            "read_note": self._read_note,
        }
        missing = {t.name for t in TOOL_REGISTRY} - set(self._handlers)
        if missing:
            raise RuntimeError(f"No handler for registered tools: {sorted(missing)}")

    async def dispatch(
        self, tool_name: str, arguments: Optional[Mapping[str, Any]] = None
    ) -> ToolResult:
        """Run one tool call to completion.

        Args:
            tool_name: Exact name of a registered tool
            arguments: Raw argument mapping from the client

        Returns:
            The result of the call; never raises for per-request failures.
        """
        if get_tool(tool_name) is None:
            logger.warning(f"Unknown tool requested: {tool_name!r}")
            return ToolResult(ResultStatus.UNKNOWN_TOOL, f"Unknown tool: {tool_name}")

        with timed_operation(tool_name) as op:
            try:
                args = parse_tool_arguments(tool_name, dict(arguments or {}))
            except PydanticValidationError as e:
                detail = _describe_validation_error(tool_name, e)
                op["success"] = False
                op["error"] = detail
                logger.warning(f"Invalid arguments for {tool_name}: {detail}")
                return ToolResult(
                    ResultStatus.INVALID_ARGUMENTS,
                    f"Error: Invalid arguments for {tool_name}: {detail}",
                )

            try:
                result = await self._handlers[tool_name](args)
            except Exception as e:
                result = self.format_error_response(e)

            op["status"] = result.status.value
            if not result.ok:
                op["success"] = False
                op["error"] = result.text
            return result

    def format_error_response(self, error: Exception) -> ToolResult:
        """Turn an exception raised by a handler into a result.

        Args:
            error: The exception that occurred

        Returns:
            Result with a message at the appropriate level of detail
        """
        # Generate a unique error ID for traceability in logs
        error_id = str(uuid.uuid4())[:8]

        if isinstance(error, ValidationError):
            logger.warning(f"[{error.code.name}] [{error_id}]: {error.message}")
            return ToolResult(ResultStatus.INVALID_ARGUMENTS, f"Error: {error.message}")
        elif isinstance(error, DevNotesError):
            # Structured domain errors - log details, return the message only
            logger.error(
                f"[{error.code.name}] [{error_id}]: {error.message}",
                extra={"error_details": error.details},
            )
            return ToolResult(
                ResultStatus.ERROR, f"Error: {error.message} (ref: {error_id})"
            )
        elif isinstance(error, OSError):
            # File system errors - don't expose paths or detailed error messages
            logger.error(f"File system error [{error_id}]: {error}", exc_info=True)
            return ToolResult(
                ResultStatus.ERROR,
                f"Error: A file system error occurred (ref: {error_id})",
            )
        else:
            # Unexpected errors - log with full stack trace but return generic message
            logger.error(f"Unexpected error [{error_id}]: {error}", exc_info=True)
            return ToolResult(
                ResultStatus.ERROR,
                f"Error: An unexpected error occurred (ref: {error_id})",
            )

    async def _save_note(self, args: SaveNoteArgs) -> ToolResult:
        filename = self.store.save(args.title, args.content)
        return ToolResult(ResultStatus.OK, f"Note saved successfully: {filename}")

    async def _list_notes(self, args: ListNotesArgs) -> ToolResult:
        self.store.ensure_directory()
        entries = self.store.list_notes()
        if not entries:
            return ToolResult(
                ResultStatus.EMPTY, f"No notes found in {self.store.notes_dir}"
            )
        lines = "\n".join(entry.to_markdown() for entry in entries)
        return ToolResult(ResultStatus.OK, f"Available notes:\n\n{lines}")

    async def _read_note(self, args: ReadNoteArgs) -> ToolResult:
        result = self.store.read(args.title)
        if not result.found:
            return ToolResult(
                ResultStatus.NOT_FOUND, f"Note not found: {result.filename}"
            )
        return ToolResult(ResultStatus.OK, result.content)
