"""Utility functions for the Dev Notes MCP server."""

import re

_NON_SLUG_CHARS = re.compile(r"[^A-Za-z0-9_\s-]")
_WHITESPACE_RUN = re.compile(r"\s+")
_HYPHEN_RUN = re.compile(r"-+")


def slugify(text: str) -> str:
    """Convert a note title into a filesystem-safe slug.

    The transformation is deterministic and idempotent, so
    ``slugify(slugify(x)) == slugify(x)`` for every string.

    Examples:
        "Project Ideas" -> "project-ideas"
        "  Hello,  World!  " -> "hello-world"
        "a -- b" -> "a-b"

    Args:
        text: The note title.

    Returns:
        Lower-case slug made of ASCII letters, digits, underscores and
        single hyphens. May be empty when the title has none of those.
    """
    result = text.lower().strip()
    result = _NON_SLUG_CHARS.sub("", result)
    result = _WHITESPACE_RUN.sub("-", result)
    return _HYPHEN_RUN.sub("-", result)


def title_from_filename(filename: str, extension: str = ".md") -> str:
    """Derive a display title from a note filename.

    This is the listing-side inverse of :func:`slugify`: the extension is
    dropped and hyphens become spaces. Case and stripped punctuation are
    not recovered.

    Example:
        "project-ideas.md" -> "project ideas"
    """
    if filename.endswith(extension):
        filename = filename[: -len(extension)]
    return filename.replace("-", " ")
