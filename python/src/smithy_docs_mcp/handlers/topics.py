"""
Topic Listing Handler for Smithy Docs MCP Server.

Provides handle_list for the list_smithy_topics tool: enumerates the corpus
and renders it grouped by directory.
"""

import logging
from typing import TYPE_CHECKING

from mcp.types import CallToolResult

from ..common_types import ListArgs, error_response, text_response
from ..config import DEFAULT_DOCS_PREFIX
from ..errors import error_message
from ..storage import relative_path

if TYPE_CHECKING:
    from ..storage import DocumentStore

logger = logging.getLogger(__name__)


ROOT_GROUP = "Root"

EMPTY_CORPUS_TEXT = (
    "No documentation files found. The knowledge base may not be populated yet."
)


def group_by_directory(paths: list[str]) -> dict[str, list[str]]:
    """
    Group relative paths by their directory portion.

    Top-level files go under "Root". Paths keep their listing order
    within a group.
    """
    groups: dict[str, list[str]] = {}
    for path in paths:
        directory, sep, _ = path.rpartition("/")
        group = directory if sep else ROOT_GROUP
        groups.setdefault(group, []).append(path)
    return groups


def format_topics(paths: list[str]) -> str:
    groups = group_by_directory(paths)

    lines = [f"# Smithy Documentation Files\n\nTotal files: {len(paths)}\n\n"]
    for group in sorted(groups):
        lines.append(f"## {group}\n\n")
        lines.extend(f"- `{path}`\n" for path in groups[group])
        lines.append("\n")
    return "".join(lines)


async def handle_list(
    args: ListArgs,
    store: "DocumentStore",
    prefix: str = DEFAULT_DOCS_PREFIX,
) -> CallToolResult:
    """Handle list_smithy_topics tool call."""
    try:
        keys = await store.list_keys(prefix)
    except Exception as e:
        logger.warning("Listing %s failed: %s", prefix, e)
        return error_response(f"Error listing topics: {error_message(e)}")

    # Directory placeholder objects ("smithy-docs/") have no file part
    paths = [
        path for path in (relative_path(key, prefix) for key in keys)
        if path and not path.endswith("/")
    ]

    if not paths:
        return text_response(EMPTY_CORPUS_TEXT)

    return text_response(format_topics(paths))
