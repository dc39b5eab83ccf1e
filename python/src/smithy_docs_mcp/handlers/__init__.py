"""
Request Handlers for Smithy Docs MCP Server.

One handler per tool:
- search: search_smithy_docs (semantic search)
- read: read_smithy_doc (full document fetch)
- topics: list_smithy_topics (corpus listing)
"""

from .read import handle_read
from .search import (
    handle_search,
    effective_limit,
    format_search_results,
)
from .topics import (
    handle_list,
    group_by_directory,
    format_topics,
)

__all__ = [
    "handle_search",
    "handle_read",
    "handle_list",
    "effective_limit",
    "format_search_results",
    "group_by_directory",
    "format_topics",
]
