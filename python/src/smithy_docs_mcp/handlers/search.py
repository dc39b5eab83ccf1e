"""
Search Handler for Smithy Docs MCP Server.

Provides handle_search for the search_smithy_docs tool: clamps the result
count, runs semantic retrieval and renders the ranked chunks as Markdown.
"""

import logging
from typing import TYPE_CHECKING

from mcp.types import CallToolResult

from ..common_types import SearchArgs, SearchResult, error_response, text_response
from ..errors import error_message

if TYPE_CHECKING:
    from ..config import DocsConfig
    from ..retrieval import Retriever

logger = logging.getLogger(__name__)


DEFAULT_MAX_RESULTS = 5
MAX_RESULTS_LIMIT = 10

NO_RESULTS_TEXT = (
    "No relevant documentation found for your query. "
    "Try rephrasing or using different keywords."
)


def effective_limit(
    max_results: int | None,
    default: int = DEFAULT_MAX_RESULTS,
    upper: int = MAX_RESULTS_LIMIT,
) -> int:
    """Resolve the number of results to request: default when absent, clamped to [1, upper]."""
    if max_results is None:
        max_results = default
    return max(1, min(max_results, upper))


def format_search_results(query: str, results: list[SearchResult]) -> str:
    """Render results in retrieval order. Downstream clients parse this text."""
    parts = [f'# Search Results for: "{query}"\n\nFound {len(results)} relevant section(s):\n\n']
    for index, result in enumerate(results, start=1):
        parts.append(
            f"## Result {index} (Score: {result.score:.3f})\n"
            f"**Source:** `{result.source_name}`\n\n"
            f"{result.content}\n\n---\n\n"
        )
    return "".join(parts)


async def handle_search(
    args: SearchArgs,
    retriever: "Retriever",
    config: "DocsConfig | None" = None,
) -> CallToolResult:
    """
    Handle search_smithy_docs tool call.

    The query goes to the retriever untouched; ranking is entirely the
    knowledge base's concern.
    """
    if config is not None:
        limit = effective_limit(args.max_results, config.default_max_results, config.max_results_limit)
    else:
        limit = effective_limit(args.max_results)

    try:
        results = await retriever.retrieve(args.query, limit)
    except Exception as e:
        logger.warning("Search failed for %r: %s", args.query, e)
        return error_response(f"Error searching documentation: {error_message(e)}")

    if not results:
        return text_response(NO_RESULTS_TEXT)

    return text_response(format_search_results(args.query, results))
