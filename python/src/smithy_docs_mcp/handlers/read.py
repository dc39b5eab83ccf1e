"""
Read Handler for Smithy Docs MCP Server.

Provides handle_read for the read_smithy_doc tool.
"""

import logging
from typing import TYPE_CHECKING

from mcp.types import CallToolResult

from ..common_types import ReadArgs, error_response, text_response
from ..config import DEFAULT_DOCS_PREFIX
from ..errors import DocumentNotFoundError, error_message
from ..storage import document_key

if TYPE_CHECKING:
    from ..storage import DocumentStore

logger = logging.getLogger(__name__)


async def handle_read(
    args: ReadArgs,
    store: "DocumentStore",
    prefix: str = DEFAULT_DOCS_PREFIX,
) -> CallToolResult:
    """
    Handle read_smithy_doc tool call.

    Returns the whole document under a heading naming the requested path.
    Missing and empty documents are reported as distinct errors.
    """
    file_path = args.file_path
    key = document_key(file_path, prefix)

    try:
        content = await store.get_text(key)
    except DocumentNotFoundError:
        return error_response(
            f"Document not found: {file_path}\n\n"
            "Tip: Use search_smithy_docs to find available documents."
        )
    except Exception as e:
        logger.warning("Read failed for %s: %s", key, e)
        return error_response(f"Error reading document: {error_message(e)}")

    if not content:
        return error_response(f"Document found but content is empty: {file_path}")

    return text_response(f"# {file_path}\n\n{content}")
