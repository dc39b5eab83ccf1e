"""
MCP tool descriptors for Smithy Docs MCP Server.

The input schemas are what clients see through tools/list.
"""

from mcp.types import Tool


SEARCH_TOOL = "search_smithy_docs"
READ_TOOL = "read_smithy_doc"
LIST_TOOL = "list_smithy_topics"

TOOL_NAMES = (SEARCH_TOOL, READ_TOOL, LIST_TOOL)


TOOLS: list[Tool] = [
    Tool(
        name=SEARCH_TOOL,
        title="Search Smithy Documentation",
        description=(
            "Search the Smithy CLI documentation using semantic search. "
            "Returns relevant documentation snippets with their source locations."
        ),
        inputSchema={
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": "The search query. Can be a question or keywords.",
                },
                "max_results": {
                    "type": "integer",
                    "description": "Maximum number of results to return (1-10)",
                    "default": 5,
                    "minimum": 1,
                    "maximum": 10,
                },
            },
            "required": ["query"],
        },
    ),
    Tool(
        name=READ_TOOL,
        title="Read Smithy Documentation",
        description=(
            "Read the full content of a specific Smithy documentation file. "
            "Use this after searching to get the complete context of a documentation page."
        ),
        inputSchema={
            "type": "object",
            "properties": {
                "file_path": {
                    "type": "string",
                    "description": (
                        "The relative path to the documentation file "
                        '(e.g., "quickstart.md" or "guides/model-basics.md")'
                    ),
                },
            },
            "required": ["file_path"],
        },
    ),
    Tool(
        name=LIST_TOOL,
        title="List Smithy Topics",
        description=(
            "List all available Smithy documentation topics and files. "
            "Returns a structured view of the documentation hierarchy."
        ),
        inputSchema={
            "type": "object",
            "properties": {},
            "required": [],
        },
    ),
]
