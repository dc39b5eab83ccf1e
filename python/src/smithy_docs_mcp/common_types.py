"""
Common types for the Smithy Docs MCP tools.

Contains:
- SearchResult: a ranked chunk returned by the retriever
- SearchArgs / ReadArgs / ListArgs: validated arguments, one per tool
- Response helpers building the MCP CallToolResult envelope
"""

from dataclasses import dataclass
from typing import Any, Union

from mcp.types import CallToolResult, TextContent


@dataclass
class SearchResult:
    """A single chunk returned by semantic retrieval."""
    content: str
    source_uri: str
    score: float
    metadata: dict[str, Any] | None = None

    @property
    def source_name(self) -> str:
        """Final path segment of the source location, 'unknown' if there is none."""
        return self.source_uri.split("/")[-1] or "unknown"


@dataclass(frozen=True)
class SearchArgs:
    query: str
    max_results: int | None = None


@dataclass(frozen=True)
class ReadArgs:
    file_path: str


@dataclass(frozen=True)
class ListArgs:
    pass


ToolArgs = Union[SearchArgs, ReadArgs, ListArgs]


@dataclass
class ToolCall:
    """An inbound tool call after argument validation."""
    name: str
    args: ToolArgs


def text_response(text: str, is_error: bool = False) -> CallToolResult:
    """Wrap text in the uniform tool response envelope."""
    return CallToolResult(
        content=[TextContent(type="text", text=text)],
        isError=is_error,
    )


def error_response(text: str) -> CallToolResult:
    return text_response(text, is_error=True)


def response_text(result: CallToolResult) -> str:
    """Concatenated text of all text blocks in a response."""
    return "".join(
        block.text for block in result.content if isinstance(block, TextContent)
    )
