"""
Tool dispatch for Smithy Docs MCP Server.

Validates raw tool-call arguments into typed per-tool values, routes the
call to its handler and guarantees a CallToolResult comes back for every
request, including malformed ones.
"""

import logging
from typing import Any, Mapping, TYPE_CHECKING

from mcp.types import CallToolResult

from .common_types import (
    ListArgs,
    ReadArgs,
    SearchArgs,
    ToolCall,
    error_response,
)
from .config import DocsConfig
from .errors import InvalidArgumentsError, UnknownToolError, error_message
from .handlers import handle_list, handle_read, handle_search
from .tool_defs import READ_TOOL, SEARCH_TOOL, TOOL_NAMES
from .utils import MetricsCollector, PerformanceMetrics, Timer, log_timing

if TYPE_CHECKING:
    from .retrieval import Retriever
    from .storage import DocumentStore

logger = logging.getLogger(__name__)

UNKNOWN_TOOL_METRIC = "tool:unknown"


def _require_string(arguments: Mapping[str, Any], name: str) -> str:
    value = arguments.get(name)
    if value is None:
        raise InvalidArgumentsError(f"{name} is required")
    if not isinstance(value, str):
        raise InvalidArgumentsError(f"{name} must be a string")
    return value


def _optional_int(arguments: Mapping[str, Any], name: str) -> int | None:
    value = arguments.get(name)
    if value is None:
        return None
    # bool is an int subclass; true/false is never a count
    if isinstance(value, bool):
        raise InvalidArgumentsError(f"{name} must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    raise InvalidArgumentsError(f"{name} must be an integer")


def metric_key(name: Any) -> str:
    """Metrics key for a tool name; names outside the served set share one key."""
    return f"tool:{name}" if name in TOOL_NAMES else UNKNOWN_TOOL_METRIC


def parse_tool_call(name: Any, arguments: Any) -> ToolCall:
    """
    Validate a raw tool call into its typed form.

    Raises:
        UnknownToolError: if name is not one of the served tools
        InvalidArgumentsError: if arguments do not fit the tool
    """
    if name not in TOOL_NAMES:
        raise UnknownToolError(str(name))

    if arguments is None:
        arguments = {}
    if not isinstance(arguments, Mapping):
        raise InvalidArgumentsError("arguments must be an object")

    if name == SEARCH_TOOL:
        args = SearchArgs(
            query=_require_string(arguments, "query"),
            max_results=_optional_int(arguments, "max_results"),
        )
    elif name == READ_TOOL:
        args = ReadArgs(file_path=_require_string(arguments, "file_path"))
    else:
        args = ListArgs()

    return ToolCall(name=name, args=args)


class ToolDispatcher:
    """
    Routes tool calls to the search, read and list handlers.

    Collaborators are injected; the dispatcher itself keeps nothing between
    calls apart from timing metrics.
    """

    def __init__(
        self,
        retriever: "Retriever",
        store: "DocumentStore",
        config: DocsConfig | None = None,
        metrics: MetricsCollector | None = None,
    ):
        self.retriever = retriever
        self.store = store
        self.config = config or DocsConfig()
        self.metrics = metrics or MetricsCollector()

    async def dispatch(self, name: Any, arguments: Any = None) -> CallToolResult:
        """Handle one tool call. Never raises."""
        with Timer() as timer:
            try:
                call = parse_tool_call(name, arguments)
                result = await self._route(call)
            except UnknownToolError as e:
                logger.info("Rejected call to unknown tool %r", e.name)
                result = error_response(str(e))
            except InvalidArgumentsError as e:
                logger.info("Invalid arguments for %r: %s", name, e)
                result = error_response(f"Error: {e}")
            except Exception as e:
                logger.exception("Tool call %r failed", name)
                result = error_response(f"Error: {error_message(e)}")

        success = not result.isError
        metric_name = metric_key(name)
        self.metrics.record(PerformanceMetrics(
            function_name=metric_name,
            elapsed_ms=timer.elapsed_ms,
            success=success,
        ))
        log_timing(metric_name, timer.elapsed_ms, success=success)
        return result

    def log_metrics(self) -> None:
        """Log aggregated per-tool call statistics."""
        for stats in self.metrics.get_stats().values():
            logger.info(
                "%s: %d calls, %.0f%% ok, avg %.1fms, p95 %.1fms",
                stats["function"],
                stats["call_count"],
                stats["success_rate"] * 100,
                stats["avg_ms"],
                stats["p95_ms"],
            )

    async def _route(self, call: ToolCall) -> CallToolResult:
        args = call.args
        if isinstance(args, SearchArgs):
            return await handle_search(args, self.retriever, self.config)
        if isinstance(args, ReadArgs):
            return await handle_read(args, self.store, self.config.docs_prefix)
        return await handle_list(args, self.store, self.config.docs_prefix)
