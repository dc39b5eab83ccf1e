"""
Tests for tool-call validation and dispatch.

Tests cover:
- Routing each tool name to its handler
- Unknown tools and malformed arguments
- The never-raises guarantee
- Per-tool metrics
"""

import logging

import pytest

from smithy_docs_mcp.common_types import ListArgs, ReadArgs, SearchArgs, response_text
from smithy_docs_mcp.dispatcher import ToolDispatcher, parse_tool_call
from smithy_docs_mcp.errors import InvalidArgumentsError, UnknownToolError

from conftest import FakeRetriever


class TestParseToolCall:
    """Tests for argument validation at the dispatch boundary."""

    def test_search_arguments(self):
        call = parse_tool_call("search_smithy_docs", {"query": "traits", "max_results": 3})

        assert call.args == SearchArgs(query="traits", max_results=3)

    def test_search_without_max_results(self):
        call = parse_tool_call("search_smithy_docs", {"query": "traits"})

        assert call.args.max_results is None

    def test_integral_float_accepted(self):
        call = parse_tool_call("search_smithy_docs", {"query": "q", "max_results": 4.0})

        assert call.args.max_results == 4

    @pytest.mark.parametrize("value", [True, "5", 2.5, [5]])
    def test_bad_max_results_rejected(self, value):
        with pytest.raises(InvalidArgumentsError):
            parse_tool_call("search_smithy_docs", {"query": "q", "max_results": value})

    def test_missing_query_rejected(self):
        with pytest.raises(InvalidArgumentsError, match="query is required"):
            parse_tool_call("search_smithy_docs", {})

    def test_non_string_query_rejected(self):
        with pytest.raises(InvalidArgumentsError, match="query must be a string"):
            parse_tool_call("search_smithy_docs", {"query": 42})

    def test_read_arguments(self):
        call = parse_tool_call("read_smithy_doc", {"file_path": "quickstart.md"})

        assert call.args == ReadArgs(file_path="quickstart.md")

    def test_list_ignores_arguments(self):
        assert parse_tool_call("list_smithy_topics", None).args == ListArgs()
        assert parse_tool_call("list_smithy_topics", {"extra": 1}).args == ListArgs()

    def test_unknown_tool(self):
        with pytest.raises(UnknownToolError) as exc_info:
            parse_tool_call("bogus_tool", {})

        assert exc_info.value.name == "bogus_tool"

    def test_arguments_must_be_mapping(self):
        with pytest.raises(InvalidArgumentsError):
            parse_tool_call("read_smithy_doc", ["quickstart.md"])

    def test_unknown_tool_checked_before_arguments(self):
        with pytest.raises(UnknownToolError) as exc_info:
            parse_tool_call("bogus_tool", "x")

        assert exc_info.value.name == "bogus_tool"


class TestToolDispatcher:
    """End-to-end dispatch through the fakes."""

    @pytest.mark.asyncio
    async def test_search_scenario(self, dispatcher: ToolDispatcher, retriever: FakeRetriever):
        result = await dispatcher.dispatch(
            "search_smithy_docs",
            {"query": "How do I define a service?", "max_results": 2},
        )
        text = response_text(result)

        assert not result.isError
        assert retriever.calls == [("How do I define a service?", 2)]
        assert '"How do I define a service?"' in text
        assert "Found 2 relevant section(s)" in text
        assert text.index("0.910") < text.index("0.770")

    @pytest.mark.asyncio
    async def test_search_limit_clamped(self, dispatcher: ToolDispatcher, retriever: FakeRetriever):
        await dispatcher.dispatch("search_smithy_docs", {"query": "q", "max_results": 99})

        assert retriever.calls == [("q", 10)]

    @pytest.mark.asyncio
    async def test_read_scenario(self, dispatcher: ToolDispatcher):
        result = await dispatcher.dispatch("read_smithy_doc", {"file_path": "quickstart.md"})

        assert not result.isError
        assert response_text(result) == "# quickstart.md\n\n# Hello"

    @pytest.mark.asyncio
    async def test_read_missing_scenario(self, dispatcher: ToolDispatcher):
        result = await dispatcher.dispatch("read_smithy_doc", {"file_path": "missing.md"})

        assert result.isError
        assert "missing.md" in response_text(result)
        assert "search_smithy_docs" in response_text(result)

    @pytest.mark.asyncio
    async def test_list(self, dispatcher: ToolDispatcher):
        result = await dispatcher.dispatch("list_smithy_topics", {})
        text = response_text(result)

        assert not result.isError
        assert "Total files: 4" in text
        assert "## Root" in text
        assert "## guides" in text
        assert "- `guides/style-guide.md`" in text

    @pytest.mark.asyncio
    async def test_list_idempotent(self, dispatcher: ToolDispatcher):
        first = await dispatcher.dispatch("list_smithy_topics", {})
        second = await dispatcher.dispatch("list_smithy_topics", {})

        assert response_text(first) == response_text(second)

    @pytest.mark.asyncio
    async def test_unknown_tool_scenario(self, dispatcher: ToolDispatcher):
        result = await dispatcher.dispatch("bogus_tool", {})

        assert result.isError
        assert "bogus_tool" in response_text(result)

    @pytest.mark.asyncio
    async def test_serves_after_unknown_tool(self, dispatcher: ToolDispatcher):
        await dispatcher.dispatch("bogus_tool", {})
        result = await dispatcher.dispatch("read_smithy_doc", {"file_path": "quickstart.md"})

        assert not result.isError

    @pytest.mark.asyncio
    async def test_malformed_arguments(self, dispatcher: ToolDispatcher):
        result = await dispatcher.dispatch("read_smithy_doc", "not-a-mapping")

        assert result.isError
        assert response_text(result).startswith("Error: ")

    @pytest.mark.asyncio
    async def test_missing_required_argument(self, dispatcher: ToolDispatcher):
        result = await dispatcher.dispatch("read_smithy_doc", {})

        assert result.isError
        assert "file_path is required" in response_text(result)

    @pytest.mark.asyncio
    async def test_unexpected_exception_contained(self, dispatcher: ToolDispatcher, monkeypatch):
        async def explode(call):
            raise RuntimeError("boom")

        monkeypatch.setattr(dispatcher, "_route", explode)

        result = await dispatcher.dispatch("list_smithy_topics", {})

        assert result.isError
        assert response_text(result) == "Error: boom"

    @pytest.mark.asyncio
    async def test_metrics_recorded(self, dispatcher: ToolDispatcher):
        await dispatcher.dispatch("read_smithy_doc", {"file_path": "quickstart.md"})
        await dispatcher.dispatch("read_smithy_doc", {"file_path": "missing.md"})

        stats = dispatcher.metrics.get_stats("tool:read_smithy_doc")

        assert stats["call_count"] == 2
        assert stats["success_rate"] == 0.5

    @pytest.mark.asyncio
    async def test_unknown_tool_named_before_argument_checks(self, dispatcher: ToolDispatcher):
        result = await dispatcher.dispatch("bogus_tool", "not-a-mapping")

        assert result.isError
        assert response_text(result) == "Unknown tool: bogus_tool"

    @pytest.mark.asyncio
    async def test_metric_keys_bounded_by_served_tools(self, dispatcher: ToolDispatcher):
        for i in range(500):
            await dispatcher.dispatch(f"bogus_{i}", {})
        await dispatcher.dispatch("list_smithy_topics", {})

        stats = dispatcher.metrics.get_stats()

        assert set(stats) == {"tool:unknown", "tool:list_smithy_topics"}
        assert stats["tool:unknown"]["call_count"] == 500
        assert stats["tool:unknown"]["success_rate"] == 0

    @pytest.mark.asyncio
    async def test_log_metrics(self, dispatcher: ToolDispatcher, caplog):
        await dispatcher.dispatch("read_smithy_doc", {"file_path": "quickstart.md"})

        with caplog.at_level(logging.INFO, logger="smithy_docs_mcp.dispatcher"):
            dispatcher.log_metrics()

        assert "tool:read_smithy_doc: 1 calls, 100% ok" in caplog.text
