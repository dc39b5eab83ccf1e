"""
Pytest configuration and fixtures for Smithy Docs MCP tests.
"""

import pytest

from smithy_docs_mcp.common_types import SearchResult
from smithy_docs_mcp.config import DocsConfig
from smithy_docs_mcp.dispatcher import ToolDispatcher
from smithy_docs_mcp.errors import DocumentNotFoundError


class FakeRetriever:
    """In-memory retriever recording every call."""

    def __init__(self, results: list[SearchResult] | None = None, error: Exception | None = None):
        self.results = results or []
        self.error = error
        self.calls: list[tuple[str, int]] = []

    async def retrieve(self, query: str, limit: int) -> list[SearchResult]:
        self.calls.append((query, limit))
        if self.error is not None:
            raise self.error
        return self.results[:limit]


class FakeDocumentStore:
    """In-memory document store keyed like the S3 bucket."""

    def __init__(self, documents: dict[str, str | None] | None = None, error: Exception | None = None):
        self.documents = documents if documents is not None else {}
        self.error = error
        self.requested_keys: list[str] = []

    async def get_text(self, key: str) -> str | None:
        self.requested_keys.append(key)
        if self.error is not None:
            raise self.error
        if key not in self.documents:
            raise DocumentNotFoundError(key)
        return self.documents[key]

    async def list_keys(self, prefix: str) -> list[str]:
        if self.error is not None:
            raise self.error
        return [key for key in self.documents if key.startswith(prefix)]


@pytest.fixture
def docs_config() -> DocsConfig:
    """Create a test docs configuration."""
    return DocsConfig(
        bucket_name="test-bucket",
        knowledge_base_id="KB123TEST",
        aws_region="us-east-1",
        docs_prefix="smithy-docs/",
        list_max_keys=0,
    )


@pytest.fixture
def sample_results() -> list[SearchResult]:
    return [
        SearchResult(
            content="A service is the entry point of an API.",
            source_uri="s3://test-bucket/smithy-docs/guides/model-basics.md",
            score=0.91,
        ),
        SearchResult(
            content="Operations are bound to services and resources.",
            source_uri="s3://test-bucket/smithy-docs/spec/service-types.md",
            score=0.77,
            metadata={"x-amz-bedrock-kb-chunk-id": "abc"},
        ),
    ]


@pytest.fixture
def retriever(sample_results: list[SearchResult]) -> FakeRetriever:
    return FakeRetriever(sample_results)


@pytest.fixture
def document_store() -> FakeDocumentStore:
    return FakeDocumentStore({
        "smithy-docs/quickstart.md": "# Hello",
        "smithy-docs/guides/model-basics.md": "# Model basics\n\nShapes and traits.",
        "smithy-docs/guides/style-guide.md": "# Style guide",
        "smithy-docs/spec/service-types.md": "# Service types",
    })


@pytest.fixture
def dispatcher(retriever: FakeRetriever, document_store: FakeDocumentStore, docs_config: DocsConfig) -> ToolDispatcher:
    return ToolDispatcher(retriever, document_store, docs_config)
