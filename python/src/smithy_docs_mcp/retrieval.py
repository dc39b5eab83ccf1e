"""
Semantic retrieval client for Smithy Docs MCP Server.

Search is delegated to an Amazon Bedrock Knowledge Base; this module only
maps the Retrieve API onto SearchResult values.
"""

import asyncio
import logging
from typing import Any, Protocol, TYPE_CHECKING

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .common_types import SearchResult
from .errors import RetrievalError

if TYPE_CHECKING:
    from .config import DocsConfig

logger = logging.getLogger(__name__)


class Retriever(Protocol):
    """Anything that can rank documentation chunks for a query."""

    async def retrieve(self, query: str, limit: int) -> list[SearchResult]:
        ...


class BedrockKnowledgeBaseRetriever:
    """Retriever backed by the bedrock-agent-runtime Retrieve API."""

    def __init__(self, knowledge_base_id: str, client: Any = None, region_name: str | None = None):
        self.knowledge_base_id = knowledge_base_id
        self.client = client or boto3.client("bedrock-agent-runtime", region_name=region_name)

    async def retrieve(self, query: str, limit: int) -> list[SearchResult]:
        """
        Run a vector search against the knowledge base.

        Args:
            query: Free-text query, passed through unchanged
            limit: Number of results to request

        Returns:
            Results in the order the service ranked them

        Raises:
            RetrievalError: if the service call fails
        """
        try:
            response = await asyncio.to_thread(
                self.client.retrieve,
                knowledgeBaseId=self.knowledge_base_id,
                retrievalQuery={"text": query},
                retrievalConfiguration={
                    "vectorSearchConfiguration": {"numberOfResults": limit}
                },
            )
        except ClientError as e:
            message = e.response.get("Error", {}).get("Message") or str(e)
            logger.warning("Knowledge base retrieve failed: %s", message)
            raise RetrievalError(message) from e
        except BotoCoreError as e:
            logger.warning("Knowledge base retrieve failed: %s", e)
            raise RetrievalError(str(e)) from e

        return [
            self._to_search_result(item)
            for item in response.get("retrievalResults") or []
        ]

    @staticmethod
    def _to_search_result(item: dict[str, Any]) -> SearchResult:
        content = item.get("content") or {}
        location = item.get("location") or {}
        s3_location = location.get("s3Location") or {}
        return SearchResult(
            content=content.get("text") or "",
            source_uri=s3_location.get("uri") or "",
            score=item.get("score") or 0.0,
            metadata=item.get("metadata"),
        )


def create_retriever(config: "DocsConfig") -> BedrockKnowledgeBaseRetriever:
    """Factory function to create the knowledge base retriever."""
    return BedrockKnowledgeBaseRetriever(
        config.knowledge_base_id,
        region_name=config.aws_region,
    )
