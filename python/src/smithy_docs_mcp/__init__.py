"""
Smithy Docs MCP Server

An MCP server that lets LLM clients search, read and browse the Smithy
documentation.

Backends:
- Amazon Bedrock Knowledge Base: semantic search over the converted docs
- Amazon S3: raw Markdown documents under the smithy-docs/ prefix
"""

__version__ = "1.0.0"

from .server import main, create_server, create_dispatcher
from .dispatcher import ToolDispatcher, parse_tool_call
from .retrieval import BedrockKnowledgeBaseRetriever
from .storage import S3DocumentStore, document_key

__all__ = [
    "main",
    "create_server",
    "create_dispatcher",
    "ToolDispatcher",
    "parse_tool_call",
    "BedrockKnowledgeBaseRetriever",
    "S3DocumentStore",
    "document_key",
]
