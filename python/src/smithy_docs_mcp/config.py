"""
Configuration for Smithy Docs MCP Server

Environment Variables:
- BUCKET_NAME: S3 bucket holding the converted documentation (required)
- KNOWLEDGE_BASE_ID: Bedrock Knowledge Base used for semantic search (required)
- AWS_REGION: Region for the AWS clients (default: boto3 resolution chain)
- SMITHY_DOCS_PREFIX: Key prefix of the corpus inside the bucket (default: smithy-docs/)
- SMITHY_LIST_MAX_KEYS: Cap on keys returned by list_smithy_topics (default: 0, unlimited)
- MCP_TRANSPORT: "stdio" (default) or "streamable-http"
- HOST / PORT: Bind address for the HTTP transport (default: 0.0.0.0:8080)
- LOG_LEVEL: Logging level (default: INFO)
"""

import os
from dataclasses import dataclass, field
from typing import Literal

from dotenv import load_dotenv

load_dotenv()


DEFAULT_DOCS_PREFIX = "smithy-docs/"

TRANSPORTS = ("stdio", "streamable-http")


@dataclass
class DocsConfig:
    """Configuration for the documentation backends."""

    # AWS resources
    bucket_name: str = field(default_factory=lambda: os.getenv("BUCKET_NAME", ""))
    knowledge_base_id: str = field(default_factory=lambda: os.getenv("KNOWLEDGE_BASE_ID", ""))
    aws_region: str | None = field(default_factory=lambda: os.getenv("AWS_REGION") or None)

    # Corpus namespace inside the bucket
    docs_prefix: str = field(
        default_factory=lambda: os.getenv("SMITHY_DOCS_PREFIX", DEFAULT_DOCS_PREFIX)
    )

    # Search limits
    default_max_results: int = 5
    max_results_limit: int = 10

    # 0 means follow pagination to the end
    list_max_keys: int = field(
        default_factory=lambda: int(os.getenv("SMITHY_LIST_MAX_KEYS", "0"))
    )

    def validate(self) -> list[str]:
        """Validate configuration and return list of errors."""
        errors = []

        if not self.bucket_name:
            errors.append("BUCKET_NAME environment variable not set")

        if not self.knowledge_base_id:
            errors.append("KNOWLEDGE_BASE_ID environment variable not set")

        if not self.docs_prefix.endswith("/"):
            errors.append("SMITHY_DOCS_PREFIX must end with '/'")

        if self.list_max_keys < 0:
            errors.append("SMITHY_LIST_MAX_KEYS must not be negative")

        return errors


@dataclass
class ServerConfig:
    """Configuration for the MCP server."""

    name: str = "smithy-docs-mcp-server"
    version: str = "1.0.0"
    description: str = (
        "MCP server exposing the Smithy documentation through semantic search, "
        "document reads and corpus listing"
    )

    transport: Literal["stdio", "streamable-http"] = field(
        default_factory=lambda: os.getenv("MCP_TRANSPORT", "stdio").strip().lower()  # type: ignore
    )
    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8080")))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())

    def validate(self) -> list[str]:
        errors = []
        if self.transport not in TRANSPORTS:
            errors.append(f"MCP_TRANSPORT must be one of {', '.join(TRANSPORTS)}")
        if not 0 < self.port < 65536:
            errors.append(f"PORT out of range: {self.port}")
        return errors


def get_config() -> tuple[DocsConfig, ServerConfig]:
    """Get configuration instances."""
    return DocsConfig(), ServerConfig()
