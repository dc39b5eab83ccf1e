"""
Error types for the Smithy Docs MCP Server.

Backend adapters raise these instead of botocore exceptions so the
handlers can tell a missing document apart from a failing service.
"""


class SmithyDocsError(Exception):
    """Base class for errors raised by this package."""


class DocumentNotFoundError(SmithyDocsError):
    """The requested key does not exist in the document store."""

    def __init__(self, key: str):
        super().__init__(f"No such key: {key}")
        self.key = key


class StorageError(SmithyDocsError):
    """Any other object-store failure (permissions, network, throttling)."""


class RetrievalError(SmithyDocsError):
    """The semantic retrieval service failed."""


class UnknownToolError(SmithyDocsError):
    """A tool call named a tool this server does not provide."""

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class InvalidArgumentsError(SmithyDocsError):
    """Tool call arguments failed validation."""


def error_message(exc: BaseException) -> str:
    """Human-readable message of an exception, 'Unknown error' if it carries none."""
    return str(exc) or "Unknown error"
