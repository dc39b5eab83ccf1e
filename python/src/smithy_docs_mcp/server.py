#!/usr/bin/env python3
"""
Smithy Docs MCP Server

Exposes the Smithy documentation corpus to MCP clients.

Tools provided:
- search_smithy_docs: Semantic search over the Bedrock Knowledge Base
- read_smithy_doc: Full content of one document from S3
- list_smithy_topics: Every document in the corpus, grouped by directory

Transports:
- stdio (default): the client launches the server as a subprocess
- streamable-http: stateless JSON responses on POST /mcp, health check on GET /
"""

import asyncio
import contextlib
import logging
import signal
import sys
from typing import Any

import uvicorn
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from mcp.types import CallToolResult, Tool
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import PlainTextResponse
from starlette.routing import Route

from .config import DocsConfig, ServerConfig, get_config
from .dispatcher import ToolDispatcher
from .retrieval import create_retriever
from .storage import create_document_store
from .tool_defs import TOOLS

logger = logging.getLogger(__name__)

HEALTH_TEXT = "Smithy MCP Server is running."


def create_dispatcher(config: DocsConfig) -> ToolDispatcher:
    """Wire the AWS-backed collaborators into a dispatcher."""
    return ToolDispatcher(
        retriever=create_retriever(config),
        store=create_document_store(config),
        config=config,
    )


def create_server(dispatcher: ToolDispatcher, server_config: ServerConfig | None = None) -> Server:
    """Create and configure the MCP server."""
    server_config = server_config or ServerConfig()
    server = Server(server_config.name, version=server_config.version)

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        """List available tools."""
        return TOOLS

    # Argument validation and clamping belong to the dispatcher
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict[str, Any]) -> CallToolResult:
        """Handle tool calls."""
        return await dispatcher.dispatch(name, arguments)

    return server


class MCPEndpoint:
    """
    ASGI app forwarding to the session manager.

    Starlette routes a class instance as a raw ASGI app, matching exactly
    /mcp for every method.
    """

    def __init__(self, session_manager: StreamableHTTPSessionManager):
        self.session_manager = session_manager

    async def __call__(self, scope, receive, send) -> None:
        await self.session_manager.handle_request(scope, receive, send)


def create_http_app(server: Server) -> Starlette:
    """Streamable HTTP app: POST /mcp for MCP traffic, GET / for health checks."""
    session_manager = StreamableHTTPSessionManager(
        app=server,
        event_store=None,
        json_response=True,
        stateless=True,
    )

    async def health(request: Request) -> PlainTextResponse:
        return PlainTextResponse(HEALTH_TEXT)

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette):
        async with session_manager.run():
            logger.info("Streamable HTTP session manager started")
            yield

    return Starlette(
        routes=[
            Route("/", endpoint=health, methods=["GET"]),
            Route("/mcp", endpoint=MCPEndpoint(session_manager)),
        ],
        lifespan=lifespan,
    )


async def run_stdio_server(server: Server) -> None:
    """Run the MCP server over stdio with graceful shutdown."""
    shutdown_event = asyncio.Event()
    loop = asyncio.get_running_loop()

    def handle_shutdown(sig: signal.Signals) -> None:
        logger.info("Received %s, shutting down gracefully...", sig.name)
        shutdown_event.set()

    # Signal handlers are Unix only
    if sys.platform != "win32":
        for sig in (signal.SIGTERM, signal.SIGINT):
            loop.add_signal_handler(sig, lambda s=sig: handle_shutdown(s))

    async with stdio_server() as (read_stream, write_stream):
        server_task = asyncio.create_task(
            server.run(
                read_stream,
                write_stream,
                server.create_initialization_options(),
            )
        )

        done, pending = await asyncio.wait(
            [server_task, asyncio.create_task(shutdown_event.wait())],
            return_when=asyncio.FIRST_COMPLETED,
        )

        for task in pending:
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

        # Surface a crash of the server task
        for task in done:
            if task is server_task:
                task.result()


def configure_logging(level: str) -> None:
    # stdout carries the stdio transport; logs go to stderr
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main() -> None:
    """Main entry point."""
    docs_config, server_config = get_config()
    configure_logging(server_config.log_level)

    errors = docs_config.validate() + server_config.validate()
    if errors:
        for error in errors:
            logger.error("Configuration error: %s", error)
        sys.exit(1)

    dispatcher = create_dispatcher(docs_config)
    server = create_server(dispatcher, server_config)

    try:
        if server_config.transport == "streamable-http":
            logger.info("MCP Server running on port %d", server_config.port)
            uvicorn.run(
                create_http_app(server),
                host=server_config.host,
                port=server_config.port,
                log_level=server_config.log_level.lower(),
            )
        else:
            asyncio.run(run_stdio_server(server))
    except KeyboardInterrupt:
        pass
    except Exception as e:
        logger.error("Server error: %s", e)
        sys.exit(1)
    finally:
        dispatcher.log_metrics()


if __name__ == "__main__":
    main()
