import asyncio
from typing import Any

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.tools.function_tool import FunctionTool
from fastmcp.utilities.json_schema import dereference_refs
from starlette.requests import Request
from starlette.responses import JSONResponse

from codecov_mcp.app import CoverageApplication
from codecov_mcp.logger import get_logger
from codecov_mcp.tools.registry import ToolRegistry, ToolSpec, registry


SERVER_NAME = "codecov"
SERVER_VERSION = "1.0.0"
TRANSPORTS = ("stdio", "http")

logger = get_logger("server")


def _load_tools() -> None:
    # Importing the tool modules registers them
    from codecov_mcp.tools import comparison, coverage, repository  # noqa: F401


def create_server(
    app: CoverageApplication, tool_registry: ToolRegistry = registry
) -> FastMCP:
    _load_tools()

    mcp = FastMCP(
        SERVER_NAME,
        instructions=(
            "Read-only access to Codecov coverage data: repository totals, "
            "per-file line coverage, coverage trees, comparisons, commits "
            "and pull requests."
        ),
    )

    tool_count = 0
    for spec in tool_registry.get_all():
        _wire_tool(mcp, spec, app, tool_registry)
        tool_count += 1

    @mcp.custom_route("/health", methods=["GET"])
    async def health(_request: Request) -> JSONResponse:
        return JSONResponse(
            {"status": "ok", "server": "codecov-mcp-server", "version": SERVER_VERSION}
        )

    logger.info(f"Registered {tool_count} tools")
    return mcp


def _wire_tool(
    mcp: FastMCP, spec: ToolSpec, app: CoverageApplication, tool_registry: ToolRegistry
) -> None:
    parameters = dereference_refs(spec.params_model.model_json_schema())

    async def handler(**kwargs: Any) -> str:
        # The client is blocking; keep it off the event loop
        outcome = await asyncio.to_thread(
            tool_registry.execute, spec.name, lambda: app.client, kwargs
        )
        if outcome.is_error:
            raise ToolError(outcome.text)
        return outcome.text

    mcp.add_tool(
        FunctionTool(
            name=spec.name,
            description=spec.description,
            parameters=parameters,
            fn=handler,
        )
    )


def run_server(
    app: CoverageApplication,
    transport: str = "stdio",
    host: str = "127.0.0.1",
    port: int = 3000,
) -> None:
    if transport not in TRANSPORTS:
        raise ValueError(f"Invalid transport: {transport}. Use 'stdio' or 'http'.")

    mcp = create_server(app)

    if transport == "stdio":
        logger.info("Codecov MCP server running on stdio")
        mcp.run(transport="stdio")
    else:
        logger.info(f"Codecov MCP server running on http://{host}:{port}/sse")
        mcp.run(transport="sse", host=host, port=port)
