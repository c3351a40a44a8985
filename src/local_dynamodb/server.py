"""MCP server exposing a local DynamoDB instance as tools."""
import asyncio
import dataclasses
import json
from typing import Any, Dict, List

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.models import InitializationOptions
from mcp.server import stdio

from local_dynamodb.binaries.provisioner import Provisioner, provision_binary
from local_dynamodb.config import settings_from_env
from local_dynamodb.errors import LocalDynamoDbError, log_error
from local_dynamodb.instances.manager import InstanceManager, create_instance
from local_dynamodb.logging import configure_logging, get_logger
from local_dynamodb.types import Settings

logger = get_logger("server")

SERVER_NAME = "local-dynamodb"
SERVER_VERSION = "0.1.0"

tools = [
    types.Tool(
        name="local_dynamodb_start",
        description="Download DynamoDB Local if needed and start it",
        inputSchema={"type": "object", "properties": {}},
    ),
    types.Tool(
        name="local_dynamodb_stop",
        description="Stop the running DynamoDB Local process",
        inputSchema={"type": "object", "properties": {}},
    ),
    types.Tool(
        name="local_dynamodb_restart",
        description="Restart DynamoDB Local with the current configuration",
        inputSchema={"type": "object", "properties": {}},
    ),
    types.Tool(
        name="local_dynamodb_configure",
        description="Change port and/or mode; applied on the next start",
        inputSchema={
            "type": "object",
            "properties": {
                "port": {
                    "type": "integer",
                    "minimum": 1024,
                    "maximum": 65535,
                    "description": "Port DynamoDB Local listens on",
                },
                "mode": {
                    "type": "string",
                    "enum": ["inMemory", "sharedDb"],
                    "description": "Storage mode",
                },
            },
        },
    ),
    types.Tool(
        name="local_dynamodb_status",
        description="Report status, port and mode of DynamoDB Local",
        inputSchema={"type": "object", "properties": {}},
    ),
]


def status_data(manager: InstanceManager) -> Dict[str, Any]:
    return {
        **manager.status().to_dict(),
        "liveness": manager.liveness(),
        "readiness": manager.readiness(),
    }


def text_result(payload: Dict[str, Any]) -> List[types.TextContent]:
    return [types.TextContent(type="text", text=json.dumps(payload))]


async def handle_tool_call(
    manager: InstanceManager, name: str, arguments: Dict[str, Any]
) -> List[types.TextContent]:
    """Dispatch a tool call to the manager and wrap the outcome as JSON."""
    logger.debug(f"Tool call received: {name} with arguments {arguments}")

    try:
        if name == "local_dynamodb_start":
            await manager.start()
        elif name == "local_dynamodb_stop":
            manager.stop()
        elif name == "local_dynamodb_restart":
            await manager.restart()
        elif name == "local_dynamodb_configure":
            manager.configure(port=arguments.get("port"), mode=arguments.get("mode"))
        elif name != "local_dynamodb_status":
            return text_result({"success": False, "error": f"Unknown tool: {name}"})

    except LocalDynamoDbError as e:
        log_error(e, context={"tool": name}, logger=logger)
        return text_result(
            {
                "success": False,
                "error": str(e),
                "code": e.code,
                "details": e.details,
            }
        )

    return text_result({"success": True, "data": status_data(manager)})


def build_manager(
    settings: Settings, provisioner: Provisioner = provision_binary
) -> InstanceManager:
    """Create the manager behind the MCP tools.

    stdout carries the JSON-RPC stream, so the java child writes to stderr.
    """
    settings = dataclasses.replace(settings, redirect_output=True)
    return create_instance(
        settings.port, settings.mode, settings=settings, provisioner=provisioner
    )


async def init_server(manager: InstanceManager) -> Server:
    logger.info(f"Registered tools: {', '.join(t.name for t in tools)}")

    server = Server(SERVER_NAME)

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        logger.debug("Tools requested")
        return tools

    @server.call_tool()
    async def call_tool(name: str, arguments: Dict[str, Any]) -> List[types.TextContent]:
        return await handle_tool_call(manager, name, arguments or {})

    return server


async def serve() -> None:
    settings = settings_from_env()
    configure_logging(settings.log_level)
    logger.info("Starting local DynamoDB MCP server")

    manager = build_manager(settings)
    server = await init_server(manager)
    try:
        async with stdio.stdio_server() as (read_stream, write_stream):
            init_options = InitializationOptions(
                server_name=SERVER_NAME,
                server_version=SERVER_VERSION,
                capabilities=types.ServerCapabilities(
                    tools=types.ToolsCapability(listChanged=False),
                    logging=types.LoggingCapability(),
                ),
            )
            await server.run(read_stream, write_stream, init_options)
    finally:
        manager.stop()


def main() -> None:
    """Run the MCP server."""
    asyncio.run(serve())
