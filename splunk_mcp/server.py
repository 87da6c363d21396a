"""Main MCP server implementation for Splunk integration."""

import argparse
import functools
import inspect
import os
import sys
from typing import Annotated

from loguru import logger
from mcp.server.fastmcp import FastMCP
from pydantic import Field

from splunk_mcp import __version__
from splunk_mcp.splunk.client import SplunkClient
from splunk_mcp.splunk.config import SplunkConfig
from splunk_mcp.splunk.exceptions import ConfigurationError
from splunk_mcp.tools import TOOLS_DEFINITION, get_schema


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class SplunkMCPServer:
    """Model Context Protocol server for Splunk integration."""

    def __init__(
        self,
        mcp_port: int = int(os.getenv("MCP_PORT", 8081)),
        username: str = os.getenv("SPLUNK_USERNAME", "admin"),
        password: str = os.getenv("SPLUNK_PASSWORD", "Password1"),
        scheme: str = os.getenv("SPLUNK_SCHEME", "http"),
        host: str = os.getenv("SPLUNK_HOST", "localhost"),
        port: int = int(os.getenv("SPLUNK_PORT", 8089)),
        verify_ssl: bool = _env_flag("SPLUNK_VERIFY_SSL"),
        connection_timeout: float = float(os.getenv("CONNECTION_TIMEOUT", 30)),
        stdio: bool = False,
    ):
        """Initialize the server.

        Args:
            mcp_port: Port for MCP server
            username: Splunk username
            password: Splunk password
            scheme: http or https for the management endpoint
            host: Splunk host
            port: Splunk management port
            verify_ssl: Verify TLS certificates of the management endpoint
            connection_timeout: Connection timeout in seconds
            stdio: Use stdio instead of HTTP

        Raises:
            ConfigurationError: If any Splunk setting is invalid
        """
        self.port = mcp_port
        self.config = SplunkConfig(
            username=username,
            password=password,
            scheme=scheme,
            host=host,
            port=port,
            verify_ssl=verify_ssl,
            connection_timeout=connection_timeout,
        )
        self.stdio = stdio
        self.__setup_server()

    def __setup_server(self):
        """Set up the MCP server and Splunk client."""
        self.__connect_to_splunk()

        logger.info(f"Server starting on port {self.port}")

        self.mcp = FastMCP(
            name="Splunk MCP Server",
            instructions="""This server provides tools for interacting with Splunk:
- Run SPL searches and return matching events
- Test the connection and credentials
- List available indexes""",
            port=self.port,
        )

        self.__setup_tools()

    def __connect_to_splunk(self):
        """Initialize Splunk client."""
        self.splunk_client = SplunkClient(config=self.config)

    def __wrap_tool(self, tool, schema):
        """Bind a tool to this server instance.

        The returned coroutine function no longer takes the server parameter,
        so it is hidden from the schema FastMCP derives from the signature.
        Each remaining parameter is annotated with its docstring description.

        Args:
            tool: Tool function to wrap
            schema: Schema built by ``get_schema`` for the tool

        Returns:
            Wrapped tool function
        """
        @functools.wraps(tool)
        async def wrapper(**kwargs):
            return await tool(self, **kwargs)

        properties = schema["inputSchema"]["properties"]
        signature = inspect.signature(tool)
        parameters = [
            param.replace(
                annotation=Annotated[
                    param.annotation if param.annotation is not inspect.Parameter.empty else str,
                    Field(description=properties[param.name]["description"])
                ]
            )
            for param in list(signature.parameters.values())[1:]
        ]
        wrapper.__signature__ = signature.replace(parameters=parameters)
        wrapper._is_tool = True
        wrapper._tool_name = tool._tool_name
        return wrapper

    def __setup_tools(self):
        """Register MCP tools."""
        for tool in TOOLS_DEFINITION:
            schema = get_schema(tool)
            self.mcp.tool(name=schema["name"], description=schema["description"])(
                self.__wrap_tool(tool, schema)
            )
            logger.debug(f"Registered tool {schema['name']}")

    def run(self) -> None:
        """Run the Splunk MCP server."""
        logger.info(f"Starting Splunk MCP server v{__version__}...")
        if self.stdio:
            self.mcp.run("stdio")
        else:
            self.mcp.run("sse")

    async def close(self):
        """Clean up resources."""
        await self.splunk_client.close()


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Splunk MCP Server")
    parser.add_argument("--mcp-port", type=int, help="MCP server port", default=int(os.getenv("MCP_PORT", 8081)))
    parser.add_argument("--splunk-username", help="Splunk username", default=os.getenv("SPLUNK_USERNAME", "admin"))
    parser.add_argument("--splunk-password", help="Splunk password", default=os.getenv("SPLUNK_PASSWORD", "Password1"))
    parser.add_argument("--splunk-scheme", help="Management endpoint scheme (http or https)", default=os.getenv("SPLUNK_SCHEME", "http"))
    parser.add_argument("--splunk-host", help="Splunk host", default=os.getenv("SPLUNK_HOST", "localhost"))
    parser.add_argument("--splunk-port", type=int, help="Splunk management port", default=int(os.getenv("SPLUNK_PORT", 8089)))
    parser.add_argument("--verify-ssl", help="Verify TLS certificates", action="store_true", default=_env_flag("SPLUNK_VERIFY_SSL"))
    parser.add_argument("--connection-timeout", type=float, help="Connection timeout in seconds", default=float(os.getenv("CONNECTION_TIMEOUT", 30)))
    parser.add_argument("--stdio", help="Use stdio instead of HTTP", action="store_true")

    args = parser.parse_args()

    try:
        server = SplunkMCPServer(
            mcp_port=args.mcp_port,
            username=args.splunk_username,
            password=args.splunk_password,
            scheme=args.splunk_scheme,
            host=args.splunk_host,
            port=args.splunk_port,
            verify_ssl=args.verify_ssl,
            connection_timeout=args.connection_timeout,
            stdio=args.stdio,
        )
    except ConfigurationError as e:
        logger.error(f"Invalid Splunk configuration: {e}")
        sys.exit(1)
    server.run()


if __name__ == "__main__":
    main()
