"""Tool for checking the Splunk connection."""

from mcp.server.fastmcp.exceptions import ToolError

from splunk_mcp.splunk.exceptions import SplunkError
from splunk_mcp.splunk.utils.formatting import format_connection_failure, format_connection_test
from splunk_mcp.tools.tool_decorator import tool


@tool(name="splunk_test")
async def execute_connection_test(mcp) -> str:
    """Test Splunk connection and authentication.

    Args:
        mcp: SplunkMCPServer instance
    """
    client = mcp.splunk_client
    try:
        info = await client.test_connection()
    except SplunkError as e:
        raise ToolError(format_connection_failure(client.config, e)) from e
    return format_connection_test(info)
