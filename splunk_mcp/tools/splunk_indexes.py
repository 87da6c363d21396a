"""Tool for listing Splunk indexes."""

from mcp.server.fastmcp.exceptions import ToolError

from splunk_mcp.splunk.exceptions import SplunkError
from splunk_mcp.splunk.utils.formatting import format_error_response, format_indexes
from splunk_mcp.tools.tool_decorator import tool


@tool(name="splunk_indexes")
async def execute_list_indexes(mcp) -> str:
    """List available Splunk indexes.

    Args:
        mcp: SplunkMCPServer instance
    """
    try:
        indexes = await mcp.splunk_client.list_indexes()
    except SplunkError as e:
        raise ToolError(format_error_response(e)) from e
    return format_indexes(indexes)
