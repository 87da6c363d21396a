"""Tool for running searches against Splunk."""

from mcp.server.fastmcp.exceptions import ToolError
from pydantic import ValidationError

from splunk_mcp.splunk.exceptions import SplunkError
from splunk_mcp.splunk.models import SearchRequest
from splunk_mcp.splunk.utils.formatting import format_error_response, format_search_results
from splunk_mcp.tools.tool_decorator import tool


@tool()
async def execute_search(
    mcp,
    query: str,
    earliest_time: str = "-24h",
    latest_time: str = "now",
    count: int = 100,
) -> str:
    """Search Splunk logs and data.

    The query is written in SPL. A leading ``search`` command is added when
    the query does not start with one or with a ``|`` generating command.
    The search runs as a job on the server; at most the first 100 rows are
    returned.

    Args:
        mcp: SplunkMCPServer instance
        query: Splunk search query (SPL)
        earliest_time: Earliest time for search (default: -24h)
        latest_time: Latest time for search (default: now)
        count: Maximum number of results (default: 100)

    Returns:
        Readable summary of the matching events
    """
    try:
        request = SearchRequest(
            query=query,
            earliest_time=earliest_time,
            latest_time=latest_time,
            max_count=count,
        )
    except ValidationError as e:
        raise ToolError(f"Invalid search request: {str(e)}") from e

    try:
        result = await mcp.splunk_client.run(request)
    except SplunkError as e:
        raise ToolError(format_error_response(e)) from e

    return format_search_results(request.query, result)
