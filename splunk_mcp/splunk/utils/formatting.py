"""Text rendering of search results and errors for LLM consumption."""

import re
from typing import Any, Dict, List

from splunk_mcp.splunk.config import SplunkConfig
from splunk_mcp.splunk.exceptions import ResponseParseError, SplunkError
from splunk_mcp.splunk.models import SearchResult

# Splunk bucket/internal fields that carry no meaning for a reader
HIDDEN_FIELDS = frozenset({"_bkt", "_cd"})

DEFAULT_DISPLAY_LIMIT = 10

TROUBLESHOOTING_TIPS = {
    "authentication": [
        "Check the Splunk username and password",
        "Verify the host, port and scheme of the management endpoint",
    ],
    "submission": [
        "Check if the index exists",
        "Verify search syntax",
        "Check Splunk permissions",
    ],
    "polling": [
        "Narrow the time range or add filters so the search finishes sooner",
        "Check the job in the Splunk job inspector",
    ],
    "parsing": [
        "Check that the management endpoint is a Splunk server and not a proxy error page",
        "Run with debug logging to see the raw response",
    ],
    "transport": [
        "Verify the Splunk server is reachable",
        "Check the host, port and scheme of the management endpoint",
    ],
}


def error_code(error: Exception) -> str:
    """Upper snake case code derived from the exception class name."""
    if not isinstance(error, SplunkError):
        return "INTERNAL_ERROR"
    return re.sub(r"(?<!^)(?=[A-Z])", "_", type(error).__name__).upper()


def format_error_response(error: Exception) -> str:
    """Describe a failed search, naming the stage that failed."""
    if not isinstance(error, SplunkError):
        return f"Error: {str(error)}"

    lines = [f"Search Error [{error_code(error)}] during {error.stage}: {str(error)}"]
    # Malformed payloads share tips whatever stage they were read at
    tips_key = "parsing" if isinstance(error, ResponseParseError) else error.stage
    tips = TROUBLESHOOTING_TIPS.get(tips_key)
    if tips:
        lines.append("")
        lines.append("Troubleshooting tips:")
        lines.extend(f"- {tip}" for tip in tips)
    return "\n".join(lines)


def format_row(row: Dict[str, Any]) -> List[str]:
    return [
        f"  {key}: {value}"
        for key, value in row.items()
        if value not in (None, "", [], {}) and key not in HIDDEN_FIELDS
    ]


def format_search_results(
    query: str, result: SearchResult, max_display: int = DEFAULT_DISPLAY_LIMIT
) -> str:
    """Render search results as readable text.

    Only the first ``max_display`` rows are written out; the remainder is
    summarised in a trailing line.
    """
    lines = [
        f"Splunk Search Results for: {query}",
        f"Job SID: {result.job_id}",
        f"Result Count: {result.row_count}",
        "",
    ]

    if not result.rows:
        lines.append(f"No results found for query: {query}")
        return "\n".join(lines)

    for index, row in enumerate(result.rows[:max_display], start=1):
        lines.append(f"Result {index}:")
        lines.extend(format_row(row))
        lines.append("")

    remaining = result.row_count - max_display
    if remaining > 0:
        lines.append(f"... and {remaining} more results")

    return "\n".join(lines).rstrip("\n")


def format_connection_test(info: Dict[str, Any]) -> str:
    return "\n".join([
        "Splunk Connection Test Results:",
        "Login successful",
        f"Session key obtained: {info.get('session_key') or 'None'}",
        f"Host: {info['host']}:{info['port']}",
        f"Username: {info['username']}",
        f"Scheme: {info['scheme']}",
        "",
        "Connection is working properly!",
    ])


def format_connection_failure(config: SplunkConfig, error: Exception) -> str:
    return "\n".join([
        "Splunk Connection Test Failed:",
        f"Error: {str(error)}",
        f"Host: {config.host}:{config.port}",
        f"Username: {config.username}",
        f"Scheme: {config.scheme}",
        "",
        "Please check your Splunk configuration and credentials.",
    ])


def format_indexes(indexes: List[str]) -> str:
    if not indexes:
        return "No Splunk indexes are visible to this user."
    return "Available Splunk Indexes:\n" + "\n".join(indexes)
