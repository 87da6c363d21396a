"""Splunk utilities package."""

from splunk_mcp.splunk.utils.formatting import (
    format_connection_failure,
    format_connection_test,
    format_error_response,
    format_indexes,
    format_search_results,
)

__all__ = [
    "format_search_results",
    "format_error_response",
    "format_connection_test",
    "format_connection_failure",
    "format_indexes",
]
