"""Tool definitions for Splunk MCP server."""

import inspect
import sys

from .tool_decorator import tool, get_schema
from .splunk_search import execute_search
from .splunk_test import execute_connection_test
from .splunk_indexes import execute_list_indexes

__all__ = [
    "execute_search",
    "execute_connection_test",
    "execute_list_indexes",
]

TOOLS_DEFINITION = [
    obj
    for name, obj in inspect.getmembers(sys.modules[__name__])
    if inspect.isfunction(obj) and hasattr(obj, "_is_tool") and obj._is_tool
]
