"""Test tools initialization."""

from splunk_mcp.tools import (
    TOOLS_DEFINITION,
    execute_connection_test,
    execute_list_indexes,
    execute_search,
)


def test_tools_definition():
    """Test that TOOLS_DEFINITION contains all expected tools."""
    tools = {
        "splunk_search": execute_search,
        "splunk_test": execute_connection_test,
        "splunk_indexes": execute_list_indexes,
    }

    assert len(TOOLS_DEFINITION) == len(tools)

    for tool_name, tool_func in tools.items():
        assert tool_func in TOOLS_DEFINITION
        assert tool_func._tool_name == tool_name


def test_tools_exports():
    """Test that __all__ exports all tools."""
    from splunk_mcp.tools import __all__

    assert set(__all__) == {
        "execute_search",
        "execute_connection_test",
        "execute_list_indexes",
    }
