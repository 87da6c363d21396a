"""Main entry point for the Splunk MCP server."""

from splunk_mcp.server import main

if __name__ == "__main__":
    main()
