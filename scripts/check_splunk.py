#!/usr/bin/env python3
"""
Script to check Splunk connectivity and list the visible indexes.
"""

import asyncio
import os
import sys

from splunk_mcp.splunk.client import SplunkClient
from splunk_mcp.splunk.config import SplunkConfig
from splunk_mcp.splunk.exceptions import SplunkError


async def check_splunk() -> int:
    """Log in to Splunk and print the indexes the user can see."""
    config = SplunkConfig(
        username=os.getenv("SPLUNK_USERNAME", "admin"),
        password=os.getenv("SPLUNK_PASSWORD", "Password1"),
        scheme=os.getenv("SPLUNK_SCHEME", "http"),
        host=os.getenv("SPLUNK_HOST", "localhost"),
        port=int(os.getenv("SPLUNK_PORT", 8089)),
    )
    client = SplunkClient(config=config)
    try:
        info = await client.test_connection()
        print(f"Connected to {info['host']}:{info['port']} as {info['username']}")
        print(f"Session key: {info['session_key']}")

        indexes = await client.list_indexes()
        print(f"Found {len(indexes)} indexes: {', '.join(indexes)}")
    except SplunkError as e:
        print(f"Error checking Splunk ({e.stage}): {e}")
        return 1
    finally:
        await client.close()
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(check_splunk()))
