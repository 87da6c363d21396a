"""Authenticated request helpers shared by the job components."""

from typing import Any, Dict, Optional

import httpx
from loguru import logger

from splunk_mcp.splunk.exceptions import TransportError
from splunk_mcp.splunk.wire import describe_error

# Bodies are truncated to this many characters in debug logs
LOG_BODY_LIMIT = 500


def auth_headers(token: str) -> Dict[str, str]:
    """Headers for an authenticated management API request."""
    return {"Authorization": f"Splunk {token}", "Accept": "application/json"}


async def authenticated_get(
    http_client: httpx.AsyncClient,
    path: str,
    token: str,
    params: Optional[Dict[str, Any]] = None,
) -> bytes:
    """GET a management endpoint and return the raw body.

    Args:
        http_client: Client bound to the management API base URL
        path: Endpoint path
        token: Session token
        params: Query parameters

    Returns:
        Response body

    Raises:
        TransportError: On connection failure or a non-2xx status
    """
    logger.debug(f"GET {path} params={params}")
    try:
        response = await http_client.get(path, params=params, headers=auth_headers(token))
    except httpx.HTTPError as e:
        raise TransportError(f"Request to {path} failed: {str(e)}") from e

    logger.debug(f"Response status: {response.status_code}")
    logger.debug(f"Response data: {response.text[:LOG_BODY_LIMIT]}")
    if response.status_code >= 400:
        logger.warning(f"GET {path} returned status {response.status_code}")
        raise TransportError(
            f"Request to {path} failed with status {response.status_code}: "
            f"{describe_error(response.content)}"
        )
    return response.content
