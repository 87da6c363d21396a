"""Session management for the Splunk management API."""

from typing import Optional

import httpx
from loguru import logger

from splunk_mcp.splunk.config import SplunkConfig
from splunk_mcp.splunk.exceptions import AuthenticationError
from splunk_mcp.splunk.interfaces import SessionProvider
from splunk_mcp.splunk.wire import describe_error, extract_value

LOGIN_PATH = "/services/auth/login"


class SessionManager(SessionProvider):
    """Holds the session token shared by every search in the process.

    A new token is obtained on every call. Concurrent searches may overwrite
    each other's stored token; each one uses the value its own login returned.
    """

    def __init__(self, config: SplunkConfig, http_client: httpx.AsyncClient):
        """Initialize the session manager.

        Args:
            config: Connection settings including credentials
            http_client: Client bound to the management API base URL
        """
        self.config = config
        self._http = http_client
        self.token: Optional[str] = None

    async def ensure_authenticated(self) -> str:
        """Log in with the configured credentials and store the new token.

        Returns:
            Session token

        Raises:
            AuthenticationError: If the endpoint is unreachable, rejects the
                credentials or returns no session key
        """
        logger.debug(f"Logging in to {self.config.base_url} as {self.config.username}")
        try:
            response = await self._http.post(
                LOGIN_PATH,
                data={
                    "username": self.config.username,
                    "password": self.config.password,
                    "output_mode": "json",
                },
            )
        except httpx.HTTPError as e:
            raise AuthenticationError(
                f"Unable to reach Splunk at {self.config.base_url}: {str(e)}"
            ) from e

        if response.status_code >= 400:
            logger.warning(f"Login rejected with status {response.status_code}")
            raise AuthenticationError(
                f"Login failed with status {response.status_code}: "
                f"{describe_error(response.content)}"
            )

        try:
            token = extract_value(response.content, "sessionKey")
        except ValueError as e:
            raise AuthenticationError(f"Login response had no session key: {str(e)}") from e

        self.token = token
        logger.info(f"Authenticated to {self.config.base_url} as {self.config.username}")
        return token
