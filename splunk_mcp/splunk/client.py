"""Splunk search client implementation."""

import json
from typing import Any, Dict, List, Optional

import httpx
from loguru import logger

from splunk_mcp.splunk.config import SplunkConfig
from splunk_mcp.splunk.exceptions import ResultParseError
from splunk_mcp.splunk.interfaces import SessionProvider
from splunk_mcp.splunk.jobs import JobPoller, JobSubmitter, ResultFetcher
from splunk_mcp.splunk.models import SearchRequest, SearchResult
from splunk_mcp.splunk.session import SessionManager
from splunk_mcp.splunk.transport import authenticated_get

INDEXES_PATH = "/services/data/indexes"


class SplunkClient:
    """Client that runs searches as deferred jobs against Splunk."""

    def __init__(self,
                 config: SplunkConfig,
                 http_client: Optional[httpx.AsyncClient] = None,
                 session: Optional[SessionProvider] = None,
                 submitter: Optional[JobSubmitter] = None,
                 poller: Optional[JobPoller] = None,
                 fetcher: Optional[ResultFetcher] = None):
        """Initialize the SplunkClient with the given configuration and optional dependencies.

        Args:
            config: Configuration for the client
            http_client: Optional pre-configured HTTP client bound to the management API
            session: Optional session provider implementation
            submitter: Optional pre-configured job submitter
            poller: Optional pre-configured job poller
            fetcher: Optional pre-configured result fetcher
        """
        self.config = config

        # Initialize HTTP client
        self._http = http_client or httpx.AsyncClient(
            base_url=config.base_url,
            verify=config.verify_ssl,
            timeout=config.connection_timeout,
        )

        self.session = session or SessionManager(config, self._http)
        self.submitter = submitter or JobSubmitter(config, self._http)
        self.poller = poller or JobPoller(config, self._http)
        self.fetcher = fetcher or ResultFetcher(config, self._http)

        logger.info(f"Initialized Splunk client for {config.base_url} as {config.username}")

    async def run(self, request: SearchRequest) -> SearchResult:
        """Run a search to completion.

        Each call logs in, creates its own job, waits for it and fetches the
        first page of results. The first failing step ends the search and its
        exception propagates unchanged.

        Args:
            request: Search to run

        Returns:
            Search results

        Raises:
            AuthenticationError: If login fails
            SubmissionError: If the job cannot be created
            PollTimeoutError: If the job does not finish in time
            PollParseError: If a status payload is malformed
            ResultParseError: If the results payload is malformed
            TransportError: If a status or results request fails
        """
        logger.info(f"Running search: {request.query}")
        token = await self.session.ensure_authenticated()
        job = await self.submitter.submit(token, request)
        await self.poller.poll_until_done(job, token)
        return await self.fetcher.fetch(job, token)

    async def search(self, query: str, **options: Any) -> SearchResult:
        """Convenience wrapper building a SearchRequest from keyword options."""
        return await self.run(SearchRequest(query=query, **options))

    async def list_indexes(self) -> List[str]:
        """List the names of the indexes visible to the configured user.

        Raises:
            AuthenticationError: If login fails
            TransportError: If the request fails
            ResultParseError: If the payload is malformed
        """
        token = await self.session.ensure_authenticated()
        body = await authenticated_get(
            self._http, INDEXES_PATH, token, params={"output_mode": "json", "count": 0}
        )
        try:
            entries = json.loads(body)["entry"]
            names = [entry["name"] for entry in entries]
        except (json.JSONDecodeError, UnicodeDecodeError, KeyError, TypeError) as e:
            raise ResultParseError(f"Failed to parse index list: {str(e)}") from e
        logger.info(f"Found {len(names)} indexes")
        return names

    async def test_connection(self) -> Dict[str, Any]:
        """Log in and report the connection settings that were used.

        Raises:
            AuthenticationError: If login fails
        """
        token = await self.session.ensure_authenticated()
        return {
            "host": self.config.host,
            "port": self.config.port,
            "scheme": self.config.scheme,
            "username": self.config.username,
            "session_key": f"{token[:20]}..." if token else None,
        }

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._http.aclose()
