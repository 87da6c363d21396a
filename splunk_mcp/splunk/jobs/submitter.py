"""Search job creation."""

import re

import httpx
from loguru import logger

from splunk_mcp.splunk.config import SplunkConfig
from splunk_mcp.splunk.exceptions import SubmissionError
from splunk_mcp.splunk.models import Job, SearchRequest
from splunk_mcp.splunk.transport import LOG_BODY_LIMIT, auth_headers
from splunk_mcp.splunk.wire import describe_error, extract_value, sniff_format

JOBS_PATH = "/services/search/jobs"

_SEARCH_KEYWORD = re.compile(r"^search(\s|$)", re.IGNORECASE)


def build_search_string(query: str) -> str:
    """Prefix a query with the ``search`` command the search grammar expects.

    Queries that already start with ``search`` or with a generating command
    (``| tstats ...``) are left untouched.
    """
    query = query.strip()
    if query.startswith("|") or _SEARCH_KEYWORD.match(query):
        return query
    return f"search {query}"


def parse_sid(body: bytes) -> str:
    """Extract the job identifier from a JSON or XML job creation response.

    Raises:
        SubmissionError: If the body is undecodable or carries no sid
    """
    try:
        return extract_value(body, "sid")
    except ValueError as e:
        snippet = body[:200].decode("utf-8", errors="replace")
        raise SubmissionError(
            f"Failed to parse {sniff_format(body).value.upper()} job creation "
            f"response: {str(e)}. Raw response: {snippet}"
        ) from e


class JobSubmitter:
    """Creates search jobs."""

    def __init__(self, config: SplunkConfig, http_client: httpx.AsyncClient):
        self.config = config
        self._http = http_client

    def build_payload(self, request: SearchRequest) -> dict:
        return {
            "search": build_search_string(request.query),
            "earliest_time": request.earliest_time,
            "latest_time": request.latest_time,
            "max_count": request.max_count,
            "output_mode": "json",
        }

    async def submit(self, token: str, request: SearchRequest) -> Job:
        """Create a search job.

        Args:
            token: Session token
            request: Search to run

        Returns:
            Job for the created search

        Raises:
            SubmissionError: If the request fails or no sid can be read
        """
        logger.info("Making REST API request to create search job...")
        try:
            response = await self._http.post(
                JOBS_PATH,
                data=self.build_payload(request),
                headers=auth_headers(token),
            )
        except httpx.HTTPError as e:
            raise SubmissionError(f"Request failed: {str(e)}") from e

        logger.debug(f"Response status: {response.status_code}")
        logger.debug(f"Response data: {response.text[:LOG_BODY_LIMIT]}")

        if response.status_code >= 400:
            logger.warning(f"Job creation returned status {response.status_code}")
            raise SubmissionError(
                f"Job creation failed with status {response.status_code}: "
                f"{describe_error(response.content)}"
            )

        sid = parse_sid(response.content)
        logger.info(f"Job created with SID: {sid}")
        return Job(id=sid)
