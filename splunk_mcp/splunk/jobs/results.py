"""Fetching the results of a finished search job."""

import json
from typing import Any, Dict, List

import httpx
from loguru import logger

from splunk_mcp.splunk.config import SplunkConfig
from splunk_mcp.splunk.exceptions import ResultParseError
from splunk_mcp.splunk.jobs.poller import job_path
from splunk_mcp.splunk.models import Job, SearchResult
from splunk_mcp.splunk.transport import authenticated_get


def parse_rows(body: bytes) -> List[Dict[str, Any]]:
    """Read the row list from a results payload.

    A missing or null ``results`` list means the search matched nothing.

    Raises:
        ResultParseError: If the payload or any row is malformed
    """
    try:
        data = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ResultParseError(f"Failed to parse results: {str(e)}") from e

    if not isinstance(data, dict):
        raise ResultParseError(f"Expected a JSON object, got {type(data).__name__}")

    rows = data.get("results")
    if rows is None:
        return []
    if not isinstance(rows, list):
        raise ResultParseError(f"Expected a list of results, got {type(rows).__name__}")
    for index, row in enumerate(rows):
        if not isinstance(row, dict):
            raise ResultParseError(f"Result {index} is not an object")
    return rows


class ResultFetcher:
    """Retrieves the first page of results for a finished job."""

    def __init__(self, config: SplunkConfig, http_client: httpx.AsyncClient):
        self.config = config
        self._http = http_client
        self.page_size = config.results_page_size

    async def fetch(self, job: Job, token: str) -> SearchResult:
        """Fetch results for a job that has finished.

        Args:
            job: Finished job
            token: Session token

        Returns:
            Up to ``page_size`` rows in backend order

        Raises:
            ValueError: If the job has not been reported done
            ResultParseError: If the results payload is malformed
            TransportError: If the results request fails
        """
        if not job.done:
            raise ValueError(f"Job {job.id} is not done")

        body = await authenticated_get(
            self._http,
            f"{job_path(job.id)}/results",
            token,
            params={"output_mode": "json", "count": self.page_size},
        )
        rows = parse_rows(body)
        logger.info(f"Retrieved {len(rows)} results")
        return SearchResult(rows=rows, job_id=job.id)
