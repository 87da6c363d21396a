"""Job status polling."""

import asyncio
import json
from typing import Any
from urllib.parse import quote

import httpx
from loguru import logger

from splunk_mcp.splunk.config import SplunkConfig
from splunk_mcp.splunk.exceptions import PollParseError, PollTimeoutError
from splunk_mcp.splunk.jobs.submitter import JOBS_PATH
from splunk_mcp.splunk.models import Job
from splunk_mcp.splunk.transport import authenticated_get


def job_path(job_id: str) -> str:
    return f"{JOBS_PATH}/{quote(job_id, safe='')}"


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str) and value.strip().lower() in ("1", "0", "true", "false"):
        return value.strip().lower() in ("1", "true")
    raise PollParseError(f"Unrecognised isDone value: {value!r}")


def parse_is_done(body: bytes) -> bool:
    """Read the ``isDone`` flag from a job status payload.

    Raises:
        PollParseError: If the payload is not JSON or lacks the flag
    """
    try:
        data = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise PollParseError(f"Failed to parse job status: {str(e)}") from e

    entries = data.get("entry") if isinstance(data, dict) else None
    if not isinstance(entries, list) or not entries:
        raise PollParseError("Job status response has no entry")

    content = entries[0].get("content") if isinstance(entries[0], dict) else None
    if not isinstance(content, dict) or "isDone" not in content:
        raise PollParseError("Job status entry has no isDone flag")

    return _as_bool(content["isDone"])


class JobPoller:
    """Waits for a search job to finish.

    Status is checked at a fixed interval until the job reports done or the
    attempt ceiling is reached. Malformed status payloads are not retried.
    """

    def __init__(self, config: SplunkConfig, http_client: httpx.AsyncClient):
        self.config = config
        self._http = http_client
        self.interval = config.poll_interval
        self.max_attempts = config.max_poll_attempts

    async def is_done(self, job: Job, token: str) -> bool:
        body = await authenticated_get(
            self._http, job_path(job.id), token, params={"output_mode": "json"}
        )
        return parse_is_done(body)

    async def poll_until_done(self, job: Job, token: str) -> None:
        """Suspend until the job is done.

        Args:
            job: Job to wait for; its ``attempt`` and ``done`` fields are updated
            token: Session token

        Raises:
            PollTimeoutError: If the job is still running after ``max_attempts`` checks
            PollParseError: If a status payload is malformed
            TransportError: If a status request fails
        """
        while True:
            if await self.is_done(job, token):
                job.done = True
                logger.info(f"Job {job.id} completed, fetching results...")
                return

            job.attempt += 1
            if job.attempt >= self.max_attempts:
                logger.warning(f"Job {job.id} timed out after {job.attempt} attempts")
                raise PollTimeoutError(job.id, job.attempt)

            logger.debug(f"Job not done yet, attempt {job.attempt}/{self.max_attempts}")
            await asyncio.sleep(self.interval)
