"""Tests for JobPoller."""

import httpx
import pytest

from splunk_mcp.splunk.exceptions import PollParseError, PollTimeoutError, TransportError
from splunk_mcp.splunk.jobs.poller import JobPoller, job_path, parse_is_done
from splunk_mcp.splunk.models import Job


@pytest.fixture
def poller(splunk_config, http_client):
    return JobPoller(splunk_config, http_client)


def status_body(is_done):
    return httpx.Response(200, json={"entry": [{"content": {"isDone": is_done}}]}).content


@pytest.mark.parametrize(
    "value, expected",
    [(True, True), (False, False), (1, True), (0, False), ("1", True), ("false", False)],
)
def test_parse_is_done(value, expected):
    assert parse_is_done(status_body(value)) is expected


@pytest.mark.parametrize(
    "body, message",
    [
        (b"not json", "Failed to parse job status"),
        (b"[]", "no entry"),
        (b'{"entry": []}', "no entry"),
        (b'{"entry": [{"name": "x"}]}', "no isDone flag"),
        (b'{"entry": [{"content": {"dispatchState": "RUNNING"}}]}', "no isDone flag"),
        (b'{"entry": [{"content": {"isDone": "maybe"}}]}', "Unrecognised isDone value"),
    ],
)
def test_parse_is_done_malformed(body, message):
    with pytest.raises(PollParseError, match=message):
        parse_is_done(body)


def test_job_path_quotes_sid():
    assert job_path("abc123") == "/services/search/jobs/abc123"
    assert job_path("a/b") == "/services/search/jobs/a%2Fb"


class TestJobPoller:
    """Test cases for JobPoller."""

    @pytest.mark.asyncio
    async def test_done_on_first_check_does_not_sleep(self, poller, fake_splunk, no_sleep):
        job = Job(id="job-1")
        await poller.poll_until_done(job, "tok")

        assert job.done is True
        assert job.attempt == 0
        no_sleep.assert_not_called()

        request = fake_splunk.requests[0]
        assert request.method == "GET"
        assert request.url.path == "/services/search/jobs/job-1"
        assert request.url.params["output_mode"] == "json"
        assert request.headers["Authorization"] == "Splunk tok"

    @pytest.mark.asyncio
    async def test_polls_until_done(self, poller, fake_splunk, no_sleep):
        fake_splunk.done_after = 3
        job = Job(id="job-1")
        await poller.poll_until_done(job, "tok")

        assert job.done is True
        assert job.attempt == 3
        assert fake_splunk.status_checks["job-1"] == 4
        assert no_sleep.await_count == 3
        no_sleep.assert_awaited_with(poller.interval)

    @pytest.mark.asyncio
    async def test_timeout_after_max_attempts(self, poller, fake_splunk, no_sleep):
        fake_splunk.done_after = 1000
        job = Job(id="job-1")
        with pytest.raises(PollTimeoutError) as exc_info:
            await poller.poll_until_done(job, "tok")

        assert exc_info.value.attempts == 30
        assert exc_info.value.job_id == "job-1"
        assert fake_splunk.status_checks["job-1"] == 30
        assert job.done is False

    @pytest.mark.asyncio
    async def test_parse_error_is_not_retried(self, poller, fake_splunk, no_sleep):
        fake_splunk.status_response = httpx.Response(200, content=b"<html>oops</html>")
        with pytest.raises(PollParseError):
            await poller.poll_until_done(Job(id="job-1"), "tok")
        assert len(fake_splunk.requests) == 1
        no_sleep.assert_not_called()

    @pytest.mark.asyncio
    async def test_transport_error(self, poller, fake_splunk, no_sleep):
        fake_splunk.fail_paths["/services/search/jobs/"] = httpx.ConnectError("Connection reset")
        with pytest.raises(TransportError, match="Connection reset"):
            await poller.poll_until_done(Job(id="job-1"), "tok")

    @pytest.mark.asyncio
    async def test_error_status(self, poller, fake_splunk, no_sleep):
        fake_splunk.status_response = httpx.Response(
            404, json={"messages": [{"type": "ERROR", "text": "Unknown sid."}]}
        )
        with pytest.raises(TransportError, match="status 404: Unknown sid."):
            await poller.poll_until_done(Job(id="job-1"), "tok")
