"""Search job lifecycle: submission, polling and result retrieval."""

from splunk_mcp.splunk.jobs.poller import JobPoller
from splunk_mcp.splunk.jobs.results import ResultFetcher
from splunk_mcp.splunk.jobs.submitter import JobSubmitter

__all__ = ["JobSubmitter", "JobPoller", "ResultFetcher"]
