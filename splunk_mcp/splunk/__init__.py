"""Splunk search job client."""

from splunk_mcp.splunk.client import SplunkClient
from splunk_mcp.splunk.config import SplunkConfig
from splunk_mcp.splunk.models import Job, SearchRequest, SearchResult

__all__ = ["SplunkClient", "SplunkConfig", "SearchRequest", "SearchResult", "Job"]
