"""Test configuration and fixtures."""

import collections
import itertools
from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock, patch
from urllib.parse import parse_qs

import httpx
import pytest

from splunk_mcp.splunk.client import SplunkClient
from splunk_mcp.splunk.config import SplunkConfig

MOCK_SESSION_KEY = "0123456789abcdefghijKLMNOPQRSTUV"
MOCK_INDEXES = ["main", "_internal", "security"]


class FakeSplunk:
    """In-memory stand-in for the Splunk management API.

    Jobs get sequential sids (``job-1``, ``job-2`` ...). A job reports done
    once it has been checked more than ``done_after`` times; its rows are
    looked up by the search string it was created with. Any of the canned
    ``*_response`` attributes replaces the generated response for that
    endpoint, and ``fail_paths`` maps a path prefix to an exception raised
    instead of answering.
    """

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.login_response: Optional[httpx.Response] = None
        self.submit_response: Optional[httpx.Response] = None
        self.status_response: Optional[httpx.Response] = None
        self.results_response: Optional[httpx.Response] = None
        self.indexes_response: Optional[httpx.Response] = None
        self.done_after = 0
        self.rows_by_search: Dict[str, List[Dict[str, Any]]] = {}
        self.searches: Dict[str, str] = {}
        self.status_checks: collections.Counter = collections.Counter()
        self.fail_paths: Dict[str, Exception] = {}
        self._sids = itertools.count(1)

    @property
    def paths(self) -> List[str]:
        return [request.url.path for request in self.requests]

    def form(self, request: httpx.Request) -> Dict[str, str]:
        return {k: v[0] for k, v in parse_qs(request.content.decode()).items()}

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        for prefix, exc in self.fail_paths.items():
            if path.startswith(prefix):
                raise exc

        if path == "/services/auth/login":
            if self.login_response is not None:
                return self.login_response
            return httpx.Response(200, json={"sessionKey": MOCK_SESSION_KEY})

        if path == "/services/data/indexes":
            if self.indexes_response is not None:
                return self.indexes_response
            return httpx.Response(
                200, json={"entry": [{"name": name} for name in MOCK_INDEXES]}
            )

        if path == "/services/search/jobs" and request.method == "POST":
            if self.submit_response is not None:
                return self.submit_response
            sid = f"job-{next(self._sids)}"
            self.searches[sid] = self.form(request)["search"]
            return httpx.Response(201, json={"sid": sid})

        if path.startswith("/services/search/jobs/") and path.endswith("/results"):
            if self.results_response is not None:
                return self.results_response
            sid = path.split("/")[-2]
            rows = self.rows_by_search.get(self.searches.get(sid, ""), [])
            return httpx.Response(200, json={"preview": False, "results": rows})

        if path.startswith("/services/search/jobs/"):
            if self.status_response is not None:
                return self.status_response
            sid = path.rsplit("/", 1)[-1]
            self.status_checks[sid] += 1
            done = self.status_checks[sid] > self.done_after
            return httpx.Response(
                200,
                json={
                    "entry": [
                        {
                            "name": sid,
                            "content": {
                                "isDone": done,
                                "dispatchState": "DONE" if done else "RUNNING",
                            },
                        }
                    ]
                },
            )

        return httpx.Response(
            404, json={"messages": [{"type": "ERROR", "text": f"Unknown path {path}"}]}
        )


@pytest.fixture
def splunk_config():
    """SplunkConfig pointing at the fake management API."""
    return SplunkConfig(
        username="admin",
        password="changeme",
        host="splunk.test",
        port=8089,
        poll_interval=0.01,
    )


@pytest.fixture
def fake_splunk():
    return FakeSplunk()


@pytest.fixture
def http_client(fake_splunk, splunk_config):
    """httpx client whose transport is the fake management API."""
    return httpx.AsyncClient(
        base_url=splunk_config.base_url,
        transport=httpx.MockTransport(fake_splunk.handler),
    )


@pytest.fixture
def splunk_client(splunk_config, http_client):
    return SplunkClient(config=splunk_config, http_client=http_client)


@pytest.fixture
def no_sleep():
    """Replace the poll interval sleep so polling tests run instantly."""
    with patch("splunk_mcp.splunk.jobs.poller.asyncio.sleep", new_callable=AsyncMock) as sleep:
        yield sleep


@pytest.fixture
def mock_server_instance(splunk_config):
    """Stand-in for SplunkMCPServer carrying a mocked client."""
    server = MagicMock()
    server.splunk_client = AsyncMock()
    server.splunk_client.config = splunk_config
    return server


@pytest.fixture
def mock_session_key():
    return MOCK_SESSION_KEY


@pytest.fixture
def mock_indexes():
    return list(MOCK_INDEXES)
