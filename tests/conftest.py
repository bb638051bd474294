"""Pytest fixtures for the HarperDB client tests."""

import base64
import json

import httpx
import pytest

from harperdb_client import AsyncHarperDBClient, HarperDBClient

URL = "http://harperdb.test:9925/"
USERNAME = "username"
PASSWORD = "password"
BASIC_TOKEN = base64.b64encode(f"{USERNAME}:{PASSWORD}".encode()).decode()
SCHEMA = "dev"
TABLE = "test"


class FakeServer:
    """httpx.MockTransport handler that records requests and replies with a canned response."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.status = 200
        self.kwargs: dict = {"json": {}}

    def reply(self, status: int = 200, **kwargs) -> None:
        """Set the next responses; kwargs go to ``httpx.Response`` (json=, content=)."""
        self.status = status
        self.kwargs = kwargs

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status, **self.kwargs)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    @property
    def last_body(self) -> dict:
        return json.loads(self.last_request.content)


@pytest.fixture
def server():
    return FakeServer()


@pytest.fixture
def db(server):
    """Async client talking to the fake server."""
    return AsyncHarperDBClient(
        URL, USERNAME, PASSWORD, transport=httpx.MockTransport(server)
    )


@pytest.fixture
def sync_db(server):
    """Blocking client talking to the fake server."""
    return HarperDBClient(URL, USERNAME, PASSWORD, transport=httpx.MockTransport(server))
