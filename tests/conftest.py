"""
Shared fixtures: a config with every path set and a session that records
requests instead of touching the network.
"""

import sys
from pathlib import Path

import pytest
import requests

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from shopsense.client import ShopsenseClient
from shopsense.config import Operation, ShopsenseConfig


def make_response(body: str = "{}", status: int = 200, url: str = "") -> requests.Response:
    resp = requests.Response()
    resp.status_code = status
    resp._content = body.encode("utf-8")
    resp.encoding = "utf-8"
    resp.url = url
    return resp


class FakeSession:
    """Stands in for requests.Session; records every GET."""

    def __init__(self, body: str = '{"ok": true}', status: int = 200, exc: Exception = None):
        self.body = body
        self.status = status
        self.exc = exc
        self.calls = []
        self.closed = False

    def get(self, url, timeout=None):
        self.calls.append({"url": url, "timeout": timeout})
        if self.exc is not None:
            raise self.exc
        return make_response(self.body, self.status, url)

    def close(self):
        self.closed = True


@pytest.fixture
def paths():
    return {op: f"/api/{op.value}" for op in Operation}


@pytest.fixture
def cfg(paths):
    return ShopsenseConfig(
        api_url="http://api.example.test",
        partner_id="partner-123",
        site="www.example.test",
        paths=paths,
    )


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def client(cfg, session):
    return ShopsenseClient(cfg, session=session)
