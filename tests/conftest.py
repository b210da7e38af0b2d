import random

import httpx
import pytest
from fastapi.testclient import TestClient

from hostinfo.config import Settings
from hostinfo.environment import Environment
from hostinfo.main import create_app
from hostinfo.models import SystemInfo
from hostinfo.quotes import QuoteClient


SYSTEM_INFO = SystemInfo(
    hostname="test-host",
    ip_address="10.0.0.5",
    platform="linux",
    release="6.1.0",
    architecture="x86_64",
    total_memory="15.54 GB",
    free_memory="7.21 GB",
    os_name="Linux",
)


def quote_transport(status_code=200, payload=None, exc=None):
    def handler(request: httpx.Request) -> httpx.Response:
        if exc is not None:
            raise exc
        if isinstance(payload, (bytes, str)):
            return httpx.Response(status_code, content=payload)
        return httpx.Response(status_code, json=payload)

    return httpx.MockTransport(handler)


@pytest.fixture
def make_client():
    def _make(settings=None, environ=None, transport=None):
        quotes = QuoteClient(
            transport=transport or quote_transport(payload={"content": "Stay curious.", "author": "Anon"}),
            rng=random.Random(7),
        )
        app = create_app(
            settings or Settings(),
            SYSTEM_INFO,
            Environment(environ if environ is not None else {}),
            quotes,
        )
        return TestClient(app)

    return _make


@pytest.fixture
def client(make_client):
    return make_client()
