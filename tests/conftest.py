"""Shared fixtures: a fake transfer service behind httpx.MockTransport."""

import json

import httpx
import pytest

from globus_transfer import Config, TransferClient

TRANSFER = "https://transfer.test/v0.10"
AUTH = "https://auth.test/v2/api"
TOKEN = "test-bearer-token"
ENDPOINT = "ddb59aef-6d04-11e5-ba46-22000b92c6ec"


class FakeService:
    """Records every request and answers from a queue, falling back to a 200."""

    def __init__(self):
        self.requests = []
        self.responses = []

    def queue(self, *responses):
        self.responses.extend(responses)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.responses:
            response = self.responses.pop(0)
            if isinstance(response, Exception):
                raise response
            if callable(response):
                return response(request)
            return response
        return httpx.Response(200, json={"code": "OK"})

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self):
        return json.loads(self.last.content)


@pytest.fixture
def service():
    return FakeService()


@pytest.fixture
def clean_env(monkeypatch):
    for var in (
        "GLOBUS_TRANSFER_BASE_URL",
        "GLOBUS_AUTH_BASE_URL",
        "GLOBUS_HTTP_TIMEOUT",
        "GLOBUS_USER_AGENT",
        "LOG_LEVEL",
        "LOG_FORMAT",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def make_client(service, clean_env):
    def _make():
        return TransferClient(
            Config(),
            transfer_base_url=TRANSFER,
            auth_base_url=AUTH,
            transport=httpx.MockTransport(service.handler),
        )
    return _make
