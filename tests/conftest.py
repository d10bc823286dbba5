import json
import threading
from functools import partial

import httpx
import pytest
import requests

from podcast_gateway.api.server import create_app
from podcast_gateway.config.settings import Settings
from podcast_gateway.infra import openai_client

SHEETS_URL = "https://script.google.com/macros/s/fake/exec"
MAILCHIMP_URL = "https://us21.api.mailchimp.com/3.0/lists/list123/members"


def make_response(status=200, body=None, text=None):
    """A real requests.Response carrying a canned body."""
    r = requests.Response()
    r.status_code = status
    r.encoding = "utf-8"
    if text is None:
        text = json.dumps(body) if body is not None else ""
    r._content = text.encode("utf-8")
    return r


@pytest.fixture
def settings():
    return Settings(
        openai_api_key="sk-test-fake-key",
        sheets_webhook_url=SHEETS_URL,
        mailchimp_api_key="fakekey-us21",
        mailchimp_list_id="list123",
    )


@pytest.fixture
def app(settings):
    app = create_app(settings)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


class FakeSinks:
    """Routes requests.post calls by URL and records every call."""

    def __init__(self):
        self.responses = {
            SHEETS_URL: make_response(200, {"success": True}),
            MAILCHIMP_URL: make_response(200, {"id": "abc"}),
        }
        self.calls = []
        self._lock = threading.Lock()

    def __call__(self, url, **kwargs):
        with self._lock:
            self.calls.append((url, kwargs))
        outcome = self.responses[url]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def calls_to(self, url):
        return [kwargs for called, kwargs in self.calls if called == url]


@pytest.fixture
def sinks(monkeypatch):
    fake = FakeSinks()
    monkeypatch.setattr(requests, "post", fake)
    return fake


class FakeUpstream:
    """Stands in for the chat-completion API behind the openai client."""

    def __init__(self):
        self.status = 200
        self.body = {
            "id": "chatcmpl-1",
            "object": "chat.completion",
            "choices": [{"index": 0, "message": {"role": "assistant", "content": "{}"}, "finish_reason": "stop"}],
        }
        self.content = None
        self.requests = []

    def handler(self, request):
        self.requests.append(request)
        if self.content is not None:
            return httpx.Response(self.status, content=self.content)
        return httpx.Response(self.status, json=self.body)


@pytest.fixture
def upstream(monkeypatch):
    fake = FakeUpstream()
    http_client = httpx.Client(transport=httpx.MockTransport(lambda request: fake.handler(request)))
    monkeypatch.setattr(openai_client, "get_client", partial(openai_client.get_client, http_client=http_client))
    yield fake
    http_client.close()
