"""Pytest fixtures. The model endpoint is replaced by an httpx.MockTransport that records every call."""

import json

import httpx
import pytest

from cannaconnect.services.llm import LLMClient

PNG_DATA_URI = "data:image/png;base64,AAAA"


class FakeModel:
    """
    Stand-in for the chat completions endpoint.

    reply: text returned as the first choice's content.
    body: raw JSON body to return instead (overrides reply).
    error: exception raised by the transport instead of answering.
    """

    def __init__(self, reply=None, status_code=200, body=None, error=None):
        self.reply = reply
        self.status_code = status_code
        self.body = body
        self.error = error
        self.requests: list[dict] = []
        self.headers: list[httpx.Headers] = []

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(json.loads(request.content))
        self.headers.append(request.headers)
        if self.error is not None:
            raise self.error
        if self.body is not None:
            return httpx.Response(self.status_code, json=self.body)
        return httpx.Response(
            self.status_code,
            json={"choices": [{"message": {"role": "assistant", "content": self.reply}}]},
        )

    @property
    def calls(self) -> int:
        return len(self.requests)

    def client(self) -> LLMClient:
        return LLMClient(
            api_key="test-key",
            base_url="https://llm.test/v1",
            timeout=5.0,
            transport=httpx.MockTransport(self._handle),
        )


@pytest.fixture
def fake_model():
    """Factory: fake_model(reply=..., status_code=..., body=..., error=...)."""

    def _make(**kwargs) -> FakeModel:
        return FakeModel(**kwargs)

    return _make
