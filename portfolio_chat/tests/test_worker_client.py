import asyncio
import json

import httpx
import pytest

from portfolio_chat.domain.exceptions import ApiError, NetworkError
from portfolio_chat.domain.models import ChatConfig
from portfolio_chat.providers.worker_client import HttpWorkerClient


CONFIG = ChatConfig(worker_url="https://worker.example/chat", system_prompt="sys", http_timeout=5.0)
MESSAGES = [{"role": "system", "content": "sys"}, {"role": "user", "content": "hi"}]


def _patch_client(monkeypatch, resp=None, error=None):
    captured = {}

    class Client:
        def __init__(self, *a, **kw):
            captured["client_kwargs"] = kw

        async def __aenter__(self):
            return self

        async def __aexit__(self, *a):
            return False

        async def post(self, url, **kw):
            captured["url"] = url
            captured.update(kw)
            if error is not None:
                raise error
            return resp

    monkeypatch.setattr("httpx.AsyncClient", Client)
    return captured


class Resp:
    def __init__(self, status_code=200, body=None, text=""):
        self.status_code = status_code
        self._body = body
        self.text = text

    def json(self):
        if self._body is None:
            raise json.JSONDecodeError("Expecting value", self.text, 0)
        return self._body


def test_send_posts_messages_and_returns_reply(monkeypatch):
    captured = _patch_client(monkeypatch, resp=Resp(body={"reply": "Hi there"}))
    reply = asyncio.run(HttpWorkerClient(CONFIG).send(MESSAGES))
    assert reply == "Hi there"
    assert captured["url"] == "https://worker.example/chat"
    assert captured["json"] == {"messages": MESSAGES}
    assert captured["headers"]["Content-Type"] == "application/json"
    assert captured["client_kwargs"]["timeout"] == 5.0


def test_send_non_2xx_raises_api_error(monkeypatch):
    _patch_client(monkeypatch, resp=Resp(status_code=500, text="upstream exploded"))
    with pytest.raises(ApiError) as exc:
        asyncio.run(HttpWorkerClient(CONFIG).send(MESSAGES))
    assert exc.value.http_status == 500
    assert exc.value.message == "upstream exploded"


def test_send_transport_failure_raises_network_error(monkeypatch):
    _patch_client(monkeypatch, error=httpx.ConnectError("connection refused"))
    with pytest.raises(NetworkError) as exc:
        asyncio.run(HttpWorkerClient(CONFIG).send(MESSAGES))
    assert exc.value.code == "NETWORK_ERROR"
    assert "connection refused" in exc.value.message


def test_send_non_json_body_returns_none(monkeypatch):
    _patch_client(monkeypatch, resp=Resp(body=None, text="<html>oops</html>"))
    assert asyncio.run(HttpWorkerClient(CONFIG).send(MESSAGES)) is None


@pytest.mark.parametrize(
    "body",
    [{}, {"reply": ""}, {"reply": 42}, ["reply"], {"message": "hi"}],
)
def test_parse_reply_rejects_unusable_shapes(body):
    assert HttpWorkerClient.parse_reply(body) is None
