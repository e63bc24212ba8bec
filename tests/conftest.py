import json
from typing import Any, Dict, List
from unittest.mock import patch

import pytest

from gemini_live.core.gemini_client import GeminiLiveClient


class FakeWebSocketApp:
    """Stand-in for websocket.WebSocketApp that records sent frames."""

    def __init__(self, url, on_open=None, on_message=None, on_error=None, on_close=None, **kwargs):
        self.url = url
        self.on_open = on_open
        self.on_message = on_message
        self.on_error = on_error
        self.on_close = on_close
        self.sent: List[str] = []
        self.closed = False
        self.fail_sends = False

    def run_forever(self, *args, **kwargs):
        return False

    def send(self, data):
        if self.fail_sends:
            raise BrokenPipeError("socket is gone")
        self.sent.append(data)

    def close(self, **kwargs):
        self.closed = True

    # Helpers driving the callbacks the way the transport thread would.

    def open(self):
        self.on_open(self)

    def receive(self, payload: Dict[str, Any]):
        self.on_message(self, json.dumps(payload))

    def receive_raw(self, data):
        self.on_message(self, data)

    def handshake(self):
        self.receive({"setupComplete": {}})

    def shut(self, code=1000, message=""):
        self.on_close(self, code, message)

    def sent_json(self) -> List[Dict[str, Any]]:
        return [json.loads(frame) for frame in self.sent]


@pytest.fixture
def fake_ws_app():
    with patch("gemini_live.core.session.websocket.WebSocketApp", FakeWebSocketApp):
        yield FakeWebSocketApp


@pytest.fixture
def client(fake_ws_app):
    """A connected client whose socket has not opened yet."""
    return GeminiLiveClient("test-api-key")


@pytest.fixture
def ready_client(client):
    """A client that completed the setup handshake."""
    client.session.ws.open()
    client.session.ws.handshake()
    client.session.ws.sent.clear()
    return client
