import base64
import shutil
import io
from unittest.mock import Mock, patch

import numpy as np
import pytest

from gemini_live.core.audio_processor import decode_wav
from gemini_live.core.exceptions import (
    ConstructionError,
    InputValidationError,
    RequestTimeoutError,
    SessionStateError,
    TransportError,
)
from gemini_live.core.gemini_client import GeminiLiveClient
from gemini_live.core.session import SessionState

from tests.helpers import audio_frame, pcm_b64, text_frame, tool_call_frame


# Construction


@pytest.mark.parametrize("api_key", [123, b"key"])
def test_non_string_api_key_is_rejected(fake_ws_app, api_key):
    with pytest.raises(ConstructionError):
        GeminiLiveClient(api_key)


def test_empty_api_key_is_rejected(fake_ws_app):
    with pytest.raises(ConstructionError):
        GeminiLiveClient("")


def test_missing_api_key_names_the_environment_variable(fake_ws_app):
    with patch("gemini_live.core.gemini_client.get_api_key", return_value=None):
        with pytest.raises(ConstructionError, match="GEMINI_API_KEY environment variable not set"):
            GeminiLiveClient()


def test_api_key_falls_back_to_environment(fake_ws_app, monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "from-env")

    client = GeminiLiveClient()

    assert client.api_key == "from-env"


def test_invalid_config_is_rejected(fake_ws_app):
    with pytest.raises(ConstructionError):
        GeminiLiveClient("key", {"generationConfig": {"responseType": "VIDEO"}})


def test_auto_connect_can_be_disabled(fake_ws_app):
    client = GeminiLiveClient("key", auto_connect=False)

    assert client.session.ws is None
    client.connect()
    assert client.session.ws is not None


def test_lifecycle_registration_chains_and_last_wins(client):
    first, second = Mock(), Mock()

    assert client.on_open(first).on_open(second).on_handshake(Mock()).on_close(Mock()) is client
    client.session.ws.open()

    first.assert_not_called()
    second.assert_called_once()


# send


def test_send_resolves_with_joined_trimmed_text(ready_client):
    ws = ready_client.session.ws

    future = ready_client.send({"prompt": "Say hello"})
    ws.receive(text_frame("Hello "))
    ws.receive(text_frame("world", turn_complete=True))

    response = future.result(timeout=1)
    assert response.type == "text"
    assert response.role == "gemini"
    assert response.text == "Hello world"
    assert ready_client.session.handler is None


def test_send_serialises_turns_with_default_role(ready_client):
    ready_client.send([{"prompt": "Hi"}, {"prompt": "Hello!", "role": "gemini"}, {"prompt": "How are you?"}])

    assert ready_client.session.ws.sent_json() == [
        {
            "client_content": {
                "turns": [
                    {"parts": [{"text": "Hi"}], "role": "user"},
                    {"parts": [{"text": "Hello!"}], "role": "gemini"},
                    {"parts": [{"text": "How are you?"}], "role": "user"},
                ],
                "turn_complete": True,
            }
        }
    ]


def test_send_builds_audio_response_from_fragments(ready_client):
    ws = ready_client.session.ws

    future = ready_client.send({"prompt": "Speak"})
    ws.receive(audio_frame(pcm_b64([100, -100]), mime_type="audio/pcm"))
    ws.receive(audio_frame(pcm_b64([200]), turn_complete=True))

    response = future.result(timeout=1)
    assert response.type == "audio"
    assert response.audio.mime_type == "audio/wav"
    assert response.audio.data
    samples, sample_rate = decode_wav(base64.b64decode(response.audio.data))
    assert sample_rate == 24000
    assert len(samples) == 3


def test_tool_call_short_circuits_the_turn(ready_client):
    ws = ready_client.session.ws

    future = ready_client.send({"prompt": "Weather in Paris?"})
    ws.receive(text_frame("Let me check"))
    ws.receive(
        tool_call_frame(
            {"name": "get_weather", "args": {"city": "Paris"}, "id": "call-1"},
            {"name": "get_time", "args": {}, "id": "call-2"},
        )
    )

    response = future.result(timeout=1)
    assert response.type == "function"
    assert response.function_call.name == "get_weather"
    assert response.function_call.id == "call-1"
    assert response.text is None

    ws.receive(text_frame("late", turn_complete=True))
    assert future.result() is response
    assert ready_client.session.handler is None


def test_empty_tool_call_frame_is_ignored(ready_client):
    ws = ready_client.session.ws

    future = ready_client.send({"prompt": "Hi"})
    ws.receive(tool_call_frame())

    assert not future.done()
    ws.receive(text_frame("Hi", turn_complete=True))
    assert future.result(timeout=1).type == "text"


def test_send_times_out_and_session_stays_usable(ready_client):
    ws = ready_client.session.ws

    future = ready_client.send({"prompt": "Hello"}, timeout=0.05)
    with pytest.raises(RequestTimeoutError):
        future.result(timeout=2)

    assert ready_client.session.handler is None
    assert ready_client.state == SessionState.READY
    assert not ws.closed

    retry = ready_client.send({"prompt": "Hello again"})
    ws.receive(text_frame("Hi", turn_complete=True))
    assert retry.result(timeout=1).text == "Hi"


def test_late_timeout_does_not_override_result(ready_client):
    future = ready_client.send({"prompt": "Hello"}, timeout=0.05)
    ready_client.session.ws.receive(text_frame("Quick", turn_complete=True))

    assert future.result(timeout=1).text == "Quick"
    assert future.exception(timeout=1) is None


@pytest.mark.parametrize("value", [None, "Hello", {"text": "Hello"}, {"prompt": "x", "role": "system"}])
def test_send_rejects_invalid_input(ready_client, value):
    future = ready_client.send(value)

    with pytest.raises(InputValidationError):
        future.result(timeout=1)
    assert ready_client.session.ws.sent == []
    assert ready_client.session.handler is None


@pytest.mark.parametrize("timeout", [0, -1, "15", True, float("nan"), float("inf")])
def test_send_rejects_invalid_timeout(ready_client, timeout):
    with pytest.raises(InputValidationError):
        ready_client.send({"prompt": "Hello"}, timeout=timeout).result(timeout=1)


def test_send_before_handshake_is_rejected(client):
    client.session.ws.open()
    client.session.ws.sent.clear()

    with pytest.raises(SessionStateError):
        client.send({"prompt": "Hello"}).result(timeout=1)
    assert client.session.ws.sent == []


def test_send_failure_rolls_back(ready_client):
    ready_client.session.ws.fail_sends = True

    future = ready_client.send({"prompt": "Hello"})

    with pytest.raises(TransportError):
        future.result(timeout=1)
    assert ready_client.session.handler is None


def test_close_rejects_pending_send(ready_client):
    future = ready_client.send({"prompt": "Hello"})

    ready_client.session.ws.shut(1011, "Internal error")

    with pytest.raises(TransportError):
        future.result(timeout=1)


# realtime


def test_realtime_reports_each_turn_without_leaking(ready_client):
    ws = ready_client.session.ws
    responses = []

    ready_client.realtime(responses.append)
    ws.receive(text_frame("First "))
    ws.receive(text_frame("turn", turn_complete=True))
    ws.receive(text_frame("Second turn", turn_complete=True))

    assert [r.text for r in responses] == ["First turn", "Second turn"]
    assert ready_client.session.handler is not None


def test_realtime_tool_call_then_text_turn(ready_client):
    ws = ready_client.session.ws
    responses = []

    ready_client.realtime(responses.append)
    ws.receive(tool_call_frame({"name": "lookup", "args": {"q": "x"}}))
    ws.receive(text_frame("Done", turn_complete=True))

    assert [r.type for r in responses] == ["function", "text"]
    assert responses[1].function_call is None


def test_realtime_sends_initial_audio_chunk(ready_client):
    chunk = np.asarray([1, 2, 3], dtype="<i2").tobytes()

    ready_client.realtime(Mock(), chunk)

    assert ready_client.session.ws.sent_json() == [
        {
            "realtime_input": {
                "media_chunks": [
                    {"data": base64.b64encode(chunk).decode(), "mime_type": "audio/pcm"}
                ]
            }
        }
    ]


def test_realtime_callback_errors_are_contained(ready_client):
    ws = ready_client.session.ws
    callback = Mock(side_effect=[RuntimeError("boom"), None])

    ready_client.realtime(callback)
    ws.receive(text_frame("one", turn_complete=True))
    ws.receive(text_frame("two", turn_complete=True))

    assert callback.call_count == 2
    assert callback.call_args[0][0].text == "two"


def test_realtime_requires_ready_session(client):
    with pytest.raises(SessionStateError):
        client.realtime(Mock())


def test_realtime_requires_callable(ready_client):
    with pytest.raises(TypeError):
        ready_client.realtime("not callable")


def test_realtime_requires_bytes_audio(ready_client):
    with pytest.raises(TypeError):
        ready_client.realtime(Mock(), "not bytes")
    assert ready_client.session.handler is None


def test_realtime_send_failure_rolls_back(ready_client):
    ready_client.session.ws.fail_sends = True

    with pytest.raises(TransportError):
        ready_client.realtime(Mock(), b"\x00\x01")
    assert ready_client.session.handler is None


# writable stream


def test_writable_stream_sends_realtime_input(ready_client):
    ws = ready_client.session.ws
    sink = ready_client.get_writable_stream().result(timeout=1)

    shutil.copyfileobj(io.BytesIO(b"\x01\x00\x02\x00"), sink)

    frame = ws.sent_json()[0]["realtime_input"]["media_chunks"][0]
    assert frame == {"data": base64.b64encode(b"\x01\x00\x02\x00").decode(), "mime_type": "audio/pcm"}


def test_writable_stream_accepts_float_samples(ready_client):
    sink = ready_client.get_writable_stream().result(timeout=1)

    sink.write_samples(np.array([0.0, 1.0], dtype=np.float32))

    data = ready_client.session.ws.sent_json()[0]["realtime_input"]["media_chunks"][0]["data"]
    assert np.frombuffer(base64.b64decode(data), dtype="<i2").tolist() == [0, 32767]


def test_writable_stream_drops_audio_after_close(ready_client):
    ws = ready_client.session.ws
    sink = ready_client.get_writable_stream().result(timeout=1)
    ws.shut(1000, "")

    assert sink.write(b"\x00\x00") == 2
    assert ws.sent == []


def test_writable_stream_raises_on_transport_failure(ready_client):
    sink = ready_client.get_writable_stream().result(timeout=1)
    ready_client.session.ws.fail_sends = True

    with pytest.raises(TransportError):
        sink.write(b"\x00\x00")
