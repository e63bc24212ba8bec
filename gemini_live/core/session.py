"""
Live session for the Gemini bidirectional streaming API.
Owns the websocket, performs the setup handshake and routes every inbound
frame to the frame handler of the operation currently using the session.
"""

import logging
import threading
from concurrent.futures import Future
from enum import Enum
from typing import Callable, Optional, Union

import websocket
from pydantic import ValidationError

from gemini_live.core.exceptions import TransportError
from gemini_live.core.operations import FrameHandler
from gemini_live.core.sink import AudioSink
from gemini_live.schemas.config import GeminiConfig
from gemini_live.schemas.event import BaseMessage, InboundMessage, SetupMessage
from gemini_live.schemas.response import ConnectionCloseReason

logger = logging.getLogger(__name__)

BASE_URL = "wss://generativelanguage.googleapis.com"
API_VERSION = "v1alpha"
TRACE_ID_MARKER = "Request trace id:"


class SessionState(str, Enum):
    CONNECTING = "connecting"
    OPEN_UNCONFIGURED = "open_unconfigured"
    HANDSHAKE_PENDING = "handshake_pending"
    READY = "ready"
    CLOSED = "closed"


def parse_close_reason(
    code: Optional[int], message: Union[str, bytes, None]
) -> ConnectionCloseReason:
    """
    Build a close reason from a websocket close frame.

    Messages of the form ``"Request trace id: <id>, <reason>"`` are split into
    the trace id and the remaining reason text.
    """
    if isinstance(message, (bytes, bytearray)):
        message = message.decode("utf-8", errors="replace")
    message = message or ""

    if TRACE_ID_MARKER not in message:
        return ConnectionCloseReason(code=code, reason=message)

    trace_part, _, reason = message.partition(", ")
    trace_id = trace_part.partition(": ")[2].strip() or None
    return ConnectionCloseReason(code=code, reason=reason, trace_id=trace_id)


class LiveSession:  # pylint: disable=R0902
    """
    One websocket connection plus its negotiated configuration.

    Attributes:
        api_key (str): Gemini API key, sent as the ``key`` URL parameter.
        config (GeminiConfig): Configuration sent in the setup frame.
        ws (websocket.WebSocketApp): WebSocket connection.
        ws_thread (Thread): Thread running the WebSocket connection.
        state (SessionState): Current connection state.

    Callbacks:
        on_open_callback (callable): Called once the socket is open, before setup is sent.
        on_handshake_callback (callable): Called when the server acknowledges setup.
        on_close_callback (callable): Called once with a ConnectionCloseReason.
    """

    def __init__(self, api_key: str, config: GeminiConfig):
        self.api_key = api_key
        self.config = config
        self.ws: Optional[websocket.WebSocketApp] = None
        self.ws_thread: Optional[threading.Thread] = None
        self.state = SessionState.CONNECTING

        self.on_open_callback: Optional[Callable[[], None]] = None
        self.on_handshake_callback: Optional[Callable[[], None]] = None
        self.on_close_callback: Optional[Callable[[ConnectionCloseReason], None]] = None

        self._handler: Optional[FrameHandler] = None
        self._handler_lock = threading.Lock()
        self._sink_ready: "Future[AudioSink]" = Future()
        self._close_reported = False

    @property
    def url(self) -> str:
        return (
            f"{BASE_URL}/ws/google.ai.generativelanguage.{API_VERSION}"
            f".GenerativeService.BidiGenerateContent?key={self.api_key}"
        )

    @property
    def is_ready(self) -> bool:
        return self.state == SessionState.READY

    @property
    def handler(self) -> Optional[FrameHandler]:
        with self._handler_lock:
            return self._handler

    def connect(self) -> None:
        """Open the websocket on a background thread."""
        self.ws = websocket.WebSocketApp(
            self.url,
            on_open=self._on_open,
            on_message=self._on_message,
            on_error=self._on_error,
            on_close=self._on_close,
        )

        self.ws_thread = threading.Thread(target=self.ws.run_forever, daemon=True)
        self.ws_thread.start()
        logger.info(f"Connecting to Gemini Live ({self.config.model})")

    def send_message(self, message: BaseMessage) -> None:
        """
        Write one frame to the socket.

        Raises:
            TransportError: If the socket is missing or the write fails.
        """
        if self.ws is None:
            raise TransportError("WebSocket is not connected")
        payload = message.to_json()
        try:
            self.ws.send(payload)
        except (websocket.WebSocketException, OSError) as e:
            raise TransportError(str(e)) from e
        logger.debug(f"{message.__class__.__name__} sent ({len(payload)} bytes)")

    def install(self, handler: FrameHandler) -> None:
        """Make ``handler`` the receiver of inbound frames, replacing any previous one."""
        with self._handler_lock:
            if self._handler is not None and self._handler is not handler:
                logger.warning(
                    f"{self._handler.__class__.__name__} replaced by {handler.__class__.__name__}"
                )
            self._handler = handler

    def release(self, handler: FrameHandler) -> bool:
        """Uninstall ``handler`` if it is still the active one."""
        with self._handler_lock:
            if self._handler is not handler:
                return False
            self._handler = None
            return True

    def writable_stream(self) -> "Future[AudioSink]":
        return self._sink_ready

    def close(self) -> None:
        """Close the WebSocket connection."""
        if self.ws:
            self.ws.close()

    def _on_open(self, ws) -> None:
        self.state = SessionState.OPEN_UNCONFIGURED
        logger.info("Connected to Gemini Live server")
        self._invoke(self.on_open_callback)

        try:
            self.send_message(SetupMessage.from_config(self.config))
        except TransportError as e:
            logger.error(f"Failed to send setup: {e}")
            return
        self.state = SessionState.HANDSHAKE_PENDING

    def _on_message(self, ws, message: Union[str, bytes]) -> None:
        try:
            frame = InboundMessage.model_validate_json(message)
        except ValidationError as e:
            logger.error(f"Error processing message: {e}")
            return

        if frame.setup_complete is not None:
            self._on_handshake()
            return

        if self.state != SessionState.READY:
            logger.warning(f"Dropped frame received in state {self.state.value}")
            return

        handler = self.handler
        if handler is None:
            logger.debug("No active operation, frame dropped")
            return

        if frame.server_content is not None:
            handler.on_server_content(frame.server_content)
        if frame.tool_call is not None:
            handler.on_tool_call(frame.tool_call)

    def _on_handshake(self) -> None:
        self.state = SessionState.READY
        logger.info("Gemini Live handshake complete")
        # The sink must be available to the handshake callback, which runs on this thread.
        if not self._sink_ready.done():
            self._sink_ready.set_result(AudioSink(self))
        self._invoke(self.on_handshake_callback)

    def _on_error(self, ws, error) -> None:
        logger.error(f"WebSocket error: {error}")
        self.state = SessionState.CLOSED

    def _on_close(self, ws, close_status_code, close_msg) -> None:
        self.state = SessionState.CLOSED
        if self._close_reported:
            return
        self._close_reported = True

        reason = parse_close_reason(close_status_code, close_msg)
        logger.info(f"WebSocket connection closed: {reason.code} - {reason.reason}")

        error = TransportError(f"Connection closed: {reason.code} {reason.reason}".strip())
        with self._handler_lock:
            handler, self._handler = self._handler, None
        if handler is not None:
            handler.abort(error)
        if not self._sink_ready.done():
            self._sink_ready.set_exception(error)

        self._invoke(self.on_close_callback, reason)

    def _invoke(self, callback: Optional[Callable], *args) -> None:
        if callback is None:
            return
        try:
            callback(*args)
        except Exception:  # pylint: disable=W0703
            logger.exception(f"{getattr(callback, '__name__', 'callback')} raised")
