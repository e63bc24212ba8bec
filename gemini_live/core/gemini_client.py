"""
Gemini Live client.
Exposes one-shot requests, realtime streaming and a writable audio sink on top
of a single live session.
"""

import logging
import math
from concurrent.futures import Future
from typing import Any, Callable, Dict, List, Optional, Union

from pydantic import ValidationError

from gemini_live.core.exceptions import (
    ConstructionError,
    InputValidationError,
    SessionStateError,
    TransportError,
)
from gemini_live.core.operations import RealtimeStream, ResponseRequest
from gemini_live.core.session import LiveSession, SessionState
from gemini_live.core.sink import AudioSink
from gemini_live.core.validate import to_prompts, validate_prompt_input
from gemini_live.schemas.config import GeminiConfig
from gemini_live.schemas.event import ClientContentMessage, RealtimeInputMessage
from gemini_live.schemas.response import CompletedResponse, ConnectionCloseReason, Prompt
from gemini_live.utils.settings import get_api_key

logger = logging.getLogger(__name__)

PromptInput = Union[Prompt, Dict[str, Any], List[Union[Prompt, Dict[str, Any]]]]

NOT_READY_MESSAGE = (
    "WebSocket connection is not ready. Please verify your API key and generation "
    "config are valid, then reinitialize the client."
)


class GeminiLiveClient:
    """
    Client for the Gemini Live bidirectional streaming API.

    Attributes:
        api_key (str): Gemini API key.
        config (GeminiConfig): Session configuration sent during the handshake.
        session (LiveSession): The live socket and its frame routing.

    Usage:
        client = GeminiLiveClient(api_key)
        client.on_handshake(lambda: client.send({"prompt": "Hello"}).add_done_callback(...))
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        config: Union[GeminiConfig, Dict[str, Any], None] = None,
        auto_connect: bool = True,
    ):
        """
        Initialize the client and, unless ``auto_connect`` is False, open the socket.

        Args:
            api_key (str, optional): Gemini API key. If not provided, GEMINI_API_KEY is used.
            config (GeminiConfig|dict, optional): Session configuration.
            auto_connect (bool): Connect immediately. Default is True.

        Raises:
            ConstructionError: If the API key is missing, not a string or the config is invalid.
        """
        if api_key is None:
            api_key = get_api_key()
            if api_key is None:
                raise ConstructionError(
                    "[GeminiLive] API key not provided and GEMINI_API_KEY environment variable not set."
                )
        if not isinstance(api_key, str):
            raise ConstructionError(
                f"[GeminiLive] Expected api_key to be a string, but received {type(api_key).__name__}."
            )
        if not api_key:
            raise ConstructionError("[GeminiLive] Api key must be provided.")

        try:
            self.config = (
                config
                if isinstance(config, GeminiConfig)
                else GeminiConfig.model_validate(config or {})
            )
        except ValidationError as e:
            raise ConstructionError(f"[GeminiLive] Invalid config: {e}") from e

        self.api_key = api_key
        self.session = LiveSession(api_key, self.config)
        if auto_connect:
            self.connect()

    @property
    def state(self) -> SessionState:
        return self.session.state

    def connect(self) -> None:
        """Connect to the Gemini Live WebSocket API."""
        self.session.connect()

    def close(self) -> None:
        """Close the WebSocket connection."""
        self.session.close()

    def get_writable_stream(self) -> "Future[AudioSink]":
        """
        Return the future of the audio sink.

        The future resolves once the handshake completes; wait on it before
        streaming microphone audio.
        """
        return self.session.writable_stream()

    def send(self, input: PromptInput, timeout: float = 15.0) -> "Future[CompletedResponse]":  # pylint: disable=W0622
        """
        Send one or more prompts and wait for the next completed turn.

        Args:
            input (Prompt|dict|list): A prompt, or an ordered list of prompts.
            timeout (float): Seconds to wait for the turn to complete. Default is 15.

        Returns:
            Future[CompletedResponse]: Resolves with the response, or fails with
            InputValidationError, SessionStateError, RequestTimeoutError or TransportError.
        """
        validation = validate_prompt_input(input)
        if not validation.valid:
            return self._failed(InputValidationError(f"[GeminiLive::send] {validation.error}"))

        if (
            isinstance(timeout, bool)
            or not isinstance(timeout, (int, float))
            or not math.isfinite(timeout)
            or timeout <= 0
        ):
            return self._failed(
                InputValidationError(
                    f"[GeminiLive::send] Invalid timeout value: {timeout!r}. "
                    "Timeout must be a positive number of seconds."
                )
            )

        if not self.session.is_ready:
            return self._failed(SessionStateError(f"[GeminiLive::send] {NOT_READY_MESSAGE}"))

        message = ClientContentMessage.from_prompts(to_prompts(input))
        return ResponseRequest(self.session, timeout).start(message)

    def realtime(
        self,
        on_response: Callable[[CompletedResponse], None],
        audio_chunk: Optional[bytes] = None,
    ) -> None:
        """
        Stream responses: ``on_response`` is called for every completed turn.

        Args:
            on_response (callable): Receives each CompletedResponse.
            audio_chunk (bytes, optional): 16-bit PCM sent immediately as realtime input.

        Raises:
            SessionStateError: If the session is not ready.
            TypeError: If on_response is not callable or audio_chunk is not bytes-like.
            TransportError: If the audio chunk cannot be sent.
        """
        if not self.session.is_ready:
            raise SessionStateError(f"[GeminiLive::realtime] {NOT_READY_MESSAGE}")

        if not callable(on_response):
            raise TypeError(
                "[GeminiLive::realtime] Expected on_response to be callable, "
                f"but received {type(on_response).__name__}."
            )

        if audio_chunk is not None and not isinstance(audio_chunk, (bytes, bytearray, memoryview)):
            raise TypeError(
                "[GeminiLive::realtime] Expected audio_chunk to be bytes, "
                f"but received {type(audio_chunk).__name__}."
            )

        stream = RealtimeStream(on_response)
        self.session.install(stream)

        if not audio_chunk:
            return
        try:
            self.session.send_message(RealtimeInputMessage.from_pcm(audio_chunk))
        except TransportError as e:
            self.session.release(stream)
            stream.accumulator.reset()
            raise TransportError(f"[GeminiLive::realtime] Failed to send message: {e}") from e

    def on_open(self, callback: Callable[[], None]) -> "GeminiLiveClient":
        """Set the callback run when the socket opens. Returns the client for chaining."""
        self.session.on_open_callback = callback
        return self

    def on_handshake(self, callback: Callable[[], None]) -> "GeminiLiveClient":
        """Set the callback run when the setup handshake completes."""
        self.session.on_handshake_callback = callback
        return self

    def on_close(self, callback: Callable[[ConnectionCloseReason], None]) -> "GeminiLiveClient":
        """Set the callback run once when the connection closes."""
        self.session.on_close_callback = callback
        return self

    @staticmethod
    def _failed(error: Exception) -> "Future[CompletedResponse]":
        future: "Future[CompletedResponse]" = Future()
        future.set_exception(error)
        return future
