"""
Frame handlers installed on a live session by ``send`` and ``realtime``.

A session holds at most one handler. Both handlers feed the same
``ResponseAccumulator``; they differ only in what happens when a turn
completes: a ``ResponseRequest`` settles its future and uninstalls itself,
a ``RealtimeStream`` calls back and resets its accumulator for the next turn.
"""

import logging
import threading
from abc import ABC, abstractmethod
from concurrent.futures import Future
from typing import TYPE_CHECKING, Callable, Optional

from gemini_live.core.accumulator import ResponseAccumulator
from gemini_live.core.exceptions import (
    ProtocolError,
    RequestTimeoutError,
    TransportError,
)
from gemini_live.schemas.event import BaseMessage, ServerContent, ToolCall
from gemini_live.schemas.response import CompletedResponse

if TYPE_CHECKING:
    from gemini_live.core.session import LiveSession

logger = logging.getLogger(__name__)


class FrameHandler(ABC):
    """Receives the server frames of the operation currently owning the session."""

    def __init__(self) -> None:
        self.accumulator = ResponseAccumulator()

    @abstractmethod
    def on_server_content(self, content: ServerContent) -> None:
        """Handle a content frame."""

    @abstractmethod
    def on_tool_call(self, tool_call: ToolCall) -> None:
        """Handle a tool-call frame."""

    @abstractmethod
    def abort(self, error: Exception) -> None:
        """Stop the operation because the session can no longer serve it."""


class ResponseRequest(FrameHandler):
    """
    One-shot request: resolves a future with the first completed turn.

    Exactly one of result, error or timeout settles the future.
    """

    def __init__(self, session: "LiveSession", timeout: float):
        super().__init__()
        self.session = session
        self.timeout = timeout
        self.future: "Future[CompletedResponse]" = Future()
        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None

    def start(self, message: BaseMessage) -> "Future[CompletedResponse]":
        """Install the handler, send ``message`` and arm the timeout."""
        self.session.install(self)
        self._timer = threading.Timer(self.timeout, self._on_timeout)
        self._timer.daemon = True
        self._timer.start()

        try:
            self.session.send_message(message)
        except TransportError as e:
            self._settle(error=TransportError(f"[GeminiLive::send] Failed to send message: {e}"))
        return self.future

    def on_server_content(self, content: ServerContent) -> None:
        if self.future.done():
            return
        self.accumulator.add_content(content)
        if content.turn_complete:
            self._finish()

    def on_tool_call(self, tool_call: ToolCall) -> None:
        if self.future.done() or not tool_call.function_calls:
            return
        self.accumulator.set_function_call(tool_call.function_calls[0])
        self._finish()

    def abort(self, error: Exception) -> None:
        self._settle(error=error)

    def _finish(self) -> None:
        try:
            response = self.accumulator.build_response()
        except ValueError as e:
            self._settle(error=ProtocolError(f"Failed to build response: {e}"))
            return
        self._settle(result=response)

    def _on_timeout(self) -> None:
        if self._settle(
            error=RequestTimeoutError(
                f"[GeminiLive::send] Request timed out after {self.timeout}s"
            )
        ):
            logger.warning(f"Request timed out after {self.timeout}s")

    def _settle(
        self,
        result: Optional[CompletedResponse] = None,
        error: Optional[Exception] = None,
    ) -> bool:
        with self._lock:
            if self.future.done():
                return False
            self.session.release(self)
            if self._timer is not None:
                self._timer.cancel()
            if error is not None:
                self.future.set_exception(error)
            else:
                self.future.set_result(result)
        return True


class RealtimeStream(FrameHandler):
    """Continuous stream: reports every completed turn and keeps listening."""

    def __init__(self, on_response: Callable[[CompletedResponse], None]):
        super().__init__()
        self.on_response = on_response

    def on_server_content(self, content: ServerContent) -> None:
        self.accumulator.add_content(content)
        if content.turn_complete:
            self._emit()

    def on_tool_call(self, tool_call: ToolCall) -> None:
        if not tool_call.function_calls:
            return
        self.accumulator.set_function_call(tool_call.function_calls[0])
        self._emit()

    def abort(self, error: Exception) -> None:
        logger.info(f"Realtime stream stopped: {error}")
        self.accumulator.reset()

    def _emit(self) -> None:
        try:
            response = self.accumulator.build_response()
        except ValueError as e:
            logger.error(f"Dropping malformed realtime turn: {e}")
            return
        finally:
            self.accumulator.reset()

        try:
            self.on_response(response)
        except Exception:  # pylint: disable=W0703
            logger.exception("Realtime response callback failed")
