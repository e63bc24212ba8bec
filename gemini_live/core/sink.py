"""
Writable sink streaming raw microphone audio to a live session.
"""

import io
import logging
from typing import TYPE_CHECKING

import numpy as np

from gemini_live.core.audio_processor import float32_to_pcm16
from gemini_live.schemas.event import RealtimeInputMessage

if TYPE_CHECKING:
    from gemini_live.core.session import LiveSession

logger = logging.getLogger(__name__)


class AudioSink(io.RawIOBase):
    """
    File-like sink for 16-bit little-endian mono PCM.

    Every ``write`` is sent as one realtime input frame. Chunks written after
    the session left the ready state are dropped.
    """

    def __init__(self, session: "LiveSession"):
        super().__init__()
        self._session = session

    def writable(self) -> bool:
        return True

    def write(self, chunk) -> int:
        if self.closed:
            raise ValueError("I/O operation on closed audio sink")
        data = bytes(chunk)
        if not data:
            return 0
        if not self._session.is_ready:
            logger.debug(f"Session not ready, dropped {len(data)} audio bytes")
            return len(data)

        self._session.send_message(RealtimeInputMessage.from_pcm(data))
        logger.debug(f"Sent audio chunk of {len(data)} bytes")
        return len(data)

    def write_samples(self, samples: np.ndarray) -> int:
        """Write float32 samples in [-1, 1] as 16-bit PCM."""
        return self.write(float32_to_pcm16(samples))
