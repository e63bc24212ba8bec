"""
Per-turn accumulation of server content fragments.
"""

import base64
import logging
from typing import List, Optional

from gemini_live.core.audio_processor import pcm_to_wav
from gemini_live.schemas.event import ServerContent
from gemini_live.schemas.response import (
    AudioPayload,
    CompletedResponse,
    ExecutableCode,
    FunctionCall,
)

logger = logging.getLogger(__name__)

# Server audio is always 24 kHz / 16-bit PCM.
OUTPUT_SAMPLE_RATE = 24000
OUTPUT_BIT_DEPTH = 16


def decode_fragment(encoded_data: str) -> bytes:
    """Decode one base64 audio fragment, tolerating missing padding."""
    padding = (4 - len(encoded_data) % 4) % 4
    return base64.b64decode(encoded_data + "=" * padding)


class ResponseAccumulator:
    """
    Collects the fragments of one model turn.

    Attributes:
        text (List[str]): Text fragments in arrival order.
        audio_mime_type (str): Mime type of the first inline data fragment.
        audio_data (List[str]): Base64 audio fragments in arrival order.
        function_call (FunctionCall, optional): Function call requested by the model.
        executable_code (ExecutableCode, optional): Latest executable code part.
    """

    def __init__(self) -> None:
        self.text: List[str] = []
        self.audio_mime_type = ""
        self.audio_data: List[str] = []
        self.function_call: Optional[FunctionCall] = None
        self.executable_code: Optional[ExecutableCode] = None

    def reset(self) -> None:
        """Clear every fragment so the accumulator can collect the next turn."""
        self.text = []
        self.audio_mime_type = ""
        self.audio_data = []
        self.function_call = None
        self.executable_code = None

    def add_content(self, content: ServerContent) -> None:
        if content.model_turn is None:
            return

        for part in content.model_turn.parts:
            if part.text:
                self.text.append(part.text)
            elif part.inline_data is not None:
                if not self.audio_mime_type and part.inline_data.mime_type:
                    self.audio_mime_type = part.inline_data.mime_type
                self.audio_data.append(part.inline_data.data)
            elif part.executable_code is not None:
                self.executable_code = part.executable_code

    def set_function_call(self, function_call: FunctionCall) -> None:
        self.function_call = function_call

    def build_response(self) -> CompletedResponse:
        """
        Derive the completed response for the accumulated turn.

        Function calls and executable code take precedence over audio, and
        audio over text. Audio is only re-encoded here, as a WAV container.

        Raises:
            ValueError: If the accumulated audio is not valid 16-bit PCM.
        """
        if self.function_call is not None or self.executable_code is not None:
            return CompletedResponse(
                type="function",
                function_call=self.function_call,
                executable_code=self.executable_code,
            )

        text = "".join(self.text).strip() if self.text else None

        if self.audio_data:
            pcm = b"".join(decode_fragment(fragment) for fragment in self.audio_data)
            wav = pcm_to_wav(pcm, OUTPUT_SAMPLE_RATE, OUTPUT_BIT_DEPTH)
            logger.debug(
                f"Built audio response from {len(self.audio_data)} fragments "
                f"({self.audio_mime_type or 'unknown mime type'})"
            )
            return CompletedResponse(
                type="audio",
                text=text,
                audio=AudioPayload(data=base64.b64encode(wav).decode("ascii")),
            )

        return CompletedResponse(type="text", text=text)
