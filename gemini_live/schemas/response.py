# pylint: disable=C0115

import base64
import logging
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)

Role = Literal["user", "gemini"]
ROLES = ("user", "gemini")


class Prompt(BaseModel):
    prompt: str
    role: Role = "user"


class FunctionCall(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    name: str
    args: Dict[str, Any] = Field(default_factory=dict)
    id: Optional[str] = None


class ExecutableCode(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    language: str = ""
    code: str = ""


class AudioPayload(BaseModel):
    model_config = ConfigDict(frozen=True)

    mime_type: str = "audio/wav"
    data: str


class CompletedResponse(BaseModel):
    """
    A finished model turn.

    Attributes:
        type (str): "text", "audio" or "function".
        role (str): Always "gemini".
        text (str, optional): Joined and trimmed text fragments of the turn.
        audio (AudioPayload, optional): Base64 encoded WAV container of the turn audio.
        function_call (FunctionCall, optional): First function call requested by the model.
        executable_code (ExecutableCode, optional): Last executable code part of the turn.
    """

    model_config = ConfigDict(frozen=True)

    type: Literal["text", "audio", "function"]
    role: Literal["gemini"] = "gemini"
    text: Optional[str] = None
    audio: Optional[AudioPayload] = None
    function_call: Optional[FunctionCall] = None
    executable_code: Optional[ExecutableCode] = None

    def audio_bytes(self) -> bytes:
        """Return the decoded WAV container, or empty bytes for non-audio responses."""
        if self.audio is None:
            return b""
        return base64.b64decode(self.audio.data)

    def save_audio(self, filename: str = "output.wav") -> None:
        """
        Save the response audio to a WAV file.

        Args:
            filename (str): The name of the WAV file to save to.
        """
        if self.audio is None:
            logger.warning("No audio in response to save")
            return

        with open(filename, "wb") as wf:
            wf.write(self.audio_bytes())
        logger.info(f"Saved audio to {filename}")


class ConnectionCloseReason(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: Optional[int] = None
    reason: str = ""
    trace_id: Optional[str] = None
