# pylint: disable=C0115

import base64
from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel, Field

from gemini_live.schemas.config import CamelModel, GeminiConfig, SafetySetting, ToolsConfig
from gemini_live.schemas.response import ExecutableCode, FunctionCall, Prompt

PCM_MIME_TYPE = "audio/pcm"


class BaseMessage(BaseModel):
    """Outbound frame, serialised as one JSON text message."""

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True)


# Setup


class PrebuiltVoiceConfig(CamelModel):
    voice_name: str


class VoiceConfig(CamelModel):
    prebuilt_voice_config: PrebuiltVoiceConfig


class SpeechConfig(CamelModel):
    voice_config: VoiceConfig


class SetupGenerationConfig(CamelModel):
    candidate_count: int
    max_output_tokens: int
    temperature: float
    top_p: float
    top_k: int
    response_modalities: List[str]
    speech_config: SpeechConfig


class TextPart(BaseModel):
    text: str


class SystemInstruction(CamelModel):
    parts: List[TextPart]


class Setup(CamelModel):
    model: str
    generation_config: SetupGenerationConfig
    system_instruction: SystemInstruction
    tools: List[ToolsConfig] = Field(default_factory=list)
    safety_settings: List[SafetySetting] = Field(default_factory=list)


class SetupMessage(BaseMessage):
    setup: Setup

    @classmethod
    def from_config(cls, config: GeminiConfig) -> "SetupMessage":
        generation = config.generation_config
        return cls(
            setup=Setup(
                model=config.model,
                generation_config=SetupGenerationConfig(
                    candidate_count=generation.candidate_count,
                    max_output_tokens=generation.max_output_tokens,
                    temperature=generation.temperature,
                    top_p=generation.top_p,
                    top_k=generation.top_k,
                    response_modalities=[generation.response_type.value],
                    speech_config=SpeechConfig(
                        voice_config=VoiceConfig(
                            prebuilt_voice_config=PrebuiltVoiceConfig(
                                voice_name=generation.voice_name.value
                            )
                        )
                    ),
                ),
                system_instruction=SystemInstruction(
                    parts=[TextPart(text=config.system_instruction)]
                ),
                tools=config.tools,
                safety_settings=config.safety_settings,
            )
        )


# Client content


class Turn(BaseModel):
    parts: List[TextPart]
    role: str = "user"


class ClientContent(BaseModel):
    turns: List[Turn]
    turn_complete: bool = True


class ClientContentMessage(BaseMessage):
    client_content: ClientContent

    @classmethod
    def from_prompts(cls, prompts: Sequence[Prompt]) -> "ClientContentMessage":
        turns = [Turn(parts=[TextPart(text=p.prompt)], role=p.role) for p in prompts]
        return cls(client_content=ClientContent(turns=turns))


# Realtime input


class MediaChunk(BaseModel):
    data: str
    mime_type: str = PCM_MIME_TYPE


class RealtimeInput(BaseModel):
    media_chunks: List[MediaChunk]


class RealtimeInputMessage(BaseMessage):
    realtime_input: RealtimeInput

    @classmethod
    def from_pcm(cls, chunk: bytes) -> "RealtimeInputMessage":
        data = base64.b64encode(bytes(chunk)).decode("ascii")
        return cls(realtime_input=RealtimeInput(media_chunks=[MediaChunk(data=data)]))


# Inbound


class InlineData(CamelModel):
    mime_type: Optional[str] = None
    data: str = ""


class Part(CamelModel):
    text: Optional[str] = None
    inline_data: Optional[InlineData] = None
    executable_code: Optional[ExecutableCode] = None


class ModelTurn(CamelModel):
    parts: List[Part] = Field(default_factory=list)


class ServerContent(CamelModel):
    model_turn: Optional[ModelTurn] = None
    turn_complete: bool = False


class ToolCall(CamelModel):
    function_calls: List[FunctionCall] = Field(default_factory=list)


class InboundMessage(CamelModel):
    """One parsed server frame. Unknown keys are ignored."""

    setup_complete: Optional[Dict[str, Any]] = None
    server_content: Optional[ServerContent] = None
    tool_call: Optional[ToolCall] = None
