"""
Client for the Gemini Live bidirectional streaming API.
"""

from gemini_live.core import (
    AudioSink,
    GeminiLiveClient,
    LiveSession,
    SessionState,
    pcm_to_wav,
    validate_prompt_input,
)
from gemini_live.core.exceptions import (
    ConstructionError,
    GeminiLiveError,
    InputValidationError,
    ProtocolError,
    RequestTimeoutError,
    SessionStateError,
    TransportError,
)
from gemini_live.schemas.config import (
    DynamicRetrievalMode,
    FunctionDeclaration,
    GeminiConfig,
    GenerationConfig,
    GoogleSearchRetrieval,
    HarmBlockThreshold,
    HarmCategory,
    ParameterSchema,
    ParameterType,
    ResponseModality,
    SafetySetting,
    ToolsConfig,
    VoiceOptions,
)
from gemini_live.schemas.response import (
    CompletedResponse,
    ConnectionCloseReason,
    ExecutableCode,
    FunctionCall,
    Prompt,
)

__all__ = [
    "AudioSink",
    "CompletedResponse",
    "ConnectionCloseReason",
    "ConstructionError",
    "DynamicRetrievalMode",
    "ExecutableCode",
    "FunctionCall",
    "FunctionDeclaration",
    "GeminiConfig",
    "GeminiLiveClient",
    "GeminiLiveError",
    "GenerationConfig",
    "GoogleSearchRetrieval",
    "HarmBlockThreshold",
    "HarmCategory",
    "InputValidationError",
    "LiveSession",
    "ParameterSchema",
    "ParameterType",
    "Prompt",
    "ProtocolError",
    "RequestTimeoutError",
    "ResponseModality",
    "SafetySetting",
    "SessionState",
    "SessionStateError",
    "ToolsConfig",
    "TransportError",
    "VoiceOptions",
    "pcm_to_wav",
    "validate_prompt_input",
]
