# pylint: disable=C0115

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DEFAULT_MODEL = "models/gemini-2.0-flash-exp"


class CamelModel(BaseModel):
    """Base model serialised with the camelCase keys the API expects."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ResponseModality(str, Enum):
    TEXT = "TEXT"
    AUDIO = "AUDIO"


class VoiceOptions(str, Enum):
    AOEDE = "Aoede"
    CHARON = "Charon"
    FENRIR = "Fenrir"
    KORE = "Kore"
    PUCK = "Puck"


class ParameterType(str, Enum):
    UNSPECIFIED = "TYPE_UNSPECIFIED"
    STRING = "STRING"
    NUMBER = "NUMBER"
    INTEGER = "INTEGER"
    BOOLEAN = "BOOLEAN"
    ARRAY = "ARRAY"
    OBJECT = "OBJECT"


class DynamicRetrievalMode(str, Enum):
    UNSPECIFIED = "MODE_UNSPECIFIED"
    DYNAMIC = "MODE_DYNAMIC"


class HarmCategory(str, Enum):
    UNSPECIFIED = "HARM_CATEGORY_UNSPECIFIED"
    DEROGATORY = "HARM_CATEGORY_DEROGATORY"
    TOXICITY = "HARM_CATEGORY_TOXICITY"
    VIOLENCE = "HARM_CATEGORY_VIOLENCE"
    SEXUAL = "HARM_CATEGORY_SEXUAL"
    MEDICAL = "HARM_CATEGORY_MEDICAL"
    DANGEROUS = "HARM_CATEGORY_DANGEROUS"
    HARASSMENT = "HARM_CATEGORY_HARASSMENT"
    HATE_SPEECH = "HARM_CATEGORY_HATE_SPEECH"
    SEXUALLY_EXPLICIT = "HARM_CATEGORY_SEXUALLY_EXPLICIT"
    DANGEROUS_CONTENT = "HARM_CATEGORY_DANGEROUS_CONTENT"
    CIVIC_INTEGRITY = "HARM_CATEGORY_CIVIC_INTEGRITY"


class HarmBlockThreshold(str, Enum):
    UNSPECIFIED = "HARM_BLOCK_THRESHOLD_UNSPECIFIED"
    LOW_AND_ABOVE = "BLOCK_LOW_AND_ABOVE"
    MEDIUM_AND_ABOVE = "BLOCK_MEDIUM_AND_ABOVE"
    ONLY_HIGH = "BLOCK_ONLY_HIGH"
    NONE = "BLOCK_NONE"
    OFF = "OFF"


class ParameterSchema(CamelModel):
    type: ParameterType
    format: Optional[str] = None
    description: Optional[str] = None
    nullable: Optional[bool] = None
    enum: Optional[List[str]] = None
    max_items: Optional[int] = None
    min_items: Optional[int] = None
    properties: Optional[Dict[str, "ParameterSchema"]] = None
    required: Optional[List[str]] = None
    items: Optional["ParameterSchema"] = None


class FunctionDeclaration(CamelModel):
    name: str
    description: str
    parameters: Optional[ParameterSchema] = None


class DynamicRetrievalConfig(CamelModel):
    mode: DynamicRetrievalMode = DynamicRetrievalMode.DYNAMIC
    dynamic_threshold: float = 0.7


class GoogleSearchRetrieval(CamelModel):
    dynamic_retrieval_config: DynamicRetrievalConfig = Field(
        default_factory=DynamicRetrievalConfig
    )


class ToolsConfig(CamelModel):
    function_declarations: Optional[List[FunctionDeclaration]] = None
    google_search_retrieval: Optional[GoogleSearchRetrieval] = None


class SafetySetting(CamelModel):
    category: HarmCategory
    threshold: HarmBlockThreshold


class GenerationConfig(CamelModel):
    """
    Generation parameters sent with the session setup.

    Attributes:
        candidate_count (int): Number of candidates to generate per turn.
        max_output_tokens (int): Upper bound on tokens generated per turn.
        temperature (float): Sampling temperature.
        top_p (float): Nucleus sampling probability mass.
        top_k (int): Number of highest probability tokens considered.
        response_type (ResponseModality): Whether the model answers with text or audio.
        voice_name (VoiceOptions): Prebuilt voice used for audio responses.
    """

    candidate_count: int = 1
    max_output_tokens: int = 2000
    temperature: float = 0.7
    top_p: float = 1.0
    top_k: int = 1
    response_type: ResponseModality = ResponseModality.TEXT
    voice_name: VoiceOptions = VoiceOptions.PUCK


class GeminiConfig(CamelModel):
    """
    Session configuration for a Gemini Live client.

    Attributes:
        model (str): Model identifier sent in the setup frame.
        generation_config (GenerationConfig): Sampling and output parameters.
        system_instruction (str): System prompt applied to the whole session.
        tools (List[ToolsConfig]): Function declarations and search retrieval settings.
        safety_settings (List[SafetySetting]): Harm category / block threshold pairs.
    """

    model: str = DEFAULT_MODEL
    generation_config: GenerationConfig = Field(default_factory=GenerationConfig)
    system_instruction: str = ""
    tools: List[ToolsConfig] = Field(default_factory=list)
    safety_settings: List[SafetySetting] = Field(default_factory=list)
