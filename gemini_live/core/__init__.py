"""
Core components of the Gemini Live client.
"""

from .audio_processor import pcm_to_wav
from .gemini_client import GeminiLiveClient
from .session import LiveSession, SessionState
from .sink import AudioSink
from .validate import validate_prompt_input

__all__ = [
    "AudioSink",
    "GeminiLiveClient",
    "LiveSession",
    "SessionState",
    "pcm_to_wav",
    "validate_prompt_input",
]
