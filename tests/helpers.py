import base64
from typing import Any, Dict

import numpy as np


def pcm_b64(samples) -> str:
    """Base64 of little-endian 16-bit PCM built from integer samples."""
    return base64.b64encode(np.asarray(samples, dtype="<i2").tobytes()).decode("ascii")


def text_frame(text: str, turn_complete: bool = False) -> Dict[str, Any]:
    return {
        "serverContent": {
            "modelTurn": {"parts": [{"text": text}]},
            "turnComplete": turn_complete,
        }
    }


def audio_frame(data: str, mime_type=None, turn_complete: bool = False) -> Dict[str, Any]:
    inline_data = {"data": data}
    if mime_type:
        inline_data["mimeType"] = mime_type
    return {
        "serverContent": {
            "modelTurn": {"parts": [{"inlineData": inline_data}]},
            "turnComplete": turn_complete,
        }
    }


def tool_call_frame(*calls) -> Dict[str, Any]:
    return {"toolCall": {"functionCalls": list(calls)}}
