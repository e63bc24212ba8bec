"""
Audio processing utilities for the Gemini Live client.
Converts raw 16-bit PCM to and from WAV containers.
"""

import io
import logging
from typing import Tuple

import numpy as np
import soundfile as sf

logger = logging.getLogger(__name__)

SUBTYPES_BY_BIT_DEPTH = {
    8: "PCM_U8",
    16: "PCM_16",
    24: "PCM_24",
    32: "PCM_32",
}


def pcm_to_wav(
    pcm: bytes,
    sample_rate: int,
    bit_depth: int,
    volume_multiplier: float = 1.0,
) -> bytes:
    """
    Encode little-endian 16-bit PCM as a mono WAV container.

    Each sample is normalised to [-1.0, 1.0] by dividing by 32768, scaled by
    ``volume_multiplier`` and hard-clipped back into [-1.0, 1.0] so that a gain
    above 1 saturates instead of wrapping.

    Parameters:
        pcm (bytes): Raw signed 16-bit little-endian samples.
        sample_rate (int): Sample rate of the container in Hz.
        bit_depth (int): Integer sample width of the container (8, 16, 24 or 32).
        volume_multiplier (float): Gain applied before clipping.

    Returns:
        bytes: The encoded WAV file.
    """
    if not isinstance(pcm, (bytes, bytearray, memoryview)):
        raise TypeError(f"Expected PCM bytes, got {type(pcm).__name__}")
    if len(pcm) % 2 != 0:
        raise ValueError(f"PCM buffer length must be even, got {len(pcm)} bytes")
    subtype = SUBTYPES_BY_BIT_DEPTH.get(bit_depth)
    if subtype is None:
        raise ValueError(f"Unsupported bit depth: {bit_depth}")

    samples = np.frombuffer(pcm, dtype="<i2").astype(np.float32) / 32768.0
    samples = np.clip(samples * volume_multiplier, -1.0, 1.0)

    buffer = io.BytesIO()
    sf.write(buffer, samples, sample_rate, subtype=subtype, format="WAV")
    logger.debug(f"Encoded {len(samples)} samples at {sample_rate} Hz / {bit_depth} bit")
    return buffer.getvalue()


def decode_wav(wav: bytes) -> Tuple[np.ndarray, int]:
    """Decode a WAV container into float32 samples in [-1, 1] and its sample rate."""
    samples, sample_rate = sf.read(io.BytesIO(wav), dtype="float32")
    return samples, sample_rate


def float32_to_pcm16(samples: np.ndarray) -> bytes:
    """Clip float samples to [-1, 1] and pack them as little-endian 16-bit PCM."""
    clipped = np.clip(np.asarray(samples, dtype=np.float32), -1.0, 1.0)
    return (clipped * 32767).astype("<i2").tobytes()
