"""
Pre-flight validation of prompt input for one-shot requests.
"""

from collections.abc import Mapping
from typing import Any, List, NamedTuple, Optional

from gemini_live.schemas.response import ROLES, Prompt


class ValidationResult(NamedTuple):
    valid: bool
    error: Optional[str] = None


def _is_valid_prompt(item: Any) -> bool:
    if isinstance(item, Prompt):
        return True
    if not isinstance(item, Mapping):
        return False
    if not isinstance(item.get("prompt"), str):
        return False
    role = item.get("role")
    return role is None or role in ROLES


def validate_prompt_input(value: Any) -> ValidationResult:
    """
    Check that ``value`` is a single prompt or a list of prompts.

    A prompt is a mapping (or ``Prompt``) with a ``prompt`` string and an
    optional ``role`` of "user" or "gemini".
    """
    if value is None:
        return ValidationResult(False, "Input cannot be None")

    if isinstance(value, (list, tuple)):
        if not value:
            return ValidationResult(False, "Input list cannot be empty")
        if not all(_is_valid_prompt(item) for item in value):
            return ValidationResult(
                False,
                "List input must contain objects with a 'prompt' string and an optional valid role",
            )
        return ValidationResult(True)

    if isinstance(value, Prompt):
        return ValidationResult(True)

    if not isinstance(value, Mapping):
        return ValidationResult(False, "Single input must be an object")

    if not isinstance(value.get("prompt"), str):
        return ValidationResult(False, "Single input must contain a 'prompt' string property")

    if not _is_valid_prompt(value):
        return ValidationResult(False, f"Role must be one of: {', '.join(ROLES)}")

    return ValidationResult(True)


def to_prompts(value: Any) -> List[Prompt]:
    """Normalise validated input into an ordered list of ``Prompt`` models."""
    items = value if isinstance(value, (list, tuple)) else [value]
    prompts = []
    for item in items:
        if isinstance(item, Prompt):
            prompts.append(item)
        else:
            prompts.append(Prompt(prompt=item["prompt"], role=item.get("role") or "user"))
    return prompts
