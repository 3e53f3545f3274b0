"""OpenAI model catalog and model-family helpers."""
from __future__ import annotations

import re

AVAILABLE_MODELS = (
    "o1",
    "o1-2024-12-17",
    "o1-mini",
    "o1-mini-2024-09-12",
    "o1-preview",
    "o1-preview-2024-09-12",
    "o3",
    "o3-mini",
    "o4-mini",
    "gpt-4.1",
    "gpt-4.1-mini",
    "gpt-4.1-nano",
    "gpt-4o",
    "gpt-4o-mini",
    "gpt-4o-audio-preview",
    "gpt-4o-mini-audio-preview-2024-12-17",
    "gpt-4o-mini-audio-preview",
    "gpt-4o-mini-2024-07-18",
    "gpt-4o-audio-preview-2024-12-17",
    "gpt-4o-audio-preview-2024-10-01",
    "gpt-4o-2024-11-20",
    "gpt-4o-2024-08-06",
    "gpt-4o-2024-05-13",
    "gpt-4-turbo-preview",
    "gpt-4-turbo-2024-04-09",
    "gpt-4-turbo",
    "gpt-4-1106-preview",
    "gpt-4-0613",
    "gpt-4-0125-preview",
    "gpt-4",
    "gpt-3.5-turbo-16k",
    "gpt-3.5-turbo-1106",
    "gpt-3.5-turbo-0125",
    "gpt-3.5-turbo",
    "chatgpt-4o-latest",
)

# o1, o3, o4 families
REASONING_MODEL_PATTERN = re.compile(r"^o\d")


def is_reasoning_model(model_name: str) -> bool:
    """Return True for reasoning-class models (``reasoning_effort`` applies)."""
    return bool(REASONING_MODEL_PATTERN.match(model_name or ""))


__all__ = ["AVAILABLE_MODELS", "REASONING_MODEL_PATTERN", "is_reasoning_model"]
