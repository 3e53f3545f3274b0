"""OpenAI backend adapter package."""

from .client import OpenAIProvider
from .models import AVAILABLE_MODELS, is_reasoning_model

__all__ = ["OpenAIProvider", "AVAILABLE_MODELS", "is_reasoning_model"]
