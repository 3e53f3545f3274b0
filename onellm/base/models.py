"""
Typed request records public surface.

This module re-exports the one-class-per-file implementations under
``onellm.base.models_parts`` to keep a stable import path.
"""

from .models_parts.image_url import ImageURL
from .models_parts.content_part import ContentPart, ContentPartType
from .models_parts.message import Message, Role
from .models_parts.tool_spec import FunctionSpec, ToolSpec
from .models_parts.tool_choice import TOOL_CHOICE_MODES, ToolChoice
from .models_parts.chat_request import ChatRequest

__all__ = [
    "ImageURL",
    "ContentPart",
    "ContentPartType",
    "Message",
    "Role",
    "FunctionSpec",
    "ToolSpec",
    "ToolChoice",
    "TOOL_CHOICE_MODES",
    "ChatRequest",
]
