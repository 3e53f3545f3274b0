"""
Backend adapter interfaces public surface.

Re-exports the single-class modules under ``onellm.base.interfaces_parts``
to keep imports stable.
"""

from __future__ import annotations

from .interfaces_parts.llm_provider import LLMProvider
from .interfaces_parts.base_provider import BaseProvider

__all__ = ["LLMProvider", "BaseProvider"]
