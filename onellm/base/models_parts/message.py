"""
Input message record.

Defines the `Message` dataclass and the `Role` literal representing the
sender role. Content may be plain text or a tuple of `ContentPart` objects.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal, Tuple, Union

from .content_part import ContentPart


Role = Literal["system", "user", "assistant"]


@dataclass(frozen=True)
class Message:
    """One conversation turn.

    Attributes:
        role: The role of the message author (``"system"``, ``"user"`` or
            ``"assistant"``).
        content: Either a plain text string or a tuple of `ContentPart`
            items for multimodal input.

    Values outside these shapes are preserved so the validator can report
    them instead of failing at construction.
    """

    role: Any
    content: Union[str, Tuple[ContentPart, ...], Any]

    def is_structured(self) -> bool:
        """Return True if the message content is a sequence of parts."""
        return isinstance(self.content, tuple)

    def text_or_joined(self) -> str:
        """Return the content as one string; non-text parts render as ``[type]``."""
        if isinstance(self.content, str):
            return self.content
        if not self.is_structured():
            return ""
        return "\n".join(p.text if p.text else f"[{p.type}]" for p in self.content)

    def to_dict(self) -> Dict[str, Any]:
        content = self.content
        if self.is_structured():
            content = [p.to_dict() for p in self.content]
        return {"role": self.role, "content": content}


__all__ = [
    "Message",
    "Role",
]
