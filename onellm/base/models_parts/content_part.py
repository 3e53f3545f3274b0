"""
Multimodal content part model for input messages.

This module defines the `ContentPart` dataclass and the `ContentPartType`
literal. A message whose content is a sequence of parts mixes text fragments
with image references, mirroring the chat-completion wire format.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal, Optional

from .image_url import ImageURL


ContentPartType = Literal["text", "image_url"]


@dataclass(frozen=True)
class ContentPart:
    """A single fragment of multimodal message content.

    Attributes:
        type: ``"text"`` or ``"image_url"``. Other values are kept as given
            and rejected by the validator.
        text: Text for ``"text"`` parts.
        image_url: Image reference for ``"image_url"`` parts.
    """

    type: Any
    text: Optional[Any] = None
    image_url: Optional[ImageURL] = None

    @classmethod
    def text_part(cls, text: str) -> "ContentPart":
        return cls(type="text", text=text)

    @classmethod
    def image_part(cls, url: str, detail: Optional[str] = None) -> "ContentPart":
        return cls(type="image_url", image_url=ImageURL(url=url, detail=detail))

    def to_dict(self) -> Dict[str, Any]:
        """Return the wire representation, omitting absent fields."""
        data: Dict[str, Any] = {"type": self.type}
        if self.text is not None:
            data["text"] = self.text
        if self.image_url is not None:
            data["image_url"] = self.image_url.to_dict()
        return data


__all__ = [
    "ContentPart",
    "ContentPartType",
]
