"""
Image reference carried by an ``image_url`` content part.

The URL is either an ``http(s)`` URL or a base64 ``data:`` URI. Whether the
reference is acceptable is decided by the validator, not at construction.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ImageURL:
    """Image location plus the optional ``detail`` fidelity hint.

    Attributes:
        url: ``http(s)`` URL or ``data:image/<subtype>;base64,...`` URI.
        detail: Optional fidelity hint (``"auto"``, ``"low"`` or ``"high"``).
    """

    url: Any
    detail: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"url": self.url}
        if self.detail is not None:
            data["detail"] = self.detail
        return data


__all__ = ["ImageURL"]
