"""
Tool-choice directive.

Accepted shapes are the strings ``"auto"``, ``"none"`` and ``"required"``,
or a function selector ``{"type": "function", "function": {"name": ...}}``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

TOOL_CHOICE_MODES = ("auto", "none", "required")


@dataclass(frozen=True)
class ToolChoice:
    """Wrapper around the raw ``tool_choice`` value.

    The raw value is kept verbatim for the payload. ``function_name`` is set
    only when the value is a well-formed function selector.
    """

    value: Any

    @classmethod
    def function(cls, name: str) -> "ToolChoice":
        return cls({"type": "function", "function": {"name": name}})

    @property
    def mode(self) -> Optional[str]:
        return self.value if isinstance(self.value, str) else None

    @property
    def function_name(self) -> Optional[str]:
        v = self.value
        if not isinstance(v, Mapping) or v.get("type") != "function":
            return None
        fn = v.get("function")
        if isinstance(fn, Mapping) and isinstance(fn.get("name"), str):
            return fn["name"]
        return None

    def is_well_formed(self) -> bool:
        return self.mode in TOOL_CHOICE_MODES or self.function_name is not None

    def to_wire(self) -> Any:
        if isinstance(self.value, Mapping):
            return {k: (dict(v) if isinstance(v, Mapping) else v) for k, v in self.value.items()}
        return self.value


__all__ = ["ToolChoice", "TOOL_CHOICE_MODES"]
