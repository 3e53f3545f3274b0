"""Function invocation carried by tool calls (whole or incremental)."""
from __future__ import annotations

from typing import Optional

from .graph_model import GraphModel


class FunctionCall(GraphModel):
    """Function name plus its JSON-encoded ``arguments`` string.

    In streaming deltas either field may be absent or carry only a fragment.
    """

    name: Optional[str] = None
    arguments: Optional[str] = None


__all__ = ["FunctionCall"]
