"""
Shared pydantic base for the normalized response object graph.

Every node keeps unknown backend fields (``extra="allow"``) and remembers
which fields were present in the input, so ``to_dict`` reproduces the
decoded document exactly.
"""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from ..errors import DecodeError

G = TypeVar("G", bound="GraphModel")


class GraphModel(BaseModel):
    """Base class for response graph nodes."""

    model_config = ConfigDict(extra="allow")

    @classmethod
    def from_dict(
        cls: Type[G],
        data: Any,
        *,
        provider: Optional[str] = None,
        model: Optional[str] = None,
    ) -> G:
        """Build a node from a decoded JSON mapping.

        Raises:
            DecodeError: when ``data`` is not an object or does not match the
                expected shape.
        """
        if not isinstance(data, Mapping):
            raise DecodeError(
                message=f"Expected a JSON object for {cls.__name__}, got {type(data).__name__}",
                provider=provider,
                model=model,
            )
        try:
            return cls.model_validate(dict(data))
        except PydanticValidationError as exc:
            first = exc.errors()[0]
            loc = ".".join(str(p) for p in first.get("loc", ())) or "<root>"
            raise DecodeError(
                message=f"Unexpected {cls.__name__} shape at {loc}: {first.get('msg')}",
                provider=provider,
                model=model,
                raw=exc,
            ) from exc

    def to_dict(self) -> Dict[str, Any]:
        """Return a plain mapping holding exactly the fields that were set."""
        return self.model_dump(exclude_unset=True)


__all__ = ["GraphModel"]
