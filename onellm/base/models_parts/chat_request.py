"""
ChatRequest record for normalized chat-completion calls.

Adapters validate this record and map it to their wire payload. Every
optional field defaults to ``None`` and is omitted from the payload when
unset. ``from_params`` coerces raw OpenAI-shaped mappings into typed records
and reports structural problems (unknown parameters, malformed messages or
tools) as a single :class:`~onellm.base.errors.ValidationError`.
"""
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from ..errors import ValidationError, Violation
from .content_part import ContentPart
from .image_url import ImageURL
from .message import Message
from .tool_choice import ToolChoice
from .tool_spec import FunctionSpec, ToolSpec


@dataclass(frozen=True)
class ChatRequest:
    """Normalized chat request sent to backend adapters.

    Attributes:
        model: Model identifier, usually ``"<backend>/<model>"``.
        messages: Ordered tuple of :class:`Message` records.
        stream: Request a server-sent-event stream.
        tools: Optional tool specifications.
        tool_choice: Optional tool-usage directive.

    The remaining attributes mirror the chat-completion parameters of the
    same name.
    """

    model: str
    messages: Tuple[Message, ...]
    stream: bool = False
    tools: Optional[Tuple[ToolSpec, ...]] = None
    tool_choice: Optional[ToolChoice] = None
    reasoning_effort: Optional[str] = None
    metadata: Optional[Mapping[str, Any]] = None
    frequency_penalty: Optional[float] = None
    presence_penalty: Optional[float] = None
    top_p: Optional[float] = None
    temperature: Optional[float] = None
    logit_bias: Optional[Mapping[str, Any]] = None
    logprobs: Optional[bool] = None
    top_logprobs: Optional[int] = None
    max_tokens: Optional[int] = None
    max_completion_tokens: Optional[int] = None
    stop: Optional[Union[str, Sequence[str]]] = None
    n: Optional[int] = None
    seed: Optional[int] = None
    user: Optional[str] = None
    response_format: Optional[Mapping[str, Any]] = None
    parallel_tool_calls: Optional[bool] = None
    stream_options: Optional[Mapping[str, Any]] = None

    @classmethod
    def parameter_names(cls) -> Tuple[str, ...]:
        """Return the accepted keyword parameters (everything but model/messages)."""
        return tuple(f.name for f in fields(cls) if f.name not in ("model", "messages"))

    @classmethod
    def from_params(cls, model: str, messages: Any, **params: Any) -> "ChatRequest":
        """Build a request from raw chat-completion arguments.

        Raises:
            ValidationError: listing every unknown parameter and every
                structurally malformed message or tool.
        """
        violations: List[Violation] = []
        allowed = set(cls.parameter_names())
        for name in sorted(set(params) - allowed):
            violations.append(Violation(name, f"Unknown parameter: {name}"))

        coerced_messages = _coerce_messages(messages, violations)
        tools = params.get("tools")
        if tools is not None:
            params["tools"] = _coerce_tools(tools, violations)
        choice = params.get("tool_choice")
        if choice is not None and not isinstance(choice, ToolChoice):
            params["tool_choice"] = ToolChoice(choice)
        if isinstance(params.get("stop"), list):
            params["stop"] = tuple(params["stop"])
        if violations:
            raise ValidationError(violations)
        known = {k: v for k, v in params.items() if k in allowed}
        if known.get("stream") is None:
            known.pop("stream", None)
        return cls(model=model, messages=coerced_messages, **known)

    def to_dict(self) -> Dict[str, Any]:
        """Return the request as a plain mapping, omitting unset fields."""
        data: Dict[str, Any] = {
            "model": self.model,
            "messages": [m.to_dict() for m in self.messages],
            "stream": self.stream,
        }
        for name in self.parameter_names():
            value = getattr(self, name)
            if value is None or name == "stream":
                continue
            if name == "tools":
                value = [t.to_dict() for t in value]
            elif name == "tool_choice":
                value = value.to_wire()
            elif name == "stop" and not isinstance(value, str):
                value = list(value)
            elif isinstance(value, Mapping):
                value = dict(value)
            data[name] = value
        return data


def _coerce_image(raw: Any) -> Optional[ImageURL]:
    if raw is None:
        return None
    if isinstance(raw, ImageURL):
        return raw
    if isinstance(raw, Mapping):
        return ImageURL(url=raw.get("url"), detail=raw.get("detail"))
    return ImageURL(url=raw)


def _coerce_content(content: Any, where: str, violations: List[Violation]) -> Any:
    if not isinstance(content, (list, tuple)):
        return content
    parts: List[ContentPart] = []
    for j, part in enumerate(content):
        if isinstance(part, ContentPart):
            parts.append(part)
        elif isinstance(part, Mapping):
            parts.append(
                ContentPart(
                    type=part.get("type"),
                    text=part.get("text"),
                    image_url=_coerce_image(part.get("image_url")),
                )
            )
        else:
            violations.append(Violation(f"{where}.content[{j}]", "Content part must be an object"))
    return tuple(parts)


def _coerce_messages(messages: Any, violations: List[Violation]) -> Tuple[Message, ...]:
    if messages is None:
        return ()
    if isinstance(messages, (str, bytes, Mapping)) or not isinstance(messages, Sequence):
        violations.append(Violation("messages", "Messages must be an array of message objects"))
        return ()
    out: List[Message] = []
    for i, msg in enumerate(messages):
        where = f"messages[{i}]"
        if isinstance(msg, Message):
            out.append(msg)
            continue
        if not isinstance(msg, Mapping):
            violations.append(Violation(where, f"Message at index {i} must be an object with role and content"))
            continue
        keys = set(msg)
        if keys != {"role", "content"}:
            missing = sorted({"role", "content"} - keys)
            extra = sorted(keys - {"role", "content"}, key=str)
            detail = []
            if missing:
                detail.append(f"missing {', '.join(missing)}")
            if extra:
                detail.append(f"unexpected {', '.join(map(str, extra))}")
            violations.append(
                Violation(
                    where,
                    f"Message at index {i} must contain exactly role and content ({'; '.join(detail)})",
                )
            )
            continue
        out.append(Message(role=msg["role"], content=_coerce_content(msg["content"], where, violations)))
    return tuple(out)


def _coerce_tools(tools: Any, violations: List[Violation]) -> Any:
    if not isinstance(tools, (list, tuple)):
        violations.append(Violation("tools", "Tools must be an array of function definitions"))
        return tools
    out: List[ToolSpec] = []
    for i, tool in enumerate(tools):
        if isinstance(tool, ToolSpec):
            out.append(tool)
            continue
        if not isinstance(tool, Mapping):
            violations.append(Violation(f"tools[{i}]", "Tools must be an array of function definitions"))
            continue
        fn = tool.get("function")
        spec = None
        if isinstance(fn, FunctionSpec):
            spec = fn
        elif isinstance(fn, Mapping):
            spec = FunctionSpec(
                name=fn.get("name"),
                description=fn.get("description"),
                parameters=fn.get("parameters"),
                strict=fn.get("strict"),
            )
        out.append(ToolSpec(type=tool.get("type"), function=spec))
    return tuple(out)


__all__ = [
    "ChatRequest",
]
