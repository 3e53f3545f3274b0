"""Client facade.

Resolves ``"<backend>/<model>"`` through the registry, builds the typed
request, and forwards it to the backend adapter. Each client carries its own
:class:`~onellm.config.Configuration` and registry, so several
independently configured clients can live in one process.
"""

from __future__ import annotations

from contextlib import closing
from typing import Any, Callable, Iterator, Optional, Union

from .base.errors import ValidationError
from .base.interfaces import LLMProvider
from .base.models import ChatRequest
from .base.registry import ProviderRegistry, default_registry
from .base.response import DeltaResponse, Response
from .config import Configuration

ChunkCallback = Callable[[DeltaResponse], Any]


class Client:
    """Entry point for chat completions across registered backends.

    Parameters:
        configuration: Explicit settings; ``Configuration.from_env()`` when
            omitted. Validated at construction.
        registry: Backend table; ``default_registry()`` when omitted.

    Raises:
        ConfigurationError: when the configuration is invalid.
    """

    def __init__(
        self,
        configuration: Optional[Configuration] = None,
        registry: Optional[ProviderRegistry] = None,
    ) -> None:
        self.configuration = (configuration or Configuration.from_env()).validate()
        self.registry = registry or default_registry()

    def adapter_for(self, model: str) -> LLMProvider:
        """Construct the adapter serving ``model``'s backend prefix."""
        return self.registry.create(model, self.configuration)

    def complete(
        self,
        model: str,
        messages: Any,
        *,
        stream: bool = False,
        on_chunk: Optional[ChunkCallback] = None,
        **params: Any,
    ) -> Union[Response, Iterator[DeltaResponse], None]:
        """Run a chat completion.

        Returns:
            - ``Response`` when ``stream`` is false.
            - A lazy iterator of ``DeltaResponse`` when ``stream`` is true.
            - ``None`` when ``stream`` is true and ``on_chunk`` is given; the
              stream is drained, calling ``on_chunk`` for every chunk in
              arrival order on the calling thread.

        Raises:
            UnknownProviderError: unregistered backend prefix.
            ValidationError: request rule violations (no network call made).
            ProviderError: transport-class failures.
        """
        if on_chunk is not None and not stream:
            raise ValidationError("on_chunk requires stream=True", parameter="on_chunk")
        adapter = self.adapter_for(model)
        request = ChatRequest.from_params(model, messages, stream=stream, **params)
        if not stream:
            return adapter.complete(request)
        chunks = adapter.stream(request)
        if on_chunk is None:
            return chunks
        with closing(chunks):
            for chunk in chunks:
                on_chunk(chunk)
        return None

    def stream(self, model: str, messages: Any, **params: Any) -> Iterator[DeltaResponse]:
        """Return a lazy iterator of chunks; closing it closes the HTTP connection."""
        return self.complete(model, messages, stream=True, **params)


__all__ = ["Client", "ChunkCallback"]
