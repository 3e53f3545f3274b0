"""Provider registry.

Purpose
-------
Map a backend prefix (the part of ``"<backend>/<model>"`` before the first
``/``) to a constructor of an adapter implementing ``LLMProvider``.
Resolution is a pure table lookup; the table is read-mostly and
``register`` overwrites (last write wins).

Entries are either factories ``callable(configuration) -> adapter`` or lazy
import paths ``"package.module:ClassName"``. Lazy paths are imported with
``importlib`` on first resolution so backends cost nothing until used.

Failure modes
-------------
:class:`UnknownProviderError` names the prefix for unregistered backends,
malformed model identifiers, and lazy paths that fail to import.
"""

from __future__ import annotations

from importlib import import_module
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterator, List, Mapping, Optional, Tuple, Union

from .errors import UnknownProviderError

if TYPE_CHECKING:
    from ..config import Configuration
    from .interfaces import LLMProvider

AdapterFactory = Callable[["Configuration"], "LLMProvider"]
RegistryEntry = Union[str, AdapterFactory]

MODEL_SEPARATOR = "/"


def split_model_id(model_id: str) -> Tuple[str, str]:
    """Split ``"<backend>/<model>"`` on the first separator.

    The remainder is returned verbatim (it may itself contain ``/``).

    Raises:
        UnknownProviderError: when ``model_id`` has no backend prefix.
    """
    if not isinstance(model_id, str) or MODEL_SEPARATOR not in model_id:
        raise UnknownProviderError(
            str(model_id),
            f"Model identifier {model_id!r} must have the form '<provider>/<model>'",
        )
    prefix, name = model_id.split(MODEL_SEPARATOR, 1)
    if not prefix:
        raise UnknownProviderError(prefix, f"Model identifier {model_id!r} has an empty provider prefix")
    return prefix, name


def _load_entry(prefix: str, path: str) -> AdapterFactory:
    module_path, _, attr = path.partition(":")
    try:
        module = import_module(module_path)
    except ImportError as exc:
        raise UnknownProviderError(
            prefix, f"Failed to import adapter module '{module_path}' for provider '{prefix}': {exc}"
        ) from exc
    try:
        return getattr(module, attr)
    except AttributeError as exc:
        raise UnknownProviderError(
            prefix, f"Adapter '{attr}' not found in '{module_path}' for provider '{prefix}'"
        ) from exc


class ProviderRegistry:
    """Prefix -> adapter factory table."""

    def __init__(self, entries: Optional[Mapping[str, RegistryEntry]] = None) -> None:
        self._table: Dict[str, RegistryEntry] = {}
        for prefix, entry in (entries or {}).items():
            self.register(prefix, entry)

    def register(self, prefix: str, factory: RegistryEntry) -> None:
        """Insert or overwrite the entry for ``prefix``."""
        if not isinstance(prefix, str) or not prefix or MODEL_SEPARATOR in prefix:
            raise ValueError(f"Invalid provider prefix: {prefix!r}")
        if isinstance(factory, str):
            if ":" not in factory:
                raise ValueError(f"Lazy adapter path must look like 'module:Class', got {factory!r}")
        elif not callable(factory):
            raise TypeError(f"Adapter factory for {prefix!r} must be callable or a 'module:Class' path")
        self._table[prefix] = factory

    def unregister(self, prefix: str) -> None:
        self._table.pop(prefix, None)

    def resolve(self, model_id: str) -> AdapterFactory:
        """Return the adapter factory for ``model_id``'s prefix.

        Lazy paths are imported and the loaded factory replaces the path in
        the table.
        """
        prefix, _ = split_model_id(model_id)
        entry = self._table.get(prefix)
        if entry is None:
            raise UnknownProviderError(prefix)
        if isinstance(entry, str):
            loaded = _load_entry(prefix, entry)
            # keep any registration that raced with the import
            if self._table.get(prefix) == entry:
                self._table[prefix] = loaded
            return loaded
        return entry

    def create(self, model_id: str, configuration: "Configuration") -> "LLMProvider":
        """Resolve ``model_id`` and construct its adapter with ``configuration``."""
        return self.resolve(model_id)(configuration)

    def supported(self) -> List[str]:
        return sorted(self._table)

    def __contains__(self, prefix: Any) -> bool:
        return prefix in self._table

    def __iter__(self) -> Iterator[str]:
        return iter(self.supported())


def default_registry() -> ProviderRegistry:
    """Return a fresh registry with the built-in backends registered lazily."""
    return ProviderRegistry({"openai": "onellm.openai.client:OpenAIProvider"})


__all__ = [
    "AdapterFactory",
    "ProviderRegistry",
    "split_model_id",
    "default_registry",
    "MODEL_SEPARATOR",
]
