"""Name-keyed registries for pluggable decomposers and geocoding backends.

A backend is registered under a short name together with a constructor (a
class or any callable returning an instance). Names are matched without
regard to case or surrounding whitespace, so ``--backend Chained`` on the
command line finds the ``chained`` entry.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, ClassVar, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _normalize_name(name: str) -> str:
    return name.strip().lower()


class PluginFactory(ABC, Generic[T]):
    """Registry of named constructors for one kind of plugin.

    Subclasses define ``_registry``, ``_default_type`` and ``_entity_name``
    and implement ``_ensure_defaults_registered`` to add the built-in
    backends on first use, so importing the factory stays cheap.
    """

    _registry: ClassVar[dict[str, Callable[..., Any]]]
    _default_type: ClassVar[str]
    _entity_name: ClassVar[str]

    @classmethod
    @abstractmethod
    def _ensure_defaults_registered(cls) -> None: ...

    @classmethod
    def _register_default(cls, name: str, constructor: Callable[..., T]) -> None:
        # Never overrides an entry the caller registered first
        cls._registry.setdefault(_normalize_name(name), constructor)

    @classmethod
    def register(cls, name: str, constructor: Callable[..., T]) -> Callable[..., T]:
        """Register *constructor* under *name*, replacing any previous entry.

        Returns the constructor unchanged.
        """
        key = _normalize_name(name)
        if not key:
            raise ValueError(f"{cls._entity_name} name must not be empty")
        cls._registry[key] = constructor
        return constructor

    @classmethod
    def unregister(cls, name: str) -> None:
        cls._registry.pop(_normalize_name(name), None)

    @classmethod
    def is_registered(cls, name: str) -> bool:
        cls._ensure_defaults_registered()
        return _normalize_name(name) in cls._registry

    @classmethod
    def create(cls, name: str | None = None, **kwargs: Any) -> T:
        """Build the plugin registered under *name* (the default when None).

        Keyword arguments are passed to the constructor.

        Raises:
            ValueError: If nothing is registered under *name*.
        """
        cls._ensure_defaults_registered()
        key = _normalize_name(name if name is not None else cls._default_type)

        constructor = cls._registry.get(key)
        if constructor is None:
            available = ", ".join(sorted(cls._registry))
            raise ValueError(
                f"Unknown {cls._entity_name} type: {name}. Available types: {available}"
            )

        logger.debug("Creating %s %r", cls._entity_name, key)
        return constructor(**kwargs)  # type: ignore[no-any-return]

    @classmethod
    def available_types(cls) -> list[str]:
        cls._ensure_defaults_registered()
        return sorted(cls._registry)
