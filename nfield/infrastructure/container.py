"""
IoC Container
=============

Minimal inversion-of-control kernel with transient, singleton and constant
bindings. The SDK itself never depends on this class directly: it only sees
the resolve callables handed to ``DependencyResolver.register`` and the bind
callables handed to ``initialize``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Type, TypeVar

from nfield.config.logging import get_logger
from nfield.infrastructure.errors import DependencyResolutionError

logger = get_logger(__name__)

T = TypeVar("T")


class Scope(str, Enum):
    """Binding lifetimes."""
    TRANSIENT = "transient"
    SINGLETON = "singleton"
    CONSTANT = "constant"


@dataclass
class Binding:
    """A single service binding."""
    service: type
    scope: Scope
    factory: Optional[Callable[[], Any]] = None
    instance: Any = None
    has_instance: bool = False

    def activate(self) -> Any:
        if self.scope is Scope.TRANSIENT:
            return self.factory()
        if not self.has_instance:
            self.instance = self.factory()
            self.has_instance = True
        return self.instance


class Kernel:
    """
    Service container used as a context manager:

        with Kernel() as kernel:
            kernel.bind_transient(BaseService, ServiceImpl)
            service = kernel.get(BaseService)
    """

    def __init__(self) -> None:
        self.logger: Any = logger.bind(component="kernel")  # structlog.BoundLoggerBase
        self._bindings: Dict[type, List[Binding]] = {}
        self._closed = False

    def __enter__(self) -> "Kernel":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def bind_transient(self, service: type, implementation: Callable[[], Any]) -> None:
        """Bind ``service`` to a new ``implementation()`` on every resolve."""
        self._add(Binding(service=service, scope=Scope.TRANSIENT, factory=implementation))

    def bind_singleton(self, service: type, implementation: Callable[[], Any]) -> None:
        """Bind ``service`` to one lazily created ``implementation()``."""
        self._add(Binding(service=service, scope=Scope.SINGLETON, factory=implementation))

    def bind_constant(self, service: type, instance: Any) -> None:
        """Bind ``service`` to an existing object."""
        self._add(
            Binding(service=service, scope=Scope.CONSTANT, instance=instance, has_instance=True)
        )

    def get(self, service: Type[T]) -> T:
        """
        Resolve a service.

        Args:
            service: Service type to resolve

        Returns:
            Instance from the most recent binding of ``service``

        Raises:
            DependencyResolutionError: If the kernel is closed or nothing is bound
        """
        self._ensure_open()
        bindings = self._bindings.get(service)
        if not bindings:
            raise DependencyResolutionError(f"No binding registered for {service.__name__}")
        return bindings[-1].activate()

    def get_all(self, service: Type[T]) -> List[T]:
        """Resolve every binding of ``service`` in registration order."""
        self._ensure_open()
        return [binding.activate() for binding in self._bindings.get(service, [])]

    def close(self) -> None:
        """Release cached singletons and all bindings."""
        if self._closed:
            return
        count = sum(len(b) for b in self._bindings.values())
        self._bindings.clear()
        self._closed = True
        self.logger.debug("Kernel closed", released_bindings=count)

    def _add(self, binding: Binding) -> None:
        self._ensure_open()
        self._bindings.setdefault(binding.service, []).append(binding)
        self.logger.debug(
            "Service bound", service=binding.service.__name__, scope=binding.scope.value
        )

    def _ensure_open(self) -> None:
        if self._closed:
            raise DependencyResolutionError("Kernel has been closed")
