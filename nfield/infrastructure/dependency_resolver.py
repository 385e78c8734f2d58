"""
Dependency Resolver
===================

Process-wide hook through which the SDK resolves its services. Applications
register the resolve callables of whatever container they use.
"""

from typing import Any, Callable, Iterable, List, Optional, Type, TypeVar

from nfield.infrastructure.errors import DependencyResolutionError

T = TypeVar("T")

ResolveFunc = Callable[[type], Any]
ResolveAllFunc = Callable[[type], Iterable[Any]]


class DependencyResolver:
    """Static registry of the application's resolve callables."""

    _resolve: Optional[ResolveFunc] = None
    _resolve_all: Optional[ResolveAllFunc] = None

    @classmethod
    def register(cls, resolve: ResolveFunc, resolve_all: ResolveAllFunc) -> None:
        """Register the container callables used for every later lookup."""
        cls._resolve = resolve
        cls._resolve_all = resolve_all

    @classmethod
    def reset(cls) -> None:
        """Forget the registered callables."""
        cls._resolve = None
        cls._resolve_all = None

    @classmethod
    def is_registered(cls) -> bool:
        return cls._resolve is not None

    @classmethod
    def get_service(cls, service: Type[T]) -> T:
        """Resolve a single instance of ``service``."""
        if cls._resolve is None:
            raise DependencyResolutionError(
                "DependencyResolver.register must be called before resolving services"
            )
        return cls._resolve(service)

    @classmethod
    def get_services(cls, service: Type[T]) -> List[T]:
        """Resolve every instance bound to ``service``."""
        if cls._resolve_all is None:
            raise DependencyResolutionError(
                "DependencyResolver.register must be called before resolving services"
            )
        return list(cls._resolve_all(service))
