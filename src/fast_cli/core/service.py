"""Service base class and the context handed to services at construction."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Protocol, TypeAlias

if TYPE_CHECKING:
    from fast_cli.core.kernel import Kernel


class ServiceContext(Protocol):
    """Capability view a service uses to look up its siblings.

    The context does not own anything: lookups delegate back into the
    ServiceManager that constructed the service, so transitive dependencies
    resolve even while the service itself is being built.
    """

    kernel: Kernel | None

    def get_service(self, name: str) -> Any | None:
        """Return the named service, or None when it is not defined."""
        ...

    def require_service(self, name: str) -> Any:
        """Return the named service, raising ServiceNotFoundError when absent."""
        ...


class Service:
    """Base capability unit managed by the ServiceManager.

    All lifecycle hooks are optional; subclasses override only what they need:

    - ``on_register()`` runs synchronously right after construction. Resolve
      dependencies on other services here.
    - ``on_init()`` is awaited once the whole container is realised. Hooks of
      different services run concurrently, so do not rely on another
      service's ``on_init`` having finished.
    - ``on_destroy()`` is awaited during shutdown.
    """

    def __init__(self, context: ServiceContext) -> None:
        self.context = context

    @property
    def kernel(self) -> Kernel | None:
        return self.context.kernel

    def get_service(self, name: str) -> Any | None:
        return self.context.get_service(name)

    def require_service(self, name: str) -> Any:
        return self.context.require_service(name)

    def on_register(self) -> None:
        pass

    async def on_init(self) -> None:
        pass

    async def on_destroy(self) -> None:
        pass


ServiceConstructor: TypeAlias = Callable[[ServiceContext], Service]
