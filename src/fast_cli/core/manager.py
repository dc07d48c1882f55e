"""Service manager for lazy, dependency-resolving singleton services."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from fast_cli.core.service import Service, ServiceConstructor
from fast_cli.errors import (
    CircularDependencyError,
    ServiceContainerError,
    ServiceInstantiationError,
    ServiceLifecycleError,
    ServiceNotFoundError,
)

if TYPE_CHECKING:
    from fast_cli.core.kernel import Kernel

logger = logging.getLogger(__name__)


@dataclass
class _ManagerContext:
    """ServiceContext implementation delegating lookups to a ServiceManager."""

    manager: ServiceManager
    kernel: Kernel | None

    def get_service(self, name: str) -> Any | None:
        return self.manager.get(name)

    def require_service(self, name: str) -> Any:
        return self.manager.require(name)


class ServiceManager:
    """Registry of named singleton services with lifecycle management.

    Services are defined by name and constructor, and instantiated lazily on
    first lookup. Each name resolves to exactly one instance for the lifetime
    of the manager. A service that requests itself while under construction
    (directly or through another service) raises CircularDependencyError.

    Example:
        >>> manager = ServiceManager()
        >>> manager.define("logger", LoggerService)
        >>> manager.define("config", ConfigService)
        >>> await manager.init_all()
        >>> config = manager.require("config")

    """

    def __init__(self, kernel: Kernel | None = None) -> None:
        """Initialise an empty service manager.

        Args:
            kernel: Owning kernel, exposed to services through their context

        """
        self._kernel = kernel
        self._definitions: dict[str, ServiceConstructor] = {}
        self._instances: dict[str, Service] = {}
        self._instantiating: set[str] = set()
        # Names in the order their registration completed; dependencies land
        # before the services that required them.
        self._registration_order: list[str] = []
        self._initialized = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    def define(self, name: str, ctor: ServiceConstructor) -> None:
        """Register a service constructor under a name.

        Raises:
            ServiceContainerError: If the manager has already been initialised

        """
        if self._initialized:
            raise ServiceContainerError(
                f"Cannot define service '{name}' after services were initialised"
            )
        self._definitions[name] = ctor
        logger.debug("Defined service: %s", name)

    def get(self, name: str) -> Any | None:
        """Return the named service, instantiating its definition on demand.

        Returns:
            The service instance, or None when the name is not defined

        """
        instance = self._instances.get(name)
        if instance is not None:
            return instance

        ctor = self._definitions.get(name)
        if ctor is None:
            return None
        return self.instantiate(name, ctor)

    def require(self, name: str) -> Any:
        """Return the named service.

        Raises:
            ServiceNotFoundError: If the name is not defined

        """
        instance = self.get(name)
        if instance is None:
            raise ServiceNotFoundError(name)
        return instance

    def instantiate(self, name: str, ctor: ServiceConstructor) -> Service:
        """Construct and register a service, or return the existing instance.

        Raises:
            CircularDependencyError: If the service is already under construction
            ServiceInstantiationError: If the constructor or on_register fails

        """
        existing = self._instances.get(name)
        if existing is not None:
            return existing

        if name in self._instantiating:
            raise CircularDependencyError(name)

        self._instantiating.add(name)
        context = _ManagerContext(manager=self, kernel=self._kernel)
        try:
            instance = ctor(context)
            self._instances[name] = instance
            self._instantiating.discard(name)
            instance.on_register()
        except CircularDependencyError:
            self._discard(name)
            raise
        except Exception as e:
            self._discard(name)
            logger.debug("Instantiation of service %s failed: %s", name, e)
            raise ServiceInstantiationError(name, e) from e

        self._registration_order.append(name)
        logger.debug("Registered service: %s", name)
        return instance

    def _discard(self, name: str) -> None:
        self._instantiating.discard(name)
        self._instances.pop(name, None)

    async def init_all(self) -> None:
        """Realise every defined service and run all on_init hooks concurrently.

        Hooks run in one task group: when one fails, the remaining hooks are
        cancelled and the first failure is raised.

        Raises:
            ServiceContainerError: If the manager has already been initialised
            ServiceLifecycleError: If any on_init hook fails

        """
        if self._initialized:
            raise ServiceContainerError("Services have already been initialised")

        for name, ctor in list(self._definitions.items()):
            if name not in self._instances:
                self.instantiate(name, ctor)

        try:
            async with asyncio.TaskGroup() as group:
                for name, instance in list(self._instances.items()):
                    group.create_task(self._init_service(name, instance))
        except ExceptionGroup as eg:
            raise eg.exceptions[0]

        self._initialized = True
        logger.debug("Initialised %d services", len(self._instances))

    async def _init_service(self, name: str, instance: Service) -> None:
        try:
            await instance.on_init()
        except Exception as e:
            raise ServiceLifecycleError(name, "init", e) from e

    async def destroy(self, name: str) -> None:
        """Remove the named instance and await its on_destroy hook.

        Raises:
            ServiceLifecycleError: If the on_destroy hook fails

        """
        instance = self._instances.pop(name, None)
        if name in self._registration_order:
            self._registration_order.remove(name)
        if instance is None:
            return

        try:
            await instance.on_destroy()
        except Exception as e:
            raise ServiceLifecycleError(name, "destroy", e) from e
        logger.debug("Destroyed service: %s", name)

    async def destroy_all(self) -> None:
        """Destroy every instance, dependents first.

        Individual hook failures are logged and do not stop the teardown of
        the remaining services.
        """
        remaining = [n for n in self._instances if n not in self._registration_order]
        for name in [*reversed(self._registration_order), *remaining]:
            try:
                await self.destroy(name)
            except ServiceLifecycleError as e:
                logger.warning("Ignoring teardown failure: %s", e)

        self._initialized = False

    def has(self, name: str) -> bool:
        return name in self._definitions or name in self._instances

    def is_instantiated(self, name: str) -> bool:
        return name in self._instances

    def get_names(self) -> list[str]:
        names = list(self._definitions)
        names.extend(n for n in self._instances if n not in self._definitions)
        return names
