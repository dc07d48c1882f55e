"""Error classes for the fast CLI.

This module provides:
- FastError: Base exception class for all fast CLI errors
- ServiceContainerError and its subclasses: service kernel programming errors
- KernelError: Kernel boot, command registration and shutdown failures
- ConfigurationError: Missing or invalid per-user configuration
- ProjectConfigError: Missing or invalid project files (xyx.config.json, template)
- UploadError: Object storage upload failures
- EditorError: Interactive editor failures
"""


class FastError(Exception):
    """Base exception for all fast CLI errors."""

    pass


class ServiceContainerError(FastError):
    """Base exception for service container errors."""

    pass


class ServiceNotFoundError(ServiceContainerError):
    """Raised when a required service is not defined."""

    def __init__(self, name: str) -> None:
        """Initialise with the name of the missing service."""
        super().__init__(f"Service '{name}' not found")
        self.service_name = name


class CircularDependencyError(ServiceContainerError):
    """Raised when a service requests itself while under construction."""

    def __init__(self, name: str) -> None:
        """Initialise with the name of the service closing the cycle."""
        super().__init__(f"Circular dependency detected for service '{name}'")
        self.service_name = name


class ServiceInstantiationError(ServiceContainerError):
    """Raised when a service constructor or its registration hook fails."""

    def __init__(self, name: str, cause: BaseException) -> None:
        """Initialise with the failing service name and the original error."""
        super().__init__(f"Failed to instantiate service '{name}': {cause}")
        self.service_name = name
        self.cause = cause


class ServiceLifecycleError(ServiceContainerError):
    """Raised when an async lifecycle hook (init or destroy) fails."""

    def __init__(self, name: str, phase: str, cause: BaseException) -> None:
        """Initialise with the service name, lifecycle phase and original error."""
        super().__init__(f"Service '{name}' failed during {phase}: {cause}")
        self.service_name = name
        self.phase = phase
        self.cause = cause


class KernelError(FastError):
    """Raised when the kernel cannot boot, register commands or shut down."""

    pass


class ConfigurationError(FastError):
    """Raised when the per-user configuration is missing or invalid."""

    pass


class ProjectConfigError(FastError):
    """Raised when project files or the cached template cannot be used."""

    pass


class UploadError(FastError):
    """Raised when a file cannot be uploaded to object storage."""

    def __init__(self, message: str, file: str | None = None) -> None:
        """Initialise upload error.

        Args:
            message: Human-readable description of the failure
            file: Path of the file being uploaded, when known

        """
        super().__init__(message)
        self.file = file


class EditorError(FastError):
    """Raised when no editor is available or the editor exits abnormally."""

    pass
