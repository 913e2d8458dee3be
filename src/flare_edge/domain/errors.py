"""Domain exceptions for deployment operations."""


class DeploymentError(Exception):
    """Base class for deployment errors."""


class ConfigError(DeploymentError):
    """Raised when the configuration document is missing or malformed."""


class FilesystemError(DeploymentError):
    """Raised when the local tree cannot be enumerated or read."""


class TransportError(DeploymentError):
    """Raised when a remote endpoint cannot be reached."""


class RemoteError(DeploymentError):
    """Raised when a remote endpoint answers with a failure status."""


class ArchiveError(DeploymentError):
    """Raised when the project archive cannot be produced."""


__all__ = [
    "ArchiveError",
    "ConfigError",
    "DeploymentError",
    "FilesystemError",
    "RemoteError",
    "TransportError",
]
