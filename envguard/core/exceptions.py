"""Core exceptions for EnvGuard."""


class EnvGuardError(Exception):
    """Base exception for all EnvGuard errors."""

    def __init__(self, message: str, details: dict = None):
        """Initialize the exception."""
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(EnvGuardError):
    """Raised when a resource is not found."""

    pass


class EnvFileNotFoundError(NotFoundError):
    """Raised when the environment file to inspect does not exist."""

    pass


class SchemaLoadError(EnvGuardError):
    """Raised when a schema document exists but cannot be loaded."""

    pass


class ExternalToolUnavailableError(EnvGuardError):
    """Raised when git is missing or refuses to produce history."""

    pass


class ScanError(EnvGuardError):
    """Raised when scanning fails."""

    pass


class ConfigurationError(EnvGuardError):
    """Raised when configuration is invalid."""

    pass
