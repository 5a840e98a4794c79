"""Shared exceptions module."""

from typing import Optional, Sequence


class ProviderRuntimeException(Exception):
    """Base exception for the provider runtime."""

    def __init__(self, message: Optional[str] = "Provider runtime error"):
        """Create a new ProviderRuntimeException instance.

        Args:
        ----
            message (str, optional): The error message. Has default message.

        """
        self.message = message
        super().__init__(self.message)


class ConfigurationError(ProviderRuntimeException):
    """Base class for fatal provider configuration errors raised during bootstrap."""

    def __init__(self, registrar_name: str, path: str, message: str):
        """Create a new ConfigurationError instance.

        Args:
        ----
            registrar_name (str): Class name of the registrar being processed.
            path (str): Configuration path the registrar reads from.
            message (str): The error message.

        """
        self.registrar_name = registrar_name
        self.path = path
        super().__init__(message)


class ConfigurationMissingError(ConfigurationError):
    """Raised when a required provider configuration section does not exist."""

    def __init__(self, registrar_name: str, path: str):
        """Create a new ConfigurationMissingError instance.

        Args:
        ----
            registrar_name (str): Class name of the registrar being processed.
            path (str): The configuration path that was not found.

        """
        super().__init__(
            registrar_name,
            path,
            f"Missing required configuration for '{registrar_name}' at '{path}'.",
        )


class ConfigurationInvalidError(ConfigurationError):
    """Raised when a provider section exists but cannot be bound to its settings type."""

    def __init__(self, registrar_name: str, path: str, found_keys: Sequence[str]):
        """Create a new ConfigurationInvalidError instance.

        Args:
        ----
            registrar_name (str): Class name of the registrar being processed.
            path (str): The configuration path that failed to bind.
            found_keys (Sequence[str]): ``key=value`` / ``key=[section]`` pairs
                found directly under ``path``.

        """
        self.found_keys = list(found_keys)
        super().__init__(
            registrar_name,
            path,
            f"Invalid configuration for '{registrar_name}' - section exists but cannot be "
            f"bound to settings. Path: '{path}'. Found keys: {', '.join(self.found_keys)}",
        )


class ConfigurationFileError(ProviderRuntimeException):
    """Raised when a configuration file cannot be read or parsed."""

    def __init__(self, path: str, message: Optional[str] = None):
        """Create a new ConfigurationFileError instance.

        Args:
        ----
            path (str): The offending file.
            message (str, optional): Detail about the failure.

        """
        self.path = path
        super().__init__(message or f"Could not load configuration file '{path}'")


class ConfigurationFileNotFoundError(ConfigurationFileError):
    """Raised when a non-optional configuration file does not exist."""

    def __init__(self, path: str):
        """Create a new ConfigurationFileNotFoundError instance."""
        super().__init__(path, f"Configuration file '{path}' was not found and is not optional")


class ServiceRegistrationError(ProviderRuntimeException):
    """Raised when a service registration call is malformed."""

    pass
