from enum import Enum
from typing import List, Optional


class ErrorKind(Enum):
    """Closed set of error classes reported to the user."""

    CONFIGURATION = "configuration"
    CONTAINER_FAULT = "container-fault"
    TRANSPORT = "transport"
    BUILD_TOOL = "build-tool"


class CPortError(Exception):
    """Base exception for all application-specific errors."""

    kind: ErrorKind = ErrorKind.TRANSPORT


# --- 1. Errors related to loading and parsing the configuration file ---
class ConfigurationError(CPortError):
    """Base class for errors encountered while finding, reading, or parsing config files."""

    kind = ErrorKind.CONFIGURATION


class ConfigFileMissingError(ConfigurationError):
    """Raised when the configuration TOML file cannot be found."""

    pass


class ConfigReadError(ConfigurationError):
    """Raised when the configuration file exists but cannot be read."""

    pass


class ConfigParsingError(ConfigurationError):
    """Raised when a TOML configuration file is syntactically incorrect."""

    pass


class ConfigValidationError(ConfigurationError):
    """Raised when the configuration fails structural validation (e.g., Pydantic)."""

    pass


# --- 2. Errors raised while talking to the container runtime ---
class ContainerError(CPortError):
    """Base class for failures of the container runtime."""

    kind = ErrorKind.TRANSPORT


class ContainerFault(ContainerError):
    """Raised when the runtime rejects an operation with a structured fault."""

    kind = ErrorKind.CONTAINER_FAULT

    def __init__(self, code: Optional[int], message: str):
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")


class TransportError(ContainerError):
    """Raised for any other failure communicating with the runtime."""

    kind = ErrorKind.TRANSPORT


# --- 3. Errors of the native build tool running inside the container ---
class BuildToolError(CPortError):
    """Raised when a command inside the container exits with a non-zero status."""

    kind = ErrorKind.BUILD_TOOL

    def __init__(self, phase: str, exit_code: int, argv: List[str]):
        self.phase = phase
        self.exit_code = exit_code
        self.argv = list(argv)
        super().__init__(
            f"{phase} step failed with exit code {exit_code}: {' '.join(self.argv)}"
        )
