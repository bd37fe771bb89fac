"""
Standard exit codes and error types for stackrepo commands.

Following Unix/POSIX conventions for command-line tools. Library code
raises the errors below; only the CLI layer turns them into exit codes.
"""
from typing import Optional

# Standard POSIX exit codes
SUCCESS = 0              # Successful termination
GENERAL_ERROR = 1        # General errors
USAGE_ERROR = 2          # Misuse of shell command (wrong arguments, etc.)

# Application-specific exit codes (64-113 are typically available)
CONFIG_ERROR = 66        # Configuration or repository file error
PERMISSION_ERROR = 67    # Insufficient permissions
NETWORK_ERROR = 68       # Index download failed
DATA_ERROR = 70          # Index document format error
INTERRUPTED = 130        # Terminated by Ctrl+C (SIGINT)

# Exit code mappings for common exceptions
EXCEPTION_EXIT_CODES = {
    'FileNotFoundError': GENERAL_ERROR,
    'PermissionError': PERMISSION_ERROR,
    'ConnectionError': NETWORK_ERROR,
    'TimeoutError': NETWORK_ERROR,
    'ValueError': DATA_ERROR,
    'KeyError': DATA_ERROR,
    'KeyboardInterrupt': INTERRUPTED,
}


def get_exit_code_for_exception(exc: Exception) -> int:
    """
    Get the appropriate exit code for an exception.

    Args:
        exc: The exception that occurred

    Returns:
        Appropriate exit code
    """
    if isinstance(exc, CommandError):
        return exc.exit_code
    exc_name = exc.__class__.__name__
    return EXCEPTION_EXIT_CODES.get(exc_name, GENERAL_ERROR)


class CommandError(Exception):
    """
    Base class for errors that map to a specific exit code.
    """
    def __init__(self, message: str, exit_code: int = GENERAL_ERROR):
        super().__init__(message)
        self.exit_code = exit_code


class TransportError(CommandError):
    """Raised when an index cannot be downloaded (network, non-2xx status)."""
    def __init__(self, message: str, url: str, status_code: Optional[int] = None):
        super().__init__(message, NETWORK_ERROR)
        self.url = url
        self.status_code = status_code


class IndexFormatError(CommandError):
    """Raised when a downloaded index is not a valid index document."""
    def __init__(self, url: str, detail: str):
        super().__init__(f"Repository index formatting error in {url}: {detail}", DATA_ERROR)
        self.url = url


class ConfigError(CommandError):
    """Raised when there's a configuration error."""
    def __init__(self, message: str):
        super().__init__(message, CONFIG_ERROR)


class RepositoryFileNotFoundError(ConfigError):
    """Raised when the repository file has not been created yet."""
    def __init__(self, path: str):
        super().__init__(
            f"Repository file does not exist {path}. "
            "Check to make sure 'stackrepo init' has been run."
        )
        self.path = path


class StorageError(CommandError):
    """Raised when a directory or file cannot be created, read or written."""
    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message, GENERAL_ERROR)
        self.path = path


class DuplicateRepositoryError(CommandError):
    """Raised when adding a repository whose name or URL is already configured."""
    def __init__(self, message: str):
        super().__init__(message, USAGE_ERROR)


class RepositoryNotFoundError(CommandError):
    """Raised when a named repository is not configured."""
    def __init__(self, name: str):
        super().__init__(f"Repository {name} is not in the configured list of repositories", USAGE_ERROR)
        self.name = name
