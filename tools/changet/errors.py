"""Exception hierarchy for changet."""


class ChangetError(Exception):
    """Base exception for all changet errors."""


class InvalidInput(ChangetError):
    """Raised when a pasted thread link is not a valid thread URL."""


class InvalidOutputPath(ChangetError):
    """Raised when the requested output directory is missing or not a directory."""


class NetworkError(ChangetError):
    """Raised when a request to the API or media host fails."""


class ThreadNotFoundError(NetworkError):
    """Raised when the thread metadata endpoint answers 404."""


class DecodeError(ChangetError):
    """Raised when thread metadata does not have the expected shape."""


class FilesystemError(ChangetError):
    """Raised when a directory or file cannot be created or written."""


class ConfigError(ChangetError):
    """Raised when a setting from the environment cannot be parsed."""
