"""
Error types raised by excludejar.
"""


class ExcludeJarError(RuntimeError):
    """Base class for every failure surfaced by an excludejar run."""


class ConfigurationError(ExcludeJarError):
    """Raised when the run options or the configuration file are unusable."""


class ArchiveOperationError(ExcludeJarError):
    """Raised when reading, extracting or packaging an archive fails."""

    PREFIX = "File IO Error: "

    def __init__(self, cause: BaseException):
        super().__init__(f"{self.PREFIX}{cause}")
        self.cause = cause


class CleanupError(ExcludeJarError):
    """Raised when the workspace directory cannot be removed."""
