"""Exception hierarchy for console operations."""


class Typo3ConsoleError(Exception):
    """Base exception for console operations."""

    pass


class CliContextError(Typo3ConsoleError):
    """Interactive input requested without a CLI context."""

    pass


class MissingInputError(Typo3ConsoleError):
    """Input stream ended while waiting for an answer."""

    pass


class HiddenInputError(Typo3ConsoleError):
    """Response cannot be hidden and fallback is disabled."""

    pass


class InvalidValueError(Typo3ConsoleError, ValueError):
    """Answer rejected by a validator or a choice constraint."""

    pass


class ProgressNotStartedError(Typo3ConsoleError):
    """Progress changed before progress_start()."""

    pass


class UnknownCommandError(Typo3ConsoleError):
    """Command identifier is not known."""

    pass


class CommandNotEnabledError(Typo3ConsoleError):
    """Command exists but cannot run in the current state."""

    pass


class ServiceNotFoundError(Typo3ConsoleError):
    """Container has no service for the requested type."""

    pass


class ConfigurationError(Typo3ConsoleError):
    """Base exception for local configuration problems."""

    pass


class EssentialConfigurationMissingError(ConfigurationError):
    """Essential configuration (database connection) is missing."""

    pass


class UnsupportedDriverError(ConfigurationError):
    """Database driver not supported."""

    pass


class DatabaseError(Typo3ConsoleError):
    """Database connection or statement failed."""

    pass
