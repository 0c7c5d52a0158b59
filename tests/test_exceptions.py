"""Tests for exception classes."""

import pytest

from typo3_console.exceptions import (
    CliContextError,
    CommandNotEnabledError,
    ConfigurationError,
    DatabaseError,
    EssentialConfigurationMissingError,
    HiddenInputError,
    InvalidValueError,
    MissingInputError,
    ProgressNotStartedError,
    ServiceNotFoundError,
    Typo3ConsoleError,
    UnknownCommandError,
    UnsupportedDriverError,
)


def test_typo3_console_error():
    """Test Typo3ConsoleError base exception."""
    error = Typo3ConsoleError("Test error")
    assert str(error) == "Test error"
    assert isinstance(error, Exception)


@pytest.mark.parametrize(
    "error_class",
    [
        CliContextError,
        MissingInputError,
        HiddenInputError,
        InvalidValueError,
        ProgressNotStartedError,
        UnknownCommandError,
        CommandNotEnabledError,
        ServiceNotFoundError,
        ConfigurationError,
        DatabaseError,
    ],
)
def test_errors_inherit_from_base(error_class):
    """Test every error is a Typo3ConsoleError."""
    error = error_class("message")
    assert str(error) == "message"
    assert isinstance(error, Typo3ConsoleError)


def test_invalid_value_error_is_value_error():
    """Test validators may raise either InvalidValueError or ValueError."""
    with pytest.raises(ValueError):
        raise InvalidValueError("Value is invalid")


def test_configuration_errors():
    """Test configuration error subclasses."""
    assert isinstance(EssentialConfigurationMissingError("x"), ConfigurationError)
    assert isinstance(UnsupportedDriverError("x"), ConfigurationError)
