#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the mdpeek library.

The rendering engine itself has no failure modes: both emitters are total
functions over well-nested event streams. The exceptions below belong to the
layer around the engine (options validation, theme lookup, configuration
files, document loading and Markdown parsing).

Exception Hierarchy
-------------------
- MdpeekError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidOptionsError (wrong options class for an emitter or parser)
    - InvalidThemeError (unknown theme preset name)

  - ConfigError (configuration file discovery and loading)

  - FileError (document access and decoding)
    - DocumentNotFoundError (file doesn't exist or is not a regular file)
    - DocumentDecodeError (document bytes are not valid UTF-8)

  - ParsingError (Markdown parser failures)

"""

from __future__ import annotations

from typing import Any


class MdpeekError(Exception):
    """Base exception class for all mdpeek-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(MdpeekError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidOptionsError(ValidationError):
    """Exception raised when an emitter or parser receives the wrong options class.

    Parameters
    ----------
    component_name : str
        Name of the component that received invalid options
    expected_type : type
        The expected options class type
    received_type : type
        The actual options class type that was received
    message : str, optional
        Custom error message. If not provided, a message is generated

    """

    def __init__(
        self,
        component_name: str,
        expected_type: type,
        received_type: type,
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the invalid options error with type details."""
        if message is None:
            message = (
                f"Invalid options type for '{component_name}': "
                f"expected {expected_type.__name__}, got {received_type.__name__}"
            )
        super().__init__(
            message,
            parameter_name="options",
            parameter_value=received_type,
            original_error=original_error,
        )
        self.component_name = component_name
        self.expected_type = expected_type
        self.received_type = received_type


class InvalidThemeError(ValidationError):
    """Exception raised when a theme name does not match any preset.

    Parameters
    ----------
    theme_name : str
        The requested theme name
    available : list of str
        Names of the known presets

    """

    def __init__(self, theme_name: str, available: list[str]):
        """Initialize the error with the rejected name and the known presets."""
        message = f"Unknown theme '{theme_name}'. Available themes: {', '.join(available)}"
        super().__init__(message, parameter_name="theme", parameter_value=theme_name)
        self.theme_name = theme_name
        self.available = available


class ConfigError(MdpeekError):
    """Exception raised when a configuration file cannot be read or parsed.

    Parameters
    ----------
    message : str
        Description of the problem
    config_path : str, optional
        Path of the offending configuration file

    """

    def __init__(self, message: str, config_path: str | None = None, original_error: Exception | None = None):
        """Initialize the configuration error."""
        super().__init__(message, original_error=original_error)
        self.config_path = config_path


class FileError(MdpeekError):
    """Base exception for document access problems.

    Parameters
    ----------
    message : str
        Description of the problem
    file_path : str, optional
        Path of the document

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the file error."""
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class DocumentNotFoundError(FileError):
    """Exception raised when the document does not exist or is not a regular file."""

    def __init__(self, file_path: str, message: str | None = None):
        """Initialize with the missing path."""
        super().__init__(message or f"'{file_path}' is not found.", file_path=file_path)


class DocumentDecodeError(FileError):
    """Exception raised when document bytes are not valid UTF-8."""

    def __init__(self, file_path: str, original_error: Exception | None = None):
        """Initialize with the undecodable path."""
        super().__init__(
            f"'{file_path}' is not valid UTF-8 text.",
            file_path=file_path,
            original_error=original_error,
        )


class ParsingError(MdpeekError):
    """Exception raised when the Markdown parser fails unexpectedly."""

    pass


__all__ = [
    "MdpeekError",
    "ValidationError",
    "InvalidOptionsError",
    "InvalidThemeError",
    "ConfigError",
    "FileError",
    "DocumentNotFoundError",
    "DocumentDecodeError",
    "ParsingError",
]
