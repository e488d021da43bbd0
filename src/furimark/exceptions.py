#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the furimark library.

Malformed markup never raises: every construct degrades to literal text.
The exceptions below cover the remaining failure classes, namely invalid
configuration, resource exhaustion, failing plugins and values that are
not well-formed nodes.

Exception Hierarchy
-------------------
- FurimarkError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidOptionsError (wrong options class for a parser or renderer)

  - ResourceExhaustedError (pathological input)
    - NestingDepthError (recursion bound exceeded)
    - InputTooLargeError (input size bound exceeded)

  - PluginError (plugin collaborator failures)

  - RenderingError (export of a malformed node)

"""

from typing import Any


class FurimarkError(Exception):
    """Base exception class for all furimark-specific errors.

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


class ValidationError(FurimarkError):
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
    """Exception raised when an options object of the wrong class is supplied.

    Parameters
    ----------
    component_name : str
        Name of the parser or renderer that received invalid options
    expected_type : type
        The expected options class type
    received_type : type
        The actual options class type that was received
    message : str, optional
        Custom error message. If not provided, generates a helpful message

    """

    def __init__(
        self,
        component_name: str,
        expected_type: type,
        received_type: type,
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the invalid options error."""
        if message is None:
            message = (
                f"{component_name} expected options of type '{expected_type.__name__}' "
                f"but received '{received_type.__name__}'."
            )
        super().__init__(
            message, parameter_name="options", parameter_value=received_type, original_error=original_error
        )
        self.component_name = component_name
        self.expected_type = expected_type
        self.received_type = received_type


class ResourceExhaustedError(FurimarkError):
    """Base exception for pathological input that exceeds a resource bound.

    This is the only failure a parse can report for content. Catching it
    lets callers reject adversarial input without crashing.

    """


class NestingDepthError(ResourceExhaustedError):
    """Exception raised when nested blocks or inlines exceed the depth bound.

    Parameters
    ----------
    depth : int or None
        The depth that was reached, or None when the interpreter's own
        recursion limit was hit first
    limit : int
        The configured maximum nesting depth

    """

    def __init__(self, depth: int | None, limit: int, original_error: Exception | None = None):
        """Initialize the nesting depth error."""
        if depth is None:
            message = f"Input nesting exhausted the interpreter recursion limit (configured maximum {limit})"
        else:
            message = f"Nesting depth {depth} exceeds the maximum of {limit}"
        super().__init__(message, original_error=original_error)
        self.depth = depth
        self.limit = limit


class InputTooLargeError(ResourceExhaustedError):
    """Exception raised when the input text exceeds the configured size bound."""

    def __init__(self, length: int, limit: int):
        """Initialize the input size error."""
        super().__init__(f"Input of {length} characters exceeds the maximum of {limit}")
        self.length = length
        self.limit = limit


class PluginError(FurimarkError):
    """Exception raised when a registered plugin fails or returns an unusable value.

    Parameters
    ----------
    message : str
        Description of the failure
    plugin_name : str
        Name the plugin is registered under
    original_error : Exception, optional
        The exception raised by the plugin

    """

    def __init__(self, message: str, plugin_name: str, original_error: Exception | None = None):
        """Initialize the plugin error."""
        super().__init__(message, original_error=original_error)
        self.plugin_name = plugin_name


class RenderingError(FurimarkError):
    """Exception raised when an export strategy receives a value that is not a node.

    Parameters
    ----------
    message : str
        Description of the rendering error
    node_type : str, optional
        Type name of the offending value

    """

    def __init__(self, message: str, node_type: str | None = None, original_error: Exception | None = None):
        """Initialize the rendering error."""
        super().__init__(message, original_error=original_error)
        self.node_type = node_type


__all__ = [
    "FurimarkError",
    "ValidationError",
    "InvalidOptionsError",
    "ResourceExhaustedError",
    "NestingDepthError",
    "InputTooLargeError",
    "PluginError",
    "RenderingError",
]
