#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the livefind library.

This module defines the exception classes raised by the host document models,
the option layer and the command line. The search engine itself never raises
for user input: every query is literal text, operations on an empty result set
are no-ops, and stale deferred callbacks are guarded. The exceptions below
therefore describe caller mistakes rather than search outcomes.

Exception Hierarchy
-------------------
- LiveFindError (base exception)

  - ValidationError (option and configuration validation)

  - PositionError (positions or ranges that do not address text)

  - MutationError (steps that cannot be applied to a document)

  - ParsingError (malformed JSON documents or configuration files)

"""

from typing import Any


class LiveFindError(Exception):
    """Base exception class for all livefind-specific errors.

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


class ValidationError(LiveFindError):
    """Exception raised for invalid option values or configuration entries.

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

    Attributes
    ----------
    parameter_name : str or None
        The name of the problematic parameter
    parameter_value : any
        The value that caused the error

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


class PositionError(LiveFindError):
    """Exception raised when a position or range does not address document text.

    Raised for positions outside ``[0, content_size]``, for inverted ranges, and
    for text edits on a tree document that are not contained in a single text
    leaf.

    Parameters
    ----------
    message : str
        Description of the addressing problem
    start : int, optional
        Start of the offending range
    end : int, optional
        End of the offending range
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        start: int | None = None,
        end: int | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the position error with the offending range."""
        super().__init__(message, original_error=original_error)
        self.start = start
        self.end = end


class MutationError(LiveFindError):
    """Exception raised when a step cannot be applied to a document.

    Parameters
    ----------
    message : str
        Description of the failed mutation
    step : object, optional
        The step that could not be applied
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, step: object | None = None, original_error: Exception | None = None):
        """Initialize the mutation error."""
        super().__init__(message, original_error=original_error)
        self.step = step


class ParsingError(LiveFindError):
    """Exception raised when a serialized document or config file cannot be read.

    Parameters
    ----------
    message : str
        Description of the parsing failure
    parsing_stage : str, optional
        The stage of parsing where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the parsing failure

    Attributes
    ----------
    parsing_stage : str or None
        Where in the parsing process the error occurred

    """

    def __init__(self, message: str, parsing_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the parsing error."""
        super().__init__(message, original_error)
        self.parsing_stage = parsing_stage


__all__ = [
    "LiveFindError",
    "MutationError",
    "ParsingError",
    "PositionError",
    "ValidationError",
]
