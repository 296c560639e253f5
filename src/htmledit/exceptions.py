#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the htmledit library.

This module defines specialized exception classes for the error conditions
that can occur while parsing, selecting, editing and serializing node trees.

Exception Hierarchy
-------------------
- HtmlEditError (base exception)

  - ValidationError (parameter/option validation)
    - SelectorError (malformed or unsupported selector text)

  - ParsingError (markup could not be turned into a node tree)

  - EditError (a replace transform failed)

  - DependencyError (missing optional tree builder packages)

"""

from __future__ import annotations

import sys
import traceback
from typing import Any

from htmledit.constants import EDIT_ERROR_MESSAGE


class HtmlEditError(Exception):
    """Base exception class for all htmledit-specific errors.

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


class ValidationError(HtmlEditError):
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


class SelectorError(ValidationError):
    """Exception raised when selector text cannot be compiled.

    Parameters
    ----------
    message : str
        Description of the problem
    selector : str, optional
        The offending selector text
    position : int, optional
        Offset in ``selector`` where the problem was detected

    """

    def __init__(self, message: str, selector: str | None = None, position: int | None = None):
        """Initialize the selector error with the offending text."""
        super().__init__(message, parameter_name="selector", parameter_value=selector)
        self.selector = selector
        self.position = position


class ParsingError(HtmlEditError):
    """Exception raised when markup cannot be parsed into a node tree.

    Parameters
    ----------
    message : str
        Description of the parsing failure
    original_error : Exception, optional
        The underlying exception raised by the tree builder

    """


class EditError(HtmlEditError):
    """Opaque failure raised when a ``replace_with`` transform fails.

    The error carries no structured kind: its message is always
    ``"Unexpected error in HTML Editor"``. The only extra information is the
    call-site where the failure originated, kept for diagnostics.

    When wrapping another exception, the location is taken from the innermost
    frame of that exception's traceback. Otherwise it is the frame that
    constructed the error (or ``stacklevel`` frames above it).

    Parameters
    ----------
    original_error : Exception, optional
        The exception raised by the transform, if it was not an EditError
    stacklevel : int, default 1
        Number of frames above the constructor to record as the call-site

    Attributes
    ----------
    file : str
        Source file of the originating call-site
    line : int
        Line number of the originating call-site
    function : str
        Function name of the originating call-site

    Examples
    --------
    >>> def transform(element):
    ...     if not element.children:
    ...         raise EditError()
    ...     return element.children[0]

    """

    def __init__(self, original_error: Exception | None = None, *, stacklevel: int = 1):
        """Initialize the error and record where it originated."""
        super().__init__(EDIT_ERROR_MESSAGE, original_error=original_error)
        self.file, self.line, self.function = _locate(original_error, stacklevel + 1)

    def __str__(self) -> str:
        return EDIT_ERROR_MESSAGE

    def __repr__(self) -> str:
        return f"EditError(file={self.file!r}, line={self.line}, function={self.function!r})"


def _locate(error: Exception | None, stacklevel: int) -> tuple[str, int, str]:
    if error is not None and error.__traceback__ is not None:
        frame_summary = traceback.extract_tb(error.__traceback__)[-1]
        return frame_summary.filename, frame_summary.lineno or 0, frame_summary.name

    frame = sys._getframe(stacklevel)
    return frame.f_code.co_filename, frame.f_lineno, frame.f_code.co_name


class DependencyError(HtmlEditError):
    """Exception raised when a required optional package is not available.

    Parameters
    ----------
    feature_name : str
        Name of the feature requiring the packages (e.g. "lxml tree builder")
    missing_packages : list[tuple[str, str]]
        List of (package_name, version_spec) tuples for missing packages
    message : str, optional
        Custom error message. If not provided, generates a helpful message
    original_error : Exception, optional
        The underlying error raised while loading the feature

    Attributes
    ----------
    feature_name : str
        The feature that has missing dependencies
    missing_packages : list[tuple[str, str]]
        Packages that need to be installed

    """

    def __init__(
        self,
        feature_name: str,
        missing_packages: list[tuple[str, str]],
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the dependency error with package details."""
        if message is None:
            message = f"{feature_name} is not available"
            if missing_packages:
                pkg_list = ", ".join(f"'{name}{spec}'" if spec else f"'{name}'" for name, spec in missing_packages)
                packages_str = " ".join(f'"{name}{spec}"' if spec else name for name, spec in missing_packages)
                message = f"{feature_name} requires the following packages: {pkg_list}"
                message += f"\nInstall with: pip install --upgrade {packages_str}"

        super().__init__(message, original_error=original_error)
        self.feature_name = feature_name
        self.missing_packages = missing_packages
