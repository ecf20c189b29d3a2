"""
Errors Raised by the Runtime Parameter System.

Every failure of the parameter system derives from ParamError, which is a
SimParamsException. Most classes also derive from the built-in exception that
describes them best (ValueError, RuntimeError, LookupError) so that callers
which do not know about this package can still catch them sensibly.

Error Message Format
--------------------
Messages follow the same structure throughout:
- Parameter name in single quotes: 'ParamName'
- Clear description of the problem
- Current value if relevant: got <value>

Examples:
- "Parameter 'EndTime' registered twice with non-matching characteristics"
- "Unknown parameter 'EndTme'. Did you mean 'EndTime'?"
- "'MaxIterations' must be an integer, got 'ten'"
"""

from typing import Any, List, Optional

from ..common import SimParamsException


class ParamError(SimParamsException):
    """Base class of all runtime parameter errors."""


class InvalidNameError(ParamError, ValueError):
    """A parameter name violates the identifier rules."""


class RegistrationStateError(ParamError, RuntimeError):
    """An operation was called in the wrong phase of the registry lifecycle."""


class RegistrationClosedError(RegistrationStateError):
    """Registration was attempted after end_registration()."""


class RegistrationOpenError(RegistrationStateError):
    """Values were queried before end_registration()."""


class AlreadyClosedError(RegistrationStateError):
    """end_registration() was called a second time."""


class UnknownParameterError(ParamError, LookupError):
    """A parameter was used without prior registration."""

    def __str__(self) -> str:
        # LookupError would otherwise repr() the message like a KeyError.
        return str(self.args[0]) if self.args else ""


class ConflictingRegistrationError(ParamError, ValueError):
    """The same name was registered with different characteristics."""


class DuplicateKeyError(ParamError):
    """A key was supplied more than once by the same source."""


class DuplicateKeyInFileError(DuplicateKeyError):
    pass


class DuplicateCommandLineKeyError(DuplicateKeyError):
    pass


class ParamSyntaxError(ParamError, ValueError):
    """Malformed parameter file line, command line token or quoted string."""


class UnterminatedStringError(ParamSyntaxError):
    pass


class UnknownEscapeError(ParamSyntaxError):
    pass


class ValueParseError(ParamError, ValueError):
    """Stored text cannot be converted to the declared kind."""


def format_param(name: str) -> str:
    """Format a parameter name for error messages."""
    return f"'{name}'"


def format_value(value: Any) -> str:
    """Format a value for error messages."""
    if isinstance(value, str):
        return f"'{value}'"
    return str(value)


def type_error(param: str, expected_type: str, got: Any) -> str:
    """
    Create a type mismatch error message.

    Args:
        param: Parameter name
        expected_type: Expected type description
        got: Actual value received

    Returns:
        Formatted error message.
    """
    return f"{format_param(param)} must be {expected_type}, got {format_value(got)}"


def unknown_param_error(param: str, suggestions: Optional[List[str]] = None) -> str:
    """
    Create an error message for an unknown parameter with suggestions.

    Args:
        param: The unknown parameter name.
        suggestions: Optional list of similar registered parameter names.

    Returns:
        Formatted error message with "Did you mean?" if suggestions available.
    """
    base_msg = f"Unknown parameter {format_param(param)}"
    if suggestions:
        if len(suggestions) == 1:
            return f"{base_msg}. Did you mean {format_param(suggestions[0])}?"
        quoted = [format_param(s) for s in suggestions]
        return f"{base_msg}. Did you mean one of: {', '.join(quoted)}?"
    return base_msg
