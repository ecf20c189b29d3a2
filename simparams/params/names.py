"""
Conversion between command line spellings and canonical parameter names.

Parameters are identified by CamelCase names ("MaxTimeStepSize"). On the
command line and in parameter files they may be spelled in kebab-case
("max-time-step-size"); transform_key() maps the latter onto the former and
to_command_line_name() renders a canonical name for help output.
"""

import string

from .errors import InvalidNameError


LETTERS       = frozenset(string.ascii_letters)
ALPHANUMERICS = frozenset(string.ascii_letters + string.digits)


def transform_key(s: str, capitalize_first: bool, error_prefix: str = "") -> str:
    """
    Validate a parameter name and convert it to its canonical form.

    Args:
        s: Raw name, e.g. "max-iterations" or "MaxIterations".
        capitalize_first: Upper-case the first letter. Names read from the
            command line or from files use this to match CamelCase
            declarations.
        error_prefix: Prepended to error messages (e.g. "case.ini:3: ").

    Returns:
        The canonical name.

    Raises:
        InvalidNameError: If the name is empty, does not start with a
            letter, or contains characters other than letters, digits and
            hyphens that precede a letter.
    """
    if not s:
        raise InvalidNameError(f"{error_prefix}Empty parameter names are invalid")

    if s[0] not in LETTERS:
        raise InvalidNameError(f"{error_prefix}Parameter name '{s}' is invalid: "
                               "First character must be a letter")

    result = [s[0].upper() if capitalize_first else s[0]]

    i = 1
    while i < len(s):
        if s[i] == '-':
            i += 1
            if i >= len(s) or s[i] not in LETTERS:
                raise InvalidNameError(f"{error_prefix}Invalid parameter name '{s}'")
            result.append(s[i].upper())
        elif s[i] not in ALPHANUMERICS:
            raise InvalidNameError(f"{error_prefix}Invalid parameter name '{s}'")
        else:
            result.append(s[i])
        i += 1

    return ''.join(result)


def to_command_line_name(name: str) -> str:
    """
    Render a canonical name as a long option: "MaxIterations" -> "--max-iterations".

    A hyphen is inserted before every upper-case letter (including the first)
    and everything is lower-cased.
    """
    result = "-"
    for char in name:
        if char.isupper():
            result += "-"
        result += char.lower()
    return result
