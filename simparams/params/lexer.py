"""
Tokenizer for "key=value" text.

Used for command line tokens ("--end-time=1e3") and for the lines of
parameter files ('EndTime = 1e3  # seconds'). Every function consumes a
prefix of its input and returns the token together with the unconsumed
remainder, so callers chain them:

    key, rest = parse_key(line)
    rest = remove_leading_space(rest)
"""

from typing import Tuple

from .errors import ParamSyntaxError, UnterminatedStringError, UnknownEscapeError


ESCAPES = {
    'n':  '\n',
    'r':  '\r',
    't':  '\t',
    '"':  '"',
    '\\': '\\',
}

UNESCAPES = {char: "\\" + esc for esc, char in ESCAPES.items()}


def remove_leading_space(s: str) -> str:
    return s.lstrip()


def parse_key(s: str) -> Tuple[str, str]:
    """Consume characters up to the first whitespace or '='."""
    for i, char in enumerate(s):
        if char.isspace() or char == '=':
            return s[:i], s[i:]
    return s, ""


def parse_unquoted_value(s: str) -> Tuple[str, str]:
    """Consume characters up to the next whitespace."""
    for i, char in enumerate(s):
        if char.isspace():
            return s[:i], s[i:]
    return s, ""


def parse_quoted_value(s: str, error_prefix: str = "") -> Tuple[str, str]:
    """
    Parse a double quoted string with C-style escapes.

    Args:
        s: Text starting with the opening quote.
        error_prefix: Prepended to error messages (e.g. "case.ini:3: ").

    Returns:
        The unescaped value and the text after the closing quote.

    Raises:
        ParamSyntaxError: If s does not start with a quote.
        UnknownEscapeError: For escapes other than \\n \\r \\t \\" and \\\\.
        UnterminatedStringError: If no closing quote is found.
    """
    if not s or s[0] != '"':
        raise ParamSyntaxError(f"{error_prefix}Expected quoted string")

    result = []
    i = 1
    while i < len(s):
        char = s[i]
        if char == '\\':
            i += 1
            if i >= len(s):
                raise UnterminatedStringError(f"{error_prefix}Unexpected end of quoted string")
            if s[i] not in ESCAPES:
                raise UnknownEscapeError(f"{error_prefix}Unknown escape character '\\{s[i]}'")
            result.append(ESCAPES[s[i]])
        elif char == '"':
            return ''.join(result), s[i+1:]
        else:
            result.append(char)
        i += 1

    raise UnterminatedStringError(f"{error_prefix}Unterminated quoted string")


def escape_value(s: str) -> str:
    """
    Inverse of parse_quoted_value() without the surrounding quotes:
    'a<TAB>"b"' becomes 'a\\t\\"b\\"'.
    """
    return ''.join(UNESCAPES.get(char, char) for char in s)
