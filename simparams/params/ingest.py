"""
Reading Parameter Values from the Command Line and from Parameter Files.

Command line
------------
Parameters are given as long options, "--max-iterations=20". The name is
converted to its canonical form ("MaxIterations"). Tokens that are not long
options are passed to a positional argument handler.

Parameter files
---------------
INI-style files with one "key = value" pair per line:

    # comment
    ; comment
    end-time = 1e3          # trailing comments are allowed
    OutputDir = "results/run 1"

Quoted values support the escapes \\n \\r \\t \\" and \\\\.
"""

import sys
from typing import Callable, List, Set, Tuple

from ..common import file_read_lines
from .errors import DuplicateCommandLineKeyError, DuplicateKeyInFileError, ParamError, ParamSyntaxError
from .lexer import parse_key, parse_quoted_value, parse_unquoted_value, remove_leading_space
from .names import LETTERS, transform_key
from .registry import REGISTRY, ParamRegistry
from .usage import print_usage

# Returned by parse_command_line_options() when help was printed
HELP_CALLED = "Help called"

SetValue = Callable[[str, str], None]

# (set_value, seen_keys, args, index, num_positional) -> (num_consumed, error_msg)
PositionalHandler = Callable[[SetValue, Set[str], List[str], int, int], Tuple[int, str]]


def no_positional_parameters(set_value: SetValue,  # pylint: disable=unused-argument
                             seen_keys: Set[str],  # pylint: disable=unused-argument
                             args: List[str],
                             index: int,
                             num_positional: int) -> Tuple[int, str]:  # pylint: disable=unused-argument
    """Positional argument handler that rejects every positional argument."""
    return 0, f'Illegal parameter "{args[index]}".'


def _parse_long_option(arg: str, argno: int, seen_keys: Set[str]) -> Tuple[str, str]:
    if arg[2] not in LETTERS:
        raise ParamSyntaxError(f"Parameter name of argument {argno} ('{arg}') "
                               "is invalid because it does not start with a letter.")

    key, rest = parse_key(arg[2:])
    name = transform_key(key, capitalize_first=True)

    if name in seen_keys:
        raise DuplicateCommandLineKeyError(
            f"Parameter '{name}' specified multiple times as a command line parameter"
        )
    seen_keys.add(name)

    if not rest or rest[0] != '=':
        raise ParamSyntaxError(f"Parameter '{name}' is missing a value. Please use {arg}=value.")

    return name, rest[1:]


def _parse_command_line(args: List[str],
                        positional_handler: PositionalHandler,
                        registry: ParamRegistry) -> None:
    seen_keys: Set[str] = set()
    num_positional = 0

    i = 0
    while i < len(args):
        arg = args[i]

        # All non-positional command line options need to start with "--"
        if len(arg) < 4 or not arg.startswith("--"):
            num_handled, error_msg = positional_handler(registry.set_value, seen_keys,
                                                        args, i, num_positional)
            if num_handled < 1:
                raise ParamSyntaxError(error_msg)

            num_positional += 1
            i += num_handled
            continue

        # argument numbers are counted like sys.argv, which starts with the program
        name, value = _parse_long_option(arg, i + 1, seen_keys)
        registry.set_value(name, value)
        i += 1


def parse_command_line_options(args: List[str],
                               help_preamble: str = "",
                               positional_handler: PositionalHandler = no_positional_parameters,
                               registry: ParamRegistry = REGISTRY) -> str:
    """
    Parse the parameters given on the command line.

    Args:
        args: The command line arguments without the program name,
            i.e. sys.argv[1:].
        help_preamble: If non-empty, -h, --help and --help-all print the
            help message (preceded by this text) to stdout, and errors are
            printed to stderr along with the help message.
        positional_handler: Called for every argument that is not a long
            option. It returns how many arguments it consumed and an error
            message; consuming none aborts parsing.
        registry: The registry that receives the values.

    Returns:
        An empty string on success, HELP_CALLED if help was printed,
        otherwise a description of the first error. Values parsed before the
        error are kept.
    """
    if help_preamble:
        for arg in args:
            if arg in ("-h", "--help"):
                print_usage(help_preamble, stream=sys.stdout, registry=registry)
                return HELP_CALLED
            if arg == "--help-all":
                print_usage(help_preamble, stream=sys.stdout, show_all=True, registry=registry)
                return HELP_CALLED

    try:
        _parse_command_line(args, positional_handler, registry)
    except ParamError as exc:
        if help_preamble:
            print_usage(help_preamble, str(exc), stream=sys.stderr, registry=registry)
        return str(exc)

    return ""


def _parse_line(line: str, error_prefix: str) -> Tuple[str, str]:
    key, rest = parse_key(line)
    key = transform_key(key, capitalize_first=True, error_prefix=error_prefix)

    rest = remove_leading_space(rest)
    if not rest or rest[0] != '=':
        raise ParamSyntaxError(f"{error_prefix}Syntax error, expecting 'key=value'")

    rest = remove_leading_space(rest[1:])
    if not rest or rest[0] in '#;':
        raise ParamSyntaxError(f"{error_prefix}Syntax error, expecting 'key=value'")

    if rest[0] == '"':
        value, rest = parse_quoted_value(rest, error_prefix)
    else:
        value, rest = parse_unquoted_value(rest)

    # only a comment may follow the value
    rest = remove_leading_space(rest)
    if rest and rest[0] not in '#;':
        raise ParamSyntaxError(f"{error_prefix}Syntax error, expecting 'key=value'")

    return key, value


def parse_parameter_file(filename: str,
                         overwrite: bool = True,
                         registry: ParamRegistry = REGISTRY) -> None:
    """
    Read parameter values from an INI-style file.

    Args:
        filename: Path of the parameter file.
        overwrite: Replace values already present in the registry (e.g. from
            the command line). If False, only keys not yet set are stored.
        registry: The registry that receives the values.

    Raises:
        SimParamsException: If the file cannot be read.
        DuplicateKeyInFileError: If a key appears twice in the file.
        ParamSyntaxError: For malformed lines; the message starts with
            "<filename>:<line>: ".
        InvalidNameError: For malformed keys.
    """
    seen_keys: Set[str] = set()

    for lineno, line in enumerate(file_read_lines(filename), start=1):
        error_prefix = f"{filename}:{lineno}: "

        line = remove_leading_space(line)
        if not line or line[0] in '#;':
            continue

        key, value = _parse_line(line, error_prefix)

        if key in seen_keys:
            raise DuplicateKeyInFileError(
                f"{error_prefix}Parameter '{key}' seen multiple times in the same file"
            )
        seen_keys.add(key)

        if overwrite or not registry.tree.has_key(key):
            registry.set_value(key, value)
