"""
Help Messages and Value Reports.

Renders the state of a ParamRegistry as text:
- print_usage: the "Recognized options" help message
- print_values: every parameter with its effective value
- print_unused: run-time supplied keys no component registered

Layout constants (help column, indentation, terminal widths) come from
simparams.state.CFG(); output goes through the rich console wrapper in
simparams.printer.
"""

import sys
from typing import List, TextIO

from ..printer import cons
from ..state import CFG
from .lexer import escape_value
from .names import to_command_line_name
from .registry import REGISTRY, ParamRegistry
from .schema import ParamInfo, ParamKind
from .suggest import format_suggestion
from .tree import get_flattened_key_list

__all__ = [
    'break_lines', 'get_tty_width', 'get_flattened_key_list',
    'format_param_usage', 'print_param_usage', 'print_usage',
    'print_values', 'print_unused',
]


def break_lines(msg: str, indent_width: int, max_width: int) -> str:
    """
    Greedily word-wrap a message.

    Newlines already present in msg are kept. A line that would grow beyond
    max_width is broken at its last whitespace character, which is dropped;
    without whitespace the line is broken in the middle of the word.
    Continuation lines are indented by indent_width spaces.
    """
    result = []
    start = 0       # first character of the line being assembled
    last_break = 0  # last whitespace position in that line, or start
    col = 0
    pos = 0
    while pos < len(msg):
        char = msg[pos]
        if char == '\n':
            result.append(msg[start:pos + 1])
            start = last_break = pos + 1
            col = 0
            pos += 1
            continue

        if char.isspace():
            last_break = pos

        if col >= max_width and pos > start:
            if last_break > start:
                result.append(msg[start:last_break])
                start = last_break + 1
            else:
                result.append(msg[start:pos])
                start = pos
            last_break = start
            pos = start
            result.append("\n" + " " * indent_width)
            col = indent_width
            continue

        pos += 1
        col += 1

    result.append(msg[start:])
    return ''.join(result)


def get_tty_width() -> int:
    """
    Width available for help messages.

    Unbounded when stdout is not a terminal, so that redirected output is
    never wrapped.
    """
    if not cons.is_terminal:
        return CFG().unbounded_width

    return max(CFG().min_tty_width, cons.width)


def format_param_usage(info: ParamInfo, tty_width: int = None) -> str:
    """
    Render the help line of one parameter, e.g.

        --end-time=SCALAR        The time to stop. Default: 1000.0
    """
    if tty_width is None:
        tty_width = get_tty_width()

    message = "    " + to_command_line_name(info.name) + info.kind.usage_hint

    message += "  "
    message = message.ljust(CFG().help_column)

    message += info.usage

    if info.kind is not ParamKind.FLAG:
        if not message.endswith('.'):
            message += '.'
        message += " Default: "
        if info.kind is ParamKind.BOOLEAN:
            message += "false" if info.default_value == "0" else "true"
        elif info.kind is ParamKind.STRING:
            message += f'"{escape_value(info.default_value)}"'
        else:
            message += info.default_value

    return break_lines(message, CFG().help_indent, tty_width) + "\n"


def print_param_usage(info: ParamInfo, stream: TextIO = None) -> None:
    cons.write(format_param_usage(info), stream)


def print_usage(help_preamble: str,
                error_msg: str = "",
                stream: TextIO = None,
                show_all: bool = False,
                registry: ParamRegistry = REGISTRY) -> None:
    """
    Print the help message listing every recognized option.

    Args:
        help_preamble: Text printed before the list of options. If
            non-empty, the -h/--help and --help-all options are listed too.
        error_msg: Printed first, if any.
        stream: Destination; stderr by default.
        show_all: Include hidden parameters.
        registry: The registry whose parameters are listed.
    """
    if stream is None:
        stream = sys.stderr

    tty_width = get_tty_width()

    text = ""
    if error_msg:
        text += error_msg + "\n\n"

    text += break_lines(help_preamble, CFG().preamble_indent, tty_width)
    text += "\n"
    text += "Recognized options:\n"

    if help_preamble:
        # rendered as "-h,--help" and "--help-all" by to_command_line_name()
        text += format_param_usage(ParamInfo(name="h,--help",
                                             usage="Print this help message and exit"), tty_width)
        text += format_param_usage(ParamInfo(name="-help-all",
                                             usage="Print all parameters, including obsolete, "
                                                   "hidden and deprecated ones."), tty_width)

    for name in sorted(registry.params):
        info = registry.params[name]
        if show_all or not info.is_hidden:
            text += format_param_usage(info, tty_width)

    cons.write(text, stream)


def _format_param_list(registry: ParamRegistry, keys: List[str], print_defaults: bool) -> str:
    text = ""
    for key in keys:
        default_value = registry.params[key].default_value
        value = registry.tree.get(key, default_value)
        text += f'{key}="{escape_value(value)}"'
        if print_defaults:
            text += f' # default: "{escape_value(default_value)}"'
        text += "\n"
    return text


def _format_unused(registry: ParamRegistry, keys: List[str], suggest: bool) -> str:
    text = "# [unused run-time specified parameters]\n"
    for key in keys:
        text += f'{key}="{escape_value(registry.tree[key])}"'
        if suggest:
            hint = format_suggestion(registry.suggest(key))
            if hint:
                text += f" # {hint}"
        text += "\n"
    return text


def _unused_keys(registry: ParamRegistry) -> List[str]:
    return [key for key in get_flattened_key_list(registry.tree) if key not in registry.params]


def print_values(stream: TextIO = None, registry: ParamRegistry = REGISTRY) -> None:
    """
    Print the effective value of every parameter.

    Three sections are printed, each only if non-empty: registered
    parameters supplied at run time (with their default for comparison),
    registered parameters left at their default, and supplied keys that
    no one registered.

    Values are escaped like quoted values in parameter files, so every
    entry stays on one line.
    """
    run_time_keys, unknown_keys = [], []
    for key in get_flattened_key_list(registry.tree):
        if key in registry.params:
            run_time_keys.append(key)
        else:
            unknown_keys.append(key)

    compile_time_keys = [name for name in sorted(registry.params) if not registry.tree.has_key(name)]

    text = ""
    if run_time_keys:
        text += "# [known parameters which were specified at run-time]\n"
        text += _format_param_list(registry, run_time_keys, print_defaults=True)

    if compile_time_keys:
        text += "# [parameters which were specified at compile-time]\n"
        text += _format_param_list(registry, compile_time_keys, print_defaults=False)

    if unknown_keys:
        text += _format_unused(registry, unknown_keys, suggest=False)

    cons.write(text, stream)


def print_unused(stream: TextIO = None,
                 registry: ParamRegistry = REGISTRY,
                 suggest: bool = False) -> bool:
    """
    Print the run-time supplied keys that no one registered.

    Args:
        stream: Destination; stdout by default.
        registry: The registry to report on.
        suggest: Append a "did you mean" comment naming similar registered
            parameters to each line.

    Returns:
        True if anything was printed.
    """
    unknown_keys = _unused_keys(registry)
    if not unknown_keys:
        return False

    cons.write(_format_unused(registry, unknown_keys, suggest), stream)
    return True
