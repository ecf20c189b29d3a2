"""
Unit tests for params/usage.py module.

Tests line breaking, help messages and the value reports.
"""

import io
import unittest
from unittest.mock import patch

from ..params.lexer import parse_quoted_value
from ..params.registry import ParamRegistry
from ..params.schema import ParamDef, ParamInfo, ParamKind
from ..params.usage import (
    break_lines,
    format_param_usage,
    get_flattened_key_list,
    print_param_usage,
    print_unused,
    print_usage,
    print_values,
)

EndTime = ParamDef("EndTime", 100.0)
MaxIterations = ParamDef("MaxIterations", 20)
EnableGravity = ParamDef("EnableGravity", False)
OutputDir = ParamDef("OutputDir", "./output")
SecretKnob = ParamDef("SecretKnob", 1)

WIDE = 10*1000


def _lines_between_breaks(text: str):
    return text.split("\n")


class TestBreakLines(unittest.TestCase):
    """Tests for break_lines function."""

    def test_short_text_unchanged(self):
        self.assertEqual(break_lines("hello world", 2, 80), "hello world")

    def test_breaks_at_whitespace(self):
        self.assertEqual(break_lines("aaa bbb ccc", 0, 5), "aaa\nbbb\nccc")

    def test_continuation_indent(self):
        self.assertEqual(break_lines("aaa bbb ccc", 2, 6), "aaa\n  bbb\n  ccc")

    def test_force_break_without_whitespace(self):
        self.assertEqual(break_lines("abcdefghij", 0, 4), "abcd\nefgh\nij")

    def test_newlines_preserved(self):
        text = "first line\n\nthird\n"
        self.assertEqual(break_lines(text, 4, 80), text)

    def test_column_resets_after_newline(self):
        self.assertEqual(break_lines("abcd\nefgh", 0, 4), "abcd\nefgh")

    def test_long_word_after_newline(self):
        """Characters right after a newline are never dropped."""
        result = break_lines("x\nabcdefgh", 0, 4)
        self.assertEqual(result.replace("\n", ""), "xabcdefgh")

    def test_line_width_bound(self):
        """No line exceeds max_width when whitespace is available."""
        text = ("The relative tolerance of the Newton solver, i.e. the maximum "
                "allowed reduction of the residual\nbefore the step is accepted "
                "and the time step size is increased by the controller.")
        for width in [20, 33, 50]:
            result = break_lines(text, 4, width)
            for line in _lines_between_breaks(result):
                self.assertLessEqual(len(line), width, repr(line))
            # author supplied newline kept
            self.assertIn("residual\n", result)

    def test_words_preserved(self):
        text = "one two three four five six seven eight nine ten"
        result = break_lines(text, 3, 12)
        self.assertEqual(result.split(), text.split())

    def test_indent_wider_than_width_terminates(self):
        result = break_lines("abc def ghi", 10, 4)
        self.assertEqual("".join(result.split()), "abcdefghi")


class TestFlattenedKeys(unittest.TestCase):

    def test_dotted_paths(self):
        reg = ParamRegistry()
        reg.set_value("EndTime", "1")
        reg.set_value("Newton.Tolerance", "1e-8")
        reg.set_value("Newton.LineSearch.Steps", "3")
        reg.set_value("Newton.MaxIterations", "5")

        self.assertEqual(get_flattened_key_list(reg.tree), [
            "EndTime",
            "Newton.Tolerance",
            "Newton.MaxIterations",
            "Newton.LineSearch.Steps",
        ])


class TestParamUsage(unittest.TestCase):
    """Tests for format_param_usage function."""

    def test_scalar(self):
        info = ParamInfo("EndTime", ParamKind.SCALAR, "The end time", "100.0")
        line = format_param_usage(info, WIDE)

        self.assertEqual(line, "    --end-time=SCALAR".ljust(50) + "The end time. Default: 100.0\n")

    def test_description_column(self):
        info = ParamInfo("MaxIterations", ParamKind.INTEGER, "Maximum iterations.", "20")
        line = format_param_usage(info, WIDE)

        self.assertEqual(line.index("Maximum"), 50)
        self.assertTrue(line.endswith("Maximum iterations. Default: 20\n"))

    def test_long_option_keeps_two_spaces(self):
        info = ParamInfo("AVeryLongParameterNameThatFillsTheColumn", ParamKind.INTEGER, "Text", "1")
        line = format_param_usage(info, WIDE)

        self.assertIn("=INTEGER  Text.", line)

    def test_boolean_default(self):
        info = ParamInfo("EnableGravity", ParamKind.BOOLEAN, "Gravity", "0")
        self.assertTrue(format_param_usage(info, WIDE).endswith("Default: false\n"))

        info.default_value = "1"
        self.assertTrue(format_param_usage(info, WIDE).endswith("Default: true\n"))

    def test_string_default_quoted(self):
        info = ParamInfo("OutputDir", ParamKind.STRING, "Where to write", "./output")
        line = format_param_usage(info, WIDE)

        self.assertIn("--output-dir=STRING", line)
        self.assertTrue(line.endswith('Default: "./output"\n'))

    def test_string_default_escaped(self):
        info = ParamInfo("Separator", ParamKind.STRING, "Column separator", "\t")
        self.assertTrue(format_param_usage(info, WIDE).endswith('Default: "\\t"\n'))

    @patch("simparams.params.usage.get_tty_width", return_value=WIDE)
    def test_print_param_usage(self, _):
        info = ParamInfo("PrintVersion", usage="Print the version")
        out = io.StringIO()
        print_param_usage(info, out)

        self.assertEqual(out.getvalue(), "    --print-version".ljust(50) + "Print the version\n")

    def test_flag_has_no_type_or_default(self):
        info = ParamInfo("PrintVersion", ParamKind.FLAG, "Print the version")
        line = format_param_usage(info, WIDE)

        self.assertEqual(line, "    --print-version".ljust(50) + "Print the version\n")

    def test_wrapped_to_width(self):
        info = ParamInfo("EndTime", ParamKind.SCALAR,
                         "The simulated time at which the run stops and the final "
                         "report is written to the output directory", "100.0")
        line = format_param_usage(info, 80)

        lines = line.rstrip("\n").split("\n")
        self.assertGreater(len(lines), 1)
        for continuation in lines[1:]:
            self.assertTrue(continuation.startswith(" " * 52))
        for each in lines:
            self.assertLessEqual(len(each), 80)


@patch("simparams.params.usage.get_tty_width", return_value=WIDE)
class TestPrintUsage(unittest.TestCase):
    """Tests for print_usage function."""

    def setUp(self):
        self.reg = ParamRegistry()
        self.reg.register(MaxIterations, "Maximum iterations")
        self.reg.register(EndTime, "The end time")
        self.reg.register(SecretKnob, "Developers only")
        self.reg.hide(SecretKnob)

    def _usage(self, *args, **kwargs) -> str:
        out = io.StringIO()
        print_usage(*args, stream=out, registry=self.reg, **kwargs)
        return out.getvalue()

    def test_layout(self, _):
        text = self._usage("Usage: sim [OPTIONS]")
        lines = text.split("\n")

        self.assertEqual(lines[0], "Usage: sim [OPTIONS]")
        self.assertEqual(lines[1], "Recognized options:")
        self.assertTrue(lines[2].startswith("    -h,--help "))
        self.assertTrue(lines[3].startswith("    --help-all "))
        # sorted by name, hidden left out
        self.assertTrue(lines[4].startswith("    --end-time=SCALAR"))
        self.assertTrue(lines[5].startswith("    --max-iterations=INTEGER"))
        self.assertEqual(lines[6], "")
        self.assertNotIn("secret", text)

    def test_error_message_first(self, _):
        text = self._usage("Usage: sim", error_msg="Something went wrong")

        self.assertTrue(text.startswith("Something went wrong\n\nUsage: sim\n"))

    def test_show_all(self, _):
        self.assertIn("--secret-knob=INTEGER", self._usage("Usage: sim", show_all=True))

    def test_no_preamble_no_help_entries(self, _):
        text = self._usage("")

        self.assertTrue(text.startswith("\nRecognized options:\n"))
        self.assertNotIn("--help", text)


class TestPrintValues(unittest.TestCase):
    """Tests for print_values and print_unused."""

    def setUp(self):
        self.reg = ParamRegistry()
        self.reg.register(EndTime, "The end time")
        self.reg.register(MaxIterations, "Maximum iterations")
        self.reg.register(OutputDir, "Output directory")

    def test_print_values_sections(self):
        self.reg.set_value("MaxIterations", "50")
        self.reg.set_value("MaxIteration", "5")
        self.reg.end_registration()

        out = io.StringIO()
        print_values(out, registry=self.reg)

        self.assertEqual(out.getvalue(),
                         "# [known parameters which were specified at run-time]\n"
                         'MaxIterations="50" # default: "20"\n'
                         "# [parameters which were specified at compile-time]\n"
                         'EndTime="100.0"\n'
                         'OutputDir="./output"\n'
                         "# [unused run-time specified parameters]\n"
                         'MaxIteration="5"\n')

    def test_print_values_escapes_values(self):
        """Control characters, quotes and backslashes are printed as escapes."""
        self.reg.set_value("OutputDir", 'a\tb\rc"d')
        self.reg.set_value("Separator", "x\\y\nz")
        self.reg.end_registration()

        out = io.StringIO()
        print_values(out, registry=self.reg)

        self.assertEqual(out.getvalue(),
                         "# [known parameters which were specified at run-time]\n"
                         'OutputDir="a\\tb\\rc\\"d" # default: "./output"\n'
                         "# [parameters which were specified at compile-time]\n"
                         'EndTime="100.0"\n'
                         'MaxIterations="20"\n'
                         "# [unused run-time specified parameters]\n"
                         'Separator="x\\\\y\\nz"\n')

    def test_print_unused_reads_back(self):
        """A printed value parses back to the stored one."""
        value = "a\tb\rc \"quoted\" \\ end"
        self.reg.set_value("Sep", value)

        out = io.StringIO()
        print_unused(out, registry=self.reg)

        line = out.getvalue().split("\n")[1]
        key, _, rest = line.partition("=")
        self.assertEqual(key, "Sep")
        self.assertEqual(parse_quoted_value(rest), (value, ""))

    def test_print_values_shows_set_default(self):
        self.reg.set_default(EndTime, 7.5)

        out = io.StringIO()
        print_values(out, registry=self.reg)

        self.assertIn('EndTime="7.5"\n', out.getvalue())
        self.assertNotIn("run-time", out.getvalue())

    def test_print_unused_nothing(self):
        self.reg.set_value("EndTime", "1")

        out = io.StringIO()
        self.assertFalse(print_unused(out, registry=self.reg))
        self.assertEqual(out.getvalue(), "")

    def test_print_unused_lists_unregistered_keys(self):
        self.reg.set_value("EndTime", "1")
        self.reg.set_value("EndTim", "2")
        self.reg.set_value("Newton.Tolerance", "1e-8")

        out = io.StringIO()
        self.assertTrue(print_unused(out, registry=self.reg))
        self.assertEqual(out.getvalue(),
                         "# [unused run-time specified parameters]\n"
                         'EndTim="2"\n'
                         'Newton.Tolerance="1e-8"\n')

    def test_print_unused_with_suggestions(self):
        self.reg.set_value("MaxIteration", "5")

        out = io.StringIO()
        self.assertTrue(print_unused(out, registry=self.reg, suggest=True))
        self.assertIn("MaxIteration=\"5\" # did you mean", out.getvalue())
        self.assertIn("'MaxIterations'", out.getvalue())


if __name__ == "__main__":
    unittest.main()
