import sys, typing

import rich, rich.console


class ParamsPrinter:
    def __init__(self):
        self.raw = rich.console.Console()

    @property
    def is_terminal(self) -> bool:
        return self.raw.is_terminal

    @property
    def width(self) -> int:
        return self.raw.width

    def write(self, text: str, stream: typing.TextIO = None):
        """
        Writes pre-formatted text verbatim to a stream (stdout by default).
        Rich markup, highlighting and emoji codes are not interpreted, so
        bracketed section headers and user supplied values pass through.
        """

        if stream is None:
            stream = sys.stdout

        console = rich.console.Console(file=stream, markup=False, highlight=False,
                                       emoji=False, soft_wrap=True)
        console.print(text, end="")


cons = ParamsPrinter()
