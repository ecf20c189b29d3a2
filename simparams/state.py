import dataclasses


@dataclasses.dataclass
class UsageConfig:
    """ Layout settings used when rendering help text and value dumps. """
    help_column:     int = 50
    help_indent:     int = 52
    preamble_indent: int = 2
    min_tty_width:   int = 80
    unbounded_width: int = 10*1000


gCFG: UsageConfig = UsageConfig()


def CFG() -> UsageConfig:
    # pylint: disable=global-variable-not-assigned
    global gCFG
    return gCFG
