import typing


class SimParamsException(Exception):
    pass


def file_read_lines(filepath: str) -> typing.List[str]:
    """
    Returns the lines of a text file without their line terminators.
    """

    try:
        with open(filepath, "r", encoding="utf-8") as f:
            return [ line.rstrip("\r\n") for line in f ]
    except (IOError, UnicodeDecodeError) as exc:
        raise SimParamsException(f'Failed to read from "{filepath}": {exc}') from exc
