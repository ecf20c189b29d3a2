"""
Runtime Parameter System.

Parameters are declared with ParamDef, registered with a ParamRegistry
(REGISTRY is the process-wide one), filled from parameter files and the
command line, and queried once registration has ended:

    import sys

    from simparams.params import REGISTRY, ParamDef
    from simparams.params.ingest import parse_parameter_file, parse_command_line_options

    MaxIterations = ParamDef("MaxIterations", 20)

    REGISTRY.register(MaxIterations, "Maximum number of Newton iterations")

    parse_parameter_file("case.ini")
    error = parse_command_line_options(sys.argv[1:], help_preamble="Usage: sim [OPTIONS]")

    REGISTRY.end_registration()  # validates the values read above

    n = REGISTRY.get(MaxIterations)
"""

from .registry import REGISTRY, ParamRegistry
from .schema import ParamDef, ParamInfo, ParamKind
from .errors import ParamError

__all__ = ['REGISTRY', 'ParamRegistry', 'ParamDef', 'ParamInfo', 'ParamKind', 'ParamError']
