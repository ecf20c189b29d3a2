"""
simparams: runtime parameters for simulation programs.

See simparams.params for the parameter registry.
"""

__version__ = "0.1"
