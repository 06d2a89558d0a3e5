"""
crucible_ir - Typed intermediate representation for ML reliability experiments.

Build entities, validate them, move them to and from JSON.
"""

from crucible_ir.builder import build, experiment
from crucible_ir.errors import ConfigError, CrucibleIRError, DecodeError, UnwrapError
from crucible_ir.models import Experiment, new_experiment
from crucible_ir.result import Err, Ok, Result
from crucible_ir.serialization import KINDS, from_json, from_map, to_json, to_map
from crucible_ir.validation import errors, is_valid, validate

__version__ = "0.1.0"
__all__ = [
    "KINDS",
    "ConfigError",
    "CrucibleIRError",
    "DecodeError",
    "Err",
    "Experiment",
    "Ok",
    "Result",
    "UnwrapError",
    "__version__",
    "build",
    "errors",
    "experiment",
    "from_json",
    "from_map",
    "is_valid",
    "new_experiment",
    "to_json",
    "to_map",
    "validate",
]
