"""DOM-to-plaintext parameters, tag policies and parse scratch state."""

from .config import DNMSettings, build_parameters_for_preset
from .parameters import (
    ENTER,
    SKIP,
    Diagnostic,
    DNMParameters,
    Enter,
    FunctionNormalize,
    Normalize,
    RuntimeParseData,
    Skip,
    SpecialTagsOption,
    check,
    log_diagnostics,
)

__all__ = [
    "ENTER",
    "SKIP",
    "Diagnostic",
    "DNMParameters",
    "DNMSettings",
    "Enter",
    "FunctionNormalize",
    "Normalize",
    "RuntimeParseData",
    "Skip",
    "SpecialTagsOption",
    "build_parameters_for_preset",
    "check",
    "log_diagnostics",
]
