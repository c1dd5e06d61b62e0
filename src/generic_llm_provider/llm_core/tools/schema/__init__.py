"""Tool schema translation and generation."""

from .translator import FunctionDeclaration, to_function_declarations, EMPTY_PARAMETERS
from .signature import assert_no_recursive_refs, build_args_model, parameters_schema

__all__ = [
    "FunctionDeclaration",
    "to_function_declarations",
    "EMPTY_PARAMETERS",
    "build_args_model",
    "parameters_schema",
    "assert_no_recursive_refs",
]
