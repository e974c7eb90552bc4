"""
Core module for cryptocnf.
Provides error handling, logging, types, and configuration.
"""
from cryptocnf.core.errors import (
    CryptoCnfError, AllocationError, DuplicateNameError, UnknownFamilyError,
    TooManyCoordinatesError, CoordinateOutOfRangeError, NoFamiliesDeclaredError,
    NotYetAssignedError, EqualityCycleError, UnknownVariableError, CNFError, InvalidLiteralError,
    LengthMismatchError, ValueOutOfRangeError, DimacsParseError, SboxError,
    SizeMismatchError, ArityMismatchError, SolverError
)
from cryptocnf.core.logging import get_logger
from cryptocnf.core.types import (
    CnfVar, Lit, VariableFamily, UINT32_MAX, check_nonzero, require_literal, negate
)
from cryptocnf.core.config import CnfConfig

__all__ = [
    "CryptoCnfError", "AllocationError", "DuplicateNameError", "UnknownFamilyError",
    "TooManyCoordinatesError", "CoordinateOutOfRangeError", "NoFamiliesDeclaredError",
    "NotYetAssignedError", "EqualityCycleError", "UnknownVariableError", "CNFError", "InvalidLiteralError",
    "LengthMismatchError", "ValueOutOfRangeError", "DimacsParseError", "SboxError",
    "SizeMismatchError", "ArityMismatchError", "SolverError",
    "get_logger",
    "CnfVar", "Lit", "VariableFamily", "UINT32_MAX", "check_nonzero", "require_literal", "negate",
    "CnfConfig"
]
