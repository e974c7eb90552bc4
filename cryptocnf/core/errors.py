class CryptoCnfError(Exception):
    """Base exception for all cryptocnf related errors."""
    pass

# --- Variable allocation ---

class AllocationError(CryptoCnfError):
    """Raised when declaring or addressing variables fails."""
    pass

class DuplicateNameError(AllocationError):
    """Raised when a variable family name is declared twice."""
    pass

class UnknownFamilyError(AllocationError):
    """Raised when a variable family name was never declared."""
    pass

class TooManyCoordinatesError(AllocationError):
    """Raised when coordinates do not match the dimensions of a family."""
    pass

class CoordinateOutOfRangeError(AllocationError):
    """Raised when a coordinate is not smaller than its dimension."""
    pass

class NoFamiliesDeclaredError(AllocationError):
    """Raised when decoding an assignment into an empty allocator."""
    pass

class NotYetAssignedError(AllocationError):
    """Raised when reading variable values before an assignment was decoded."""
    pass

class EqualityCycleError(AllocationError):
    """Raised when equality declarations would loop or contradict each other."""
    pass

class UnknownVariableError(AllocationError):
    """Raised when a code lies beyond the variables covered by the assignment."""
    pass

# --- CNF construction ---

class CNFError(CryptoCnfError):
    """Raised when there is an issue with CNF construction or parsing."""
    pass

class InvalidLiteralError(CNFError, ValueError):
    """Raised when 0 is used as a literal."""
    pass

class LengthMismatchError(CNFError):
    """Raised when two literal vectors must have the same length but do not."""
    pass

class ValueOutOfRangeError(CNFError):
    """Raised when an integer constant does not fit in 32 unsigned bits."""
    pass

class DimacsParseError(CNFError):
    """Raised when DIMACS assignment text is malformed."""
    pass

# --- S-boxes ---

class SboxError(CryptoCnfError):
    """Raised when compiling or instantiating an S-box fails."""
    pass

class SizeMismatchError(SboxError):
    """Raised when a lookup table does not match the declared bit widths."""
    pass

class ArityMismatchError(SboxError):
    """Raised when literal vectors do not match the S-box bit widths."""
    pass

# --- Solving ---

class SolverError(CryptoCnfError):
    """Raised when the SAT solver collaborator fails to run."""
    pass
