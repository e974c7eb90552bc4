from typing import List, Optional
from cryptocnf.core.errors import DimacsParseError

def parse_assignment(text: str) -> Optional[List[int]]:
    """
    Parses the answer of a SAT solver:

        SAT
        1 -2 3 ... 0

    Returns None if the first token is not SAT, otherwise the literals
    preceding the terminating 0.
    """
    tokens = text.split()
    if not tokens or tokens[0] != "SAT":
        return None

    literals = []
    for tok in tokens[1:]:
        try:
            lit = int(tok)
        except ValueError:
            raise DimacsParseError(f"Invalid literal token '{tok}' in assignment") from None
        if lit == 0:
            return literals
        literals.append(lit)
    raise DimacsParseError("Missing terminating 0 in assignment")

def format_assignment(literals: Optional[List[int]]) -> str:
    """Writes an assignment in the format read by parse_assignment."""
    if literals is None:
        return "UNSAT\n"
    return "SAT\n" + "".join(f"{lit} " for lit in literals) + "0\n"
