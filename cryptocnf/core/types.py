from typing import Annotated, List, Sequence
from pydantic import AfterValidator, BaseModel, Field, field_validator
from cryptocnf.core.errors import InvalidLiteralError

UINT32_MAX = (1 << 32) - 1

def check_nonzero(v: int) -> int:
    if v == 0:
        raise ValueError("Literal cannot be zero")
    return v

CnfVar = Annotated[int, Field(gt=0)]
Lit = Annotated[int, AfterValidator(check_nonzero)]

def require_literal(lit: int) -> int:
    """Returns lit unchanged, raising InvalidLiteralError for 0."""
    if lit == 0:
        raise InvalidLiteralError("0 is the DIMACS clause terminator, not a literal")
    return lit

def negate(lit: int) -> int:
    """Literals are signed codes, so the negation of x is -x."""
    return -require_literal(lit)

class VariableFamily(BaseModel):
    """A named multi-dimensional array of boolean variables."""
    name: str
    dimensions: List[CnfVar]
    base_offset: int = Field(ge=0)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v:
            raise ValueError("Family name cannot be empty")
        return v

    @field_validator('dimensions')
    @classmethod
    def validate_dimensions(cls, v: List[int]) -> List[int]:
        if not v:
            raise ValueError("A family needs at least one dimension")
        return v

    @property
    def size(self) -> int:
        total = 1
        for d in self.dimensions:
            total *= d
        return total

    def flat_index(self, coordinates: Sequence[int]) -> int:
        """Row-major index of the coordinates; callers check bounds first."""
        idx = 0
        for dim, coord in zip(self.dimensions, coordinates):
            idx = idx * dim + coord
        return idx
