from cryptocnf.vars.allocator import VariableAllocator
from cryptocnf.vars.assignment import parse_assignment, format_assignment

__all__ = ["VariableAllocator", "parse_assignment", "format_assignment"]
