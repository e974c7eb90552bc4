from cryptocnf.sbox.template import TemplateRow, naive_template, row_holds
from cryptocnf.sbox.reduce import RowReducer, GreedyMergeReducer, IdentityReducer, merge_rows
from cryptocnf.sbox.compiler import SboxCompiler

__all__ = [
    "TemplateRow", "naive_template", "row_holds",
    "RowReducer", "GreedyMergeReducer", "IdentityReducer", "merge_rows",
    "SboxCompiler"
]
