import pytest
from cryptocnf.cnf import CnfDocument, Formula, compute_formula_stats
from cryptocnf.cnf.cnf_stats import compute_gini
from cryptocnf.sbox import IdentityReducer, SboxCompiler
from cryptocnf.vars import VariableAllocator

def test_formula_stats():
    v = VariableAllocator()
    v.declare_family("x", [4])
    f = Formula(v)
    f.append_clauses([[1, -2], [2, 3, -4]])
    stats = compute_formula_stats(f)
    assert stats.n_vars == 4
    assert stats.n_clauses == 2
    assert stats.clause_len == {"min": 2, "mean": 2.5, "max": 3}
    assert stats.polarity_ratio == pytest.approx(0.6)
    assert stats.var_occurrence["min"] == 1
    assert stats.var_occurrence["max"] == 2
    assert stats.var_occurrence["mean"] == pytest.approx(1.25)
    assert stats.clause_size_histogram[2] == 1
    assert stats.clause_size_histogram[3] == 1
    assert stats.clause_size_histogram["overflow"] == 0

def test_unused_variables_count_as_zero():
    doc = CnfDocument(num_vars=5, clauses=[[1]])
    stats = compute_formula_stats(doc)
    assert stats.var_occurrence["min"] == 0
    assert stats.var_occurrence["max"] == 1

def test_empty_formula_stats():
    stats = compute_formula_stats(Formula(VariableAllocator()))
    assert stats.n_clauses == 0
    assert stats.polarity_ratio == 0.5

def test_stats_follow_equalities():
    """Elided variables are counted under their representative."""
    v = VariableAllocator()
    v.declare_family("x", [2])
    f = Formula(v)
    f.assert_equal(1, 2)
    f.append_clauses([[2], [1]])
    stats = compute_formula_stats(f)
    assert stats.var_occurrence["max"] == 2
    assert stats.var_occurrence["min"] == 0

def test_gini():
    assert compute_gini([]) == 0.0
    assert compute_gini([3, 3, 3]) == pytest.approx(0.0)
    assert compute_gini([0, 0, 1]) == pytest.approx(2 / 3)

def test_reduced_template_is_smaller():
    """The reduced S-box template has fewer or shorter clauses."""
    table = [0x5, 0xb, 0x6, 0xe, 0x8, 0x2, 0x7, 0xa, 0x3, 0x4, 0x0, 0xc, 0x1, 0x9, 0xf, 0xd]
    stats = {}
    for name, reducer in (("naive", IdentityReducer()), ("reduced", None)):
        v = VariableAllocator()
        v.declare_family("in", [4])
        v.declare_family("out", [4])
        f = Formula(v)
        SboxCompiler(4, 4, table, reducer=reducer).add_clauses_image(f, v.vector("in"), v.vector("out"))
        stats[name] = compute_formula_stats(f)
    assert stats["naive"].n_clauses == 64
    assert stats["naive"].clause_len["min"] == 5
    assert stats["reduced"].n_clauses <= 64
    assert stats["reduced"].clause_len["mean"] <= 5
