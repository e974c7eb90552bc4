import itertools
import pytest
from hypothesis import given, settings, strategies as st
from pydantic import ValidationError
from cryptocnf.core.errors import (
    CoordinateOutOfRangeError, DuplicateNameError, EqualityCycleError, InvalidLiteralError,
    NoFamiliesDeclaredError, NotYetAssignedError, TooManyCoordinatesError, UnknownFamilyError,
    UnknownVariableError
)
from cryptocnf.cnf import Formula
from cryptocnf.vars import VariableAllocator

def test_codes_follow_declaration_order():
    """x[2][3] takes codes 1..6 in row-major order, y starts right after."""
    v = VariableAllocator()
    v.declare_family("x", [2, 3])
    assert v.code_of("x", [0, 0]) == 1
    assert v.code_of("x", [0, 2]) == 3
    assert v.code_of("x", [1, 0]) == 4
    assert v.code_of("x", [1, 2]) == 6
    v.declare_family("y", [2])
    assert v.code_of("y", [0]) == 7
    assert v.code_of("y", [1]) == 8
    assert v.size == 8

def test_family_offsets():
    v = VariableAllocator()
    x = v.declare_family("x", [7, 3])
    y = v.declare_family("y", [7, 3, 3])
    assert x.base_offset == 0
    assert y.base_offset == 21
    assert v.code_of("y", [6, 2, 2]) == 84

def test_duplicate_name():
    v = VariableAllocator()
    v.declare_family("x", [2])
    with pytest.raises(DuplicateNameError):
        v.declare_family("x", [3])
    assert v.size == 2

def test_invalid_family_shapes():
    """Families validate their name and dimensions."""
    v = VariableAllocator()
    with pytest.raises(ValidationError):
        v.declare_family("x", [2, 0])
    with pytest.raises(ValidationError):
        v.declare_family("", [2])
    with pytest.raises(ValidationError):
        v.declare_family("x", [])
    assert v.size == 0
    assert v.families == []

def test_coordinate_errors():
    v = VariableAllocator()
    v.declare_family("x", [2, 2])
    with pytest.raises(TooManyCoordinatesError):
        v.code_of("x", [1, 1, 1])
    with pytest.raises(TooManyCoordinatesError):
        v.code_of("x", [1])
    with pytest.raises(CoordinateOutOfRangeError, match="Coordinate 1"):
        v.code_of("x", [1, 3])
    with pytest.raises(UnknownFamilyError):
        v.code_of("z", [0])

def test_dimension_bound():
    v = VariableAllocator()
    v.declare_family("x", [7, 3])
    assert v.dimension_bound("x", 0) == 7
    assert v.dimension_bound("x", 1) == 3
    with pytest.raises(TooManyCoordinatesError):
        v.dimension_bound("x", 2)

def test_anonymous_families():
    """Anonymous names come from a counter owned by each allocator."""
    v = VariableAllocator()
    a = v.declare_anonymous_family([2])
    b = v.declare_anonymous_family([3])
    assert a != b
    assert v.code_of(b, [0]) == 3

    w = VariableAllocator()
    assert w.declare_anonymous_family([2]) == a

def test_describe():
    v = VariableAllocator()
    v.declare_family("x", [2, 3])
    v.declare_family("y", [2])
    assert v.describe() == ["x 0 { 2 3}", "y 1 { 2}"]

def test_vector():
    v = VariableAllocator()
    v.declare_family("in", [4])
    v.declare_family("k", [2, 3])
    assert v.vector("in") == [1, 2, 3, 4]
    assert v.vector("k", [1]) == [v.code_of("k", [1, i]) for i in range(3)]
    with pytest.raises(TooManyCoordinatesError):
        v.vector("k")

family_dims = st.lists(st.integers(min_value=1, max_value=4), min_size=1, max_size=3)

@given(families=st.lists(family_dims, min_size=1, max_size=4))
def test_codes_are_dense_and_unique(families):
    """All coordinates of all families map one-to-one onto [1, size]."""
    v = VariableAllocator()
    codes = []
    for i, dims in enumerate(families):
        name = f"f{i}"
        v.declare_family(name, dims)
    for i, dims in enumerate(families):
        for coords in itertools.product(*(range(d) for d in dims)):
            codes.append(v.code_of(f"f{i}", coords))
    assert sorted(codes) == list(range(1, v.size + 1))

# --- Equalities ---

def test_equality_maps_larger_to_smaller():
    for x, y in [(10, 11), (11, 10)]:
        v = VariableAllocator()
        v.declare_equal(x, y)
        assert v.resolve(11) == 10
        assert v.resolve(-11) == -10
        assert v.resolve(10) == 10

def test_equality_with_negation():
    v = VariableAllocator()
    v.declare_equal(3, -7)
    assert v.resolve(7) == -3
    assert v.resolve(-7) == 3
    assert v.equalities == {7: -3, -7: 3}

def test_second_equality_keeps_the_first():
    v = VariableAllocator()
    v.declare_equal(5, 3)
    v.declare_equal(5, 2)
    assert v.resolve(5) == 2
    assert v.resolve(3) == 2

def test_self_equality_is_noop():
    v = VariableAllocator()
    v.declare_equal(4, 4)
    assert v.equalities == {}

def test_contradictory_equality():
    v = VariableAllocator()
    with pytest.raises(EqualityCycleError):
        v.declare_equal(4, -4)
    v.declare_equal(5, 3)
    before = v.equalities
    with pytest.raises(EqualityCycleError):
        v.declare_equal(3, -5)
    assert v.equalities == before

def test_resolve_detects_cycles():
    """A looping equality map is reported instead of followed forever."""
    v = VariableAllocator()
    v._equalities = {1: 2, 2: 1}
    with pytest.raises(EqualityCycleError):
        v.resolve(1)

def test_zero_is_not_a_literal():
    v = VariableAllocator()
    with pytest.raises(InvalidLiteralError):
        v.resolve(0)
    with pytest.raises(InvalidLiteralError):
        v.declare_equal(0, 1)

literal = st.integers(min_value=1, max_value=20).flatmap(lambda x: st.sampled_from([x, -x]))

@given(pairs=st.lists(st.tuples(literal, literal), max_size=30))
def test_resolve_properties(pairs):
    """resolve is idempotent, odd, and never increases the magnitude."""
    v = VariableAllocator()
    for x, y in pairs:
        try:
            v.declare_equal(x, y)
        except EqualityCycleError:
            pass
    for code in range(1, 21):
        for lit in (code, -code):
            r = v.resolve(lit)
            assert v.resolve(r) == r
            assert v.resolve(-lit) == -r
            assert abs(r) <= abs(lit)

@given(pairs=st.lists(st.tuples(literal, literal), max_size=15))
def test_declared_equalities_hold(pairs):
    """Every accepted equality is honoured by resolution."""
    v = VariableAllocator()
    accepted = []
    for x, y in pairs:
        try:
            v.declare_equal(x, y)
        except EqualityCycleError:
            continue
        accepted.append((x, y))
    for x, y in accepted:
        assert v.resolve(x) == v.resolve(y)

# --- Assignment ---

def test_values_before_assignment():
    v = VariableAllocator()
    v.declare_family("x", [3])
    assert not v.is_assigned
    with pytest.raises(NotYetAssignedError):
        v.value_of("x", [0])
    with pytest.raises(NotYetAssignedError):
        v.pack_little_endian([1, 2])

def test_decode_requires_families():
    v = VariableAllocator()
    with pytest.raises(NoFamiliesDeclaredError):
        v.decode_assignment([1, -2])
    assert not v.is_assigned

def test_decode_and_pack():
    v = VariableAllocator()
    v.declare_family("x", [3])
    v.decode_assignment([1, -2, 3])
    assert v.value_of("x", [0]) is True
    assert v.value_of("x", [1]) is False
    assert v.value_of("x", [2]) is True
    assert v.pack_little_endian([1, 2, 3]) == 0b101
    assert v.pack_little_endian([1, 2]) == 0b10
    assert v.pack_little_endian([2, 3]) == 0b01

def test_decode_missing_literals_are_false():
    v = VariableAllocator()
    v.declare_family("x", [3])
    v.decode_assignment([2])
    assert v.pack_little_endian(v.vector("x")) == 0b010

def test_decode_ignores_unknown_variables():
    v = VariableAllocator()
    v.declare_family("x", [2])
    v.decode_assignment([1, -2, 99, -100])
    assert v.pack_little_endian([1, 2]) == 0b10

def test_decode_stops_at_terminator():
    v = VariableAllocator()
    v.declare_family("x", [2])
    v.decode_assignment([1, 0, 2])
    assert v.pack_little_endian([1, 2]) == 0b10

def test_decode_backfills_equal_variables():
    """Variables elided by an equality get the value of their representative."""
    v = VariableAllocator()
    v.declare_family("x", [4])
    v.declare_equal(4, -2)
    v.decode_assignment([1, 2, -3])
    assert v.value_of("x", [3]) is False
    v.decode_assignment([1, -2, -3])
    assert v.value_of("x", [3]) is True

def test_new_family_drops_assignment():
    """Codes declared after decoding have no value until the next decode."""
    v = VariableAllocator()
    v.declare_family("x", [2])
    v.decode_assignment([1, -2])
    assert v.is_assigned
    v.declare_family("y", [2])
    assert not v.is_assigned
    with pytest.raises(NotYetAssignedError):
        v.value_of("y", [0])
    with pytest.raises(NotYetAssignedError):
        v.value_of("x", [0])

    v.decode_assignment([1, -2, 3, -4])
    assert v.value_of("y", [0]) is True
    assert v.pack_little_endian(v.vector("y")) == 0b10

def test_literal_beyond_assignment():
    v = VariableAllocator()
    v.declare_family("x", [2])
    v.decode_assignment([1, -2])
    with pytest.raises(UnknownVariableError, match="beyond"):
        v.pack_little_endian([1, 5])
    with pytest.raises(UnknownVariableError):
        v.literal_value(-3)
    assert v.literal_value(-2) is True

def test_pack_negated_literal():
    v = VariableAllocator()
    v.declare_family("x", [2])
    v.decode_assignment([1, -2])
    assert v.pack_little_endian([-1, -2]) == 0b01

def test_pack_keeps_32_bits():
    v = VariableAllocator()
    v.declare_family("x", [40])
    v.decode_assignment(list(range(1, 41)))
    assert v.pack_little_endian(v.vector("x")) == 0xFFFFFFFF

@settings(max_examples=50)
@given(width=st.integers(min_value=1, max_value=32), value=st.integers(min_value=0, max_value=2**32 - 1))
def test_pack_inverts_assign_integer(width, value):
    """Decoding the unit clauses of assign_integer packs back to the value."""
    v = VariableAllocator()
    v.declare_family("bits", [width])
    bits = v.vector("bits")
    f = Formula(v)
    f.assign_integer(bits, value)
    v.decode_assignment([clause[0] for clause in f])
    assert v.pack_little_endian(bits) == value & ((1 << width) - 1)

def test_read_solution():
    v = VariableAllocator()
    v.declare_family("x", [3])
    assert v.read_solution("SAT\n1 -2 3 0\n") is True
    assert v.pack_little_endian([1, 2, 3]) == 0b101
    assert v.read_solution("UNSAT\n") is False
    assert v.pack_little_endian([1, 2, 3]) == 0b101

def test_read_solution_unsat_leaves_unassigned():
    v = VariableAllocator()
    v.declare_family("x", [3])
    assert v.read_solution("UNSAT") is False
    assert not v.is_assigned

def test_read_solution_requires_families():
    with pytest.raises(NoFamiliesDeclaredError):
        VariableAllocator().read_solution("SAT 1 0")

def test_resolve_var():
    v = VariableAllocator()
    v.declare_family("x", [2])
    v.declare_family("y", [2])
    v.declare_equal(v.code_of("y", [1]), -v.code_of("x", [0]))
    assert v.resolve_var("y", [1]) == -1
    assert v.resolve_var("y", [0]) == 3
