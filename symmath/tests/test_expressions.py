"""Tests for expression nodes: equality, hashing, rendering, leaf construction."""

import dataclasses
from fractions import Fraction

import pytest
from symmath.expressions import (
    Expr, Number, Symbol, Add, Mul, SingleArgFunc,
    convert, symbols,
)
from symmath.functions import exp, ln


x, y, z = symbols("x y z")


class TestLeaves:
    """Tests for Number and Symbol leaves."""

    def test_number_promotes_int(self):
        """Integer literals are stored as exact fractions."""
        n = Number(2)
        assert n.value == 2
        assert isinstance(n.value, Fraction)

    def test_number_equal_across_types(self):
        """Numbers compare by value."""
        assert Number(2) == Number(Fraction(2))
        assert hash(Number(2)) == hash(Number(Fraction(4, 2)))

    def test_number_rejects_bool(self):
        """Booleans are not coefficients."""
        with pytest.raises(TypeError):
            Number(True)

    def test_number_rejects_expression(self):
        """A Number cannot wrap another node."""
        with pytest.raises(TypeError):
            Number(Number(2))

    def test_symbol_equal_by_name(self):
        """Symbols built separately with one name are equal."""
        assert Symbol("x") == x
        assert hash(Symbol("x")) == hash(x)
        assert Symbol("x") != Symbol("y")

    def test_symbol_rejects_non_str(self):
        """Symbol names must be strings."""
        with pytest.raises(TypeError):
            Symbol(3)

    def test_number_never_equals_symbol(self):
        """Equality is decided by variant first."""
        assert Number(2) != Symbol("2")
        assert Symbol("2") != Number(2)
        assert str(Number(2)) == str(Symbol("2"))

    def test_number_and_symbol_keys_stay_apart(self):
        """A dictionary never merges a number key with a same-looking symbol key."""
        d = {Number(2): "number", Symbol("2"): "symbol"}
        assert len(d) == 2

    def test_not_equal_to_plain_values(self):
        """Expressions do not compare equal to raw numbers."""
        assert Number(2) != 2
        assert x != "x"

    def test_nodes_are_frozen(self):
        """Nodes cannot be mutated after construction."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            x.name = "y"
        with pytest.raises(dataclasses.FrozenInstanceError):
            Number(1).value = 2


class TestNary:
    """Tests for Add and Mul structural equality."""

    def test_order_independent_equality(self):
        """Entry insertion order does not matter."""
        a = Add(1, {x: 1, y: 2})
        b = Add(1, {y: 2, x: 1})
        assert a == b
        assert hash(a) == hash(b)

    def test_coefficient_matters(self):
        """Different coefficients make different nodes."""
        assert Add(1, {x: 1}) != Add(2, {x: 1})

    def test_values_matter(self):
        """Different entry values make different nodes."""
        assert Mul(1, {x: 2}) != Mul(1, {x: 3})

    def test_size_matters(self):
        """A superset dictionary is not equal."""
        assert Add(0, {x: 1}) != Add(0, {x: 1, y: 1})

    def test_add_is_not_mul(self):
        """Add and Mul with the same fields differ."""
        assert Add(1, {x: 1}) != Mul(1, {x: 1})

    def test_nested_structural_equality(self):
        """Equality recurses into keys built through different paths."""
        a = Add(0, {Mul(2, {x: 1, y: 1}): 1, z: 3})
        b = Add(0, {z: 3, Mul(2, {y: 1, x: 1}): 1})
        assert a == b
        assert hash(a) == hash(b)

    def test_dict_is_copied(self):
        """The node does not alias the dictionary it was built from."""
        terms = {x: 1}
        node = Add(0, terms)
        terms[y] = 1
        assert node.dict == {x: 1}

    def test_rejects_non_expression_keys(self):
        """Dictionary keys must be expressions."""
        with pytest.raises(TypeError):
            Add(0, {"x": 1})

    def test_rejects_expression_coefficient(self):
        """The coefficient must be a scalar, not a node or a bool."""
        with pytest.raises(TypeError):
            Add(x, {})
        with pytest.raises(TypeError):
            Mul(Number(2), {x: 1})
        with pytest.raises(TypeError):
            Add(True, {x: 1})

    def test_subexpressions(self):
        """Add and Mul expose their keys as subexpressions."""
        assert set(Add(0, {x: 1, y: 1}).subexpressions()) == {x, y}
        assert list(x.subexpressions()) == []


class TestFunctions:
    """Tests for SingleArgFunc nodes."""

    def test_call_builds_node(self):
        """Calling a descriptor builds a SingleArgFunc."""
        node = exp(x)
        assert isinstance(node, SingleArgFunc)
        assert node.base == exp
        assert node.arg == x

    def test_structural_equality(self):
        """Same descriptor and equal argument are equal."""
        assert exp(x + 1) == exp(x + 1)
        assert hash(exp(x + 1)) == hash(exp(1 + x))

    def test_different_descriptor(self):
        """Different descriptors differ."""
        assert exp(x) != ln(x)

    def test_numeric_argument(self):
        """Numeric arguments are converted."""
        assert exp(2).arg == Number(2)


class TestConvert:
    """Tests for convert and symbols."""

    def test_convert_passthrough(self):
        """Expressions pass through unchanged."""
        assert convert(x) is x

    def test_convert_number(self):
        """Numbers become Number nodes."""
        assert convert(3) == Number(3)
        assert convert(Fraction(1, 2)) == Number(Fraction(1, 2))

    def test_convert_rejects_str(self):
        """Strings are not parsed."""
        with pytest.raises(TypeError):
            convert("x")

    def test_convert_rejects_objects(self):
        """Arbitrary objects are rejected."""
        with pytest.raises(TypeError):
            convert(object())

    def test_symbols_split(self):
        """symbols() accepts space or comma separated names."""
        a, b, c = symbols("a, b c")
        assert (a.name, b.name, c.name) == ("a", "b", "c")

    def test_symbols_single(self):
        """A single name gives a single Symbol."""
        assert symbols("a") == Symbol("a")

    def test_symbols_many_args(self):
        """Several arguments are accepted."""
        assert symbols("a", "b") == (Symbol("a"), Symbol("b"))


class TestRendering:
    """Tests for the debug text form."""

    def test_number(self):
        """Numbers print their value."""
        assert str(Number(3)) == "3"
        assert str(Number(Fraction(-1, 2))) == "-1/2"

    def test_add(self):
        """Add prints coefficient then entries."""
        assert str(Add(3, {x: 1, y: 1})) == "(3 + x + y)"
        assert str(Add(3, {x: 2})) == "(3 + 2 * x)"

    def test_add_zero_coefficient(self):
        """A zero coefficient is omitted when there are entries."""
        assert str(Add(0, {x: -1})) == "(-1 * x)"
        assert str(Add(0, {})) == "(0)"

    def test_mul(self):
        """Mul prints coefficient then factors with exponents."""
        assert str(Mul(2, {x: 1, y: 3})) == "(2 * x * y ^ 3)"
        assert str(Mul(1, {x: 1, y: 1})) == "(x * y)"

    def test_function(self):
        """Functions print as calls."""
        assert str(exp(x)) == "exp(x)"
        assert str(ln(Add(1, {x: 1}))) == "ln((1 + x))"

    def test_stable(self):
        """Rendering is stable across repeated calls."""
        e = Number(3) + x + y
        assert str(e) == str(e) == "(3 + x + y)"

    def test_repr_is_structural(self):
        """repr shows the node kind and fields."""
        assert repr(x) == "Symbol(name='x')"
        assert repr(Add(1, {x: 1})).startswith("Add(")
