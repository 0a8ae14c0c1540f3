from dataclasses import dataclass
from typing import Dict, Any
import sys

from .coefficients import coerce, power as coefficient_power, is_zero, is_one

@dataclass(eq=False, frozen=True)
class Expr:
    kind = -1

    def __str__(self):
        return self.stringify(default_repr)

    def __add__(self, other):
        return add(self, other)

    def __radd__(self, other):
        return add(other, self)

    def __sub__(self, other):
        return sub(self, other)

    def __rsub__(self, other):
        return sub(other, self)

    def __neg__(self):
        return neg(self)

    def __pos__(self):
        return self

    def __mul__(self, other):
        return mul(self, other)

    def __rmul__(self, other):
        return mul(other, self)

    def __truediv__(self, other):
        return div(self, other)

    def __rtruediv__(self, other):
        return div(other, self)

    def __pow__(self, other):
        return power(self, other)

    def __rpow__(self, other):
        return power(other, self)

    # Equality is structural and variant-first: Number(2) != Symbol("2").
    def __eq__(self, other):
        if isinstance(other, Expr) and self.kind == other.kind:
            if self is other:
                return True
            return self._hash == other._hash and self._eq(other)
        return False

    def __hash__(self):
        return self._hash

    def subexpressions(self):
        return iter(())

    def canonicalize(self):
        from .canonical import canonicalize
        return canonicalize(self)

@dataclass(eq=False, frozen=True)
class Number(Expr):
    value : Any
    kind = 0

    def __post_init__(self):
        if isinstance(self.value, Expr):
            raise TypeError(f"{self.value} is already an expression")
        object.__setattr__(self, "value", coerce(self.value))
        object.__setattr__(self, "_hash", hash((self.kind, self.value)))

    def stringify(self, s):
        return str(self.value)

    def _eq(self, other):
        return self.value == other.value

@dataclass(eq=False, frozen=True)
class Symbol(Expr):
    name : str
    kind = 1

    def __post_init__(self):
        if not isinstance(self.name, str):
            raise TypeError(f"symbol name must be str, not {type(self.name).__name__}")
        object.__setattr__(self, "name", sys.intern(self.name))
        object.__setattr__(self, "_hash", hash((self.kind, self.name)))

    def stringify(self, s):
        return self.name

    def _eq(self, other):
        return self.name == other.name

@dataclass(eq=False, frozen=True)
class Nary(Expr):
    coeff : Any
    dict  : Dict[Expr, Any]

    def __post_init__(self):
        if isinstance(self.coeff, (Expr, bool)):
            raise TypeError(f"{self.coeff!r} is not a coefficient")
        terms = {}
        for term, value in self.dict.items():
            if not isinstance(term, Expr):
                raise TypeError(f"{term!r} is not an expression")
            terms[term] = value
        object.__setattr__(self, "dict", terms)
        object.__setattr__(self, "_hash", hash((self.kind, self.coeff, frozenset(terms.items()))))

    def subexpressions(self):
        yield from self.dict

    def _eq(self, other):
        if self.coeff != other.coeff or len(self.dict) != len(other.dict):
            return False
        for term, value in self.dict.items():
            if term not in other.dict or other.dict[term] != value:
                return False
        return True

@dataclass(eq=False, frozen=True)
class Add(Nary):
    """coeff + c0*x0 + c1*x1 + ..., with dict mapping each x to its c."""
    kind = 2
    identity = 0

    def stringify(self, s):
        out = []
        if not is_zero(self.coeff) or not self.dict:
            out.append(str(self.coeff))
        for term, c in self.dict.items():
            if is_one(c):
                out.append(s(term))
            else:
                out.append(f"{c} * {s(term)}")
        return "(" + " + ".join(out) + ")"

@dataclass(eq=False, frozen=True)
class Mul(Nary):
    """coeff * x0**e0 * x1**e1 * ..., with dict mapping each x to its e."""
    kind = 3
    identity = 1

    def stringify(self, s):
        out = []
        if not is_one(self.coeff) or not self.dict:
            out.append(str(self.coeff))
        for term, e in self.dict.items():
            if is_one(e):
                out.append(s(term))
            else:
                out.append(f"{s(term)} ^ {e}")
        return "(" + " * ".join(out) + ")"

@dataclass(eq=False, frozen=True)
class SingleArgFunc(Expr):
    base : 'FunctionDescriptor'
    arg  : Expr
    kind = 4

    def __post_init__(self):
        if not isinstance(self.arg, Expr):
            raise TypeError(f"{self.arg!r} is not an expression")
        object.__setattr__(self, "_hash", hash((self.kind, self.base, self.arg)))

    def subexpressions(self):
        yield self.arg

    def stringify(self, s):
        return f"{self.base.name}({s(self.arg)})"

    def _eq(self, other):
        return self.base == other.base and self.arg == other.arg

def default_repr(expr):
    if not isinstance(expr, Expr):
        return str(expr)
    return expr.stringify(default_repr)

def convert(obj):
    if isinstance(obj, Expr):
        return obj
    elif isinstance(obj, str):
        raise TypeError(f"{obj!r}: strings are not parsed, declare symbols with symbols()")
    else:
        return Number(obj)

def symbols(*names):
    out = []
    for name in names:
        out.extend(Symbol(n) for n in name.replace(",", " ").split())
    if len(out) == 1:
        return out[0]
    return tuple(out)

def merge(terms, items):
    res = terms.copy()
    for term, value in items:
        res[term] = res.get(term, 0) + value
        if is_zero(res[term]):
            del res[term]
    return res

def scale(terms, factor):
    return {term: value * factor for term, value in terms.items() if not is_zero(value * factor)}

def add(lhs, rhs):
    lhs = convert(lhs)
    rhs = convert(rhs)
    if isinstance(lhs, Number) and isinstance(rhs, Number):
        return Number(lhs.value + rhs.value)
    elif isinstance(lhs, Number) and isinstance(rhs, Add):
        return Add(lhs.value + rhs.coeff, rhs.dict)
    elif isinstance(lhs, Add) and isinstance(rhs, Number):
        return Add(lhs.coeff + rhs.value, lhs.dict)
    elif isinstance(lhs, Add) and isinstance(rhs, Add):
        return Add(lhs.coeff + rhs.coeff, merge(lhs.dict, rhs.dict.items()))
    elif isinstance(lhs, Add):
        return Add(lhs.coeff, merge(lhs.dict, [(rhs, 1)]))
    elif isinstance(rhs, Add):
        return Add(rhs.coeff, merge(rhs.dict, [(lhs, 1)]))
    elif isinstance(lhs, Number):
        return Add(lhs.value, {rhs: 1})
    elif isinstance(rhs, Number):
        return Add(rhs.value, {lhs: 1})
    elif lhs == rhs:
        return Add(0, {lhs: 2})
    else:
        return Add(0, {lhs: 1, rhs: 1})

def neg(term):
    term = convert(term)
    if isinstance(term, Number):
        return Number(-term.value)
    elif isinstance(term, Add):
        return Add(-term.coeff, {t: -c for t, c in term.dict.items()})
    elif isinstance(term, Mul):
        # only the scalar factor flips, exponents are untouched
        return Mul(-term.coeff, term.dict)
    else:
        return Add(0, {term: -1})

def sub(lhs, rhs):
    return add(lhs, neg(rhs))

def mul(lhs, rhs):
    lhs = convert(lhs)
    rhs = convert(rhs)
    if isinstance(lhs, Number) and isinstance(rhs, Number):
        return Number(lhs.value * rhs.value)
    elif isinstance(lhs, Number) and isinstance(rhs, Mul):
        return Mul(lhs.value * rhs.coeff, rhs.dict)
    elif isinstance(lhs, Mul) and isinstance(rhs, Number):
        return Mul(lhs.coeff * rhs.value, lhs.dict)
    elif isinstance(lhs, Mul) and isinstance(rhs, Mul):
        return Mul(lhs.coeff * rhs.coeff, merge(lhs.dict, rhs.dict.items()))
    elif isinstance(lhs, Mul):
        return Mul(lhs.coeff, merge(lhs.dict, [(rhs, 1)]))
    elif isinstance(rhs, Mul):
        return Mul(rhs.coeff, merge(rhs.dict, [(lhs, 1)]))
    elif isinstance(lhs, Number):
        return Mul(lhs.value, {rhs: 1})
    elif isinstance(rhs, Number):
        return Mul(rhs.value, {lhs: 1})
    elif lhs == rhs:
        return Mul(1, {lhs: 2})
    else:
        return Mul(1, {lhs: 1, rhs: 1})

def power(base, exponent):
    base = convert(base)
    exponent = convert(exponent)
    if not isinstance(exponent, Number):
        raise TypeError(f"symbolic exponent {exponent} is not supported")
    n = exponent.value
    if isinstance(base, Number):
        return Number(coefficient_power(base.value, n))
    elif isinstance(base, Mul):
        return Mul(coefficient_power(base.coeff, n), scale(base.dict, n))
    elif is_zero(n):
        return Mul(1, {})
    else:
        return Mul(1, {base: n})

def div(lhs, rhs):
    return mul(lhs, power(rhs, -1))
