"""
Coefficient capability shared by every node of an expression tree.

Coefficients are duck typed: any value supporting +, unary -, *, **, ==
and hash that also mixes with the plain ints 0 and 1 will do. The helpers
here normalize literals before they are stored and keep exponentiation exact.
"""
from fractions import Fraction
import math
import numbers
import numpy as np

from .config import settings
class CoefficientError(ArithmeticError):
    pass

class InexactPower(CoefficientError):
    pass

class UndefinedPower(CoefficientError):
    pass

def coerce(value):
    if isinstance(value, (bool, np.bool_)):
        raise TypeError(f"{value!r} is not a coefficient")
    if isinstance(value, np.ndarray) and value.ndim == 0:
        return coerce(value.item())
    if isinstance(value, (int, np.integer)):
        if settings.promote_integers:
            return Fraction(int(value))
        return int(value)
    if isinstance(value, np.floating):
        return float(value)
    if isinstance(value, numbers.Number):
        return value
    if all(hasattr(value, op) for op in ("__add__", "__mul__", "__pow__", "__neg__")):
        return value
    raise TypeError(f"{value!r} : {type(value).__name__} is not a coefficient")

def is_zero(value):
    return value == 0

def is_one(value):
    return value == 1

def is_integral(value):
    if isinstance(value, (int, np.integer)):
        return True
    if isinstance(value, Fraction):
        return value.denominator == 1
    try:
        return value == int(value)
    except (TypeError, ValueError, OverflowError):
        return False

def power(base, exponent):
    if is_zero(base) and is_negative(exponent):
        raise UndefinedPower(f"{base} ** {exponent}")
    if is_integral(exponent):
        if isinstance(base, (int, np.integer)) and exponent < 0:
            return Fraction(int(base)) ** int(exponent)
        return base ** int(exponent)
    exact = exponent
    if isinstance(exponent, float) and math.isfinite(exponent):
        # every finite float is an exact rational, 0.5 is 1/2
        exact = Fraction(exponent)
    if isinstance(exact, Fraction) and isinstance(base, (int, Fraction)):
        root = rational_root(Fraction(base), exact.denominator)
        if root is not None:
            return root ** exact.numerator
    if settings.strict_powers:
        raise InexactPower(f"{base} ** {exponent} has no exact value")
    return base ** exponent

def is_negative(value):
    try:
        return value < 0
    except TypeError:
        return False

def rational_root(value, n):
    if value < 0:
        if n % 2 == 0:
            return None
        root = rational_root(-value, n)
        return None if root is None else -root
    p = integer_root(value.numerator, n)
    q = integer_root(value.denominator, n)
    if p is None or q is None:
        return None
    return Fraction(p, q)

def integer_root(value, n):
    if value < 2:
        return value
    if n >= value.bit_length():
        # 2 ** n > value, so the only candidate root is 1
        return None
    # Newton iteration on integers, starting above the root
    x = 1 << -(-value.bit_length() // n)
    while True:
        y = ((n - 1) * x + value // x ** (n - 1)) // n
        if y >= x:
            break
        x = y
    return x if x ** n == value else None
