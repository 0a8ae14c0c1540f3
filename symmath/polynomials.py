from typing import Dict, Set

from .expressions import Expr, Number, Symbol, Add, Mul, convert
from .coefficients import is_zero, is_integral
from .canonical import canonicalize
from .extendint import ExtendedInt

class NotPolynomial(Exception):
    pass

def free_symbols(expr):
    out : Dict[Expr, Set[Symbol]] = {}
    def get_symbols(expr):
        if isinstance(expr, Symbol):
            return {expr}
        elif expr in out:
            return out[expr]
        else:
            out[expr] = s = set()
            for a in expr.subexpressions():
                s.update(get_symbols(a))
            return s
    return set(get_symbols(convert(expr)))

def degree(expr, symbol):
    if not isinstance(symbol, Symbol):
        raise TypeError(f"{symbol} is not a symbol")
    return _degree(canonicalize(expr), symbol)

def _degree(expr, symbol):
    if isinstance(expr, Number):
        if is_zero(expr.value):
            return ExtendedInt.neg_inf()
        return ExtendedInt(0)
    if symbol not in free_symbols(expr):
        return ExtendedInt(0)
    if isinstance(expr, Symbol):
        return ExtendedInt(1)
    if isinstance(expr, Add):
        return max([ExtendedInt(0)] + [_degree(term, symbol) for term in expr.dict])
    if isinstance(expr, Mul):
        total = ExtendedInt(0)
        for term, e in expr.dict.items():
            d = _degree(term, symbol)
            if d == 0:
                continue
            if not (is_integral(e) and e > 0):
                raise NotPolynomial(f"{term} ^ {e} is not polynomial in {symbol}")
            total = total + d * int(e)
        return total
    raise NotPolynomial(f"{expr} is not polynomial in {symbol}")
