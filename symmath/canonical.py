"""
Rewrite expression trees to canonical form.

Canonical form is the fixed point of the following rules, applied bottom-up:

1. No nested `Add` in `Add` or `Mul` in `Mul`: the child is merged into
   the parent, its coefficient and entries scaled by the value it carried.
2. No `Add` or `Mul` with an empty dictionary: it becomes the `Number`
   holding its coefficient.
3. No `Number` keys: a child that reduces to a number is folded into the
   coefficient (`coeff + n*c` for `Add`, `coeff * n**e` for `Mul`).
4. No `Mul` with coefficient 0: it becomes `Number(0)` whatever it holds.
5. No `0 + x` or `1 * x`: a single entry with value 1 under the identity
   coefficient is replaced by the entry itself.

Entries whose value becomes zero are dropped. Canonicalization allocates
only when something changed, so canonical input comes back as the same
object.
"""
import logging

from .expressions import Number, Add, Mul, SingleArgFunc, convert
from .coefficients import power, is_zero, is_one

logger = logging.getLogger(__name__)

def canonicalize(expr):
    expr = convert(expr)
    if isinstance(expr, Add):
        return canonical_add(expr)
    elif isinstance(expr, Mul):
        return canonical_mul(expr)
    elif isinstance(expr, SingleArgFunc):
        arg = canonicalize(expr.arg)
        if arg is expr.arg:
            return expr
        return SingleArgFunc(expr.base, arg)
    else:
        return expr

def canonical_add(node):
    changed = False
    coeff = node.coeff
    terms = {}
    for term, c in node.dict.items():
        sub = canonicalize(term)
        changed |= sub is not term
        if isinstance(sub, Number):
            logger.debug("folding number %s into %s", sub, node)
            coeff = coeff + sub.value * c
            changed = True
        elif isinstance(sub, Add):
            logger.debug("flattening %s into %s", sub, node)
            coeff = coeff + sub.coeff * c
            for k, v in sub.dict.items():
                accumulate(terms, k, v * c)
            changed = True
        else:
            accumulate(terms, sub, c)
    changed |= drop_zeros(terms)
    if changed:
        node = Add(coeff, terms)
    return collapse(node)

def canonical_mul(node):
    if is_zero(node.coeff):
        logger.debug("zero coefficient collapses %s", node)
        return Number(node.coeff)
    changed = False
    coeff = node.coeff
    terms = {}
    for term, e in node.dict.items():
        sub = canonicalize(term)
        changed |= sub is not term
        if isinstance(sub, Number):
            logger.debug("folding number %s into %s", sub, node)
            coeff = coeff * power(sub.value, e)
            changed = True
        elif isinstance(sub, Mul):
            logger.debug("flattening %s into %s", sub, node)
            coeff = coeff * power(sub.coeff, e)
            for k, v in sub.dict.items():
                accumulate(terms, k, v * e)
            changed = True
        else:
            accumulate(terms, sub, e)
    changed |= drop_zeros(terms)
    if changed:
        node = Mul(coeff, terms)
    return collapse(node)

def collapse(node):
    if not node.dict:
        logger.debug("empty %s collapses to its coefficient", type(node).__name__)
        return Number(node.coeff)
    if isinstance(node, Mul) and is_zero(node.coeff):
        logger.debug("zero coefficient collapses %s", node)
        return Number(node.coeff)
    if len(node.dict) == 1 and node.coeff == node.identity:
        (term, value), = node.dict.items()
        if is_one(value):
            logger.debug("identity %s collapses to %s", node, term)
            return term
    return node

def accumulate(terms, term, value):
    if term in terms:
        terms[term] = terms[term] + value
    else:
        terms[term] = value

def drop_zeros(terms):
    zeros = [term for term, value in terms.items() if is_zero(value)]
    for term in zeros:
        del terms[term]
    return len(zeros) > 0
