from functools import total_ordering
import math

class IndeterminateForm(ArithmeticError):
    pass

@total_ordering
class ExtendedInt:
    """An integer, or positive/negative infinity."""
    __slots__ = ("value",)

    def __init__(self, value):
        if isinstance(value, ExtendedInt):
            value = value.value
        elif not (isinstance(value, int) or value in (math.inf, -math.inf)):
            raise TypeError(f"{value!r} is not an extended integer")
        self.value = value

    @classmethod
    def pos_inf(cls):
        return cls(math.inf)

    @classmethod
    def neg_inf(cls):
        return cls(-math.inf)

    @property
    def is_finite(self):
        return isinstance(self.value, int)

    @classmethod
    def wrap(cls, other):
        if isinstance(other, ExtendedInt):
            return other
        if isinstance(other, int):
            return cls(other)
        return None

    def __hash__(self):
        return hash(self.value)

    def __eq__(self, other):
        other = self.wrap(other)
        if other is None:
            return NotImplemented
        return self.value == other.value

    def __lt__(self, other):
        other = self.wrap(other)
        if other is None:
            return NotImplemented
        return self.value < other.value

    def __neg__(self):
        return ExtendedInt(-self.value)

    def __add__(self, other):
        other = self.wrap(other)
        if other is None:
            return NotImplemented
        if not self.is_finite and not other.is_finite and self.value != other.value:
            raise IndeterminateForm(f"{self} + {other}")
        return ExtendedInt(self.value + other.value)

    __radd__ = __add__

    def __sub__(self, other):
        other = self.wrap(other)
        if other is None:
            return NotImplemented
        return self + (-other)

    def __rsub__(self, other):
        other = self.wrap(other)
        if other is None:
            return NotImplemented
        return other + (-self)

    def __mul__(self, other):
        other = self.wrap(other)
        if other is None:
            return NotImplemented
        if self.is_finite and other.is_finite:
            return ExtendedInt(self.value * other.value)
        if self.value == 0 or other.value == 0:
            raise IndeterminateForm(f"{self} * {other}")
        sign = (self.value > 0) == (other.value > 0)
        return ExtendedInt.pos_inf() if sign else ExtendedInt.neg_inf()

    __rmul__ = __mul__

    def __int__(self):
        if not self.is_finite:
            raise OverflowError(f"cannot convert {self} to int")
        return self.value

    def __str__(self):
        if self.value == math.inf:
            return "Inf"
        if self.value == -math.inf:
            return "-Inf"
        return str(self.value)

    def __repr__(self):
        return f"ExtendedInt({self})"
