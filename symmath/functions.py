from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Dict, Any
import logging
import math

from .expressions import SingleArgFunc, convert

logger = logging.getLogger(__name__)

class DuplicateFunction(Exception):
    pass

class UnknownFunction(KeyError):
    pass

@dataclass(eq=False, frozen=True)
class FunctionDescriptor:
    name : str
    call : Callable[[Any], Any] = field(repr=False)

    def __call__(self, arg):
        return SingleArgFunc(self, convert(arg))

    def __eq__(self, other):
        if isinstance(other, FunctionDescriptor):
            return self.name == other.name
        return False

    def __hash__(self):
        return hash((FunctionDescriptor, self.name))

    def __str__(self):
        return self.name

_registry : Dict[str, FunctionDescriptor] = {}

def define_function(name, call):
    try:
        existing = _registry[name]
    except KeyError:
        _registry[name] = descriptor = FunctionDescriptor(name, call)
        logger.debug("registered function %s", name)
        return descriptor
    if existing.call is not call:
        raise DuplicateFunction(f"function {name!r} is already defined")
    return existing

def get_function(name):
    try:
        return _registry[name]
    except KeyError:
        raise UnknownFunction(name) from None

def registered_functions():
    return MappingProxyType(_registry)

exp = define_function("exp", math.exp)
ln  = define_function("ln", math.log)
