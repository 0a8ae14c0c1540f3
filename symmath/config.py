from contextlib import contextmanager
from dataclasses import dataclass, fields, replace
import logging
import os

logger = logging.getLogger(__name__)

def env_flag(name, default):
    return os.environ.get(name, default).lower() in ['true', 'on', '1']

@dataclass(eq=False)
class Settings:
    # int literals become Fraction so that division and negative powers stay exact
    promote_integers : bool = env_flag('SYMMATH_PROMOTE_INTEGERS', 'true')
    # raise InexactPower instead of falling back to float
    strict_powers    : bool = env_flag('SYMMATH_STRICT_POWERS', 'true')

settings = Settings()

def configure(**changes):
    names = {f.name for f in fields(Settings)}
    unknown = [key for key in changes if key not in names]
    if unknown:
        raise TypeError(f"unknown setting {unknown[0]!r}")
    for key, value in changes.items():
        setattr(settings, key, value)
        logger.debug("setting %s = %r", key, value)
    return settings

@contextmanager
def override(**changes):
    saved = replace(settings)
    try:
        configure(**changes)
        yield settings
    finally:
        configure(**{f.name: getattr(saved, f.name) for f in fields(Settings)})
