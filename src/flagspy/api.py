## flagspy — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from .errors import *
from .spy import FlagSpy
from .scanner import scan

_SPY = FlagSpy()

def get(name: str) -> tuple[str, bool]:
    return _SPY.get(name)

def free() -> None:
    _SPY.free()

def __getattr__(name):
    return getattr(_SPY, name)
