## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# flagspy — Early, best-effort access to command-line flags before the real parser runs.
#

import sys
import threading
from typing import Literal, Sequence

from .scanner import scan
from .errors import FlagspyReleasedError


State = Literal['uninitialized', 'ready', 'released']


class FlagSpy:
    """Read-once view of command-line flags, scanned lazily on first query.

    Intended for initialization code only: copy out the values you need, then
    the owner calls `free()`. A released spy never scans again, and querying it
    raises `FlagspyReleasedError`.
    """

    def __init__(self, argv: Sequence[str] | None = None):
        self._argv = argv
        self._flags: dict[str, str] | None = None
        self._lock = threading.Lock()
        self._scanned = False
        self._released = False

    @property
    def state(self) -> State:
        if self._released: return 'released'
        return 'ready' if self._scanned else 'uninitialized'

    @property
    def scanned(self) -> bool:
        return self._scanned

    def _tokens(self) -> list[str]:
        return list(sys.argv[1:] if self._argv is None else self._argv)

    def _ensure_scanned(self) -> dict[str, str]:
        if not self._scanned:
            with self._lock:
                if not self._scanned and not self._released:
                    # Publish the finished table in one assignment, then flip the guard.
                    self._flags = scan(self._tokens())
                    self._scanned = True
        if (flags := self._flags) is None:
            raise FlagspyReleasedError("Flag values were queried after `free()` released them.")
        return flags

    def get(self, name: str) -> tuple[str, bool]:
        """Get the value of the named flag, and whether it was specified on the command line."""
        flags = self._ensure_scanned()
        if name in flags:
            return flags[name], True
        return '', False

    def flags(self) -> dict[str, str]:
        return dict(self._ensure_scanned())

    def free(self) -> None:
        self._released = True
        self._flags = None

    def __enter__(self):
        return self

    def __exit__(self, *exc_info) -> None:
        self.free()

    def __repr__(self):
        return f"<FlagSpy {self.state}>"
