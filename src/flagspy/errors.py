## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import lark


class FlagspyError(Exception):
    def __init__(self, message: str = "", *, token=None):
        """Base class for all flagspy-raised errors."""
        super().__init__(message)
        self.token: str = token

class FlagspyParseError(FlagspyError, ValueError, lark.exceptions.LarkError):
    pass

class FlagspyTypeError(FlagspyError, TypeError):
    pass

class FlagspyReleasedError(FlagspyError, RuntimeError):
    """Flag values were queried after the owner released them."""
    pass
