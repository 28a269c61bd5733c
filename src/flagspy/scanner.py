## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# flagspy — Early, best-effort access to command-line flags before the real parser runs.
#

import os
import sys
from typing import Sequence

import lark
from .errors import FlagspyParseError, FlagspyTypeError
from .formatting import format_flag


TERMINATOR = '--'

# One command-line token that starts with a dash, minus the bare terminator.
GRAMMAR = r"""flag: PREFIX NAME? (EQUALS VALUE?)?

PREFIX: /--?/
NAME: /[^=]+/
EQUALS: "="
VALUE: /.+/s
"""

_PARSER: lark.Lark | None = None

def _get_parser() -> lark.Lark:
    global _PARSER
    if _PARSER is None:
        _PARSER = lark.Lark(GRAMMAR, start='flag', parser="lalr", lexer="contextual", keep_all_tokens=True)
    return _PARSER


def is_terminator(token: str) -> bool:
    return token == TERMINATOR

def looks_like_flag(token: str) -> bool:
    return token.startswith('-')


def unquote(value: str) -> str:
    """Remove one matching pair of surrounding ' or " characters, if present."""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
        return value[1:-1]
    return value


def parse_flag_token(token: str) -> tuple[str, str | None]:
    """Split a dashed token into its name and inline value; the value is `None` without `=`."""
    assert looks_like_flag(token) and not is_terminator(token)
    try:
        tree = _get_parser().parse(token)
    except lark.exceptions.LarkError as exc:
        raise FlagspyParseError(f"Cannot read flag from token `{token}`: {exc}", token=token) from None

    name, value = '', None
    for tok in tree.children:
        if tok.type == 'NAME': name = tok.value
        elif tok.type == 'EQUALS': value = ''
        elif tok.type == 'VALUE': value = tok.value
    return name, value


def _check_tokens(tokens: Sequence[str]) -> list[str]:
    tokens = list(tokens)
    for i, tok in enumerate(tokens):
        if not isinstance(tok, str):
            raise FlagspyTypeError(f"Command-line token #{i} must be `str`, got `{type(tok).__name__}`.", token=tok)
    return tokens


def scan(tokens: Sequence[str]) -> dict[str, str]:
    """Single left-to-right pass over `tokens`, returning the flag table.

    Stops at a bare `--`. A flag without `=value` takes the following token as
    its value unless that token starts with a dash. Values lose one pair of
    matching surrounding quotes. Later flags overwrite earlier ones.
    """
    tokens = _check_tokens(tokens)
    debug = bool(os.environ.get('FLAGSPY_DEBUG'))
    flags: dict[str, str] = {}

    i = 0
    while i < len(tokens):
        token = tokens[i]
        if is_terminator(token):
            if debug: print(f'\033[90mflagspy: terminator at #{i}, {len(tokens) - i - 1} token(s) ignored\033[0m', file=sys.stderr)
            break
        if not looks_like_flag(token):
            i += 1
            continue

        name, value = parse_flag_token(token)
        if value is None:
            # Lookahead association; the terminator starts with a dash so it is never consumed here.
            if i + 1 < len(tokens) and not looks_like_flag(tokens[i + 1]):
                i += 1
                value = tokens[i]
            else:
                value = ''

        flags[name] = unquote(value)
        if debug: print(f'\033[90mflagspy:\033[0m {format_flag(name, flags[name])}', file=sys.stderr)
        i += 1

    return flags
