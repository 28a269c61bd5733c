## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import re


def write_without_ansi(write_fn):
    """Wrapper function that strips ANSI codes before calling the original writer."""
    ansi_re = re.compile(r'\033\[[0-9;]*m')
    return lambda text: write_fn(ansi_re.sub('', text))


def format_name(name: str) -> str:
    return name if name else '<empty>'

def format_value(value: str) -> str:
    return "'" + value.replace("'", "\\'") + "'"

def format_flag(name: str, value: str) -> str:
    return f"\033[1;97m{format_name(name)}\033[0m = \033[33m{format_value(value)}\033[0m"

def format_table(flags: dict[str, str]) -> str:
    if not flags: return '\033[90m∅\033[0m'
    return '\n'.join(format_flag(k, flags[k]) for k in sorted(flags))
