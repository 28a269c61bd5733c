## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# flagspy — Early, best-effort access to command-line flags before the real parser runs.
#

import os
import sys
from dataclasses import dataclass

import click

from .spy import FlagSpy
from .errors import FlagspyError
from .formatting import write_without_ansi, format_table


@dataclass(frozen=True)
class InspectConfig:
    plain: bool
    trace: bool


def _make_spy(config: InspectConfig, tokens: tuple[str, ...]) -> FlagSpy:
    if config.plain:
        writer = write_without_ansi(sys.stdout.write)
        sys.stdout.write, sys.stderr.write = writer, writer
    if config.trace:
        os.environ['FLAGSPY_DEBUG'] = '1'
    return FlagSpy(list(tokens))


def _fatal_error(message: str, detail: str) -> None:
    print(f'\033[30;43m {message} \033[0m {detail}', file=sys.stderr)
    sys.exit(2)


@click.group(context_settings={'ignore_unknown_options': True})
@click.option('--plain', '-p', is_flag=True, help='Strip ANSI color codes and redirect stderr to stdout.')
@click.option('--trace', '-t', is_flag=True, help='Trace every flag recorded while scanning.')
@click.pass_context
def cli(ctx: click.Context, plain: bool, trace: bool) -> None:
    """Show how flagspy reads TOKENS; put `--` before them so click leaves them alone."""
    ctx.ensure_object(dict)
    ctx.obj['config'] = InspectConfig(plain=plain, trace=trace)


@cli.command('show', context_settings={'ignore_unknown_options': True})
@click.argument('tokens', nargs=-1)
@click.pass_context
def show(ctx: click.Context, tokens: tuple[str, ...]) -> None:
    with _make_spy(ctx.obj['config'], tokens) as spy:
        try:
            flags = spy.flags()
        except FlagspyError as exc:
            _fatal_error("SCAN ERROR.", str(exc))
    print(format_table(flags))


@cli.command('get', context_settings={'ignore_unknown_options': True})
@click.argument('name')
@click.argument('tokens', nargs=-1)
@click.pass_context
def get(ctx: click.Context, name: str, tokens: tuple[str, ...]) -> None:
    with _make_spy(ctx.obj['config'], tokens) as spy:
        try:
            value, present = spy.get(name)
        except FlagspyError as exc:
            _fatal_error("SCAN ERROR.", str(exc))
    if not present:
        print(f'\033[90mFlag `{name}` not found.\033[0m', file=sys.stderr)
        ctx.exit(1)
    print(value)


def main(argv: list[str] | None = None) -> None:
    cli.main(args=list(sys.argv[1:] if argv is None else argv), prog_name='flagspy')


if __name__ == "__main__":
    main()
