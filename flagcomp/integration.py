"""Flag completion for click programs.

A command built with ``completing_command`` (or ``completing_group``)
answers ``--tab_completion_word WORD`` by printing completions for its own
options and exiting, before any other argument is parsed. This is what the
bash hook from ``flagcomp hook`` invokes.
"""

import click

from .completions import handle_command_line_completions
from .flags import FlagDescriptor, flags_from_click_command
from .utils import log_debug

WORD_OPTION = "--tab_completion_word"
COLUMNS_OPTION = "--tab_completion_columns"


def extract_completion_request(args: list[str]) -> tuple[str, int | None, list[str]]:
    """Pull the completion options out of raw command-line args.

    Accepts both "--opt value" and "--opt=value". Nothing after a "--"
    separator is touched. Returns (word, columns, remaining_args); columns
    is None unless a positive integer was given.
    """
    word = ""
    columns = None
    remaining = []
    index = 0
    while index < len(args):
        arg = args[index]
        if arg == "--":
            remaining.extend(args[index:])
            break
        name, sep, value = arg.partition("=")
        if name not in (WORD_OPTION, COLUMNS_OPTION):
            remaining.append(arg)
            index += 1
            continue
        if not sep:
            index += 1
            value = args[index] if index < len(args) else ""
        if name == WORD_OPTION:
            word = value
        elif value.isdigit() and int(value) > 0:
            columns = int(value)
        index += 1
    return word, columns, remaining


def collect_command_flags(command: click.Command) -> list[FlagDescriptor]:
    """Flags of a command and, for groups, of every subcommand below it."""
    all_flags = flags_from_click_command(command)
    seen = {flag.name for flag in all_flags}
    if isinstance(command, click.Group):
        for subcommand in command.commands.values():
            for flag in collect_command_flags(subcommand):
                if flag.name not in seen:
                    seen.add(flag.name)
                    all_flags.append(flag)
    return all_flags


class CompletionMixin:
    """Hijacks argument parsing when a completion word is given."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        word, columns, args = extract_completion_request(args)
        if word:
            all_flags = collect_command_flags(self)
            log_debug(f"Completing '{word}' against {len(all_flags)} flags of '{ctx.info_name}'")
            handle_command_line_completions(word, all_flags, columns)
            ctx.exit(0)
        return super().parse_args(ctx, args)


class CompletingCommand(CompletionMixin, click.Command):
    pass


class CompletingGroup(CompletionMixin, click.Group):
    pass


def completing_command(name=None, **attrs):
    """Like click.command, answering --tab_completion_word."""
    return click.command(name, cls=CompletingCommand, **attrs)


def completing_group(name=None, **attrs):
    """Like click.group, answering --tab_completion_word."""
    return click.group(name, cls=CompletingGroup, **attrs)
