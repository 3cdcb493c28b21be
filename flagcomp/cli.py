"""Command-line interface for flagcomp."""

import os
import stat
from pathlib import Path

import click

from .completions import complete_flags, complete_registry_flag, get_short_flag_line
from .config import get_columns, get_config_file, get_verbosity, set_columns, set_verbosity
from .flags import RegistryError, load_registry
from .integration import completing_group
from .search import canonicalize_cursor_word, find_matching_flags
from .shell import render_bash_hook, render_complete_command
from .utils import log_info, log_verbose

registry_option = click.option(
    "--registry", "-r",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    is_eager=True,
    help="YAML file listing the program's flags",
)


def _load(registry: Path) -> list:
    try:
        return load_registry(registry)
    except RegistryError as e:
        raise click.ClickException(str(e))


@completing_group()
def cli():
    """Bash-style completion of command-line flags.

    Completion words may carry search hints: a trailing '?' also matches
    inside flag names, '??' inside declaring files, '???' inside
    descriptions, and a trailing '+' lists every match.
    """
    pass


@cli.command()
@registry_option
@click.option("--word", "-w", default="", help="Word being completed, e.g. --log??")
@click.option("--columns", "-c", type=click.IntRange(min=1), default=None,
              help="Output width (default: config or 80)")
@click.option("--program", "-p", default=None,
              help="Program name used to find its main file (default: registry file stem)")
def complete(registry: Path, word: str, columns: int | None, program: str | None):
    """Print completion lines for a partially typed flag.

    Examples:
        flagcomp complete -r myapp.yaml --word=--lo
        flagcomp complete -r myapp.yaml --word=--port?? -c 120
    """
    if not word:
        log_verbose("Empty completion word, nothing to do.")
        return

    all_flags = _load(registry)
    result = complete_flags(
        word,
        all_flags,
        columns=columns,
        program_name=program or registry.stem,
    )
    for line in result.lines:
        click.echo(line)


@cli.command(name="flags")
@registry_option
@click.argument("word", required=False, default="", shell_complete=complete_registry_flag)
def list_flags(registry: Path, word: str):
    """List registry flags, optionally only those matching WORD.

    Examples:
        flagcomp flags -r myapp.yaml
        flagcomp flags -r myapp.yaml log?
    """
    all_flags = _load(registry)
    if word:
        token, options = canonicalize_cursor_word(word)
        matches, _ = find_matching_flags(all_flags, options, token)
        shown = list(matches.values())
    else:
        shown = all_flags

    if not shown:
        log_info("No matching flags.")
        return

    columns = get_columns()
    for flag in shown:
        click.echo(get_short_flag_line("", flag, columns))


@cli.command(short_help="Print or install the bash hook")
@click.argument("binaries", nargs=-1)
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path),
              help="Write the hook script here instead of printing it")
def hook(binaries: tuple, output: Path | None):
    """Print the bash completion hook, or install it with --output.

    With --output the script is written and made executable, and the
    `complete` line registering it for BINARIES is printed.

    Examples:
        flagcomp hook > ~/bin/flagcomp-hook.sh
        flagcomp hook -o ~/bin/flagcomp-hook.sh myapp time env
    """
    script = render_bash_hook()
    if output is None:
        click.echo(script, nl=False)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(script)
    mode = os.stat(output).st_mode
    output.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    log_info(click.style(f"Wrote {output}", fg="green"))
    click.echo(render_complete_command(str(output.resolve()), list(binaries)))


@cli.group()
def config():
    """Show or change settings."""
    pass


@config.command(name="show")
def config_show():
    """Show current settings."""
    click.echo(f"config: {get_config_file()}")
    click.echo(f"columns: {get_columns()}")
    click.echo(f"verbosity: {get_verbosity()}")


@config.command(name="set-columns")
@click.argument("columns", type=int)
def config_set_columns(columns: int):
    """Set the default output width."""
    try:
        set_columns(columns)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="COLUMNS")
    log_info(f"Columns set to {columns}")


@config.command(name="set-verbosity")
@click.argument("level", type=int)
def config_set_verbosity(level: int):
    """Set verbosity (0 silent, 1 normal, 2 verbose, 3 debug)."""
    try:
        set_verbosity(level)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="LEVEL")
    log_info(f"Verbosity set to {level}")
