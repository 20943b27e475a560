import sys
from typing import Sequence

import click

from kctx import __version__
from kctx.config import Settings
from kctx.logger import logger_manager
from kctx.models import (DeleteMany, ListContexts, Rename, SelectInteractively,
                         ShowCurrent, Swap, SwitchTo, Unset)
from kctx.selector import choose, selector_available
from kctx.shell import hand_off
from kctx.storage.kubectl_store import KubectlContextStore
from kctx.storage.state_storage import StateStorage
from kctx.switcher import ContextSwitcher
from kctx.utils.colors import format_listing, use_color

settings = Settings.from_env()
logger_manager.set_level(settings.log_level)
state_storage = StateStorage(settings.state_path)

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])


def get_context_store():
    """Build the kubectl-backed store (fails if kubectl is not installed)"""
    return KubectlContextStore(settings.kubectl)


def interactive_enabled() -> bool:
    """fzf is used only on a terminal, when installed and not opted out"""
    if settings.ignore_fzf:
        return False
    return sys.stdout.isatty() and selector_available(settings.fzf)


def parse_command(args: Sequence[str], show_current: bool = False, unset: bool = False,
                  delete: bool = False, interactive: bool = False):
    """Turn the argument vector into exactly one command, or raise a usage error"""
    if sum((show_current, unset, delete)) > 1:
        raise click.UsageError("-c, -u and -d cannot be combined")
    if show_current or unset:
        if args:
            raise click.UsageError(f"{'-c' if show_current else '-u'} takes no arguments")
        return ShowCurrent() if show_current else Unset()
    if delete:
        if not args:
            raise click.UsageError("-d needs at least one context name")
        return DeleteMany(tuple(args))

    if not args:
        return SelectInteractively() if interactive else ListContexts()
    if len(args) > 1:
        raise click.UsageError(f"too many arguments: {' '.join(args)}")

    token = args[0]
    if token == "-":
        return Swap()
    if "=" in token:
        new_name, old_name = token.split("=", 1)
        if not new_name or not old_name:
            raise click.UsageError(f"invalid rename '{token}', expected NEW=OLD")
        return Rename(old_name=old_name, new_name=new_name)
    return SwitchTo(token)


def switch(handoff):
    click.secho(f'Switched to context "{handoff.context}".', fg="green", err=True)
    hand_off(handoff, settings.shell)


@click.command(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, "-V", "--version", prog_name="kctx")
@click.option("-c", "--current", "show_current", is_flag=True, help="Show the current context name.")
@click.option("-u", "--unset", is_flag=True, help="Unset the current context.")
@click.option("-d", "--delete", is_flag=True, help="Delete the given contexts ('.' for the current one).")
@click.argument("args", nargs=-1)
def cli(show_current, unset, delete, args):
    """kctx - switch between kubectl contexts.

    \b
    USAGE:
    kctx                : list the contexts (pick one with fzf on a terminal)
    kctx NAME           : switch to context NAME
    kctx -              : switch to the previous context
    kctx -c, --current  : show the current context name
    kctx NEW=OLD        : rename context OLD to NEW
    kctx NEW=.          : rename the current context to NEW
    kctx -d NAME [...]  : delete contexts ('.' for the current one)
    kctx -u, --unset    : unset the current context

    A switch enters the context's namespace directory and starts $SHELL.
    """
    command = parse_command(args, show_current, unset, delete, interactive=interactive_enabled())
    switcher = ContextSwitcher(get_context_store(), state_storage)

    if isinstance(command, ListContexts):
        color = use_color(settings)
        output = format_listing(switcher.list_contexts(), settings, color)
        if output:
            click.echo(output, color=color)
    elif isinstance(command, SelectInteractively):
        # fzf renders the ANSI codes itself, so highlight regardless of tty
        text = format_listing(switcher.list_contexts(), settings, color=True)
        switch(switcher.switch_to(choose(text, settings.fzf)))
    elif isinstance(command, SwitchTo):
        switch(switcher.switch_to(command.name))
    elif isinstance(command, Swap):
        switch(switcher.swap())
    elif isinstance(command, ShowCurrent):
        click.echo(switcher.show_current())
    elif isinstance(command, Unset):
        switcher.unset()
        click.secho("Active context unset for kubectl.", fg="green", err=True)
    elif isinstance(command, DeleteMany):
        for name in switcher.delete_many(command.names):
            click.secho(f'Deleted context "{name}".', fg="green", err=True)
    elif isinstance(command, Rename):
        old_name = switcher.rename(command.old_name, command.new_name)
        click.secho(f'Context "{old_name}" renamed to "{command.new_name}".', fg="green", err=True)


def main(argv=None):
    """Console entry point; every failure exits with status 1"""
    try:
        rv = cli.main(args=argv, prog_name="kctx", standalone_mode=False)
    except click.ClickException as e:
        e.show()
        sys.exit(1)
    except click.Abort:
        click.echo("Aborted!", err=True)
        sys.exit(1)
    sys.exit(rv if isinstance(rv, int) else 0)


if __name__ == "__main__":
    main()
