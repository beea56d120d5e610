"""Status command - show staged files and unstaged changes."""

import click
from colorama import Fore, Style
from sprout.core.errors import SproutError
from sprout.core.repository import Repository
from sprout.operations.status import compute_status
from sprout.cli.output import success, info, fail


@click.command('status')
def status_cmd():
    """
    Show the working tree status.
    
    Displays:
    - Files staged for the next commit
    - Files of the last commit changed or deleted in the working tree
    
    Examples:
        sprout status
    """
    try:
        repo = Repository.open()
        status = compute_status(repo)
    except SproutError as e:
        fail(str(e))
    
    click.echo(f"On branch {Fore.CYAN}{status.branch}{Style.RESET_ALL}")
    if status.head is None:
        click.echo(info("No commits yet"))
    click.echo()
    
    if status.staged:
        click.echo(Fore.GREEN + "Files staged for commit:" + Style.RESET_ALL)
        for entry in status.staged:
            click.echo(f"  {Fore.GREEN}{entry.path}{Style.RESET_ALL}")
        click.echo()
    else:
        click.echo(info("No files staged for commit"))
    
    if status.unstaged:
        click.echo(Fore.RED + "Unstaged changes:" + Style.RESET_ALL)
        click.echo(info("  (use \"sprout add <file>...\" to update what will be committed)"))
        for path, kind in status.unstaged:
            click.echo(f"  {Fore.RED}{kind + ':':<10} {path}{Style.RESET_ALL}")
        click.echo()
    
    if status.is_clean:
        click.echo(success("Nothing to commit, working tree clean"))
