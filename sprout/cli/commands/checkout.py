"""Checkout command - switch the active branch."""

import click
from sprout.core.errors import SproutError
from sprout.core.repository import Repository
from sprout.cli.output import success, warning, fail


@click.command('checkout')
@click.argument('branch')
def checkout_cmd(branch):
    """
    Switch to another branch.
    
    Only HEAD moves: files in the working directory are not rewritten,
    so they keep whatever content they had on the previous branch.
    
    Examples:
        sprout checkout feature
    """
    try:
        repo = Repository.open()
        previous = repo.refs.current_branch()
        repo.refs.checkout(branch)
    except SproutError as e:
        fail(str(e))
    
    if previous == branch:
        click.echo(warning(f"Already on '{branch}'"))
        return
    
    click.echo(success(f"Switched to branch '{branch}'"))
