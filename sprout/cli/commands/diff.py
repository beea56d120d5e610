"""Diff command - show changes to a working file."""

import click
from sprout.core.errors import SproutError
from sprout.core.repository import Repository
from sprout.cli.output import info, fail


@click.command('diff')
@click.argument('path')
@click.option('--no-color', is_flag=True, help='Disable colored output')
def diff_cmd(path, no_color):
    """
    Show changes between the last commit and a working file.
    
    Compares the file with its version in the tip commit of the active
    branch. Files that commit does not record are shown as new.
    
    Examples:
        sprout diff notes.txt
        sprout diff --no-color notes.txt
    """
    try:
        repo = Repository.open()
        file_diff = repo.diff.diff_working(path)
    except SproutError as e:
        fail(str(e))
    
    if not file_diff.is_new and not file_diff.has_changes:
        click.echo(info(f"No changes in {file_diff.path}"))
        return
    
    click.echo(repo.diff.format_diff([file_diff], color=not no_color))
