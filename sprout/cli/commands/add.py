"""Add command - stage files for commit."""

import click
from sprout.core.errors import SproutError
from sprout.core.repository import Repository
from sprout.operations.add import stage_paths
from sprout.cli.output import success, info, fail


@click.command('add')
@click.argument('paths', nargs=-1, required=True)
def add_cmd(paths):
    """
    Add file contents to the staging area.
    
    Stage files for the next commit. Directories are added recursively,
    skipping hidden files. Modified files must be added again to stage
    the new changes.
    
    Examples:
        sprout add file.txt
        sprout add src/
        sprout add .
    """
    try:
        repo = Repository.open()
        staged = stage_paths(repo, paths)
    except SproutError as e:
        fail(str(e))
    
    if not staged:
        click.echo(info("No files matched"))
        return
    
    click.echo(success(f"Added {len(staged)} file(s) to staging area"))
    for entry in staged:
        click.echo(info(f"  {entry.path}"))
