"""Commit command - create a commit from staged changes."""

import click
from sprout.core.errors import SproutError
from sprout.core.repository import Repository
from sprout.cli.output import success, info, fail


@click.command('commit')
@click.argument('words', nargs=-1)
@click.option('-m', '--message', help='Commit message')
def commit_cmd(words, message):
    """
    Record the staged changes as a new commit.
    
    The commit is made on the active branch, whose tip becomes the new
    commit's parent. The staging area is emptied afterwards.
    
    Examples:
        sprout commit "Initial commit"
        sprout commit -m "Add feature"
    """
    message = message or ' '.join(words)
    if not message:
        fail('Commit message required. Use sprout commit "message"')
    
    try:
        repo = Repository.open()
        commit = repo.commit(message)
    except SproutError as e:
        fail(str(e))
    
    click.echo(success(f"Created commit {commit.fingerprint}"))
    click.echo(info(f"Branch: {commit.branch}"))
    click.echo(info(f"Message: {message}"))
    if commit.parent:
        click.echo(info(f"Parent: {commit.parent[:7]}"))
    else:
        click.echo(info("(root commit)"))
    click.echo(info(f"Files: {len(commit.files)}"))
