"""Show command - display a commit and its changes."""

import click
from colorama import Style
from sprout.core.errors import SproutError
from sprout.core.repository import Repository
from sprout.cli.commands.log import print_commit
from sprout.cli.output import info, fail


@click.command('show')
@click.argument('ref', default='HEAD')
@click.option('--no-color', is_flag=True, help='Disable colored output')
def show_cmd(ref, no_color):
    """
    Show a commit and how its files changed from the parent commit.
    
    REF may be a branch name, HEAD, or a commit fingerprint prefix.
    
    Examples:
        sprout show
        sprout show feature
        sprout show 3f2a9c1
    """
    try:
        repo = Repository.open()
        commit_hash = repo.refs.resolve_reference(ref)
        if commit_hash is None:
            fail(f"Not a valid reference: {ref}")
        
        commit = repo.graph.resolve(commit_hash)
        print_commit(commit, show_files=False)
        
        if commit.is_root:
            click.echo(info("Root commit: no parent to compare with"))
        
        diffs = repo.diff.diff_commit(commit)
        for file_diff in diffs:
            if file_diff.is_modified and not file_diff.has_changes:
                click.echo(f"{Style.DIM}unchanged: {file_diff.path}{Style.RESET_ALL}")
                continue
            click.echo(repo.diff.format_diff([file_diff], color=not no_color))
            click.echo()
    except SproutError as e:
        fail(str(e))
