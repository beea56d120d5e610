"""Branch command - list, create and delete branches."""

import click
from colorama import Fore, Style
from sprout.core.errors import SproutError
from sprout.core.repository import Repository
from sprout.cli.output import success, info, fail


def get_commit_summary(repo, commit_hash):
    """Get the first line of a commit message, shortened."""
    message = repo.graph.resolve(commit_hash).message.split('\n')[0]
    if len(message) > 50:
        message = message[:47] + "..."
    return message


@click.command('branch')
@click.argument('name', required=False)
@click.option('-d', '--delete', is_flag=True, help='Delete the named branch')
def branch_cmd(name, delete):
    """
    List, create, or delete branches.
    
    Without arguments, lists branches with the active one marked.
    With a name, creates a branch at the tip of the active branch.
    
    Examples:
        sprout branch                 # List branches
        sprout branch feature         # Create branch 'feature'
        sprout branch -d feature      # Delete branch 'feature'
    """
    try:
        repo = Repository.open()
        
        if delete:
            if not name:
                fail("Branch name required")
            tip = repo.refs.delete_branch(name)
            click.echo(success(f"Deleted branch {name} (was {tip[:7]})"))
            return
        
        if name:
            tip = repo.refs.create_branch(name)
            click.echo(success(f"Created branch '{name}' at {tip[:7]}"))
            return
        
        current = repo.refs.current_branch()
        branches = repo.refs.list_branches()
        if not branches:
            click.echo(info(f"No commits yet on {current}"))
            return
        
        for branch_name, commit_hash in branches:
            summary = get_commit_summary(repo, commit_hash)
            if branch_name == current:
                click.echo(f"* {Fore.GREEN}{branch_name}{Style.RESET_ALL} "
                           f"{Fore.YELLOW}{commit_hash[:7]}{Style.RESET_ALL} {summary}")
            else:
                click.echo(f"  {branch_name} "
                           f"{Fore.YELLOW}{commit_hash[:7]}{Style.RESET_ALL} {summary}")
    except SproutError as e:
        fail(str(e))
