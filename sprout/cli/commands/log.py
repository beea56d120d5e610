"""Log command - show commit history."""

import click
from colorama import Fore, Style
from sprout.core.errors import SproutError
from sprout.core.repository import Repository
from sprout.cli.output import info, fail


def format_timestamp(commit):
    """Format a commit timestamp in local time."""
    return commit.committed_at.astimezone().strftime("%a %b %d %H:%M:%S %Y %z")


def print_commit(commit, show_files=False):
    """Print one commit entry."""
    click.echo(f"{Fore.YELLOW}commit {commit.fingerprint}{Style.RESET_ALL}")
    click.echo(f"Branch: {Fore.CYAN}{commit.branch}{Style.RESET_ALL}")
    click.echo(f"Date:   {format_timestamp(commit)}")
    click.echo()
    for line in commit.message.split('\n'):
        click.echo(f"    {line}")
    
    if show_files:
        click.echo()
        for entry in commit.files:
            click.echo(f"    {Style.DIM}- {entry.path}{Style.RESET_ALL}")
    click.echo()


@click.command('log')
@click.option('--all', 'all_branches', is_flag=True, help='Show commits from every branch')
@click.option('--files', 'show_files', is_flag=True, help='List the files of each commit')
@click.option('-n', '--max-count', type=int, help='Limit number of commits')
def log_cmd(all_branches, show_files, max_count):
    """
    Show commit history.
    
    By default walks the active branch from its tip back to the root
    commit. With --all, lists commits reachable from any branch, most
    recent first.
    
    Examples:
        sprout log
        sprout log --files
        sprout log --all -n 5
    """
    try:
        repo = Repository.open()
        
        if all_branches:
            tips = [tip for _, tip in repo.refs.list_branches()]
            commits = iter(repo.graph.all_commits(tips))
        else:
            tip = repo.refs.head_commit()
            if tip is None:
                click.echo(info(f"No commits yet on {repo.refs.current_branch()}"))
                return
            commits = repo.graph.history(tip)
        
        for count, commit in enumerate(commits):
            if max_count is not None and count >= max_count:
                break
            print_commit(commit, show_files)
    except SproutError as e:
        fail(str(e))
