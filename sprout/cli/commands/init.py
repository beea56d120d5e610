"""Initialize a new Sprout repository."""

import click
from pathlib import Path
from sprout.core.errors import SproutError
from sprout.core.repository import Repository
from sprout.cli.output import success, info, fail


@click.command('init')
@click.argument('path', default='.')
@click.option('-b', '--initial-branch', help='Name of the first branch (default: main)')
def init_cmd(path, initial_branch):
    """
    Initialize a new Sprout repository.
    
    Creates a .sprout directory with the object store, references,
    HEAD and the staging index.
    
    Examples:
        sprout init                    # Initialize in current directory
        sprout init my-project         # Initialize in my-project directory
        sprout init -b trunk           # Start on branch 'trunk'
    """
    repo_path = Path(path).resolve()
    
    try:
        if not repo_path.exists():
            repo_path.mkdir(parents=True)
            click.echo(info(f"Created directory {repo_path}"))
        
        repo = Repository(str(repo_path))
        repo.init(default_branch=initial_branch)
    except SproutError as e:
        fail(str(e))
    except OSError as e:
        fail(f"Cannot create repository at {path}: {e}")
    
    click.echo(success(f"Initialized empty Sprout repository in {repo.sprout_dir}"))
    click.echo(info(f"On branch {repo.refs.current_branch()}"))
