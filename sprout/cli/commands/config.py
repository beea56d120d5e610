"""Config command - read and write configuration values."""

import click
from sprout.core.config import Config, split_key
from sprout.core.errors import SproutError
from sprout.core.repository import Repository
from sprout.cli.output import success, info, warning, fail


def get_config(global_config):
    """Config for the current repository, or global-only outside one."""
    repo = Repository.find_repository()
    if repo:
        return repo.config
    if not global_config:
        fail("Not a sprout repository (use --global)")
    return Config()


@click.group('config')
def config_cmd():
    """
    Get and set configuration values.
    
    Keys are written as section.key, for example init.defaultbranch
    or core.workers.
    
    Examples:
        sprout config set core.workers 8
        sprout config get init.defaultbranch
        sprout config set --global init.defaultbranch trunk
        sprout config list
    """


@config_cmd.command('get')
@click.argument('name')
def config_get(name):
    """Print the value of a configuration key."""
    try:
        section, key = split_key(name)
        value = get_config(global_config=True).get(section, key)
    except SproutError as e:
        fail(str(e))
    
    if value is None:
        fail(f"Key not set: {name}")
    click.echo(value)


@config_cmd.command('set')
@click.argument('name')
@click.argument('value')
@click.option('--global', 'global_config', is_flag=True, help='Write to ~/.sproutconfig')
def config_set(name, value, global_config):
    """Set a configuration key."""
    try:
        section, key = split_key(name)
        get_config(global_config).set(section, key, value, global_config=global_config)
    except SproutError as e:
        fail(str(e))
    click.echo(success(f"Set {name} = {value}"))


@config_cmd.command('unset')
@click.argument('name')
@click.option('--global', 'global_config', is_flag=True, help='Modify ~/.sproutconfig')
def config_unset(name, global_config):
    """Remove a configuration key."""
    try:
        section, key = split_key(name)
        removed = get_config(global_config).unset(section, key, global_config=global_config)
    except SproutError as e:
        fail(str(e))
    
    if removed:
        click.echo(success(f"Unset {name}"))
    else:
        click.echo(warning(f"Key not set: {name}"))


@config_cmd.command('list')
def config_list():
    """List all configuration values."""
    try:
        values = get_config(global_config=True).list_all()
    except SproutError as e:
        fail(str(e))
    
    if not values:
        click.echo(info("No configuration values set"))
        return
    for name, value in values.items():
        click.echo(f"{name}={value}")
