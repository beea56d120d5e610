"""CLI commands for Sprout."""

from sprout.cli.commands.init import init_cmd
from sprout.cli.commands.add import add_cmd
from sprout.cli.commands.commit import commit_cmd
from sprout.cli.commands.status import status_cmd
from sprout.cli.commands.log import log_cmd
from sprout.cli.commands.branch import branch_cmd
from sprout.cli.commands.checkout import checkout_cmd
from sprout.cli.commands.diff import diff_cmd
from sprout.cli.commands.show import show_cmd
from sprout.cli.commands.config import config_cmd

__all__ = ['init_cmd', 'add_cmd', 'commit_cmd', 'status_cmd', 'log_cmd',
           'branch_cmd', 'checkout_cmd', 'diff_cmd', 'show_cmd', 'config_cmd']
