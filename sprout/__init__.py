"""Sprout - a minimal local version control system."""

__version__ = '0.1.0'

from sprout.core.repository import Repository
from sprout.core.objects import StagingEntry, Commit
from sprout.core.errors import SproutError

__all__ = [
    'Repository',
    'StagingEntry',
    'Commit',
    'SproutError',
]
