"""Core functionality for Sprout.

This module contains the persistence and history model:
- Object records (StagingEntry, Commit)
- Content-addressed object store
- Index/staging area
- Commit graph
- Reference management
- Configuration management
- Hashing utilities

For operations like diff, status and bulk add, see sprout.operations
"""

from sprout.core.errors import (SproutError, NotFound, UnknownBranch, NoCommits, Corrupt,
                                EmptyCommit, AlreadyExists, IOFailure, InvalidName, BranchInUse)
from sprout.core.hash import fingerprint, hash_file
from sprout.core.objects import StagingEntry, Commit
from sprout.core.store import ObjectStore
from sprout.core.index import Index
from sprout.core.graph import CommitGraph
from sprout.core.refs import RefManager
from sprout.core.config import Config
from sprout.core.repository import Repository

__all__ = [
    'SproutError',
    'NotFound',
    'UnknownBranch',
    'NoCommits',
    'Corrupt',
    'EmptyCommit',
    'AlreadyExists',
    'IOFailure',
    'InvalidName',
    'BranchInUse',
    'fingerprint',
    'hash_file',
    'StagingEntry',
    'Commit',
    'ObjectStore',
    'Index',
    'CommitGraph',
    'RefManager',
    'Config',
    'Repository',
]
