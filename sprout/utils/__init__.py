"""Utilities module for common helper functions.

This module contains:
- Atomic file writes
- Directory walking for bulk add
"""

from sprout.utils.fs import write_atomic, read_bytes, collect_files

__all__ = [
    'write_atomic', 'read_bytes', 'collect_files',
]
