"""Operations module for high-level Sprout operations.

This module contains the workflows built on the core:
- Diff computation
- Status computation
- Bulk staging
"""

from sprout.operations.diff import DiffEngine, FileDiff, DiffLine, diff_lines
from sprout.operations.status import Status, compute_status, unstaged_changes
from sprout.operations.add import stage_paths

__all__ = [
    'DiffEngine', 'FileDiff', 'DiffLine', 'diff_lines',
    'Status', 'compute_status', 'unstaged_changes',
    'stage_paths',
]
