"""Working tree status computation."""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from sprout.core.hash import hash_file
from sprout.core.objects import Commit, StagingEntry

MODIFIED = 'modified'
DELETED = 'deleted'


@dataclass
class Status:
    """Snapshot of what is staged and what changed since the last commit."""
    branch: str
    head: Optional[str]
    staged: Tuple[StagingEntry, ...] = ()
    unstaged: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def unstaged_paths(self) -> List[str]:
        return [path for path, _ in self.unstaged]

    @property
    def is_clean(self) -> bool:
        return not self.staged and not self.unstaged


def _working_fingerprint(repo, path: str) -> Optional[str]:
    working_file = repo.working_path(path)
    if not working_file.is_file():
        return None
    return hash_file(working_file)


def unstaged_changes(repo, head: Optional[Commit] = None) -> List[Tuple[str, str]]:
    """
    Find files of the tip commit whose working copy differs.

    A path staged with exactly the working content is not reported; a path
    changed again after staging is.

    Returns:
        List of (path, kind) with kind 'modified' or 'deleted', in commit order
    """
    if head is None:
        head = repo.head_commit()
    if head is None:
        return []

    changes = []
    for entry in head.files:
        working_hash = _working_fingerprint(repo, entry.path)
        if working_hash is None:
            changes.append((entry.path, DELETED))
            continue

        staged = repo.index.get_entry(entry.path)
        expected = staged.fingerprint if staged is not None else entry.fingerprint
        if working_hash != expected:
            changes.append((entry.path, MODIFIED))

    return changes


def compute_status(repo) -> Status:
    """
    Compute the status of the repository.

    Reads the index, the active branch tip and the working files; changes
    nothing.
    """
    branch = repo.refs.current_branch()
    head = repo.head_commit()
    return Status(
        branch=branch,
        head=head.fingerprint if head else None,
        staged=repo.index.entries(),
        unstaged=unstaged_changes(repo, head),
    )
