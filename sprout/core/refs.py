"""Reference management for Sprout."""

import logging
import re
from pathlib import Path
from typing import List, Optional, Tuple

from .errors import (AlreadyExists, BranchInUse, Corrupt, IOFailure, InvalidName,
                     NoCommits, UnknownBranch)
from .hash import is_fingerprint
from sprout.utils.fs import write_atomic

logger = logging.getLogger(__name__)

HEAD_PREFIX = 'ref: refs/heads/'

_INVALID_NAME = re.compile(r'(^[.-])|(\.\.)|([\s/\\~^:?*\[])|(\.lock$)')


def is_valid_branch_name(name: str) -> bool:
    return bool(name) and not _INVALID_NAME.search(name)


def validate_branch_name(name: str) -> None:
    """
    Check that name can be used as a branch reference.

    Raises:
        InvalidName: If the name is empty or contains forbidden characters
    """
    if not is_valid_branch_name(name):
        raise InvalidName(f"Invalid branch name: {name!r}")


class RefManager:
    """
    Manages branch references and HEAD.

    Handles:
    - Branch references (refs/heads/<name>), each holding a tip fingerprint
    - HEAD, a symbolic reference naming the active branch

    Each reference is one small file, rewritten whole on every change.
    """

    def __init__(self, repo):
        """
        Initialize reference manager.

        Args:
            repo: Repository instance
        """
        self.repo = repo
        self.sprout_dir = repo.sprout_dir
        self.heads_dir = repo.heads_dir
        self.head_file = repo.head_file

    def branch_path(self, name: str) -> Path:
        return self.heads_dir / name

    def current_branch(self) -> str:
        """
        Get the active branch name.

        Raises:
            Corrupt: If HEAD is missing or not a branch reference
        """
        try:
            content = self.head_file.read_text().strip()
        except FileNotFoundError as exc:
            raise Corrupt("HEAD is missing") from exc
        except OSError as exc:
            raise IOFailure(f"Cannot read HEAD: {exc}") from exc

        if not content.startswith(HEAD_PREFIX) or len(content) == len(HEAD_PREFIX):
            raise Corrupt(f"HEAD is not a branch reference: {content!r}")

        name = content[len(HEAD_PREFIX):]
        if not is_valid_branch_name(name):
            raise Corrupt(f"HEAD names an invalid branch: {name!r}")
        return name

    def set_head(self, name: str) -> None:
        """Point HEAD at branch name."""
        write_atomic(self.head_file, f'{HEAD_PREFIX}{name}\n'.encode())
        logger.debug("HEAD -> %s", name)

    def tip_of(self, name: str) -> Optional[str]:
        """
        Get the tip commit fingerprint of a branch.

        Returns:
            Fingerprint, or None if the branch has no commits yet or the
            name cannot be a branch

        Raises:
            Corrupt: If the reference file does not hold a fingerprint
        """
        if not is_valid_branch_name(name):
            return None

        path = self.branch_path(name)
        if not path.is_file():
            return None

        try:
            content = path.read_text().strip()
        except OSError as exc:
            raise IOFailure(f"Cannot read branch {name}: {exc}") from exc

        if not is_fingerprint(content):
            raise Corrupt(f"Branch {name} does not point to a commit: {content!r}")
        return content

    def head_commit(self) -> Optional[str]:
        """Tip of the active branch."""
        return self.tip_of(self.current_branch())

    def branch_exists(self, name: str) -> bool:
        return is_valid_branch_name(name) and self.branch_path(name).is_file()

    def update_branch(self, name: str, commit_hash: str) -> None:
        """
        Move branch name to commit_hash, creating it if needed.

        Raises:
            NotFound: If commit_hash is not a stored commit
            Corrupt: If commit_hash is stored but is not a commit
        """
        validate_branch_name(name)
        self.repo.graph.resolve(commit_hash)
        write_atomic(self.branch_path(name), (commit_hash + '\n').encode())
        logger.debug("refs/heads/%s -> %s", name, commit_hash)

    def create_branch(self, name: str) -> str:
        """
        Create a branch at the active branch's tip.

        Returns:
            str: The commit the new branch points to

        Raises:
            InvalidName: If name is not a valid branch name
            AlreadyExists: If the branch already exists
            NoCommits: If the active branch has no commits yet
        """
        validate_branch_name(name)

        if self.branch_exists(name):
            raise AlreadyExists(f"Branch {name} already exists")

        tip = self.head_commit()
        if tip is None:
            raise NoCommits("Cannot create branch: no commits exist")

        self.update_branch(name, tip)
        return tip

    def checkout(self, name: str) -> None:
        """
        Make name the active branch.

        Only HEAD moves; files in the working directory are left as they are.

        Raises:
            UnknownBranch: If no such branch exists
        """
        if not is_valid_branch_name(name):
            raise UnknownBranch(f"Unknown branch: {name}")
        if not self.branch_exists(name) and name != self.current_branch():
            raise UnknownBranch(f"Unknown branch: {name}")
        self.set_head(name)

    def delete_branch(self, name: str) -> str:
        """
        Delete a branch reference. Commits it pointed to stay in the store.

        Returns:
            str: The tip the branch pointed to

        Raises:
            UnknownBranch: If no such branch exists
            BranchInUse: If name is the active branch
        """
        tip = self.tip_of(name)
        if tip is None:
            raise UnknownBranch(f"Unknown branch: {name}")

        if name == self.current_branch():
            raise BranchInUse(f"Cannot delete the active branch {name}")

        try:
            self.branch_path(name).unlink()
        except OSError as exc:
            raise IOFailure(f"Cannot delete branch {name}: {exc}") from exc

        logger.debug("Deleted refs/heads/%s (was %s)", name, tip)
        return tip

    def list_branches(self) -> List[Tuple[str, str]]:
        """
        List all branches.

        Returns:
            List of (branch_name, commit_hash) tuples sorted by name
        """
        if not self.heads_dir.exists():
            return []

        branches = []
        for branch_file in self.heads_dir.iterdir():
            if branch_file.is_file() and is_valid_branch_name(branch_file.name):
                branches.append((branch_file.name, self.tip_of(branch_file.name)))

        return sorted(branches, key=lambda x: x[0])

    def resolve_reference(self, ref: str) -> Optional[str]:
        """
        Resolve a branch name, HEAD, or fingerprint prefix to a commit.

        Returns:
            Commit fingerprint or None if ref can't be resolved
        """
        if ref == 'HEAD':
            return self.head_commit()

        if self.branch_exists(ref):
            return self.tip_of(ref)

        if len(ref) >= 4 and all(c in '0123456789abcdef' for c in ref.lower()):
            return self.repo.graph.find_commit(ref.lower())

        return None
