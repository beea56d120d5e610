"""Commit graph: building, resolving and walking commits."""

import logging
from typing import Iterable, Iterator, List, Optional, Sequence

from .errors import Corrupt, EmptyCommit, NotFound
from .objects import Commit, StagingEntry
from .store import ObjectStore

logger = logging.getLogger(__name__)


class CommitGraph:
    """
    Builds immutable commits and walks their parent links.

    Commits are stored through the object store like any other content, so
    a commit's fingerprint is the hash of its serialized record.
    """

    def __init__(self, store: ObjectStore):
        """
        Initialize commit graph.

        Args:
            store: Object store commits are written to and read from
        """
        self.store = store

    def commit(
        self,
        message: str,
        index_entries: Sequence[StagingEntry],
        parent: Optional[str],
        branch: str,
        timestamp: Optional[str] = None
    ) -> Commit:
        """
        Create and store a commit.

        Args:
            message: Commit message
            index_entries: Staged entries, in staging order
            parent: Parent commit fingerprint (None for the root commit)
            branch: Branch the commit is made on
            timestamp: ISO-8601 timestamp (defaults to now)

        Returns:
            Commit: The stored commit with its fingerprint

        Raises:
            EmptyCommit: If index_entries is empty
            NotFound: If parent does not resolve to a stored commit
        """
        if not index_entries:
            raise EmptyCommit("Nothing to commit (staging area is empty)")

        if parent is not None:
            self.resolve(parent)

        commit = Commit.create(message, list(index_entries), parent, branch, timestamp)
        commit_hash = self.store.put(commit.serialize())
        logger.debug("Created commit %s on %s with %d file(s)",
                     commit_hash, branch, len(commit.files))
        return commit.with_fingerprint(commit_hash)

    def resolve(self, commit_hash: str) -> Commit:
        """
        Read a stored commit.

        Raises:
            NotFound: If no object is stored under commit_hash
            Corrupt: If the stored bytes are not a well-formed commit
        """
        data = self.store.get(commit_hash)
        return Commit.deserialize(data, commit_hash)

    def history(self, start_hash: str) -> Iterator[Commit]:
        """
        Walk parent links from start_hash back to the root commit.

        The walk is lazy and can be restarted by calling history again.

        Yields:
            Commit: start commit first, then each parent in turn

        Raises:
            NotFound: If start_hash is not stored
            Corrupt: On a dangling parent or a cycle
        """
        visited = set()
        current = start_hash
        child = None

        while current is not None:
            if current in visited:
                raise Corrupt(f"Cycle in history: commit {current} reached twice")
            visited.add(current)

            try:
                commit = self.resolve(current)
            except NotFound as exc:
                if child is None:
                    raise
                raise Corrupt(f"Commit {child} has dangling parent {current}") from exc

            yield commit
            child = current
            current = commit.parent

    def all_commits(self, tips: Iterable[str]) -> List[Commit]:
        """
        Collect every commit reachable from tips.

        Returns:
            Commits most recent first by timestamp, ties broken by fingerprint
        """
        seen = {}
        for tip in tips:
            for commit in self.history(tip):
                if commit.fingerprint in seen:
                    break
                seen[commit.fingerprint] = commit

        return sorted(seen.values(),
                      key=lambda c: (c.committed_at, c.fingerprint),
                      reverse=True)

    def find_commit(self, prefix: str) -> Optional[str]:
        """
        Find a commit by fingerprint prefix.

        Returns:
            The full fingerprint if exactly one commit matches, else None
        """
        matches = []
        for key in self.store.find_prefix(prefix):
            try:
                self.resolve(key)
            except Corrupt:
                continue
            matches.append(key)

        if len(matches) == 1:
            return matches[0]
        return None

    def __repr__(self) -> str:
        return f"CommitGraph(store={self.store!r})"
