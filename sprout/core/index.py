"""Index (staging area) implementation."""

import json
import logging
from pathlib import Path
from typing import Dict, Optional, Tuple

from .errors import Corrupt, IOFailure
from .objects import StagingEntry
from sprout.utils.fs import write_atomic

logger = logging.getLogger(__name__)


class Index:
    """
    Sprout index (staging area) implementation.

    The index stores the files to be included in the next commit, one entry
    per path. Entries keep the order in which their path was first staged;
    restaging a path replaces its fingerprint in place.

    When bound to an index file, every mutation is written back to disk as
    a whole. The file is a JSON list of {"path", "fingerprint"} objects.
    """

    def __init__(self, index_file: Optional[Path] = None):
        """
        Initialize empty index.

        Args:
            index_file: File the index is persisted to, if any
        """
        self.index_file = Path(index_file) if index_file else None
        self._entries: Dict[str, StagingEntry] = {}

    @classmethod
    def open(cls, index_file: Path) -> 'Index':
        """Load the index stored in index_file (empty if it does not exist)."""
        index = cls(index_file)
        index.read()
        return index

    def stage(self, path: str, fingerprint: str) -> StagingEntry:
        """
        Add or update the entry for path.

        Args:
            path: Repository-relative path
            fingerprint: Fingerprint of the staged content

        Returns:
            StagingEntry: The stored entry
        """
        entry = StagingEntry(path, fingerprint)
        self._entries[path] = entry
        logger.debug("Staged %s as %s", path, fingerprint[:7])
        self.write()
        return entry

    def entries(self) -> Tuple[StagingEntry, ...]:
        """Staged entries in first-staging order."""
        return tuple(self._entries.values())

    def get_entry(self, path: str) -> Optional[StagingEntry]:
        """Get entry by path."""
        return self._entries.get(path)

    def clear(self) -> None:
        """Clear all entries from index."""
        self._entries.clear()
        self.write()

    def read(self) -> None:
        """
        Read index from disk.

        Raises:
            Corrupt: If the file is not a well-formed index
            IOFailure: If the file cannot be read
        """
        self._entries.clear()
        if self.index_file is None or not self.index_file.exists():
            return

        try:
            raw = self.index_file.read_bytes()
        except OSError as exc:
            raise IOFailure(f"Cannot read index: {exc}") from exc

        try:
            data = json.loads(raw.decode('utf-8'))
        except (UnicodeDecodeError, ValueError) as exc:
            raise Corrupt(f"Index file {self.index_file} is not valid JSON") from exc

        if not isinstance(data, list):
            raise Corrupt(f"Index file {self.index_file} must hold a list of entries")

        for item in data:
            entry = StagingEntry.from_dict(item)
            if entry.path in self._entries:
                raise Corrupt(f"Index lists {entry.path} more than once")
            self._entries[entry.path] = entry

    def write(self) -> None:
        """Write index to disk, if bound to a file."""
        if self.index_file is None:
            return
        data = [entry.to_dict() for entry in self._entries.values()]
        write_atomic(self.index_file, json.dumps(data, indent=2).encode('utf-8'))

    def __contains__(self, path: str) -> bool:
        return path in self._entries

    def __iter__(self):
        return iter(self.entries())

    def __len__(self) -> int:
        """Number of entries in index."""
        return len(self._entries)

    def __repr__(self) -> str:
        """String representation."""
        return f"Index(entries={len(self._entries)})"
