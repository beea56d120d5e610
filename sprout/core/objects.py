"""Sprout object records.

Blobs are stored as raw bytes and need no wrapper. Commits are stored as
sorted-key JSON so that the same record always serializes to the same bytes
and therefore the same fingerprint.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Sequence, Tuple

from .errors import Corrupt
from .hash import fingerprint as compute_fingerprint, is_fingerprint


@dataclass(frozen=True)
class StagingEntry:
    """A working path and the fingerprint of its staged content."""
    path: str
    fingerprint: str

    def to_dict(self) -> dict:
        return {'path': self.path, 'fingerprint': self.fingerprint}

    @classmethod
    def from_dict(cls, data) -> 'StagingEntry':
        """
        Build an entry from a decoded JSON mapping.

        Raises:
            Corrupt: If a field is missing or has the wrong type
        """
        if not isinstance(data, dict):
            raise Corrupt(f"Expected a file entry object, got {type(data).__name__}")
        path = data.get('path')
        fp = data.get('fingerprint')
        if not isinstance(path, str) or not path:
            raise Corrupt(f"File entry has invalid path: {path!r}")
        if not isinstance(fp, str) or not is_fingerprint(fp):
            raise Corrupt(f"File entry for {path} has invalid fingerprint: {fp!r}")
        return cls(path, fp)

    def __repr__(self) -> str:
        return f"StagingEntry({self.fingerprint[:7]} {self.path})"


def now_timestamp() -> str:
    """Current UTC time in ISO-8601 form."""
    return datetime.now(timezone.utc).isoformat(timespec='microseconds')


@dataclass(frozen=True)
class Commit:
    """
    Represents an immutable snapshot record.

    A commit captures:
    - The files staged for it (path and content fingerprint)
    - Its parent commit, or None for the root commit
    - The branch that was active when it was made
    - Timestamp and message

    The fingerprint is not part of the serialized record; it is the hash of
    the serialized bytes and is filled in once the commit is stored.
    """
    timestamp: str
    message: str
    files: Tuple[StagingEntry, ...]
    parent: Optional[str]
    branch: str
    fingerprint: str = field(default='', compare=False)

    REQUIRED_FIELDS = ('timestamp', 'message', 'files', 'parent', 'branch')

    def to_record(self) -> dict:
        return {
            'timestamp': self.timestamp,
            'message': self.message,
            'files': [entry.to_dict() for entry in self.files],
            'parent': self.parent,
            'branch': self.branch,
        }

    def serialize(self) -> bytes:
        """
        Serialize commit to its stored form.

        Returns:
            bytes: UTF-8 JSON with sorted keys
        """
        return json.dumps(self.to_record(), indent=2, sort_keys=True).encode('utf-8')

    @classmethod
    def deserialize(cls, data: bytes, commit_hash: str = '') -> 'Commit':
        """
        Deserialize a stored commit.

        Args:
            data: Stored bytes
            commit_hash: Fingerprint the bytes were stored under

        Returns:
            Commit: The decoded record

        Raises:
            Corrupt: If the bytes are not a well-formed commit record
        """
        try:
            record = json.loads(data.decode('utf-8'))
        except (UnicodeDecodeError, ValueError) as exc:
            raise Corrupt(f"Object {commit_hash or '?'} is not a commit record") from exc

        if not isinstance(record, dict):
            raise Corrupt(f"Object {commit_hash or '?'} is not a commit record")

        missing = [name for name in cls.REQUIRED_FIELDS if name not in record]
        if missing:
            raise Corrupt(f"Commit {commit_hash or '?'} is missing fields: {', '.join(missing)}")

        timestamp = record['timestamp']
        message = record['message']
        files = record['files']
        parent = record['parent']
        branch = record['branch']

        if not isinstance(timestamp, str):
            raise Corrupt(f"Commit {commit_hash} has invalid timestamp")
        try:
            parsed = datetime.fromisoformat(timestamp)
        except ValueError as exc:
            raise Corrupt(f"Commit {commit_hash} has invalid timestamp: {timestamp}") from exc
        if parsed.tzinfo is None:
            raise Corrupt(f"Commit {commit_hash} has timestamp without timezone: {timestamp}")
        if not isinstance(message, str):
            raise Corrupt(f"Commit {commit_hash} has invalid message")
        if not isinstance(files, list):
            raise Corrupt(f"Commit {commit_hash} has invalid file list")
        if parent is not None and (not isinstance(parent, str) or not is_fingerprint(parent)):
            raise Corrupt(f"Commit {commit_hash} has invalid parent: {parent!r}")
        if not isinstance(branch, str) or not branch:
            raise Corrupt(f"Commit {commit_hash} has invalid branch")

        entries = tuple(StagingEntry.from_dict(item) for item in files)
        return cls(timestamp, message, entries, parent, branch, fingerprint=commit_hash)

    @classmethod
    def create(
        cls,
        message: str,
        files: Sequence[StagingEntry],
        parent: Optional[str],
        branch: str,
        timestamp: Optional[str] = None
    ) -> 'Commit':
        """
        Create a new, not yet stored, commit.

        Args:
            message: Commit message
            files: Staged entries, in staging order
            parent: Parent commit fingerprint, None for the root commit
            branch: Active branch name
            timestamp: ISO-8601 timestamp (defaults to now)
        """
        if timestamp is None:
            timestamp = now_timestamp()
        commit = cls(timestamp, message, tuple(files), parent, branch)
        return commit.with_fingerprint(compute_fingerprint(commit.serialize()))

    def with_fingerprint(self, commit_hash: str) -> 'Commit':
        return Commit(self.timestamp, self.message, self.files, self.parent,
                      self.branch, fingerprint=commit_hash)

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def committed_at(self) -> datetime:
        return datetime.fromisoformat(self.timestamp)

    def find_file(self, path: str) -> Optional[StagingEntry]:
        """Get this commit's entry for path, if it has one."""
        for entry in self.files:
            if entry.path == path:
                return entry
        return None

    def __repr__(self) -> str:
        msg_preview = self.message.split('\n')[0][:50]
        parent_info = f", parent={self.parent[:7]}" if self.parent else ""
        return f"Commit(hash={self.fingerprint[:7]}{parent_info}, msg='{msg_preview}')"
