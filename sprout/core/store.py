"""Content-addressable object store."""

import logging
from pathlib import Path
from typing import Iterator, List

from .errors import Corrupt, IOFailure, NotFound
from .hash import fingerprint
from sprout.utils.fs import write_atomic

logger = logging.getLogger(__name__)


class ObjectStore:
    """
    Write-once storage keyed by content fingerprint.

    Blobs and commits share one address space. Objects are stored as raw
    bytes in subdirectories named by the first 2 characters of the
    fingerprint, with the remaining 38 characters as the filename.
    """

    def __init__(self, objects_dir: Path):
        """
        Initialize object store.

        Args:
            objects_dir: Directory holding the objects
        """
        self.objects_dir = Path(objects_dir)

    def object_path(self, key: str) -> Path:
        """
        Get filesystem path for an object.

        Example: ab/cdef0123456789... for fingerprint abcdef0123456789...
        """
        return self.objects_dir / key[:2] / key[2:]

    def put(self, content: bytes) -> str:
        """
        Store content under its fingerprint.

        Writing content that is already stored is a no-op.

        Args:
            content: Bytes to store

        Returns:
            str: Fingerprint of the content

        Raises:
            Corrupt: If different bytes are already stored under the same key
            IOFailure: If the write fails
        """
        key = fingerprint(content)
        path = self.object_path(key)

        if path.exists():
            existing = self._read(key, path)
            if existing != content:
                raise Corrupt(f"Fingerprint collision on object {key}")
            return key

        write_atomic(path, content)
        logger.debug("Stored object %s (%d bytes)", key, len(content))
        return key

    def get(self, key: str) -> bytes:
        """
        Read object content.

        Args:
            key: Object fingerprint

        Returns:
            bytes: Stored content

        Raises:
            NotFound: If no object exists under key
            Corrupt: If the stored bytes no longer match their fingerprint
        """
        if len(key) < 3:
            raise NotFound(f"Object {key} not found")

        path = self.object_path(key)
        content = self._read(key, path)

        if fingerprint(content) != key:
            raise Corrupt(f"Object {key} does not match its fingerprint")

        return content

    def exists(self, key: str) -> bool:
        """Check if object exists in the store."""
        return len(key) > 2 and self.object_path(key).is_file()

    def keys(self) -> Iterator[str]:
        """Iterate over the fingerprints of all stored objects."""
        if not self.objects_dir.exists():
            return

        for subdir in sorted(self.objects_dir.iterdir()):
            if not subdir.is_dir() or len(subdir.name) != 2:
                continue
            for obj_file in sorted(subdir.iterdir()):
                if obj_file.name.startswith('.'):
                    continue
                yield subdir.name + obj_file.name

    def find_prefix(self, prefix: str) -> List[str]:
        """Get every stored fingerprint starting with prefix."""
        return [key for key in self.keys() if key.startswith(prefix)]

    def _read(self, key: str, path: Path) -> bytes:
        try:
            return path.read_bytes()
        except FileNotFoundError as exc:
            raise NotFound(f"Object {key} not found") from exc
        except OSError as exc:
            raise IOFailure(f"Cannot read object {key}: {exc}") from exc

    def __len__(self) -> int:
        return sum(1 for _ in self.keys())

    def __repr__(self) -> str:
        return f"ObjectStore(path={self.objects_dir})"
