"""Filesystem helpers: atomic writes and directory walking."""

import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable, List

from sprout.core.errors import IOFailure, NotFound

logger = logging.getLogger(__name__)


def write_atomic(path: Path, data: bytes) -> None:
    """
    Write data to path so readers see either the old file or the new one.
    
    The bytes go to a temporary file in the same directory which is then
    renamed over the destination.
    
    Raises:
        IOFailure: If the write or rename fails
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=str(path.parent), prefix=f'.{path.name}.', suffix='.tmp')
    except OSError as exc:
        raise IOFailure(f"Cannot write {path}: {exc}") from exc
    
    try:
        with os.fdopen(fd, 'wb') as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except OSError as exc:
        try:
            os.unlink(tmp_name)
        except OSError:
            logger.warning("Could not remove temporary file %s", tmp_name)
        raise IOFailure(f"Cannot write {path}: {exc}") from exc


def read_bytes(path: Path) -> bytes:
    """
    Read a whole file.
    
    Raises:
        NotFound: If the file does not exist
        IOFailure: If it exists but cannot be read
    """
    try:
        return Path(path).read_bytes()
    except FileNotFoundError as exc:
        raise NotFound(f"File not found: {path}") from exc
    except IsADirectoryError as exc:
        raise NotFound(f"Not a file: {path}") from exc
    except OSError as exc:
        raise IOFailure(f"Cannot read {path}: {exc}") from exc


def collect_files(paths: Iterable) -> List[Path]:
    """
    Expand files and directories into a flat list of files.
    
    Directories are walked with an explicit worklist. Hidden entries and the
    .sprout control directory are skipped inside directories; files named
    explicitly are always kept. Order follows the input; within a directory
    its files come first in name order, then its subdirectories.
    
    Args:
        paths: Files and directories to expand
        
    Returns:
        List of file paths
        
    Raises:
        NotFound: If an input path does not exist
    """
    files = []
    seen = set()
    
    for raw in paths:
        start = Path(raw)
        if not start.exists():
            raise NotFound(f"File not found: {raw}")
        
        if start.is_file():
            if start not in seen:
                seen.add(start)
                files.append(start)
            continue
        
        stack = [start]
        while stack:
            current = stack.pop()
            try:
                children = sorted(current.iterdir(), key=lambda p: p.name)
            except OSError as exc:
                raise IOFailure(f"Cannot list {current}: {exc}") from exc
            
            subdirs = []
            for child in children:
                if child.name.startswith('.'):
                    continue
                if child.is_dir():
                    subdirs.append(child)
                elif child.is_file() and child not in seen:
                    seen.add(child)
                    files.append(child)
            
            # Reversed so the first subdirectory is popped next
            stack.extend(reversed(subdirs))
    
    logger.debug("Collected %d file(s)", len(files))
    return files
