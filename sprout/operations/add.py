"""Staging files and directories."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional

from sprout.core.objects import StagingEntry
from sprout.utils.fs import collect_files, read_bytes

logger = logging.getLogger(__name__)


def stage_paths(repo, paths: Iterable, workers: Optional[int] = None) -> List[StagingEntry]:
    """
    Stage files, expanding directories.

    Blob reads and writes run on a thread pool. Index updates are applied
    afterwards one at a time in input order, so a path listed twice ends
    up with the fingerprint of its last occurrence.

    Args:
        repo: Repository instance
        paths: Files and directories to stage
        workers: Thread pool size (defaults to core.workers)

    Returns:
        List of staged entries, in staging order

    Raises:
        NotFound: If a path does not exist or lies outside the work tree
    """
    files = collect_files(paths)
    rel_paths = [repo.relative_path(path) for path in files]

    if workers is None:
        workers = repo.config.get_int('core', 'workers', fallback=4)
    workers = max(1, workers)

    objects = repo.objects

    def store(path):
        return objects.put(read_bytes(path))

    with ThreadPoolExecutor(max_workers=workers) as pool:
        fingerprints = list(pool.map(store, files))

    staged = []
    for rel_path, fp in zip(rel_paths, fingerprints):
        staged.append(repo.index.stage(rel_path, fp))

    logger.debug("Staged %d file(s)", len(staged))
    return staged
