"""Repository management for Sprout."""

import logging
from pathlib import Path
from typing import Optional

from .errors import AlreadyExists, IOFailure, NotFound
from .objects import Commit
from sprout.utils.fs import write_atomic

logger = logging.getLogger(__name__)


class Repository:
    """
    Represents a Sprout repository.

    A repository is the explicit handle every operation works through. It
    knows the work tree and the .sprout directory layout and lazily builds
    the components that read and write it.
    """

    def __init__(self, path: str = '.'):
        """
        Initialize repository.

        Args:
            path: Path to repository root (defaults to current directory)
        """
        self.work_tree = Path(path).resolve()
        self.sprout_dir = self.work_tree / '.sprout'
        self.objects_dir = self.sprout_dir / 'objects'
        self.refs_dir = self.sprout_dir / 'refs'
        self.heads_dir = self.refs_dir / 'heads'
        self.head_file = self.sprout_dir / 'HEAD'
        self.index_file = self.sprout_dir / 'index'
        self.config_file = self.sprout_dir / 'config'

        self._objects = None
        self._index = None
        self._graph = None
        self._ref_manager = None
        self._diff_engine = None
        self._config = None

    @property
    def objects(self):
        """Get ObjectStore instance."""
        if self._objects is None:
            from .store import ObjectStore
            self._objects = ObjectStore(self.objects_dir)
        return self._objects

    @property
    def index(self):
        """Get the staging Index, loaded from disk on first use."""
        if self._index is None:
            from .index import Index
            self._index = Index.open(self.index_file)
        return self._index

    @property
    def graph(self):
        """Get CommitGraph instance."""
        if self._graph is None:
            from .graph import CommitGraph
            self._graph = CommitGraph(self.objects)
        return self._graph

    @property
    def refs(self):
        """Get RefManager instance."""
        if self._ref_manager is None:
            from .refs import RefManager
            self._ref_manager = RefManager(self)
        return self._ref_manager

    @property
    def diff(self):
        """Get DiffEngine instance."""
        if self._diff_engine is None:
            from sprout.operations.diff import DiffEngine
            self._diff_engine = DiffEngine(self)
        return self._diff_engine

    @property
    def config(self):
        """Get Config instance for this repository."""
        if self._config is None:
            from .config import Config
            self._config = Config(self.config_file)
        return self._config

    def init(self, default_branch: Optional[str] = None) -> 'Repository':
        """
        Initialize a new repository.

        Creates the .sprout directory structure:
        .sprout/
        ├── objects/       # Blobs and commits
        ├── refs/
        │   └── heads/     # Branch references
        ├── HEAD           # Active branch
        ├── index          # Staging area
        └── config         # Repository configuration

        Args:
            default_branch: Branch HEAD names (defaults to init.defaultbranch)

        Returns:
            Repository: self for method chaining

        Raises:
            AlreadyExists: If repository already exists
        """
        if self.sprout_dir.exists():
            raise AlreadyExists(f"Repository already exists at {self.sprout_dir}")

        from .refs import validate_branch_name

        branch = default_branch or self.config.get('init', 'defaultbranch')
        validate_branch_name(branch)

        try:
            self.sprout_dir.mkdir(parents=True)
            self.objects_dir.mkdir()
            self.refs_dir.mkdir()
            self.heads_dir.mkdir()
        except OSError as exc:
            raise IOFailure(f"Cannot create repository at {self.sprout_dir}: {exc}") from exc

        self.refs.set_head(branch)
        write_atomic(self.index_file, b'[]')
        write_atomic(self.config_file, b'[core]\nrepositoryformatversion = 0\n')
        self._config = None

        logger.debug("Initialized repository at %s on branch %s", self.sprout_dir, branch)
        return self

    def is_initialized(self) -> bool:
        return self.sprout_dir.is_dir()

    @classmethod
    def find_repository(cls, path: str = '.') -> Optional['Repository']:
        """
        Find repository by searching up the directory tree.

        Args:
            path: Starting path for search

        Returns:
            Repository if found, None otherwise
        """
        current = Path(path).resolve()

        while True:
            if (current / '.sprout').is_dir():
                return cls(str(current))

            # Reached filesystem root
            if current == current.parent:
                return None

            current = current.parent

    @classmethod
    def open(cls, path: str = '.') -> 'Repository':
        """
        Find the repository containing path.

        Raises:
            NotFound: If path is not inside a Sprout repository
        """
        repo = cls.find_repository(path)
        if repo is None:
            raise NotFound("Not a sprout repository (or any of the parent directories)")
        return repo

    def relative_path(self, path) -> str:
        """
        Normalize a working path to its index key.

        Returns:
            Path relative to the work tree, with forward slashes

        Raises:
            NotFound: If path lies outside the work tree
        """
        file_path = Path(path)
        if not file_path.is_absolute():
            file_path = Path.cwd() / file_path
        file_path = file_path.resolve()

        try:
            rel_path = file_path.relative_to(self.work_tree)
        except ValueError as exc:
            raise NotFound(f"{path} is outside repository at {self.work_tree}") from exc

        if rel_path.parts and rel_path.parts[0] == '.sprout':
            raise NotFound(f"{path} is inside the repository control directory")

        return rel_path.as_posix()

    def working_path(self, rel_path: str) -> Path:
        """Absolute path of an index key in the work tree."""
        return self.work_tree / rel_path

    def head_commit(self) -> Optional[Commit]:
        """The tip commit of the active branch, or None before the first commit."""
        tip = self.refs.head_commit()
        if tip is None:
            return None
        return self.graph.resolve(tip)

    def commit(self, message: str) -> Commit:
        """
        Commit the staging index on the active branch.

        Takes the active branch tip as parent, stores the commit, advances
        the branch and then clears the index.

        Raises:
            EmptyCommit: If nothing is staged; no state is changed
        """
        branch = self.refs.current_branch()
        parent = self.refs.tip_of(branch)

        commit = self.graph.commit(message, self.index.entries(), parent, branch)
        self.refs.update_branch(branch, commit.fingerprint)
        self.index.clear()

        logger.debug("Committed %s on %s", commit.fingerprint, branch)
        return commit

    def __repr__(self) -> str:
        """String representation of repository."""
        return f"Repository(path={self.work_tree})"
