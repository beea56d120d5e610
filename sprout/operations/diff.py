"""Diff engine for comparing file versions."""

from dataclasses import dataclass
from difflib import SequenceMatcher
from typing import List, Optional

from colorama import Fore, Style

from sprout.core.objects import Commit
from sprout.utils.fs import read_bytes

EQUAL = 'equal'
ADDED = 'added'
REMOVED = 'removed'


@dataclass(frozen=True)
class DiffLine:
    """One line of an edit script."""
    kind: str
    text: str

    @property
    def marker(self) -> str:
        return {ADDED: '+', REMOVED: '-'}.get(self.kind, ' ')

    def __str__(self) -> str:
        return self.marker + self.text.rstrip('\r\n')


def _split(content) -> List[str]:
    if isinstance(content, bytes):
        content = content.decode('utf-8', errors='replace')
    return content.splitlines(keepends=True)


def diff_lines(old_content, new_content) -> List[DiffLine]:
    """
    Compute a line-level edit script from old_content to new_content.

    Lines keep their line endings, so joining the equal and added lines
    reproduces new_content exactly.

    Args:
        old_content: Old text (str or UTF-8 bytes)
        new_content: New text (str or UTF-8 bytes)

    Returns:
        List of DiffLine in file order; removals come before additions
        within each replaced block
    """
    old_lines = _split(old_content)
    new_lines = _split(new_content)

    script = []
    matcher = SequenceMatcher(None, old_lines, new_lines, autojunk=False)
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == 'equal':
            script.extend(DiffLine(EQUAL, line) for line in new_lines[j1:j2])
            continue
        if tag in ('replace', 'delete'):
            script.extend(DiffLine(REMOVED, line) for line in old_lines[i1:i2])
        if tag in ('replace', 'insert'):
            script.extend(DiffLine(ADDED, line) for line in new_lines[j1:j2])

    return script


class FileDiff:
    """Represents the diff for a single file."""

    def __init__(self, path: str, old_content: Optional[bytes], new_content: Optional[bytes]):
        self.path = path
        self.old_content = old_content
        self.new_content = new_content
        self.is_new = old_content is None
        self.is_deleted = new_content is None
        self.is_modified = old_content is not None and new_content is not None
        self.lines = diff_lines(old_content or b'', new_content or b'')

    @property
    def has_changes(self) -> bool:
        return any(line.kind != EQUAL for line in self.lines)

    @property
    def added(self) -> int:
        return sum(1 for line in self.lines if line.kind == ADDED)

    @property
    def removed(self) -> int:
        return sum(1 for line in self.lines if line.kind == REMOVED)

    def __repr__(self) -> str:
        return f"FileDiff({self.path}, +{self.added} -{self.removed})"


class DiffEngine:
    """
    Engine for computing diffs between file versions.

    Supports:
    - Working file vs the active branch's tip commit
    - A commit's files vs their versions in the parent commit
    - Colored line output
    """

    def __init__(self, repo):
        """
        Initialize diff engine.

        Args:
            repo: Repository instance
        """
        self.repo = repo

    def diff_blobs(self, path: str, old_content: Optional[bytes], new_content: Optional[bytes]) -> FileDiff:
        """
        Compute diff between two contents.

        Args:
            path: File path
            old_content: Old file content (None for new files)
            new_content: New file content (None for deleted files)
        """
        return FileDiff(path, old_content, new_content)

    def committed_content(self, commit: Optional[Commit], path: str) -> Optional[bytes]:
        """Content of path as recorded in commit, or None if absent."""
        if commit is None:
            return None
        entry = commit.find_file(path)
        if entry is None:
            return None
        return self.repo.objects.get(entry.fingerprint)

    def diff_working(self, path) -> FileDiff:
        """
        Diff a working file against the active branch's tip commit.

        If the tip commit does not record the path (or there are no commits
        yet) the result is a new-file diff.

        Raises:
            NotFound: If the working file does not exist
        """
        rel_path = self.repo.relative_path(path)
        new_content = read_bytes(self.repo.working_path(rel_path))
        old_content = self.committed_content(self.repo.head_commit(), rel_path)
        return self.diff_blobs(rel_path, old_content, new_content)

    def diff_commit(self, commit: Commit) -> List[FileDiff]:
        """
        Diff each file of commit against its version in the parent commit.

        Files the parent does not record are new-file diffs. For the root
        commit every file is new.
        """
        parent = self.repo.graph.resolve(commit.parent) if commit.parent else None

        diffs = []
        for entry in commit.files:
            new_content = self.repo.objects.get(entry.fingerprint)
            old_content = self.committed_content(parent, entry.path)
            diffs.append(self.diff_blobs(entry.path, old_content, new_content))
        return diffs

    def format_diff(self, diffs: List[FileDiff], color: bool = True) -> str:
        """
        Format diffs for display.

        Args:
            diffs: List of FileDiff objects
            color: Whether to use color output

        Returns:
            Formatted diff string
        """
        output = []

        for diff in diffs:
            if diff.is_new:
                output.append(f"new file: {diff.path}")
                output.append("--- /dev/null")
                output.append(f"+++ b/{diff.path}")
            elif diff.is_deleted:
                output.append(f"deleted file: {diff.path}")
                output.append(f"--- a/{diff.path}")
                output.append("+++ /dev/null")
            else:
                output.append(f"modified: {diff.path}")
                output.append(f"--- a/{diff.path}")
                output.append(f"+++ b/{diff.path}")

            for line in diff.lines:
                text = str(line)
                if color and line.kind == ADDED:
                    output.append(f"{Fore.GREEN}{text}{Style.RESET_ALL}")
                elif color and line.kind == REMOVED:
                    output.append(f"{Fore.RED}{text}{Style.RESET_ALL}")
                elif color:
                    output.append(f"{Style.DIM}{text}{Style.RESET_ALL}")
                else:
                    output.append(text)

        return '\n'.join(output)
