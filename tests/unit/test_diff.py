"""Unit tests for diff engine."""

import pytest
from sprout.core.errors import NotFound
from sprout.operations.diff import ADDED, EQUAL, REMOVED, DiffLine, FileDiff, diff_lines


def rebuild(script):
    """Reconstruct the new text from an edit script."""
    return ''.join(line.text for line in script if line.kind != REMOVED)


def test_diff_identical_is_all_equal():
    """Test diff(x, x) has only equal lines."""
    text = "one\ntwo\nthree\n"
    script = diff_lines(text, text)
    assert [line.kind for line in script] == [EQUAL] * 3


@pytest.mark.parametrize('old, new', [
    ("a\nb\nc\n", "a\nB\nc\n"),
    ("", "new\nfile"),
    ("gone\n", ""),
    ("x\ny\nz", "z\ny\nx\n"),
    ("line\r\nother\r\n", "line\r\nchanged\r\n"),
    ("same\nsame\nsame\n", "same\nsame\n"),
])
def test_rebuild_new_text(old, new):
    """Test equal and added lines reproduce the new text exactly."""
    assert rebuild(diff_lines(old, new)) == new


def test_diff_kinds():
    """Test a modified line becomes a removal then an addition."""
    script = diff_lines("a\nb\nc\n", "a\nB\nc\n")
    assert script == [
        DiffLine(EQUAL, "a\n"),
        DiffLine(REMOVED, "b\n"),
        DiffLine(ADDED, "B\n"),
        DiffLine(EQUAL, "c\n"),
    ]


def test_diff_accepts_bytes():
    """Test byte contents are decoded as UTF-8."""
    script = diff_lines(b"caf\xc3\xa9\n", b"caf\xc3\xa9\nbar\n")
    assert script[-1] == DiffLine(ADDED, "bar\n")


def test_diff_deterministic():
    """Test the same inputs give the same script."""
    assert diff_lines("a\nb\n", "b\na\n") == diff_lines("a\nb\n", "b\na\n")


def test_diff_line_str():
    """Test display markers."""
    assert str(DiffLine(ADDED, "x\n")) == "+x"
    assert str(DiffLine(REMOVED, "x\r\n")) == "-x"
    assert str(DiffLine(EQUAL, "x")) == " x"


def test_file_diff_new_file():
    """Test FileDiff for a new file."""
    diff = FileDiff("test.txt", None, b"hello\n")
    assert diff.is_new is True
    assert diff.is_modified is False
    assert [line.kind for line in diff.lines] == [ADDED]


def test_file_diff_modified_file():
    """Test FileDiff for a modified file."""
    diff = FileDiff("test.txt", b"hello\n", b"hello world\n")
    assert diff.is_modified is True
    assert diff.has_changes
    assert (diff.added, diff.removed) == (1, 1)


def test_diff_working_modified(repo_with_commits):
    """Test a working file against its committed version."""
    repo = repo_with_commits
    (repo.work_tree / 'a.txt').write_text('hello world\nmore\n')
    
    diff = repo.diff.diff_working(repo.work_tree / 'a.txt')
    assert diff.path == 'a.txt'
    assert diff.is_modified
    assert rebuild(diff.lines) == 'hello world\nmore\n'


def test_diff_working_unchanged(repo_with_commits):
    """Test a clean file has no changes."""
    diff = repo_with_commits.diff.diff_working(repo_with_commits.work_tree / 'a.txt')
    assert not diff.has_changes


def test_diff_working_new_file(repo_with_commits, write_file):
    """Test a path the tip commit lacks is a new file."""
    path = write_file('b.txt', 'brand new\n')
    diff = repo_with_commits.diff.diff_working(path)
    assert diff.is_new
    assert diff.old_content is None
    assert all(line.kind == ADDED for line in diff.lines)


def test_diff_working_without_commits(repo, write_file):
    """Test diff before the first commit."""
    diff = repo.diff.diff_working(write_file('a.txt', 'x\n'))
    assert diff.is_new


def test_diff_working_missing_file(repo_with_commits):
    """Test diff of a file that does not exist."""
    with pytest.raises(NotFound):
        repo_with_commits.diff.diff_working(repo_with_commits.work_tree / 'nope.txt')


def test_diff_commit_against_parent(repo_with_commits, write_file, stage_file):
    """Test a commit's files are compared with the parent commit."""
    repo = repo_with_commits
    diffs = repo.diff.diff_commit(repo.second_commit)
    assert len(diffs) == 1
    assert diffs[0].is_modified
    assert diffs[0].old_content == b'hello'
    
    stage_file(write_file('b.txt', 'b\n'))
    third = repo.commit('third')
    assert repo.diff.diff_commit(third)[0].is_new


def test_diff_commit_root(repo_with_commits):
    """Test the root commit's files are all new."""
    diffs = repo_with_commits.diff.diff_commit(repo_with_commits.first_commit)
    assert [d.is_new for d in diffs] == [True]


def test_format_diff_plain(repo_with_commits):
    """Test uncolored formatting."""
    diff = FileDiff('a.txt', b'old\n', b'new\n')
    output = repo_with_commits.diff.format_diff([diff], color=False)
    assert output.splitlines() == ['modified: a.txt', '--- a/a.txt', '+++ b/a.txt', '-old', '+new']


def test_format_diff_new_file(repo):
    """Test new files are labelled distinctly."""
    output = repo.diff.format_diff([FileDiff('b.txt', None, b'x\n')], color=False)
    assert output.startswith('new file: b.txt')
    assert '--- /dev/null' in output
