"""Unit tests for directory walking and bulk staging."""

import pytest
from sprout.core.errors import NotFound
from sprout.core.hash import fingerprint
from sprout.operations.add import stage_paths
from sprout.utils.fs import collect_files, write_atomic


def test_collect_files_walks_directories(tmp_path):
    """Test directories expand to a flat, ordered file list."""
    (tmp_path / 'src' / 'pkg').mkdir(parents=True)
    (tmp_path / 'src' / 'b.txt').write_text('b')
    (tmp_path / 'src' / 'a.txt').write_text('a')
    (tmp_path / 'src' / 'pkg' / 'c.txt').write_text('c')
    (tmp_path / 'src' / '.hidden').write_text('h')
    
    files = collect_files([tmp_path / 'src'])
    names = [p.relative_to(tmp_path).as_posix() for p in files]
    assert names == ['src/a.txt', 'src/b.txt', 'src/pkg/c.txt']


def test_collect_files_keeps_explicit_files(tmp_path):
    """Test named files are returned once, in input order."""
    (tmp_path / 'z.txt').write_text('z')
    (tmp_path / '.env').write_text('e')
    files = collect_files([tmp_path / 'z.txt', tmp_path / '.env', tmp_path / 'z.txt'])
    assert [p.name for p in files] == ['z.txt', '.env']


def test_collect_files_missing(tmp_path):
    """Test a missing input path."""
    with pytest.raises(NotFound):
        collect_files([tmp_path / 'nope'])


def test_write_atomic(tmp_path):
    """Test atomic writes replace the whole file."""
    target = tmp_path / 'dir' / 'file'
    write_atomic(target, b'one')
    write_atomic(target, b'two')
    assert target.read_bytes() == b'two'
    assert [p.name for p in target.parent.iterdir()] == ['file']


def test_stage_paths(repo, write_file):
    """Test staging a directory tree."""
    write_file('docs/one.txt', 'one')
    write_file('docs/two.txt', 'two')
    write_file('top.txt', 'top')
    
    staged = stage_paths(repo, [repo.work_tree])
    paths = [entry.path for entry in staged]
    assert paths == ['top.txt', 'docs/one.txt', 'docs/two.txt']
    assert [e.path for e in repo.index.entries()] == paths
    assert repo.objects.get(fingerprint(b'one')) == b'one'


def test_stage_paths_skips_control_directory(repo, write_file):
    """Test the .sprout directory is never staged."""
    write_file('a.txt', 'a')
    staged = stage_paths(repo, [repo.work_tree])
    assert [entry.path for entry in staged] == ['a.txt']


def test_stage_paths_restage_keeps_one_entry(repo, write_file):
    """Test staging a changed file twice."""
    path = write_file('a.txt', 'first')
    stage_paths(repo, [path])
    path.write_text('second')
    stage_paths(repo, [path])
    
    assert len(repo.index) == 1
    assert repo.index.get_entry('a.txt').fingerprint == fingerprint(b'second')


def test_identical_content_stored_once(repo, write_file):
    """Test two files with the same content share one blob."""
    write_file('x1.txt', 'x')
    write_file('x2.txt', 'x')
    stage_paths(repo, [repo.work_tree], workers=2)
    
    assert len(repo.index) == 2
    assert len(repo.objects) == 1


def test_stage_paths_outside_repository(repo, tmp_path):
    """Test files outside the work tree are rejected."""
    outside = tmp_path / 'outside.txt'
    outside.write_text('x')
    with pytest.raises(NotFound):
        stage_paths(repo, [outside])
    assert len(repo.index) == 0
