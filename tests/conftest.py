"""Shared pytest fixtures for Sprout tests."""

import pytest
import tempfile
import shutil
from pathlib import Path
from sprout.core.config import Config
from sprout.core.repository import Repository


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory, monkeypatch):
    """Keep tests away from the user's ~/.sproutconfig and SPROUT_* variables."""
    home = tmp_path_factory.mktemp('home')
    monkeypatch.setattr(Config, 'GLOBAL_CONFIG_PATH', home / '.sproutconfig')
    for name in ('SPROUT_INIT_DEFAULTBRANCH', 'SPROUT_CORE_WORKERS'):
        monkeypatch.delenv(name, raising=False)
    return home


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir).resolve()
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def repo(temp_dir):
    """Create an initialized repository."""
    repo = Repository(str(temp_dir))
    repo.init()
    return repo


@pytest.fixture
def write_file(repo):
    """Write a file into the work tree and return its path."""
    def _write(name, content):
        path = repo.work_tree / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path
    return _write


@pytest.fixture
def stage_file(repo):
    """Stage one working file the way 'sprout add' does."""
    def _stage(path):
        fp = repo.objects.put(Path(path).read_bytes())
        return repo.index.stage(repo.relative_path(path), fp)
    return _stage


@pytest.fixture
def repo_with_commits(repo, write_file, stage_file):
    """Repository on main with two commits of a.txt."""
    a = write_file("a.txt", "hello")
    stage_file(a)
    first = repo.commit("first")
    
    a.write_text("hello world")
    stage_file(a)
    second = repo.commit("second")
    
    repo.first_commit = first
    repo.second_commit = second
    return repo
