"""Unit tests for reference management."""

import pytest
from sprout.core.errors import (AlreadyExists, BranchInUse, Corrupt, InvalidName, NoCommits,
                                NotFound, UnknownBranch)
from sprout.core.refs import RefManager, validate_branch_name


def test_ref_manager_init(repo):
    """Test RefManager initialization."""
    refs = RefManager(repo)
    assert refs.repo == repo
    assert refs.head_file == repo.head_file


def test_current_branch_on_main(repo):
    """Test getting current branch when on main."""
    assert repo.refs.current_branch() == 'main'


def test_current_branch_corrupt_head(repo):
    """Test HEAD that names no branch."""
    repo.head_file.write_text('a' * 40 + '\n')
    with pytest.raises(Corrupt):
        repo.refs.current_branch()


def test_create_branch_needs_commits(repo):
    """Test a branch must point somewhere."""
    with pytest.raises(NoCommits):
        repo.refs.create_branch('feature')
    assert not repo.refs.branch_exists('feature')


def test_create_branch_at_head(repo_with_commits):
    """Test creating a new branch."""
    repo = repo_with_commits
    tip = repo.refs.create_branch('feature')
    
    assert tip == repo.second_commit.fingerprint
    branch_file = repo.heads_dir / 'feature'
    assert branch_file.read_text().strip() == tip
    assert repo.refs.current_branch() == 'main'


def test_create_branch_already_exists(repo_with_commits):
    """Test creating a branch that already exists."""
    repo_with_commits.refs.create_branch('feature')
    with pytest.raises(AlreadyExists):
        repo_with_commits.refs.create_branch('feature')
    with pytest.raises(AlreadyExists):
        repo_with_commits.refs.create_branch('main')


@pytest.mark.parametrize('name', ['', 'has space', 'a/b', '..', 'x..y', '.hidden', '-flag', 'x.lock'])
def test_invalid_branch_names(name):
    """Test names that cannot be references."""
    with pytest.raises(InvalidName):
        validate_branch_name(name)


def test_checkout(repo_with_commits):
    """Test switching the active branch."""
    repo = repo_with_commits
    repo.refs.create_branch('feature')
    repo.refs.checkout('feature')
    
    assert repo.refs.current_branch() == 'feature'
    assert repo.head_file.read_text() == 'ref: refs/heads/feature\n'


def test_checkout_unknown_branch(repo_with_commits):
    """Test checkout of a missing branch."""
    with pytest.raises(UnknownBranch):
        repo_with_commits.refs.checkout('nope')
    assert isinstance(UnknownBranch('x'), NotFound)
    assert repo_with_commits.refs.current_branch() == 'main'


def test_checkout_keeps_working_files(repo_with_commits):
    """Test checkout only moves HEAD."""
    repo = repo_with_commits
    repo.refs.create_branch('feature')
    (repo.work_tree / 'a.txt').write_text('local edit')
    repo.refs.checkout('feature')
    assert (repo.work_tree / 'a.txt').read_text() == 'local edit'


def test_tip_of_unknown_branch(repo):
    """Test branches without a reference have no tip."""
    assert repo.refs.tip_of('main') is None
    assert repo.refs.tip_of('feature') is None


def test_tip_of_corrupt_reference(repo_with_commits):
    """Test a reference file not holding a fingerprint."""
    (repo_with_commits.heads_dir / 'main').write_text('garbage\n')
    with pytest.raises(Corrupt):
        repo_with_commits.refs.tip_of('main')


def test_update_branch_validates_commit(repo_with_commits):
    """Test a tip must be a stored commit."""
    repo = repo_with_commits
    with pytest.raises(NotFound):
        repo.refs.update_branch('main', '0' * 40)
    blob = repo.objects.put(b'just a blob')
    with pytest.raises(Corrupt):
        repo.refs.update_branch('main', blob)
    assert repo.refs.tip_of('main') == repo.second_commit.fingerprint


def test_delete_branch_keeps_commits(repo_with_commits):
    """Test deleting a branch leaves its commits in the store."""
    repo = repo_with_commits
    tip = repo.refs.create_branch('feature')
    assert repo.refs.delete_branch('feature') == tip
    assert not repo.refs.branch_exists('feature')
    assert repo.graph.resolve(tip).fingerprint == tip


def test_delete_active_branch(repo_with_commits):
    """Test the active branch cannot be deleted."""
    with pytest.raises(BranchInUse):
        repo_with_commits.refs.delete_branch('main')
    with pytest.raises(UnknownBranch):
        repo_with_commits.refs.delete_branch('nope')


def test_list_branches(repo_with_commits):
    """Test listing branches."""
    repo = repo_with_commits
    repo.refs.create_branch('feature')
    tip = repo.second_commit.fingerprint
    assert repo.refs.list_branches() == [('feature', tip), ('main', tip)]


def test_resolve_reference(repo_with_commits):
    """Test resolving HEAD, branch names and prefixes."""
    repo = repo_with_commits
    first = repo.first_commit.fingerprint
    second = repo.second_commit.fingerprint
    
    assert repo.refs.resolve_reference('HEAD') == second
    assert repo.refs.resolve_reference('main') == second
    assert repo.refs.resolve_reference(first[:10]) == first
    assert repo.refs.resolve_reference('no-such-thing') is None


@pytest.mark.parametrize('name', ['../../HEAD', '../../index', '../heads/main', 'a/../b'])
def test_checkout_rejects_paths_outside_heads(repo_with_commits, name):
    """Test checkout never points HEAD at a file outside refs/heads."""
    repo = repo_with_commits
    with pytest.raises(UnknownBranch):
        repo.refs.checkout(name)
    
    assert repo.refs.current_branch() == 'main'
    assert repo.refs.head_commit() == repo.second_commit.fingerprint


def test_current_branch_rejects_invalid_name_in_head(repo):
    """Test HEAD naming a path instead of a branch is corrupt."""
    repo.head_file.write_text('ref: refs/heads/../../index\n')
    with pytest.raises(Corrupt):
        repo.refs.current_branch()


def test_lookups_ignore_paths_outside_heads(repo_with_commits):
    """Test tip_of, branch_exists and delete_branch stay inside refs/heads."""
    repo = repo_with_commits
    assert repo.refs.tip_of('../../HEAD') is None
    assert not repo.refs.branch_exists('../heads/main')
    with pytest.raises(UnknownBranch):
        repo.refs.delete_branch('../../index')
    assert repo.index_file.exists()
    assert repo.refs.resolve_reference('../../HEAD') is None
