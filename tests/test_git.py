import os

import pytest

from UpdatePatches import Error
from UpdatePatches.git import GIT

from conftest import needs_git, run_git, commit_file

pytestmark = needs_git


@pytest.fixture
def history(git_repo):
    """master with a base commit, master-patches with C1..C4 on top"""
    base = commit_file(git_repo, "src/main.c", "int main;\n", "Import 1.0")
    run_git(git_repo, "branch", "master-patches")
    run_git(git_repo, "checkout", "-q", "master-patches")
    commits = []
    for i, subject in enumerate(["First change", "Second change",
                                 "Third change", "Fourth change"], 1):
        commits.append(commit_file(git_repo, "src/file%d.c" % i,
                                   "int f%d;\n" % i, subject))
    run_git(git_repo, "checkout", "-q", "master")
    return base, commits


def test_current_branch(git_repo, history):
    git = GIT(str(git_repo))
    assert git.current_branch() == "master"
    git.checkout("master-patches")
    assert git.current_branch() == "master-patches"


def test_detached_head(git_repo, history):
    base, commits = history
    run_git(git_repo, "checkout", "-q", commits[0])
    with pytest.raises(Error):
        GIT(str(git_repo)).current_branch()


def test_is_clean(git_repo, history):
    git = GIT(str(git_repo))
    assert git.is_clean()
    # untracked files are ignored
    (git_repo / "notes.txt").write_text("todo\n")
    assert git.is_clean()
    (git_repo / "src" / "main.c").write_text("int main(void);\n")
    assert not git.is_clean()
    assert git.status() == [(" M", "src/main.c")]


def test_ancestry_path_oldest_first(git_repo, history):
    base, commits = history
    git = GIT(str(git_repo))
    git.checkout("master-patches")
    assert git.ancestry_path(base) == commits
    assert git.ancestry_path(commits[-1]) == []


def test_format_patch(git_repo, history):
    base, commits = history
    git = GIT(str(git_repo))
    git.checkout("master-patches")
    patches = git.format_patch(commits[1])
    assert patches == ["0001-Third-change.patch", "0002-Fourth-change.patch"]
    text = (git_repo / patches[0]).read_text()
    assert "Subject: [PATCH] Third change" in text
    assert "src/file3.c" in text


def test_commit_amend(git_repo, history):
    git = GIT(str(git_repo))
    git.remove("src/main.c")
    git.commit("src/main.c", log="Drop main", allow_empty=True)
    assert run_git(git_repo, "log", "-1", "--format=%s") == "Drop main"
    commit_file(git_repo, "README", "foo\n", "Readme")
    (git_repo / "README").write_text("bar\n")
    git.commit(log="Amended", amend=True, all=True)
    assert run_git(git_repo, "log", "-1", "--format=%s") == "Amended"
    assert run_git(git_repo, "rev-list", "--count", "HEAD") == "3"
    assert git.is_clean()
