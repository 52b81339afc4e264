import os
import shutil
import subprocess

import pytest

from UpdatePatches import config
from UpdatePatches.VCS import VCS

SPEC = """\
Name: foo
Version: 1.0
Source0: foo-1.0.tar.gz

#
# patches_base=abc123+1
#
Patch0001: 0001-Old-fix.patch
#Patch0002: 0002-Disabled.patch

%prep
%setup -q -n foo-%{version}

%patch0001 -p1
#%patch0002 -p1

%build
make
"""

needs_git = pytest.mark.skipif(shutil.which("git") is None,
                               reason="git is not installed")
needs_filterdiff = pytest.mark.skipif(shutil.which("filterdiff") is None,
                                      reason="patchutils is not installed")


@pytest.fixture
def conf():
    """Set config options for one test only"""
    saved = []

    def setter(section, option, value):
        saved.append((section, option, config.get(section, option)))
        config.set(section, option, value)

    yield setter
    for section, option, value in reversed(saved):
        if value is None:
            config._config.remove_option(section, option)
        else:
            config.set(section, option, value)


@pytest.fixture
def specfile(tmp_path):
    path = tmp_path / "foo.spec"
    path.write_text(SPEC)
    return path


class FakeVCS(VCS):
    """Records the operations of an update and fakes their results.

    commits is the ancestry path of the patches branch, oldest first, as
    (id, subject) pairs.
    """
    vcs_name = "fake"

    def __init__(self, path, commits=(), branch="master", clean=True):
        VCS.__init__(self, str(path))
        self.commits = list(commits)
        self.branch = branch
        self.clean = clean
        self.calls = []

    def is_clean(self):
        return self.clean

    def current_branch(self):
        return self.branch

    def checkout(self, branch):
        self.calls.append(("checkout", branch))
        self.branch = branch

    def remove(self, *paths, **kwargs):
        self.calls.append(("rm",) + paths)

    def add(self, *paths, **kwargs):
        self.calls.append(("add",) + paths)

    def commit(self, *paths, **kwargs):
        self.calls.append(("commit", paths, kwargs))

    def ancestry_path(self, base):
        self.calls.append(("log", base))
        return [commit for commit, subject in self.commits]

    def format_patch(self, since):
        self.calls.append(("format-patch", since))
        ids = [commit for commit, subject in self.commits]
        names = []
        for i, (commit, subject) in enumerate(
                self.commits[ids.index(since) + 1:], 1):
            name = "%04d-%s.patch" % (i, subject.replace(" ", "-"))
            with open(os.path.join(self.path, name), "w") as f:
                f.write("Subject: [PATCH] %s\n" % subject)
            names.append(name)
        return names


class FakeFilter(object):
    def __init__(self, installed=True):
        self.installed = installed
        self.filtered = []

    def check(self):
        from UpdatePatches import Error
        if not self.installed:
            raise Error("Please install patchutils")

    def filter(self, path):
        self.filtered.append(os.path.basename(path))


class FakePkgTool(object):
    def __init__(self, spec="foo.spec"):
        self.spec = spec

    def gimmespec(self):
        return self.spec


def run_git(repo, *args):
    proc = subprocess.run(["git"] + list(args), cwd=str(repo), check=True,
                          stdout=subprocess.PIPE, stderr=subprocess.PIPE,
                          universal_newlines=True)
    return proc.stdout.strip()


def commit_file(repo, name, content, message):
    path = os.path.join(str(repo), name)
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w") as f:
        f.write(content)
    run_git(repo, "add", name)
    run_git(repo, "commit", "-q", "-m", message)
    return run_git(repo, "rev-parse", "HEAD")


@pytest.fixture
def git_repo(tmp_path):
    """An empty repository with master as its current branch"""
    repo = tmp_path / "repo"
    repo.mkdir()
    run_git(repo, "init", "-q")
    run_git(repo, "symbolic-ref", "HEAD", "refs/heads/master")
    run_git(repo, "config", "user.name", "Packager")
    run_git(repo, "config", "user.email", "packager@example.com")
    run_git(repo, "config", "commit.gpgsign", "false")
    return repo


@pytest.fixture
def fake_fedpkg(tmp_path):
    """A fedpkg lookalike whose gimmespec answers foo.spec"""
    bindir = tmp_path / "bin"
    bindir.mkdir()
    script = bindir / "fakepkg"
    script.write_text("#!/bin/sh\n"
                      "case \"$1\" in\n"
                      "    --help) exit 0 ;;\n"
                      "    gimmespec) echo foo.spec ;;\n"
                      "    *) exit 1 ;;\n"
                      "esac\n")
    script.chmod(0o755)
    return str(script)
