import subprocess
from pathlib import Path

import pytest


def _git_for(repo):
    def git(cmd):
        subprocess.check_call(f"git -C {repo} {cmd}", shell=True)

    return git


def _init(repo):
    git = _git_for(repo)
    git("init -q")
    git("symbolic-ref HEAD refs/heads/main")
    git('config user.email "test@example.com"')
    git('config user.name "Test User"')
    git("config commit.gpgsign false")
    return git


@pytest.fixture(autouse=True)
def isolate_git_config(monkeypatch, tmp_path):
    """Keep the user's global git config and SSH agent out of the tests."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.delenv("SSH_AUTH_SOCK", raising=False)
    monkeypatch.delenv("GIT_DIR", raising=False)
    monkeypatch.delenv("GIT_INDEX_FILE", raising=False)
    return home


@pytest.fixture
def tmp_git_repo(tmp_path):
    """Create a temporary git repository on an unborn main branch with user config set."""
    repo = tmp_path / "repo"
    repo.mkdir()
    git = _init(repo)
    return repo, git


@pytest.fixture
def write_file():
    def _write(base: Path, name: str, content: str = "sample"):
        path = base / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path

    return _write


@pytest.fixture
def git_out():
    """Run a git command in a repository and return its stripped output."""

    def _out(repo, cmd):
        return subprocess.check_output(f"git -C {repo} {cmd}", shell=True, text=True).strip()

    return _out


@pytest.fixture
def commit_files(write_file):
    """Commit one file per entry of `files` ({name: content}), one commit each."""

    def _commit(repo, git, files, prefix="commit"):
        for idx, (name, content) in enumerate(files.items()):
            write_file(repo, name, content)
            git(f"add {name}")
            git(f'commit -q -m "{prefix} {idx}"')

    return _commit


@pytest.fixture
def make_remote(tmp_path, commit_files):
    """
    Create a bare repository whose main branch holds one commit per file.

    With no files the bare repository is left empty.
    """

    def _make(name="remote.git", files=None, prefix="remote"):
        bare = tmp_path / name
        if not files:
            subprocess.check_call(f"git init -q --bare {bare}", shell=True)
            return bare
        seed = tmp_path / f"{name}-seed"
        seed.mkdir()
        git = _init(seed)
        commit_files(seed, git, files, prefix=prefix)
        subprocess.check_call(f"git clone -q --bare {seed} {bare}", shell=True)
        return bare

    return _make


@pytest.fixture
def clone_remote(tmp_path):
    """Clone a bare remote into a working copy with user config set."""

    def _clone(bare, name):
        work = tmp_path / name
        subprocess.check_call(f"git clone -q {bare} {work}", shell=True)
        git = _git_for(work)
        git('config user.email "other@example.com"')
        git('config user.name "Other User"')
        git("config commit.gpgsign false")
        return work, git

    return _clone
