import pytest

import git_glide as gg


class RecordingRepo:
    """Minimal repository double that records every mutating call."""

    def __init__(self, dirty):
        self.dirty = dirty
        self.calls = []

    def is_dirty(self):
        return self.dirty

    def __getattr__(self, name):
        def _record(*args, **kwargs):
            self.calls.append(name)

        return _record


@pytest.mark.parametrize("operation", ["feature", "done", "remote"])
def test_destructive_operations_refuse_dirty_tree(operation):
    repo = RecordingRepo(dirty=True)
    with pytest.raises(gg.DirtyWorkingTree) as excinfo:
        gg.SafetyGuard(repo).check(operation)
    assert excinfo.value.operation == operation
    assert excinfo.value.exit_code == 3
    assert repo.calls == []


@pytest.mark.parametrize("operation", ["save", "creds"])
def test_save_and_creds_run_on_dirty_tree(operation):
    gg.SafetyGuard(RecordingRepo(dirty=True)).check(operation)


def test_clean_tree_passes():
    gg.SafetyGuard(RecordingRepo(dirty=False)).check("remote")


def test_require_changes_rejects_empty_summary():
    guard = gg.SafetyGuard(RecordingRepo(dirty=False))
    with pytest.raises(gg.NothingToCommit):
        guard.require_changes(gg.ChangeSummary())
    guard.require_changes(gg.ChangeSummary((gg.ChangeRecord("a.py", gg.ChangeKind.ADDED, 1, 0),)))


def _snapshot(git_out, repo):
    return git_out(repo, "rev-parse HEAD"), git_out(repo, "for-each-ref"), git_out(repo, "config --list --local")


@pytest.mark.parametrize(
    "workflow",
    [
        lambda repo: gg.feature(repo, "topic"),
        lambda repo: gg.done(repo),
        lambda repo: gg.link_remote(repo, "/nonexistent/remote.git"),
    ],
)
def test_dirty_tree_leaves_repository_untouched(workflow, tmp_git_repo, write_file, commit_files, git_out):
    repo, git = tmp_git_repo
    commit_files(repo, git, {"app.py": "print('hi')\n"})
    git("checkout -q -b topic-base")
    write_file(repo, "scratch.txt", "untracked work")
    before = _snapshot(git_out, repo)

    with pytest.raises(gg.DirtyWorkingTree):
        workflow(gg.Repository(str(repo)))

    assert _snapshot(git_out, repo) == before
    assert git_out(repo, "status --porcelain") == "?? scratch.txt"
