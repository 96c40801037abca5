import pytest

import git_glide as gg
from git_glide.commits.classifier import RULES, is_build_path, is_doc_path, is_test_path
from git_glide.config import FIX_MAX_LINE_DELTA

A, M, D, R = gg.ChangeKind.ADDED, gg.ChangeKind.MODIFIED, gg.ChangeKind.DELETED, gg.ChangeKind.RENAMED


def summary(*records):
    return gg.ChangeSummary(tuple(gg.ChangeRecord(*r) for r in records))


def test_rule_table_order():
    assert [rule.name for rule in RULES] == [
        "docs-only",
        "tests-only",
        "build-only",
        "all-deleted",
        "all-added",
        "deletions-dominate",
        "some-added",
        "defect-sized",
        "fallback",
    ]


@pytest.mark.parametrize(
    "path, doc, test, build",
    [
        ("README.md", True, False, False),
        ("docs/usage.py", True, False, False),
        ("LICENSE", True, False, False),
        ("requirements-dev.txt", False, False, True),
        ("tests/test_app.py", False, True, False),
        ("src/app.test.ts", False, True, False),
        ("pkg/parser_test.go", False, True, False),
        ("pyproject.toml", False, False, True),
        (".github/workflows/ci.yml", False, False, True),
        ("src/app.py", False, False, False),
    ],
)
def test_path_predicates(path, doc, test, build):
    assert is_doc_path(path) is doc
    assert is_test_path(path) is test
    assert is_build_path(path) is build


def test_markdown_only_at_top_level_is_docs_without_scope():
    result = gg.classify(
        summary(("README.md", M, 3, 1), ("CHANGELOG.md", M, 5, 0), ("CONTRIBUTING.md", M, 1, 1))
    )
    assert result.type is gg.CommitType.DOCS
    assert result.scope is None


def test_markdown_only_in_one_directory_is_docs_with_scope():
    result = gg.classify(summary(("docs/a.md", M, 1, 0), ("docs/b.md", M, 1, 0), ("docs/c.md", A, 4, 0)))
    assert result.type is gg.CommitType.DOCS
    assert result.scope == "docs"


def test_tests_only():
    result = gg.classify(summary(("tests/conftest.py", M, 2, 2), ("tests/test_api.py", A, 40, 0)))
    assert result == gg.CommitClassification(gg.CommitType.TEST, "tests", "tests-only")


def test_build_only():
    result = gg.classify(summary(("pyproject.toml", M, 1, 1), ("requirements.txt", M, 2, 0)))
    assert result.type is gg.CommitType.BUILD
    assert result.rule == "build-only"


def test_docs_rule_wins_over_deletions():
    result = gg.classify(summary(("docs/old.md", D, 0, 10)))
    assert result.type is gg.CommitType.DOCS


def test_all_deleted_is_chore():
    result = gg.classify(summary(("lib/b.py", D, 0, 5), ("src/a.py", D, 0, 9)))
    assert result.type is gg.CommitType.CHORE
    assert result.rule == "all-deleted"


def test_all_added_is_feat_with_shared_directory_scope():
    result = gg.classify(summary(("src/a.py", A, 10, 0), ("src/b.py", A, 3, 0)))
    assert result == gg.CommitClassification(gg.CommitType.FEAT, "src", "all-added")


def test_deletion_dominated_modifications_are_refactor():
    result = gg.classify(summary(("src/engine.py", M, 5, 40)))
    assert result.type is gg.CommitType.REFACTOR
    assert result.scope == "engine"


def test_any_added_among_mixed_changes_is_feat():
    result = gg.classify(summary(("api/new.py", A, 30, 0), ("core/old.py", M, 1, 90)))
    assert result.type is gg.CommitType.FEAT
    assert result.rule == "some-added"
    assert result.scope is None


def test_small_modification_is_fix():
    result = gg.classify(summary(("src/app.py", M, 3, 1), ("src/util.py", D, 0, 2)))
    assert result.type is gg.CommitType.FIX
    assert result.rule == "defect-sized"


def test_fix_threshold_boundary():
    below = gg.classify(summary(("src/app.py", M, FIX_MAX_LINE_DELTA - 10, 9)))
    at = gg.classify(summary(("src/app.py", M, FIX_MAX_LINE_DELTA - 10, 10)))
    assert below.type is gg.CommitType.FIX
    assert at.type is gg.CommitType.CHORE
    assert at.rule == "fallback"


def test_pure_renames_fall_back_to_chore():
    result = gg.classify(summary(("src/new.py", R, 0, 0, "src/old.py")))
    assert result.type is gg.CommitType.CHORE


def test_empty_summary_maps_to_sentinel():
    result = gg.classify(gg.ChangeSummary())
    assert result.type is gg.CommitType.OTHER
    assert result.rule == "empty"


def test_classification_is_deterministic():
    snapshot = summary(("src/a.py", M, 12, 4), ("src/b.py", A, 7, 0), ("README.md", M, 1, 1))
    results = {gg.classify(snapshot) for _ in range(5)}
    assert len(results) == 1


@pytest.mark.parametrize(
    "paths, expected",
    [
        (["main.rs"], None),
        (["src/parser.py"], "parser"),
        (["src/a.py", "src/deep/b.py"], "src"),
        (["src/a.py", "lib/b.py"], None),
        (["src/a.py", "top.py"], None),
        (["My Docs/a.md", "My Docs/b.md"], "My-Docs"),
    ],
)
def test_derive_scope(paths, expected):
    snapshot = gg.ChangeSummary(tuple(gg.ChangeRecord(p, M, 1, 0) for p in paths))
    assert gg.derive_scope(snapshot) == expected
