"""git-glide: everyday git workflows without the bookkeeping."""

# Re-export the public API for library-style usage (and tests).
from .auth import (  # noqa: F401
    CredentialHelperProvider,
    CredentialProvider,
    SshAgentProvider,
    SshKeyProvider,
    TransportCredential,
    resolve_credential,
)
from .cli import cli, main
from .commits import (  # noqa: F401
    ChangeKind,
    ChangeRecord,
    ChangeSummary,
    CommitClassification,
    CommitMessage,
    CommitType,
    analyze_changes,
    classify,
    compose_message,
    derive_scope,
)
from .config import __version__
from .errors import (  # noqa: F401
    AuthFailure,
    DirtyWorkingTree,
    GitError,
    GitGlideError,
    NetworkFailure,
    NothingToCommit,
    PullRequiresMerge,
    PushFailure,
    RebaseConflict,
    UnrelatedHistoryConflict,
)
from .git import FileChange, Repository, run  # noqa: F401
from .reconcile import (  # noqa: F401
    HistoryReconciler,
    ReconcileState,
    ReconciliationOutcome,
    ReconciliationResult,
)
from .safety import SafetyGuard  # noqa: F401
from .ui import format_change_preview, format_outcome  # noqa: F401
from .validation import is_conventional, lint_git_commit_subject  # noqa: F401
from .workflows import done, feature, link_remote, prepare_message, pull, save, set_identity  # noqa: F401

__all__ = [
    "__version__",
    # CLI
    "cli",
    "main",
    # Git
    "run",
    "Repository",
    "FileChange",
    # Commit messages
    "ChangeKind",
    "ChangeRecord",
    "ChangeSummary",
    "CommitClassification",
    "CommitMessage",
    "CommitType",
    "analyze_changes",
    "classify",
    "derive_scope",
    "compose_message",
    # Safety and reconciliation
    "SafetyGuard",
    "HistoryReconciler",
    "ReconcileState",
    "ReconciliationOutcome",
    "ReconciliationResult",
    # Workflows
    "save",
    "prepare_message",
    "pull",
    "feature",
    "done",
    "link_remote",
    "set_identity",
    # Auth
    "CredentialProvider",
    "SshAgentProvider",
    "SshKeyProvider",
    "CredentialHelperProvider",
    "TransportCredential",
    "resolve_credential",
    # Errors
    "GitGlideError",
    "GitError",
    "AuthFailure",
    "NetworkFailure",
    "DirtyWorkingTree",
    "NothingToCommit",
    "RebaseConflict",
    "UnrelatedHistoryConflict",
    "PullRequiresMerge",
    "PushFailure",
    # Validation/UI
    "is_conventional",
    "lint_git_commit_subject",
    "format_change_preview",
    "format_outcome",
]
