"""Configuration constants and settings for git-glide."""

import re

__version__ = "0.1.0"

COMMIT_SUBJECT_RE = re.compile(
    r"^(feat|fix|chore|docs|refactor|test|build)(\([^()\s]+\))?: .+$"
)

# Generated headers longer than this drop their scope first.
MAX_HEADER_LENGTH = 72

# Modifications with a total line delta below this count as a fix.
FIX_MAX_LINE_DELTA = 30

DEFAULT_REMOTE = "origin"
MAIN_BRANCH_CANDIDATES = ("main", "master")

DOC_EXTENSIONS = {".md", ".markdown", ".rst", ".adoc", ".txt"}
DOC_DIRS = {"docs", "doc", "documentation"}
DOC_NAMES = {"readme", "changelog", "changes", "license", "licence", "authors", "contributing", "notice"}

TEST_DIRS = {"tests", "test", "__tests__", "spec", "specs"}

BUILD_FILES = {
    "pyproject.toml", "setup.py", "setup.cfg", "pipfile", "pipfile.lock", "poetry.lock",
    "tox.ini", "manifest.in", "cargo.toml", "cargo.lock", "package.json",
    "package-lock.json", "yarn.lock", "pnpm-lock.yaml", "makefile", "dockerfile",
    "docker-compose.yml", "docker-compose.yaml", "go.mod", "go.sum", "build.gradle",
    "pom.xml", "cmakelists.txt", ".gitignore", ".gitattributes", ".dockerignore",
    ".pre-commit-config.yaml",
}
BUILD_DIRS = {".github", ".circleci", ".gitlab"}
