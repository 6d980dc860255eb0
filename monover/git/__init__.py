"""Git operations module.

Usage:
    from monover.git import Repository

    repo = Repository(workspace_root)
    tags = repo.tags(prefix="core-")
"""

from monover.git.repository import GitCommit, GitError, Repository

__all__ = [
    "GitCommit",
    "GitError",
    "Repository",
]
