"""
Line authorship lookups backed by `git blame` and libgit2.
"""
from ApiBlame.blame.git_blame import (
    BlameError,
    BlameOracle,
    GitBlame,
    BatchedGitBlame,
    author_from_porcelain,
    make_blame,
)

__all__ = [
    "BlameError",
    "BlameOracle",
    "GitBlame",
    "BatchedGitBlame",
    "author_from_porcelain",
    "make_blame",
]
