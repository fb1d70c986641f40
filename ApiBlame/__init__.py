from ApiBlame.sca import APIUseWalker, ASTWalker, UnrecognizedCalleeShape, parse_code, parse_file
from ApiBlame.blame import BatchedGitBlame, BlameError, GitBlame
from ApiBlame.report import FileUsage, RepositoryUsage

__all__ = [
    "APIUseWalker",
    "ASTWalker",
    "UnrecognizedCalleeShape",
    "parse_code",
    "parse_file",
    "BatchedGitBlame",
    "BlameError",
    "GitBlame",
    "FileUsage",
    "RepositoryUsage",
]
