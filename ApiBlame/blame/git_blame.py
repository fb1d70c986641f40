import os
import subprocess
from typing import Dict, List, Optional, Protocol

import pygit2

from ApiBlame.config import BLAME_MODE, GIT_EXECUTABLE, VERBOSE
from ApiBlame.util.logging import setup_logging

AUTHOR_PREFIX = "author "


class BlameError(RuntimeError):
    pass


class BlameOracle(Protocol):
    def author(self, repository: str, file: str, line: int) -> str:
        ...


def author_from_porcelain(output: str) -> str:
    """
    Extracts the author from `git blame -p` output for a single line.

    The second line of the porcelain output is the `author <name>` header.
    """
    lines = output.split("\n")
    if len(lines) < 2 or not lines[1].startswith(AUTHOR_PREFIX):
        raise BlameError(f"Unexpected blame output: {output[:200]!r}")
    return lines[1][len(AUTHOR_PREFIX):]


def resolve_mailmap(repo: pygit2.Repository) -> Optional[pygit2.Mailmap]:
    try:
        return pygit2.Mailmap.from_repository(repo)
    except pygit2.GitError:
        return None


class GitBlame:
    """Runs one `git blame` process per looked up line."""

    def __init__(self, git: str = GIT_EXECUTABLE):
        self._git = git
        self._logger = setup_logging("blame.GitBlame", VERBOSE)

    def _run(self, repository: str, args: List[str]) -> str:
        command = [self._git, "blame", *args]
        self._logger.debug(f"exec {' '.join(command)} in {repository}")
        try:
            result = subprocess.run(
                command,
                cwd=repository,
                capture_output=True,
                encoding="utf-8",
                errors="replace",
                check=True,
            )
        except subprocess.CalledProcessError as e:
            raise BlameError(
                f"git blame failed in {repository} with exit code {e.returncode}: {(e.stderr or '').strip()}"
            ) from e
        except OSError as e:
            raise BlameError(f"Could not run {self._git} in {repository}: {e}") from e
        return result.stdout

    def author(self, repository: str, file: str, line: int) -> str:
        output = self._run(repository, ["-p", "-L", f"{line},{line}", "--", file])
        return author_from_porcelain(output)


class BatchedGitBlame(GitBlame):
    """
    Blames a whole file at once through libgit2 and answers line lookups from memory.

    Each blame hunk of the committed file is expanded into line -> author entries, with author
    names resolved through the repository mailmap as `git blame` does. Repositories libgit2
    cannot read (for instance SHA-256 object format) are answered line by line by `git blame`.
    Entries live as long as the instance, so one instance is meant to serve one file.
    """

    def __init__(self, git: str = GIT_EXECUTABLE):
        super().__init__(git)
        self._authors: Dict[str, Dict[int, str]] = {}
        self._unreadable = set()

    @staticmethod
    def _file_key(repository: str, file: str) -> str:
        return os.path.normpath(os.path.join(os.path.abspath(repository), file))

    def _blame_file(self, path: str) -> Dict[int, str]:
        path = os.path.realpath(path)
        repository_path = pygit2.discover_repository(os.path.dirname(path))
        if repository_path is None:
            raise BlameError(f"{path} is not inside a git repository")

        repo = pygit2.Repository(repository_path)
        if repo.workdir is None:
            raise BlameError(f"{repository_path} has no working tree")
        path_posix = os.path.relpath(path, os.path.realpath(repo.workdir)).replace(os.sep, "/")

        mailmap = resolve_mailmap(repo)
        authors = {}
        for hunk in repo.blame(path_posix):
            signature = hunk.final_signature
            if signature is None:
                signature = hunk.orig_signature
            if signature is None:
                raise BlameError(f"No author recorded for {path_posix}:{hunk.final_start_line_number}")
            if mailmap is not None:
                signature = mailmap.resolve_signature(signature)
            for offset in range(hunk.lines_in_hunk):
                authors[hunk.final_start_line_number + offset] = signature.name
        return authors

    def authors(self, repository: str, file: str) -> Dict[int, str]:
        key = self._file_key(repository, file)
        if key not in self._authors:
            self._authors[key] = self._blame_file(key)
        return self._authors[key]

    def author(self, repository: str, file: str, line: int) -> str:
        key = self._file_key(repository, file)
        if key in self._unreadable:
            return super().author(repository, file, line)

        try:
            authors = self.authors(repository, file)
        except (pygit2.GitError, KeyError, ValueError) as e:
            self._logger.debug(f"libgit2 cannot blame {file}, using git blame per line: {e}")
            self._unreadable.add(key)
            return super().author(repository, file, line)

        if line not in authors:
            raise BlameError(f"No blame information for {file}:{line}")
        return authors[line]


def make_blame(mode: Optional[str] = None, git: str = GIT_EXECUTABLE) -> GitBlame:
    match mode or BLAME_MODE:
        case "batched":
            return BatchedGitBlame(git)
        case "per_line":
            return GitBlame(git)
        case _:
            raise ValueError(f"Unknown blame mode {mode or BLAME_MODE}")
