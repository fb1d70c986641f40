from typing import Dict, Optional

from ApiBlame.blame import BlameOracle, make_blame
from ApiBlame.sca.ast_walker import ASTWalker
from ApiBlame.sca.constants import (
    ANONYMOUS_CALLEE_TYPES,
    CALL_NODE_TYPES,
    LOCAL_MODULE_PREFIX,
    MODULE_LOADERS,
    PLACEHOLDER,
    VERBOSE,
)
from ApiBlame.util.logging import setup_logging


class UnrecognizedCalleeShape(RuntimeError):
    def __init__(self, callee_type: Optional[str], line: Optional[int] = None):
        self.callee_type = callee_type
        self.line = line
        location = f" at line {line}" if line is not None else ""
        super().__init__(f"Unknown callee: {callee_type}{location}")


class APIUseWalker(ASTWalker):
    """
    Counts, per author, the calls made on modules loaded with `require` in one source file.

    Feed the parsed file to `walk`, then call `finalize` exactly once. Afterwards `uses` maps
    each external module specifier to a histogram of call counts keyed by the author that last
    touched the line of the call.

    Args:
        repository (str): Working directory of the git repository holding the file.
        file (str): Path of the file, relative to `repository` or absolute.
        blame (BlameOracle, optional): Line authorship lookup. Defaults to a batched git blame.
    """

    def __init__(self, repository: str, file: str, blame: Optional[BlameOracle] = None):
        super().__init__()
        self._logger = setup_logging("sca.APIUseWalker", VERBOSE)

        self._repository = repository
        self._file = file
        self._blame = blame if blame is not None else make_blame()

        self._uses: Dict[str, Dict[str, int]] = {}
        self._requires: Dict[str, str] = {}

        self.add_watcher("VariableDeclarator", self._on_variable_declarator)
        for node_type in CALL_NODE_TYPES:
            self.add_watcher(node_type, self._on_call)

    @property
    def uses(self) -> Dict[str, Dict[str, int]]:
        return self._uses

    @property
    def requires(self) -> Dict[str, str]:
        return self._requires

    def _on_variable_declarator(self, declarator: dict) -> None:
        target = declarator.get("id") or {}
        init = declarator.get("init") or {}
        if target.get("type") != "Identifier" or init.get("type") != "CallExpression":
            return

        callee = init.get("callee") or {}
        arguments = init.get("arguments") or []
        if callee.get("type") != "Identifier" or callee.get("name") not in MODULE_LOADERS:
            return
        if len(arguments) != 1:
            return

        argument = arguments[0]
        if argument.get("type") != "Literal" or not isinstance(argument.get("value"), str):
            return

        alias = target["name"]
        required = argument["value"]
        self._requires[alias] = required
        self._logger.debug(f"{alias} = {callee['name']}('{required}')")

    def _on_call(self, call: dict) -> None:
        line = call["loc"]["start"]["line"]
        callee_name = self.callee_identity(call["callee"], line)
        author = self._blame.author(self._repository, self._file, line)
        self.record_use(callee_name, author)

    @staticmethod
    def callee_identity(callee: dict, line: Optional[int] = None) -> str:
        callee_type = callee.get("type")
        match callee_type:
            case "MemberExpression":
                return callee["object"].get("name") or PLACEHOLDER
            case "Identifier":
                return callee["name"]
            case "NewExpression":
                return callee["callee"].get("name") or PLACEHOLDER
            case _ if callee_type in ANONYMOUS_CALLEE_TYPES:
                return PLACEHOLDER
            case _:
                raise UnrecognizedCalleeShape(callee_type, line)

    def record_use(self, callee: str, author: str) -> None:
        authors = self._uses.setdefault(callee, {})
        authors[author] = authors.get(author, 0) + 1

    def prune_local_module_requires(self) -> None:
        """Drops bindings to in-project files (relative specifiers)."""
        self._requires = {
            alias: required
            for alias, required in self._requires.items()
            if not required.startswith(LOCAL_MODULE_PREFIX)
        }

    def prune_unrequired(self) -> None:
        """Keeps only the uses of names bound by a surviving `require`."""
        self._uses = {
            alias: self._uses[alias]
            for alias in self._requires
            if alias in self._uses
        }

    def normalize_aliases_to_modules(self) -> None:
        """Re-keys each alias's usage histogram by the module specifier it was required from."""
        for alias, required in self._requires.items():
            if alias not in self._uses:
                self._logger.warning(f"Unused required module {alias} = {required}")
                continue
            self._uses[required] = self._uses.pop(alias)

    def finalize(self) -> Dict[str, Dict[str, int]]:
        self.prune_local_module_requires()
        self.prune_unrequired()
        self.normalize_aliases_to_modules()
        return self._uses
