from collections import defaultdict
from typing import Any, Callable, Dict, List

from ApiBlame.sca.constants import NODE_METADATA_FIELDS

Watcher = Callable[[dict], None]


def is_node(value: Any) -> bool:
    return isinstance(value, dict) and isinstance(value.get("type"), str)


class ASTWalker:
    """
    Pre-order walker over an ESTree syntax tree given as plain dicts.

    Callbacks are registered per node `type` with `add_watcher` and are invoked with the node
    before its children are visited. Children are found by iterating over the node's fields in
    order, descending into every value that is a node or a list of nodes.
    """

    def __init__(self) -> None:
        self._watchers: Dict[str, List[Watcher]] = defaultdict(list)

    def add_watcher(self, node_type: str, callback: Watcher) -> None:
        self._watchers[node_type].append(callback)

    def walk(self, node: Any) -> None:
        if isinstance(node, list):
            for item in node:
                self.walk(item)
            return

        if not is_node(node):
            return

        for callback in self._watchers.get(node["type"], ()):
            callback(node)

        for field, value in node.items():
            if field in NODE_METADATA_FIELDS:
                continue
            if isinstance(value, (dict, list)):
                self.walk(value)
