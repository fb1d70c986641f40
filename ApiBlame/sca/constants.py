from ApiBlame.config import VERBOSE

PLACEHOLDER = "..."

LOCAL_MODULE_PREFIX = "."

MODULE_LOADERS = ("require",)

# Callee kinds that are legal call targets but carry no attributable name
ANONYMOUS_CALLEE_TYPES = (
    "FunctionExpression",
    "CallExpression",
    "LogicalExpression",
    "ConditionalExpression",
    "MetaProperty",
    "Super",
)

CALL_NODE_TYPES = ("CallExpression", "NewExpression")

# Location metadata attached to every ESTree node, never walked
NODE_METADATA_FIELDS = ("loc", "range")

__all__ = [
    "VERBOSE",
    "PLACEHOLDER",
    "LOCAL_MODULE_PREFIX",
    "MODULE_LOADERS",
    "ANONYMOUS_CALLEE_TYPES",
    "CALL_NODE_TYPES",
    "NODE_METADATA_FIELDS",
]
