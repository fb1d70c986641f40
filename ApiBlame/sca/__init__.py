"""
Static analysis of JavaScript sources: ESTree parsing, tree walking and API use attribution.
"""
from ApiBlame.sca.constants import PLACEHOLDER, LOCAL_MODULE_PREFIX, MODULE_LOADERS
from ApiBlame.sca.ast_walker import ASTWalker
from ApiBlame.sca.api_use_walker import APIUseWalker, UnrecognizedCalleeShape
from ApiBlame.sca.js_parser import JavaScriptSyntaxError, parse_code, parse_file

__all__ = [
    "PLACEHOLDER",
    "LOCAL_MODULE_PREFIX",
    "MODULE_LOADERS",
    "ASTWalker",
    "APIUseWalker",
    "UnrecognizedCalleeShape",
    "JavaScriptSyntaxError",
    "parse_code",
    "parse_file",
]
