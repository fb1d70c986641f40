from typing import Any, Optional

import esprima
from esprima.error_handler import Error as EsprimaError

from ApiBlame.sca.constants import VERBOSE
from ApiBlame.util.logging import setup_logging

SOURCE_TYPES = ("script", "module")

_logger = setup_logging("sca.js_parser", VERBOSE)


class JavaScriptSyntaxError(ValueError):
    pass


def to_estree(value: Any) -> Any:
    """Converts esprima's node objects into plain ESTree dicts and lists."""
    if isinstance(value, list):
        return [to_estree(item) for item in value]
    if hasattr(value, "__dict__"):
        return {key: to_estree(item) for key, item in vars(value).items()}
    return value


def strip_hashbang(code: str) -> str:
    if code.startswith("#!"):
        newline = code.find("\n")
        return code[newline:] if newline != -1 else ""
    return code


def parse_code(code: str, source_type: Optional[str] = None) -> dict:
    """
    Parses JavaScript source into an ESTree `Program` with line locations.

    Args:
        code (str): The source text.
        source_type (str, optional): "script" or "module". When omitted the code is parsed as a
            script first and as a module if that fails.

    Returns:
        dict: The `Program` node.

    Raises:
        JavaScriptSyntaxError: The code does not parse under any of the attempted source types.
    """
    if source_type is not None and source_type not in SOURCE_TYPES:
        raise ValueError(f"Unknown source type {source_type}")

    code = strip_hashbang(code)
    attempts = [source_type] if source_type else list(SOURCE_TYPES)
    options = {"loc": True}

    error = None
    for attempt in attempts:
        parse = esprima.parseModule if attempt == "module" else esprima.parseScript
        try:
            return to_estree(parse(code, options))
        except EsprimaError as e:
            _logger.debug(f"Parsing as {attempt} failed: {e}")
            error = e

    raise JavaScriptSyntaxError(str(error)) from error


def parse_file(path: str, source_type: Optional[str] = None) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        code = f.read()
    try:
        return parse_code(code, source_type)
    except JavaScriptSyntaxError as e:
        raise JavaScriptSyntaxError(f"{path}: {e}") from e
