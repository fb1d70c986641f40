import unittest
from unittest.mock import MagicMock

from ApiBlame.sca.api_use_walker import APIUseWalker, UnrecognizedCalleeShape
from ApiBlame.sca.constants import PLACEHOLDER


def loc(line):
    return {"start": {"line": line, "column": 0}, "end": {"line": line, "column": 1}}


def identifier(name):
    return {"type": "Identifier", "name": name}


def literal(value):
    return {"type": "Literal", "value": value, "raw": repr(value)}


def require_declaration(alias, *arguments, line=1, loader="require"):
    return {
        "type": "VariableDeclaration",
        "kind": "const",
        "declarations": [
            {
                "type": "VariableDeclarator",
                "id": identifier(alias),
                "init": {
                    "type": "CallExpression",
                    "callee": identifier(loader),
                    "arguments": list(arguments),
                    "loc": loc(line),
                },
                "loc": loc(line),
            }
        ],
        "loc": loc(line),
    }


def call(callee, line, node_type="CallExpression"):
    return {
        "type": "ExpressionStatement",
        "expression": {"type": node_type, "callee": callee, "arguments": [], "loc": loc(line)},
        "loc": loc(line),
    }


def member(object_name, property_name):
    return {
        "type": "MemberExpression",
        "computed": False,
        "object": identifier(object_name),
        "property": identifier(property_name),
    }


def program(*body):
    return {"type": "Program", "sourceType": "script", "body": list(body)}


class FakeBlame:
    def __init__(self, authors=None, default="alice"):
        self.authors = authors or {}
        self.default = default
        self.calls = []

    def author(self, repository, file, line):
        self.calls.append((repository, file, line))
        return self.authors.get(line, self.default)


class TestAPIUseWalker(unittest.TestCase):
    def setUp(self):
        self.blame = FakeBlame()
        self.walker = APIUseWalker("/repo", "src/index.js", self.blame)

    def test_initialization(self):
        self.assertEqual(self.walker.uses, {})
        self.assertEqual(self.walker.requires, {})

    def test_require_declaration_is_recorded(self):
        self.walker.walk(program(require_declaration("x", literal("lodash"))))
        self.assertEqual(self.walker.requires, {"x": "lodash"})

    def test_require_call_itself_is_counted_as_a_use(self):
        self.walker.walk(program(require_declaration("x", literal("lodash"), line=2)))
        self.assertEqual(self.walker.uses, {"require": {"alice": 1}})
        self.assertEqual(self.blame.calls, [("/repo", "src/index.js", 2)])

    def test_redeclaration_last_write_wins(self):
        self.walker.walk(
            program(
                require_declaration("x", literal("lodash"), line=1),
                require_declaration("x", literal("underscore"), line=2),
            )
        )
        self.assertEqual(self.walker.requires, {"x": "underscore"})

    def test_malformed_declarations_are_ignored(self):
        self.walker.walk(
            program(
                require_declaration("a", identifier("name")),
                require_declaration("b", literal("one"), literal("two")),
                require_declaration("c"),
                require_declaration("d", literal(42)),
                require_declaration("e", literal("lodash"), loader="load"),
                {
                    "type": "VariableDeclarator",
                    "id": {"type": "ObjectPattern", "properties": []},
                    "init": {
                        "type": "CallExpression",
                        "callee": identifier("require"),
                        "arguments": [literal("lodash")],
                        "loc": loc(9),
                    },
                },
                {"type": "VariableDeclarator", "id": identifier("f"), "init": None},
            )
        )
        self.assertEqual(self.walker.requires, {})

    def test_callee_identity_member_expression(self):
        self.assertEqual(APIUseWalker.callee_identity(member("x", "map")), "x")

    def test_callee_identity_member_expression_without_name(self):
        callee = {
            "type": "MemberExpression",
            "object": {"type": "ThisExpression"},
            "property": identifier("run"),
        }
        self.assertEqual(APIUseWalker.callee_identity(callee), PLACEHOLDER)

    def test_callee_identity_identifier(self):
        self.assertEqual(APIUseWalker.callee_identity(identifier("f")), "f")

    def test_callee_identity_new_expression(self):
        callee = {"type": "NewExpression", "callee": identifier("Foo"), "arguments": []}
        self.assertEqual(APIUseWalker.callee_identity(callee), "Foo")

    def test_callee_identity_placeholders(self):
        for callee_type in (
            "FunctionExpression",
            "CallExpression",
            "LogicalExpression",
            "ConditionalExpression",
            "MetaProperty",
            "Super",
        ):
            with self.subTest(callee_type=callee_type):
                self.assertEqual(APIUseWalker.callee_identity({"type": callee_type}), PLACEHOLDER)

    def test_callee_identity_unknown_shape(self):
        with self.assertRaises(UnrecognizedCalleeShape) as context:
            APIUseWalker.callee_identity({"type": "TaggedTemplateExpression"}, 7)
        self.assertEqual(context.exception.callee_type, "TaggedTemplateExpression")
        self.assertEqual(context.exception.line, 7)
        self.assertIn("line 7", str(context.exception))
        self.assertTrue(issubclass(UnrecognizedCalleeShape, RuntimeError))

    def test_tagged_template_callee_aborts_walk(self):
        tagged = {
            "type": "TaggedTemplateExpression",
            "tag": identifier("tag"),
            "quasi": {"type": "TemplateLiteral", "quasis": [], "expressions": []},
        }
        with self.assertRaises(UnrecognizedCalleeShape):
            self.walker.walk(program(call(tagged, 4)))

    def test_constructor_calls_are_recorded(self):
        self.walker.walk(program(call(identifier("Foo"), 3, node_type="NewExpression")))
        self.assertEqual(self.walker.uses, {"Foo": {"alice": 1}})

    def test_record_use_counts_per_author(self):
        self.walker.record_use("x", "alice")
        self.walker.record_use("x", "alice")
        self.walker.record_use("x", "bob")
        self.walker.record_use("y", "bob")
        self.assertEqual(self.walker.uses, {"x": {"alice": 2, "bob": 1}, "y": {"bob": 1}})

    def test_counts_sum_to_call_sites(self):
        blame = FakeBlame({3: "alice", 4: "bob", 5: "alice"})
        walker = APIUseWalker("/repo", "a.js", blame)
        walker.walk(
            program(
                call(member("x", "map"), 3),
                call(member("x", "filter"), 4),
                call(member("x", "reduce"), 5),
            )
        )
        self.assertEqual(walker.uses, {"x": {"alice": 2, "bob": 1}})
        self.assertEqual(sum(walker.uses["x"].values()), 3)

    def test_prune_local_module_requires(self):
        self.walker._requires = {"h": "./helper", "p": "../parent", "l": "lodash"}
        self.walker.prune_local_module_requires()
        self.assertEqual(self.walker.requires, {"l": "lodash"})

    def test_prune_unrequired(self):
        self.walker._requires = {"l": "lodash"}
        self.walker._uses = {"l": {"alice": 1}, "console": {"bob": 2}, PLACEHOLDER: {"bob": 1}}
        self.walker.prune_unrequired()
        self.assertEqual(self.walker.uses, {"l": {"alice": 1}})

    def test_normalize_aliases_to_modules_moves_usage(self):
        histogram = {"alice": 1}
        self.walker._requires = {"l": "lodash"}
        self.walker._uses = {"l": histogram}
        self.walker.normalize_aliases_to_modules()
        self.assertEqual(self.walker.uses, {"lodash": {"alice": 1}})
        self.assertIs(self.walker.uses["lodash"], histogram)

    def test_normalize_aliases_warns_on_unused_module(self):
        self.walker._logger = MagicMock()
        self.walker._requires = {"u": "unused-lib"}
        self.walker._uses = {}
        self.walker.normalize_aliases_to_modules()
        self.walker._logger.warning.assert_called_once_with("Unused required module u = unused-lib")
        self.assertEqual(self.walker.uses, {})

    def test_finalize_lodash_scenario(self):
        blame = FakeBlame({1: "bob", 3: "alice"})
        walker = APIUseWalker("/repo", "a.js", blame)
        walker.walk(
            program(
                require_declaration("x", literal("lodash"), line=1),
                call(member("x", "map"), 3),
            )
        )
        self.assertEqual(walker.finalize(), {"lodash": {"alice": 1}})
        self.assertEqual(walker.uses, {"lodash": {"alice": 1}})

    def test_finalize_drops_local_requires(self):
        self.walker.walk(
            program(
                require_declaration("h", literal("./helper"), line=1),
                call(member("h", "run"), 2),
            )
        )
        self.walker.finalize()
        self.assertNotIn("h", self.walker.uses)
        self.assertNotIn("./helper", self.walker.uses)
        self.assertEqual(self.walker.uses, {})

    def test_finalize_drops_unused_requires(self):
        self.walker.walk(program(require_declaration("u", literal("unused-lib"))))
        with self.assertLogs("sca.APIUseWalker", level="WARNING") as logs:
            self.walker.finalize()
        self.assertIn("Unused required module u = unused-lib", logs.output[0])
        self.assertNotIn("unused-lib", self.walker.uses)

    def test_finalize_is_not_idempotent(self):
        self.walker.walk(
            program(
                require_declaration("x", literal("lodash"), line=1),
                call(member("x", "map"), 3),
            )
        )
        first = dict(self.walker.finalize())
        second = self.walker.finalize()
        self.assertEqual(first, {"lodash": {"alice": 1}})
        self.assertNotEqual(second, first)
        self.assertEqual(second, {})

    def test_default_blame_is_created(self):
        walker = APIUseWalker("/repo", "a.js")
        self.assertTrue(hasattr(walker._blame, "author"))


if __name__ == "__main__":
    unittest.main()
