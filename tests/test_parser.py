"""
Test suite for the TinyScript parser.

Tests cover:
- Cursor movement and token extraction helpers
- Every statement form of the grammar
- Nested bodies and expressions
- Fatal errors for bad token shapes and unbalanced brackets
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from tinyscript.lexer import lex, TokenKind, ErrorKind
from tinyscript.parser import (
    Parser, parse, parse_string, NodeType,
    Conditional, Invocation, Assign, Var, Parameters, Function,
    ParseError, UnexpectedTokenError, UnterminatedBracketGroupError,
    UnrecognizedBracketError
)
from tinyscript.cli import DEMO_SOURCE


def lexemes(tokens):
    return [token.lexeme for token in tokens]


class TestCursor(unittest.TestCase):
    """Cursor movement never runs past EOF."""

    def test_advance_clamps_at_eof(self):
        parser = Parser(lex("a"))
        for _ in range(5):
            parser.advance()
        self.assertTrue(parser.current_token.is_eof)
        self.assertEqual(parser.token_id, 1)

    def test_peek_clamps_at_eof(self):
        parser = Parser(lex("a b"))
        self.assertTrue(parser.peek(10).is_eof)
        self.assertEqual(parser.peek().payload, "b")

    def test_requires_eof_terminated_tokens(self):
        tokens = lex("a b")
        with self.assertRaises(ValueError):
            Parser(tokens[:-1])
        with self.assertRaises(ValueError):
            Parser([])

    def test_parse_twice(self):
        parser = Parser(lex("x = 1;"))
        parser.parse()
        with self.assertRaises(RuntimeError):
            parser.parse()


class TestGetParameters(unittest.TestCase):
    """Bracket group extraction."""

    def test_simple_group(self):
        parser = Parser(lex("(a, b)"))
        parser.advance()
        tokens = parser.get_parameters('(')
        self.assertEqual(lexemes(tokens), ["a", ",", "b"])
        self.assertTrue(parser.current_token.is_eof)

    def test_cursor_left_after_close(self):
        parser = Parser(lex("{ x = 1; } next"))
        parser.advance()
        parser.get_parameters('{')
        self.assertTrue(parser.current_token.is_identifier("next"))

    def test_nested_group(self):
        parser = Parser(lex("((a) b) c"))
        parser.advance()
        tokens = parser.get_parameters('(')
        self.assertEqual(lexemes(tokens), ["(", "a", ")", "b"])
        self.assertTrue(parser.current_token.is_identifier("c"))

    def test_all_bracket_kinds(self):
        for open_char, close_char in [('(', ')'), ('{', '}'), ('[', ']'), ('<', '>')]:
            with self.subTest(open_char=open_char):
                parser = Parser(lex(f"{open_char}x{close_char}"))
                parser.advance()
                self.assertEqual(lexemes(parser.get_parameters(open_char)), ["x"])

    def test_unterminated_group(self):
        parser = Parser(lex("(a, b"))
        parser.advance()
        with self.assertRaises(UnterminatedBracketGroupError) as ctx:
            parser.get_parameters('(')
        self.assertEqual(ctx.exception.kind, ErrorKind.UNTERMINATED_BRACKET_GROUP)

    def test_unrecognized_bracket(self):
        for char in ['a', ')', ';']:
            with self.subTest(char=char):
                parser = Parser(lex("(a)"))
                with self.assertRaises(UnrecognizedBracketError) as ctx:
                    parser.get_parameters(char)
                self.assertEqual(ctx.exception.kind, ErrorKind.UNRECOGNIZED_BRACKET)


class TestGetUntilEos(unittest.TestCase):
    """End-of-statement extraction."""

    def test_collects_after_current(self):
        parser = Parser(lex("x = 1 + 2; y"))
        tokens = parser.get_until_eos()
        self.assertEqual(lexemes(tokens), ["=", "1", "+", "2"])
        self.assertTrue(parser.current_token.is_identifier("y"))

    def test_missing_semicolon(self):
        parser = Parser(lex("x = 1"))
        with self.assertRaises(UnexpectedTokenError) as ctx:
            parser.get_until_eos()
        self.assertIn("P003", str(ctx.exception))


class TestFunctions(unittest.TestCase):
    """Function declarations."""

    def test_function_declaration(self):
        nodes = parse(lex("int add(int a, int b){ }"))
        self.assertEqual(len(nodes), 1)

        function = nodes[0]
        self.assertIsInstance(function, Function)
        self.assertEqual(function.node_type, NodeType.FUNCTION)
        self.assertEqual(function.name, "add")
        self.assertEqual(function.return_type, "int")
        self.assertEqual(function.body, [])

        params = function.parameters.parameters
        self.assertEqual([p.var_name for p in params], ["a", "b"])
        self.assertEqual([p.var_type for p in params], ["int", "int"])

    def test_no_parameters(self):
        function = parse_string("void main() { }")[0]
        self.assertEqual(function.parameters, Parameters([]))

    def test_body_statements(self):
        source = """
        int add(int a, int b) {
            int c = a + b;
            print(c);
        }
        """
        function = parse_string(source)[0]
        self.assertEqual(len(function.body), 2)
        self.assertIsInstance(function.body[0], Assign)
        self.assertIsInstance(function.body[1], Invocation)

    def test_nested_braces_in_body(self):
        source = "int main() { if (x) { if (y) { f(); } } g(); }"
        function = parse_string(source)[0]
        self.assertEqual(len(function.body), 2)
        outer = function.body[0]
        self.assertIsInstance(outer, Conditional)
        inner = outer.body[0]
        self.assertIsInstance(inner, Conditional)
        self.assertEqual(inner.body, [Invocation("f", [])])
        self.assertEqual(function.body[1], Invocation("g", []))

    def test_missing_body(self):
        with self.assertRaises(UnexpectedTokenError) as ctx:
            parse_string("int add(int a, int b) x")
        self.assertEqual(ctx.exception.kind, ErrorKind.UNEXPECTED_TOKEN)
        self.assertTrue(ctx.exception.token.is_identifier("x"))

    def test_unclosed_body(self):
        with self.assertRaises(UnterminatedBracketGroupError):
            parse_string("int add(int a, int b) {")

    def test_unclosed_parameters(self):
        with self.assertRaises(UnterminatedBracketGroupError):
            parse_string("int add(int a, int b")

    def test_bad_parameter_lists(self):
        for source in ["int f(int) { }", "int f(int a b) { }", "int f(int a,) { }", "int f(1 a) { }"]:
            with self.subTest(source=source):
                with self.assertRaises(UnexpectedTokenError):
                    parse_string(source)


class TestAssignments(unittest.TestCase):
    """Declarations and re-assignments."""

    def test_declaration(self):
        node = parse_string("int x = 5;")[0]
        self.assertIsInstance(node, Assign)
        self.assertTrue(node.first_time)
        self.assertEqual(node.var_type, "int")
        self.assertEqual(node.var_name.var_name, "x")
        self.assertEqual(len(node.value), 1)
        self.assertEqual(node.value[0].value.kind, TokenKind.INTEGER)
        self.assertEqual(node.value[0].value.payload, 5)

    def test_reassignment(self):
        node = parse_string("x = y;")[0]
        self.assertFalse(node.first_time)
        self.assertIsNone(node.var_type)
        self.assertEqual(node.var_name.var_name, "x")
        self.assertEqual(node.value[0].var_name, "y")

    def test_string_value(self):
        node = parse_string('string s = "Hello, world!";')[0]
        self.assertEqual(node.value[0].value.payload, "Hello, world!")

    def test_flat_expression_value(self):
        node = parse_string("x = a + 1;")[0]
        self.assertEqual([v.var_name for v in node.value], ["a", "+", "1"])

    def test_call_in_value(self):
        node = parse_string("int y = add(1, 2);")[0]
        call = node.value[0]
        self.assertIsInstance(call, Invocation)
        self.assertEqual(call.method_name, "add")
        self.assertEqual([p.value.payload for p in call.parameters], [1, 2])

    def test_grouping(self):
        self.assertEqual(parse_string("x = (1);")[0].value[0].value.payload, 1)

        value = parse_string("x = (1 + 2) * 3;")[0].value
        self.assertIsInstance(value[0], Parameters)
        self.assertEqual([v.var_name for v in value[0].parameters], ["1", "+", "2"])
        self.assertEqual([v.var_name for v in value[1:]], ["*", "3"])

    def test_square_bracket_value(self):
        value = parse_string("x = a[1];")[0].value
        self.assertEqual(len(value), 2)
        self.assertEqual(value[0].var_name, "a")
        self.assertEqual(value[1], Parameters([Var("1", token=value[1].parameters[0].token)]))

        value = parse_string("x = [1, 2];")[0].value
        self.assertEqual([v.var_name for v in value[0].parameters], ["1", ",", "2"])

    def test_square_brackets_in_arguments(self):
        node = parse_string("print(a[i], [b, c]);")[0]
        self.assertEqual(len(node.parameters), 2)
        self.assertIsInstance(node.parameters[0], Parameters)
        self.assertIsInstance(node.parameters[1], Parameters)

    def test_unbalanced_square_brackets(self):
        with self.assertRaises(UnterminatedBracketGroupError):
            parse_string("x = a[1;")
        with self.assertRaises(UnexpectedTokenError):
            parse_string("x = a];")

    def test_missing_value(self):
        with self.assertRaises(UnexpectedTokenError):
            parse_string("x = ;")

    def test_declaration_without_value(self):
        with self.assertRaises(UnexpectedTokenError):
            parse_string("int x;")

    def test_missing_semicolon(self):
        with self.assertRaises(UnexpectedTokenError):
            parse_string("x = 1")

    def test_stray_closing_bracket(self):
        with self.assertRaises(UnexpectedTokenError):
            parse_string("x = a);")


class TestInvocations(unittest.TestCase):
    """Call statements."""

    def test_call_with_arguments(self):
        node = parse_string('print("hi", x);')[0]
        self.assertIsInstance(node, Invocation)
        self.assertEqual(node.method_name, "print")
        self.assertEqual(node.parameters[0].value.kind, TokenKind.STRING)
        self.assertEqual(node.parameters[0].value.payload, "hi")
        self.assertEqual(node.parameters[1].var_name, "x")

    def test_call_without_arguments(self):
        self.assertEqual(parse_string("run();"), [Invocation("run", [])])

    def test_nested_calls(self):
        node = parse_string("print(add(1, mul(2, 3)), 4);")[0]
        self.assertEqual(len(node.parameters), 2)
        inner = node.parameters[0]
        self.assertEqual(inner.method_name, "add")
        self.assertEqual(inner.parameters[1].method_name, "mul")

    def test_multi_node_argument(self):
        node = parse_string("print(a + b);")[0]
        self.assertEqual(len(node.parameters), 1)
        self.assertIsInstance(node.parameters[0], Parameters)

    def test_bad_arguments(self):
        for source in ["print(a,);", "print(,a);", "print(a)", "print(a) x"]:
            with self.subTest(source=source):
                with self.assertRaises(UnexpectedTokenError):
                    parse_string(source)


class TestConditionals(unittest.TestCase):
    """``if`` statements."""

    def test_conditional(self):
        node = parse_string("if (true) { print(1); }")[0]
        self.assertIsInstance(node, Conditional)
        self.assertEqual(node.condition[0].value.payload, True)
        self.assertEqual(len(node.body), 1)

    def test_empty_body(self):
        self.assertEqual(parse_string("if (x) { }")[0].body, [])

    def test_empty_condition(self):
        with self.assertRaises(UnexpectedTokenError):
            parse_string("if () { }")

    def test_missing_body(self):
        with self.assertRaises(UnexpectedTokenError):
            parse_string("if (x) print(x);")


class TestStatements(unittest.TestCase):
    """Top-level dispatch."""

    def test_empty_program(self):
        self.assertEqual(parse(lex("")), [])

    def test_unexpected_leading_tokens(self):
        for source in ["5;", "x;", "x y;", ";", "{ }", "\"s\";"]:
            with self.subTest(source=source):
                with self.assertRaises(UnexpectedTokenError):
                    parse_string(source)

    def test_error_reports_position(self):
        with self.assertRaises(ParseError) as ctx:
            parse_string("x = 1; 5;")
        self.assertEqual(ctx.exception.position, 8)
        self.assertIn("offset 8", str(ctx.exception))
        self.assertIn("note: Unexpected token", str(ctx.exception))

    def test_demo_program(self):
        nodes = parse_string(DEMO_SOURCE)
        self.assertEqual(
            [node.node_type for node in nodes],
            [
                NodeType.ASSIGN, NodeType.INVOCATION,
                NodeType.ASSIGN, NodeType.INVOCATION,
                NodeType.ASSIGN, NodeType.INVOCATION,
                NodeType.ASSIGN, NodeType.INVOCATION,
                NodeType.CONDITIONAL,
            ]
        )
        self.assertEqual([n.first_time for n in nodes if isinstance(n, Assign)], [True, True, False, True])

    def test_structural_equality(self):
        source = "int f(int a) { if (a) { g(a, 1); } }"
        self.assertEqual(parse_string(source), parse_string(source))

    def test_children(self):
        function = parse_string("int f(int a) { x = a; }")[0]
        children = function.children()
        self.assertIsInstance(children[0], Parameters)
        self.assertIsInstance(children[1], Assign)
        self.assertEqual(children[1].children()[0], Var("x", token=children[1].var_name.token))

    def test_debug_logging(self):
        with self.assertLogs("tinyscript.parser.parser", level="DEBUG") as logs:
            parse_string("int f() { }")
        self.assertTrue(any("Parsed Function" in line for line in logs.output))


class TestNodeInvariants(unittest.TestCase):
    """Constructors reject malformed nodes."""

    def test_conditional_needs_condition(self):
        with self.assertRaises(ValueError):
            Conditional(condition=[], body=[])

    def test_declaration_needs_type(self):
        with self.assertRaises(ValueError):
            Assign(var_name=Var("x"), value=[Var("1")], first_time=True)
        with self.assertRaises(ValueError):
            Assign(var_name=Var("x"), value=[Var("1")], first_time=False, var_type="int")


if __name__ == '__main__':
    unittest.main()
