import unittest

from marmoset import syntax
from marmoset.parser import Parser, parse_program
from marmoset.scanner import Scanner

def _parse(text) -> syntax.Program:
	program, errors = parse_program(Scanner(text))
	assert not errors, errors
	return program

def _errors(text) -> list[str]:
	return parse_program(Scanner(text))[1]

def _only_expression(text) -> syntax.Expression:
	program = _parse(text)
	assert len(program.statements) == 1, program.statements
	stmt = program.statements[0]
	assert isinstance(stmt, syntax.ExpressionStatement), stmt
	return stmt.expr

class StatementTests(unittest.TestCase):

	def test_let_statements(self):
		for text, name, value in [
			("let x = 5;", "x", "5"),
			("let y = true;", "y", "true"),
			("let foobar = y;", "foobar", "y"),
			("let z = 1 + 2 * 3", "z", "(1 + (2 * 3))"),
		]:
			with self.subTest(text):
				program = _parse(text)
				self.assertEqual(1, len(program.statements))
				stmt = program.statements[0]
				self.assertIsInstance(stmt, syntax.LetStatement)
				self.assertEqual(name, stmt.name.name)
				self.assertEqual(value, str(stmt.value))

	def test_return_statements(self):
		for text, value in [("return 5;", "5"), ("return x;", "x"), ("return a + b", "(a + b)")]:
			with self.subTest(text):
				stmt = _parse(text).statements[0]
				self.assertIsInstance(stmt, syntax.ReturnStatement)
				self.assertEqual(value, str(stmt.value))

	def test_program_renders_its_statements(self):
		self.assertEqual("let myVar = anotherVar;return (1 + 2);", str(_parse("let myVar = anotherVar; return 1 + 2;")))

	def test_semicolons_are_optional(self):
		self.assertEqual(3, len(_parse("1\n2;\n3").statements))

class ExpressionTests(unittest.TestCase):

	def test_literals(self):
		for text, cls, value in [
			("foobar;", syntax.Identifier, "foobar"),
			("5;", syntax.IntegerLiteral, 5),
			("true;", syntax.BooleanLiteral, True),
			("false;", syntax.BooleanLiteral, False),
			('"hello world";', syntax.StringLiteral, "hello world"),
		]:
			with self.subTest(text):
				expr = _only_expression(text)
				self.assertIsInstance(expr, cls)
				self.assertEqual(value, expr.name if cls is syntax.Identifier else expr.value)

	def test_prefix_expressions(self):
		for text, op, operand in [("!5;", "!", "5"), ("-15;", "-", "15"), ("!true;", "!", "true")]:
			with self.subTest(text):
				expr = _only_expression(text)
				self.assertIsInstance(expr, syntax.PrefixExpression)
				self.assertEqual(op, expr.operator)
				self.assertEqual(operand, str(expr.operand))

	def test_infix_expressions(self):
		for op in ["+", "-", "*", "/", ">", "<", "==", "!="]:
			with self.subTest(op):
				expr = _only_expression("5 %s 6;" % op)
				self.assertIsInstance(expr, syntax.InfixExpression)
				self.assertEqual(op, expr.operator)
				self.assertEqual(5, expr.left.value)
				self.assertEqual(6, expr.right.value)

	def test_operator_precedence(self):
		for text, expected in [
			("-a * b", "((-a) * b)"),
			("!-a", "(!(-a))"),
			("a + b + c", "((a + b) + c)"),
			("a + b - c", "((a + b) - c)"),
			("a * b * c", "((a * b) * c)"),
			("a + b / c", "(a + (b / c))"),
			("a + b * c + d / e - f", "(((a + (b * c)) + (d / e)) - f)"),
			("3 + 4; -5 * 5", "(3 + 4)((-5) * 5)"),
			("5 > 4 == 3 < 4", "((5 > 4) == (3 < 4))"),
			("3 + 4 * 5 == 3 * 1 + 4 * 5", "((3 + (4 * 5)) == ((3 * 1) + (4 * 5)))"),
			("true == !false", "(true == (!false))"),
			("1 + (2 + 3) + 4", "((1 + (2 + 3)) + 4)"),
			("(5 + 5) * 2", "((5 + 5) * 2)"),
			("-(5 + 5)", "(-(5 + 5))"),
			("!(true == true)", "(!(true == true))"),
			("a + add(b * c) + d", "((a + add((b * c))) + d)"),
			("add(a, b, 1, 2 * 3, 4 + 5, add(6, 7 * 8))", "add(a, b, 1, (2 * 3), (4 + 5), add(6, (7 * 8)))"),
			("add(a + b + c * d / f + g)", "add((((a + b) + ((c * d) / f)) + g))"),
			("a * [1, 2, 3, 4][b * c] * d", "((a * ([1, 2, 3, 4][(b * c)])) * d)"),
			("add(a * b[2], b[1], 2 * [1, 2][1])", "add((a * (b[2])), (b[1]), (2 * ([1, 2][1])))"),
		]:
			with self.subTest(text):
				self.assertEqual(expected, str(_parse(text)))

	def test_if_expression(self):
		expr = _only_expression("if (x < y) { x }")
		self.assertIsInstance(expr, syntax.IfExpression)
		self.assertEqual("(x < y)", str(expr.condition))
		self.assertEqual("x", str(expr.consequence))
		self.assertIsNone(expr.alternative)

	def test_if_else_expression(self):
		expr = _only_expression("if (x < y) { x } else { y }")
		self.assertEqual("y", str(expr.alternative))
		self.assertEqual("if(x < y) xelse y", str(expr))

	def test_function_literal(self):
		expr = _only_expression("fn(x, y) { x + y; }")
		self.assertIsInstance(expr, syntax.FunctionLiteral)
		self.assertEqual(["x", "y"], [p.name for p in expr.parameters])
		self.assertEqual("(x + y)", str(expr.body))
		self.assertEqual("fn(x, y) (x + y)", str(expr))

	def test_function_parameters(self):
		for text, names in [("fn() {};", []), ("fn(x) {};", ["x"]), ("fn(x, y, z) {};", ["x", "y", "z"])]:
			with self.subTest(text):
				self.assertEqual(names, [p.name for p in _only_expression(text).parameters])

	def test_call_expression(self):
		expr = _only_expression("add(1, 2 * 3, 4 + 5);")
		self.assertIsInstance(expr, syntax.CallExpression)
		self.assertEqual("add", str(expr.callee))
		self.assertEqual(["1", "(2 * 3)", "(4 + 5)"], [str(a) for a in expr.arguments])

	def test_array_and_index(self):
		expr = _only_expression("[1, 2 * 2, 3 + 3]")
		self.assertIsInstance(expr, syntax.ArrayLiteral)
		self.assertEqual(["1", "(2 * 2)", "(3 + 3)"], [str(e) for e in expr.elements])
		expr = _only_expression("myArray[1 + 1]")
		self.assertIsInstance(expr, syntax.IndexExpression)
		self.assertEqual("myArray", str(expr.container))
		self.assertEqual("(1 + 1)", str(expr.index))

	def test_hash_literals(self):
		for text, rendered in [
			("{}", "{}"),
			('{"one": 1, "two": 2, "three": 3}', "{one:1, two:2, three:3}"),
			('{"one": 0 + 1, "two": 10 - 8}', "{one:(0 + 1), two:(10 - 8)}"),
			("{true: 1, 2: false}", "{true:1, 2:false}"),
		]:
			with self.subTest(text):
				expr = _only_expression(text)
				self.assertIsInstance(expr, syntax.HashLiteral)
				self.assertEqual(rendered, str(expr))

	def test_hash_keeps_declared_order(self):
		expr = _only_expression('{"b": 1, "a": 2}')
		self.assertEqual(["b", "a"], [k.value for k, v in expr.pairs])

class DiagnosticTests(unittest.TestCase):

	def test_several_faults_in_one_pass(self):
		self.assertEqual([
			"expected next token to be =, got INT instead",
			"expected next token to be IDENT, got = instead",
			"no prefix parse function found for =",
			"expected next token to be IDENT, got INT instead",
		], _errors("let x 5; let = 10; let 838383;"))

	def test_missing_operand(self):
		self.assertEqual(["no prefix parse function found for ;"], _errors("x + ;"))

	def test_unclosed_group(self):
		self.assertEqual(["expected next token to be ), got EOF instead"], _errors("(1 + 2"))

	def test_integer_out_of_range(self):
		self.assertEqual(['could not parse "9223372036854775808" as integer'], _errors("9223372036854775808"))
		self.assertEqual([], _errors("9223372036854775807"))

	def test_illegal_token(self):
		self.assertEqual(["no prefix parse function found for ILLEGAL"], _errors("@"))

	def test_recovery_keeps_later_statements(self):
		parser = Parser(Scanner("let = 1; let y = 2;"))
		program = parser.parse_program()
		self.assertTrue(parser.errors)
		self.assertEqual("let y = 2;", str(program.statements[-1]))

	def test_issues_carry_the_offending_token(self):
		parser = Parser(Scanner("let x 5;"))
		parser.parse_program()
		[(message, token)] = parser.issues
		self.assertEqual(parser.errors[0], message)
		self.assertEqual("5", token.literal)
		self.assertEqual(6, token.offset)


if __name__ == '__main__':
	unittest.main()
