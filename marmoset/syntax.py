"""
The set of parse-nodes in simple form.
The parser builds these once; afterwards nobody mutates them.
The evaluator only reads them, possibly many times over (as in a function body).

Each node keeps the token that introduced it, which serves for diagnostics.
String conversion gives the fully-parenthesized debug rendering,
which makes precedence decisions easy to see and to test.
"""
from typing import Optional, Sequence
from boozetools.support.foundation import Visitor
from .lexicon import Token

class Node:
	token: Token
	def __str__(self): return RENDER.visit(self)

class Statement(Node): pass

class Expression(Node): pass

class Program(Node):
	def __init__(self, statements:Sequence[Statement]):
		self.statements = statements
	def __repr__(self): return "<Program of %d statements>" % len(self.statements)

###############################################################################

class Identifier(Expression):
	def __init__(self, token:Token, name:str):
		self.token, self.name = token, name
	def __repr__(self): return "<Identifier %s>" % self.name

class IntegerLiteral(Expression):
	def __init__(self, token:Token, value:int):
		self.token, self.value = token, value

class BooleanLiteral(Expression):
	def __init__(self, token:Token, value:bool):
		self.token, self.value = token, value

class StringLiteral(Expression):
	def __init__(self, token:Token, value:str):
		self.token, self.value = token, value

class ArrayLiteral(Expression):
	def __init__(self, token:Token, elements:Sequence[Expression]):
		self.token, self.elements = token, elements

class HashLiteral(Expression):
	""" Pairs stay in declared order; evaluation order depends on it. """
	def __init__(self, token:Token, pairs:Sequence[tuple[Expression, Expression]]):
		self.token, self.pairs = token, pairs

class PrefixExpression(Expression):
	def __init__(self, token:Token, operator:str, operand:Expression):
		self.token, self.operator, self.operand = token, operator, operand

class InfixExpression(Expression):
	def __init__(self, token:Token, operator:str, left:Expression, right:Expression):
		self.token, self.operator = token, operator
		self.left, self.right = left, right

class IfExpression(Expression):
	def __init__(self, token:Token, condition:Expression, consequence:"BlockStatement", alternative:Optional["BlockStatement"]):
		self.token = token
		self.condition = condition
		self.consequence = consequence
		self.alternative = alternative

class FunctionLiteral(Expression):
	def __init__(self, token:Token, parameters:Sequence[Identifier], body:"BlockStatement"):
		self.token, self.parameters, self.body = token, parameters, body

class CallExpression(Expression):
	def __init__(self, token:Token, callee:Expression, arguments:Sequence[Expression]):
		self.token, self.callee, self.arguments = token, callee, arguments

class IndexExpression(Expression):
	def __init__(self, token:Token, container:Expression, index:Expression):
		self.token, self.container, self.index = token, container, index

###############################################################################

class LetStatement(Statement):
	def __init__(self, token:Token, name:Identifier, value:Expression):
		self.token, self.name, self.value = token, name, value

class ReturnStatement(Statement):
	def __init__(self, token:Token, value:Expression):
		self.token, self.value = token, value

class ExpressionStatement(Statement):
	def __init__(self, token:Token, expr:Expression):
		self.token, self.expr = token, expr

class BlockStatement(Statement):
	def __init__(self, token:Token, statements:Sequence[Statement]):
		self.token, self.statements = token, statements

###############################################################################

class Render(Visitor):
	"""
	Produces the debug rendering. Every prefix, infix, and index expression
	gets its own parentheses, so the shape of the tree shows in the text.
	"""
	def _each(self, items) -> list[str]:
		return [self.visit(i) for i in items]

	def visit_Program(self, it:Program): return "".join(self._each(it.statements))
	def visit_BlockStatement(self, it:BlockStatement): return "".join(self._each(it.statements))
	def visit_LetStatement(self, it:LetStatement):
		return "let %s = %s;" % (self.visit(it.name), self.visit(it.value))
	def visit_ReturnStatement(self, it:ReturnStatement):
		return "return %s;" % self.visit(it.value)
	def visit_ExpressionStatement(self, it:ExpressionStatement):
		return self.visit(it.expr)

	def visit_Identifier(self, it:Identifier): return it.name
	def visit_IntegerLiteral(self, it:IntegerLiteral): return it.token.literal
	def visit_BooleanLiteral(self, it:BooleanLiteral): return it.token.literal
	def visit_StringLiteral(self, it:StringLiteral): return it.value
	def visit_ArrayLiteral(self, it:ArrayLiteral):
		return "[%s]" % ", ".join(self._each(it.elements))
	def visit_HashLiteral(self, it:HashLiteral):
		return "{%s}" % ", ".join("%s:%s" % (self.visit(k), self.visit(v)) for k, v in it.pairs)

	def visit_PrefixExpression(self, it:PrefixExpression):
		return "(%s%s)" % (it.operator, self.visit(it.operand))
	def visit_InfixExpression(self, it:InfixExpression):
		return "(%s %s %s)" % (self.visit(it.left), it.operator, self.visit(it.right))
	def visit_IndexExpression(self, it:IndexExpression):
		return "(%s[%s])" % (self.visit(it.container), self.visit(it.index))
	def visit_CallExpression(self, it:CallExpression):
		return "%s(%s)" % (self.visit(it.callee), ", ".join(self._each(it.arguments)))

	def visit_IfExpression(self, it:IfExpression):
		text = "if%s %s" % (self.visit(it.condition), self.visit(it.consequence))
		if it.alternative is not None:
			text += "else %s" % self.visit(it.alternative)
		return text

	def visit_FunctionLiteral(self, it:FunctionLiteral):
		return "%s(%s) %s" % (it.token.literal, ", ".join(self._each(it.parameters)), self.visit(it.body))

RENDER = Render()
