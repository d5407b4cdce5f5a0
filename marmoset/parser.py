"""
Precedence-climbing (Pratt) parser.

Each token kind that can begin an expression has a prefix rule;
each that can continue one has an infix rule and a binding strength.
The parser holds exactly two tokens of look-ahead and never backs up.

Parsing never raises on bad input. Diagnostics accumulate in order,
and the parser presses on so one pass can surface several problems.
Sub-rules signal failure by returning None, and callers pass that up.
"""
from typing import Callable, Optional
from . import lexicon, syntax
from .lexicon import Token
from .scanner import Scanner

LOWEST = 1
EQUALS = 2       # ==
LESSGREATER = 3  # > or <
SUM = 4          # +
PRODUCT = 5      # *
PREFIX = 6       # -x or !x
CALL = 7         # f(x) or a[x]

PRECEDENCE = {
	lexicon.EQ: EQUALS,
	lexicon.NOT_EQ: EQUALS,
	lexicon.LT: LESSGREATER,
	lexicon.GT: LESSGREATER,
	lexicon.PLUS: SUM,
	lexicon.MINUS: SUM,
	lexicon.ASTERISK: PRODUCT,
	lexicon.SLASH: PRODUCT,
	lexicon.LPAREN: CALL,
	lexicon.LBRACKET: CALL,
}

INT64_MAX = 2**63 - 1

PREFIX_RULE = Callable[[], Optional[syntax.Expression]]
INFIX_RULE = Callable[[syntax.Expression], Optional[syntax.Expression]]

class Parser:
	errors: list[str]
	issues: list[tuple[str, Token]]  # Same diagnostics, with the offending token

	def __init__(self, scanner:Scanner):
		self._scanner = scanner
		self.errors = []
		self.issues = []
		self.current = self.peek = None
		self.advance()
		self.advance()
		self._prefix: dict[str, PREFIX_RULE] = {
			lexicon.IDENT: self._parse_identifier,
			lexicon.INT: self._parse_integer_literal,
			lexicon.STRING: self._parse_string_literal,
			lexicon.TRUE: self._parse_boolean_literal,
			lexicon.FALSE: self._parse_boolean_literal,
			lexicon.BANG: self._parse_prefix_expression,
			lexicon.MINUS: self._parse_prefix_expression,
			lexicon.LPAREN: self._parse_grouped_expression,
			lexicon.IF: self._parse_if_expression,
			lexicon.FUNCTION: self._parse_function_literal,
			lexicon.LBRACKET: self._parse_array_literal,
			lexicon.LBRACE: self._parse_hash_literal,
		}
		self._infix: dict[str, INFIX_RULE] = {kind: self._parse_infix_expression for kind in PRECEDENCE}
		self._infix[lexicon.LPAREN] = self._parse_call_expression
		self._infix[lexicon.LBRACKET] = self._parse_index_expression

	def advance(self):
		self.current = self.peek
		self.peek = self._scanner.next_token()

	def _current_is(self, kind:str) -> bool: return self.current.kind == kind
	def _peek_is(self, kind:str) -> bool: return self.peek.kind == kind
	def _peek_precedence(self) -> int: return PRECEDENCE.get(self.peek.kind, LOWEST)
	def _current_precedence(self) -> int: return PRECEDENCE.get(self.current.kind, LOWEST)

	def _expect_peek(self, kind:str) -> bool:
		""" On success, advance into the expected token. On failure, complain and stay put. """
		if self._peek_is(kind):
			self.advance()
			return True
		self._complain("expected next token to be %s, got %s instead" % (kind, self.peek.kind), self.peek)
		return False

	def _complain(self, message:str, token:Token):
		self.errors.append(message)
		self.issues.append((message, token))

	###########################################################################

	def parse_program(self) -> syntax.Program:
		statements = []
		while not self._current_is(lexicon.EOF):
			stmt = self._parse_statement()
			if stmt is not None:
				statements.append(stmt)
			self.advance()
		return syntax.Program(statements)

	def _parse_statement(self) -> Optional[syntax.Statement]:
		kind = self.current.kind
		if kind == lexicon.LET: return self._parse_let_statement()
		if kind == lexicon.RETURN: return self._parse_return_statement()
		return self._parse_expression_statement()

	def _parse_let_statement(self) -> Optional[syntax.LetStatement]:
		token = self.current
		if not self._expect_peek(lexicon.IDENT): return None
		name = syntax.Identifier(self.current, self.current.literal)
		if not self._expect_peek(lexicon.ASSIGN): return None
		self.advance()
		value = self.parse_expression(LOWEST)
		if self._peek_is(lexicon.SEMICOLON): self.advance()
		if value is None: return None
		return syntax.LetStatement(token, name, value)

	def _parse_return_statement(self) -> Optional[syntax.ReturnStatement]:
		token = self.current
		self.advance()
		value = self.parse_expression(LOWEST)
		if self._peek_is(lexicon.SEMICOLON): self.advance()
		if value is None: return None
		return syntax.ReturnStatement(token, value)

	def _parse_expression_statement(self) -> Optional[syntax.ExpressionStatement]:
		token = self.current
		expr = self.parse_expression(LOWEST)
		if self._peek_is(lexicon.SEMICOLON): self.advance()
		if expr is None: return None
		return syntax.ExpressionStatement(token, expr)

	def _parse_block_statement(self) -> syntax.BlockStatement:
		""" Begins on the opening brace; ends on the closing brace (or EOF). """
		token = self.current
		statements = []
		self.advance()
		while not (self._current_is(lexicon.RBRACE) or self._current_is(lexicon.EOF)):
			stmt = self._parse_statement()
			if stmt is not None:
				statements.append(stmt)
			self.advance()
		return syntax.BlockStatement(token, statements)

	###########################################################################

	def parse_expression(self, precedence:int) -> Optional[syntax.Expression]:
		try: prefix = self._prefix[self.current.kind]
		except KeyError:
			self._complain("no prefix parse function found for %s" % self.current.kind, self.current)
			return None
		left = prefix()
		while left is not None and not self._peek_is(lexicon.SEMICOLON) and precedence < self._peek_precedence():
			infix = self._infix[self.peek.kind]
			self.advance()
			left = infix(left)
		return left

	def _parse_identifier(self):
		return syntax.Identifier(self.current, self.current.literal)

	def _parse_integer_literal(self):
		value = int(self.current.literal)
		if value > INT64_MAX:
			self._complain('could not parse "%s" as integer' % self.current.literal, self.current)
			return None
		return syntax.IntegerLiteral(self.current, value)

	def _parse_string_literal(self):
		return syntax.StringLiteral(self.current, self.current.literal)

	def _parse_boolean_literal(self):
		return syntax.BooleanLiteral(self.current, self._current_is(lexicon.TRUE))

	def _parse_prefix_expression(self):
		token = self.current
		self.advance()
		operand = self.parse_expression(PREFIX)
		if operand is None: return None
		return syntax.PrefixExpression(token, token.literal, operand)

	def _parse_infix_expression(self, left:syntax.Expression):
		token = self.current
		precedence = self._current_precedence()
		self.advance()
		right = self.parse_expression(precedence)
		if right is None: return None
		return syntax.InfixExpression(token, token.literal, left, right)

	def _parse_grouped_expression(self):
		self.advance()
		expr = self.parse_expression(LOWEST)
		if expr is None or not self._expect_peek(lexicon.RPAREN): return None
		return expr

	def _parse_if_expression(self):
		token = self.current
		if not self._expect_peek(lexicon.LPAREN): return None
		self.advance()
		condition = self.parse_expression(LOWEST)
		if condition is None: return None
		if not self._expect_peek(lexicon.RPAREN): return None
		if not self._expect_peek(lexicon.LBRACE): return None
		consequence = self._parse_block_statement()
		alternative = None
		if self._peek_is(lexicon.ELSE):
			self.advance()
			if not self._expect_peek(lexicon.LBRACE): return None
			alternative = self._parse_block_statement()
		return syntax.IfExpression(token, condition, consequence, alternative)

	def _parse_function_literal(self):
		token = self.current
		if not self._expect_peek(lexicon.LPAREN): return None
		parameters = self._parse_function_parameters()
		if parameters is None: return None
		if not self._expect_peek(lexicon.LBRACE): return None
		body = self._parse_block_statement()
		return syntax.FunctionLiteral(token, parameters, body)

	def _parse_function_parameters(self) -> Optional[list[syntax.Identifier]]:
		parameters = []
		if self._peek_is(lexicon.RPAREN):
			self.advance()
			return parameters
		if not self._expect_peek(lexicon.IDENT): return None
		parameters.append(syntax.Identifier(self.current, self.current.literal))
		while self._peek_is(lexicon.COMMA):
			self.advance()
			if not self._expect_peek(lexicon.IDENT): return None
			parameters.append(syntax.Identifier(self.current, self.current.literal))
		if not self._expect_peek(lexicon.RPAREN): return None
		return parameters

	def _parse_expression_list(self, closer:str) -> Optional[list[syntax.Expression]]:
		""" Comma-separated expressions up to the given closing token, which is consumed. """
		items = []
		if self._peek_is(closer):
			self.advance()
			return items
		self.advance()
		item = self.parse_expression(LOWEST)
		if item is None: return None
		items.append(item)
		while self._peek_is(lexicon.COMMA):
			self.advance()
			self.advance()
			item = self.parse_expression(LOWEST)
			if item is None: return None
			items.append(item)
		if not self._expect_peek(closer): return None
		return items

	def _parse_call_expression(self, callee:syntax.Expression):
		token = self.current
		arguments = self._parse_expression_list(lexicon.RPAREN)
		if arguments is None: return None
		return syntax.CallExpression(token, callee, arguments)

	def _parse_index_expression(self, container:syntax.Expression):
		token = self.current
		self.advance()
		index = self.parse_expression(LOWEST)
		if index is None or not self._expect_peek(lexicon.RBRACKET): return None
		return syntax.IndexExpression(token, container, index)

	def _parse_array_literal(self):
		token = self.current
		elements = self._parse_expression_list(lexicon.RBRACKET)
		if elements is None: return None
		return syntax.ArrayLiteral(token, elements)

	def _parse_hash_literal(self):
		token = self.current
		pairs = []
		while not self._peek_is(lexicon.RBRACE):
			self.advance()
			key = self.parse_expression(LOWEST)
			if key is None or not self._expect_peek(lexicon.COLON): return None
			self.advance()
			value = self.parse_expression(LOWEST)
			if value is None: return None
			pairs.append((key, value))
			if not self._peek_is(lexicon.RBRACE) and not self._expect_peek(lexicon.COMMA): return None
		self.advance()
		return syntax.HashLiteral(token, pairs)

def parse_program(scanner:Scanner) -> tuple[syntax.Program, list[str]]:
	""" The whole contract in one call: a (possibly partial) program and its diagnostics. """
	parser = Parser(scanner)
	program = parser.parse_program()
	return program, parser.errors
