"""
Tree-walking evaluation with errors as values.

Nothing here raises for a mistake in the user's program. Instead, an Error
value comes back, and every step that receives one passes it straight up
before doing any work of its own. A `return` travels the same way, wrapped
in a ReturnValue, until the enclosing function call (or the program) unwraps it.
"""
import operator
from typing import Optional, Sequence, Union
from . import syntax
from .environment import Environment, new_enclosed_environment
from .primitive import BUILTINS
from .values import (
	Object, Array, Builtin, Error, Function, Hash, Hashable, HashPair,
	Integer, ReturnValue, String, TRUE, FALSE, NULL,
	INTEGER, STRING, ARRAY, HASH,
	native_bool, is_signal, wrap_int64,
)

def evaluate(node:syntax.Node, env:Environment) -> Optional[Object]:
	try: fn = EVALUATE[type(node)]
	except KeyError: raise NotImplementedError(type(node), node)
	return fn(node, env)

def is_truthy(obj:Object) -> bool:
	return not (obj is NULL or obj is FALSE)

###############################################################################

def _eval_program(node:syntax.Program, env:Environment):
	result = None
	for stmt in node.statements:
		result = evaluate(stmt, env)
		if isinstance(result, ReturnValue): return result.value
		if isinstance(result, Error): return result
	return result

def _eval_block(node:syntax.BlockStatement, env:Environment):
	result = None
	for stmt in node.statements:
		result = evaluate(stmt, env)
		if is_signal(result): return result
	return NULL if result is None else result

def _eval_expression_statement(node:syntax.ExpressionStatement, env:Environment):
	return evaluate(node.expr, env)

def _eval_let(node:syntax.LetStatement, env:Environment):
	value = evaluate(node.value, env)
	if is_signal(value): return value
	env.set(node.name.name, value)

def _eval_return(node:syntax.ReturnStatement, env:Environment):
	value = evaluate(node.value, env)
	if is_signal(value): return value
	return ReturnValue(value)

###############################################################################

def _eval_integer(node:syntax.IntegerLiteral, env:Environment):
	return Integer(node.value)

def _eval_boolean(node:syntax.BooleanLiteral, env:Environment):
	return native_bool(node.value)

def _eval_string(node:syntax.StringLiteral, env:Environment):
	return String(node.value)

def _eval_identifier(node:syntax.Identifier, env:Environment):
	value = env.get(node.name)
	if value is not None: return value
	try: return BUILTINS[node.name]
	except KeyError: return Error("identifier not found: " + node.name)

def _eval_function(node:syntax.FunctionLiteral, env:Environment):
	return Function(node.parameters, node.body, env)

###############################################################################

def _eval_prefix(node:syntax.PrefixExpression, env:Environment):
	operand = evaluate(node.operand, env)
	if is_signal(operand): return operand
	return prefix_operation(node.operator, operand)

def prefix_operation(op:str, operand:Object) -> Object:
	if op == "!":
		return FALSE if is_truthy(operand) else TRUE
	if op == "-":
		if isinstance(operand, Integer): return Integer(wrap_int64(-operand.value))
		return Error("unknown operator: -%s" % operand.type)
	return Error("unknown operator: %s%s" % (op, operand.type))

def _eval_infix(node:syntax.InfixExpression, env:Environment):
	left = evaluate(node.left, env)
	if is_signal(left): return left
	right = evaluate(node.right, env)
	if is_signal(right): return right
	return infix_operation(node.operator, left, right)

def _divide(a:int, b:int) -> Union[int, Error]:
	if b == 0: return Error("division by zero")
	quotient = abs(a) // abs(b)
	return quotient if (a < 0) == (b < 0) else -quotient

ARITHMETIC = {
	"+": operator.add,
	"-": operator.sub,
	"*": operator.mul,
	"/": _divide,
}

COMPARISON = {
	"<": operator.lt,
	">": operator.gt,
	"==": operator.eq,
	"!=": operator.ne,
}

def _unknown_operator(op:str, left:Object, right:Object) -> Error:
	return Error("unknown operator: %s %s %s" % (left.type, op, right.type))

def _integer_infix(op:str, left:Integer, right:Integer) -> Object:
	if op in COMPARISON:
		return native_bool(COMPARISON[op](left.value, right.value))
	if op in ARITHMETIC:
		value = ARITHMETIC[op](left.value, right.value)
		if isinstance(value, Error): return value
		return Integer(wrap_int64(value))
	return _unknown_operator(op, left, right)

def _string_infix(op:str, left:String, right:String) -> Object:
	if op in COMPARISON:
		return native_bool(COMPARISON[op](left.value, right.value))
	if op == "+":
		return String(left.value + right.value)
	return _unknown_operator(op, left, right)

def infix_operation(op:str, left:Object, right:Object) -> Object:
	if left.type == INTEGER and right.type == INTEGER:
		return _integer_infix(op, left, right)
	if left.type == STRING and right.type == STRING:
		return _string_infix(op, left, right)
	# Otherwise equality means identity, which suits the singletons.
	if op == "==": return native_bool(left is right)
	if op == "!=": return native_bool(left is not right)
	if left.type != right.type:
		return Error("type mismatch: %s %s %s" % (left.type, op, right.type))
	return _unknown_operator(op, left, right)

###############################################################################

def _eval_if(node:syntax.IfExpression, env:Environment):
	condition = evaluate(node.condition, env)
	if is_signal(condition): return condition
	if is_truthy(condition):
		return evaluate(node.consequence, env)
	if node.alternative is not None:
		return evaluate(node.alternative, env)
	return NULL

def evaluate_expressions(exprs:Sequence[syntax.Expression], env:Environment) -> Union[list[Object], Object]:
	""" Left to right. The first signal comes back alone, in place of the list. """
	values = []
	for expr in exprs:
		value = evaluate(expr, env)
		if is_signal(value): return value
		values.append(value)
	return values

def _eval_call(node:syntax.CallExpression, env:Environment):
	callee = evaluate(node.callee, env)
	if is_signal(callee): return callee
	args = evaluate_expressions(node.arguments, env)
	if is_signal(args): return args
	return apply_function(callee, args)

def apply_function(callee:Object, args:list[Object]) -> Object:
	if isinstance(callee, Function):
		inner = new_enclosed_environment(callee.env)
		# Arity goes unchecked: extra arguments drop, missing parameters stay unbound.
		for param, arg in zip(callee.parameters, args):
			inner.set(param.name, arg)
		result = evaluate(callee.body, inner)
		return result.value if isinstance(result, ReturnValue) else result
	if isinstance(callee, Builtin):
		return callee.fn(*args)
	return Error("not a function: %s" % callee.type)

###############################################################################

def _eval_array(node:syntax.ArrayLiteral, env:Environment):
	elements = evaluate_expressions(node.elements, env)
	if is_signal(elements): return elements
	return Array(elements)

def _eval_hash(node:syntax.HashLiteral, env:Environment):
	pairs = {}
	for key_expr, value_expr in node.pairs:
		key = evaluate(key_expr, env)
		if is_signal(key): return key
		if not isinstance(key, Hashable):
			return Error("unusable as hash key: %s" % key.type)
		value = evaluate(value_expr, env)
		if is_signal(value): return value
		pairs[key.hash_key()] = HashPair(key, value)
	return Hash(pairs)

def _eval_index(node:syntax.IndexExpression, env:Environment):
	container = evaluate(node.container, env)
	if is_signal(container): return container
	index = evaluate(node.index, env)
	if is_signal(index): return index
	return index_operation(container, index)

def index_operation(container:Object, index:Object) -> Object:
	if container.type == ARRAY and index.type == INTEGER:
		elements = container.elements
		if 0 <= index.value < len(elements):
			return elements[index.value]
		return NULL
	if container.type == HASH:
		if not isinstance(index, Hashable):
			return Error("unusable as hash key: %s" % index.type)
		try: return container.pairs[index.hash_key()].value
		except KeyError: return NULL
	return Error("index operator not supported: %s" % container.type)

###############################################################################

EVALUATE = {}

def attach_evaluation_methods(python_scope):
	for _k, _v in list(python_scope.items()):
		if _k.startswith("_eval_"):
			_t = _v.__annotations__["node"]
			assert isinstance(_t, type), (_k, _t)
			EVALUATE[_t] = _v

attach_evaluation_methods(globals())
