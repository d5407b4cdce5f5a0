"""
Build the primitive namespace: the fixed table of builtin functions.

Builtins never mutate their arguments. `push` and `rest` hand back fresh arrays.
Each builtin checks its own arity and argument types, answering with an Error value.
"""
from .values import Object, Array, Builtin, Error, Integer, String, NULL, ARRAY

def wrong_arity(got:int, want:int) -> Error:
	return Error("wrong number of arguments: got=%d, want=%d" % (got, want))

def _must_be_array(name:str, arg:Object):
	if arg.type != ARRAY:
		return Error("argument to `%s` must be ARRAY, got=%s" % (name, arg.type))

def _len(*args:Object) -> Object:
	if len(args) != 1: return wrong_arity(len(args), 1)
	arg = args[0]
	if isinstance(arg, String): return Integer(len(arg.value.encode("utf-8")))
	if isinstance(arg, Array): return Integer(len(arg.elements))
	return Error("argument to `len` not supported, got=%s" % arg.type)

def _first(*args:Object) -> Object:
	if len(args) != 1: return wrong_arity(len(args), 1)
	return _must_be_array("first", args[0]) or (args[0].elements[0] if args[0].elements else NULL)

def _last(*args:Object) -> Object:
	if len(args) != 1: return wrong_arity(len(args), 1)
	return _must_be_array("last", args[0]) or (args[0].elements[-1] if args[0].elements else NULL)

def _rest(*args:Object) -> Object:
	if len(args) != 1: return wrong_arity(len(args), 1)
	complaint = _must_be_array("rest", args[0])
	if complaint: return complaint
	elements = args[0].elements
	return Array(elements[1:]) if elements else NULL

def _push(*args:Object) -> Object:
	if len(args) != 2: return wrong_arity(len(args), 2)
	complaint = _must_be_array("push", args[0])
	if complaint: return complaint
	return Array(args[0].elements + [args[1]])

def _print(*args:Object) -> Object:
	for arg in args:
		print(arg.inspect())
	return NULL

BUILTINS: dict[str, Builtin] = {
	name: Builtin(name, fn)
	for name, fn in [
		("len", _len),
		("first", _first),
		("last", _last),
		("rest", _rest),
		("push", _push),
		("print", _print),
	]
}
