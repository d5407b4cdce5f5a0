"""
This module defines the run-time value-types the evaluator operates in terms of.

The set is closed. Every value reports a type tag (used in error messages and
for dispatch) and can render itself for display via `inspect`.

Booleans and null are singletons, built once and compared by identity.
"""
from abc import ABC, abstractmethod
from typing import Callable, NamedTuple, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
	from . import syntax
	from .environment import Environment

INTEGER = "INTEGER"
BOOLEAN = "BOOLEAN"
NULL_TYPE = "NULL"
STRING = "STRING"
ARRAY = "ARRAY"
HASH = "HASH"
FUNCTION = "FUNCTION"
BUILTIN = "BUILTIN"
RETURN_VALUE = "RETURN_VALUE"
ERROR = "ERROR"

_MASK_64 = (1 << 64) - 1
_FNV_OFFSET = 0xcbf29ce484222325
_FNV_PRIME = 0x100000001b3

def wrap_int64(n:int) -> int:
	""" Two's-complement wrap-around, as a 64-bit machine word would do it. """
	n &= _MASK_64
	return n - (1 << 64) if n >> 63 else n

def fnv1a_64(data:bytes) -> int:
	h = _FNV_OFFSET
	for byte in data:
		h = ((h ^ byte) * _FNV_PRIME) & _MASK_64
	return h

class HashKey(NamedTuple):
	""" Derived from a value, not its identity: equal values give equal keys. """
	type: str
	value: int

class Object(ABC):
	""" Root for all run-time values """
	type: str
	@abstractmethod
	def inspect(self) -> str: pass
	def __str__(self): return self.inspect()

class Hashable(Object):
	""" Values fit for use as hash keys """
	@abstractmethod
	def hash_key(self) -> HashKey: pass

###############################################################################

class Integer(Hashable):
	type = INTEGER
	def __init__(self, value:int):
		self.value = value
	def __repr__(self): return "<Integer %d>" % self.value
	def inspect(self): return str(self.value)
	def hash_key(self): return HashKey(INTEGER, self.value & _MASK_64)

class Boolean(Hashable):
	type = BOOLEAN
	def __init__(self, value:bool):
		self.value = value
	def __repr__(self): return "<Boolean %s>" % self.inspect()
	def inspect(self): return "true" if self.value else "false"
	def hash_key(self): return HashKey(BOOLEAN, 1 if self.value else 0)

class Null(Object):
	type = NULL_TYPE
	def __repr__(self): return "<Null>"
	def inspect(self): return "null"

class String(Hashable):
	type = STRING
	def __init__(self, value:str):
		self.value = value
	def __repr__(self): return "<String %r>" % self.value
	def inspect(self): return self.value
	def hash_key(self): return HashKey(STRING, fnv1a_64(self.value.encode("utf-8")))

class Array(Object):
	type = ARRAY
	def __init__(self, elements:list[Object]):
		self.elements = elements
	def inspect(self): return "[%s]" % ", ".join(e.inspect() for e in self.elements)

class HashPair(NamedTuple):
	key: Object   # The original key, kept for display
	value: Object

class Hash(Object):
	type = HASH
	def __init__(self, pairs:dict[HashKey, HashPair]):
		self.pairs = pairs
	def inspect(self):
		return "{%s}" % ", ".join("%s: %s" % (p.key.inspect(), p.value.inspect()) for p in self.pairs.values())

class Function(Object):
	"""
	The run-time manifestation of a function literal: a callable value tied to its natal environment.
	That environment is shared, not copied, so later bindings there remain visible.
	"""
	type = FUNCTION
	def __init__(self, parameters:Sequence["syntax.Identifier"], body:"syntax.BlockStatement", env:"Environment"):
		self.parameters = parameters
		self.body = body
		self.env = env
	def inspect(self):
		return "fn(%s) {\n%s\n}" % (", ".join(p.name for p in self.parameters), self.body)

class Builtin(Object):
	""" Native behavior. It checks its own arguments and returns Error values on complaint. """
	type = BUILTIN
	def __init__(self, name:str, fn:Callable[..., Object]):
		self.name = name
		self.fn = fn
	def __repr__(self): return "<Builtin %s>" % self.name
	def inspect(self): return "builtin function"

class ReturnValue(Object):
	""" Only ever seen inside the evaluator, where it carries a value out of a function body. """
	type = RETURN_VALUE
	def __init__(self, value:Object):
		self.value = value
	def inspect(self): return self.value.inspect()

class Error(Object):
	type = ERROR
	def __init__(self, message:str):
		self.message = message
	def __repr__(self): return "<Error %r>" % self.message
	def inspect(self): return "ERROR: " + self.message

TRUE = Boolean(True)
FALSE = Boolean(False)
NULL = Null()

def native_bool(flag:bool) -> Boolean:
	return TRUE if flag else FALSE

def is_signal(obj) -> bool:
	""" True for the values that must travel straight up, unexamined. """
	return isinstance(obj, (Error, ReturnValue))
