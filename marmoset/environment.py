"""
Simplest possible environment concept.

This is the canonical list-structured search: each scope holds its own
bindings and a link to the scope it was born inside. A function call's
scope links to the function's defining scope, not the caller's.
That is the whole of lexical scoping.
"""
from typing import Optional
from .values import Object

class Environment:
	def __init__(self, outer:Optional["Environment"]=None):
		self._bindings: dict[str, Object] = {}
		self.outer = outer

	def __repr__(self):
		return "<Environment %s%s>" % (sorted(self._bindings), " +outer" if self.outer else "")

	def get(self, name:str) -> Optional[Object]:
		""" Search outward. Absence is None here; the evaluator decides what that means. """
		env = self
		while env is not None:
			try: return env._bindings[name]
			except KeyError: env = env.outer
		return None

	def set(self, name:str, value:Object) -> Object:
		""" Always binds locally, never in an enclosing scope. """
		self._bindings[name] = value
		return value

def new_enclosed_environment(outer:Environment) -> Environment:
	return Environment(outer)
