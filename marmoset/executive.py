"""
This is the overall control for running programs:
a session keeps one top-level environment alive across many pieces of text,
which is what the REPL needs, and a file run is just a session of one piece.
"""
import sys, threading
from pathlib import Path
from typing import Callable, Optional

from . import syntax
from .diagnostics import Report
from .environment import Environment
from .evaluator import evaluate
from .front_end import parse_text, parse_file
from .values import Object, Error

PROMPT = ">> "

# Each level of recursion in a user program costs a dozen or so Python frames.
RECURSION_LIMIT = 100_000
STACK_SIZE = 512 * 1024 * 1024

def _with_deep_stack(fn:Callable, *args):
	"""
	Run fn on a thread with room for deep recursion, and wait for it.
	Whatever fn raises is raised again here, in the caller's thread.
	"""
	outcome = {}
	def work():
		try: outcome["value"] = fn(*args)
		except BaseException as ex: outcome["error"] = ex
	prior_limit = sys.getrecursionlimit()
	prior_size = threading.stack_size(STACK_SIZE)
	sys.setrecursionlimit(max(prior_limit, RECURSION_LIMIT))
	try:
		worker = threading.Thread(target=work, name="evaluator")
		worker.start()
		worker.join()
	finally:
		threading.stack_size(prior_size)
		sys.setrecursionlimit(prior_limit)
	if "error" in outcome: raise outcome["error"]
	return outcome["value"]

class Session:
	def __init__(self, report:Report):
		self.report = report
		self.env = Environment()

	def execute(self, program:syntax.Program) -> Optional[Object]:
		"""
		Evaluate in this session's environment. A resulting Error goes to the report,
		and so does a blown stack, which is the one host exception we expect.
		"""
		try:
			result = _with_deep_stack(evaluate, program, self.env)
		except RecursionError:
			self.report.stack_exhausted()
			return None
		if isinstance(result, Error):
			self.report.runtime_error(result.message)
		return result

	def run_text(self, text:str, path:Optional[Path]=None) -> Optional[Object]:
		program = parse_text(text, self.report, path)
		if program is None: return None
		return self.execute(program)

def run_file(path:Path, report:Report) -> Optional[Object]:
	program = parse_file(path, report)
	if program is None: return None
	return Session(report).execute(program)

def display(result:Optional[Object]):
	if result is not None and not isinstance(result, Error):
		print(result.inspect())

def repl(report:Report, stdin=sys.stdin):
	""" Read a line, evaluate it, print the result; complaints never end the session. """
	session = Session(report)
	while True:
		print(PROMPT, end="", flush=True)
		line = stdin.readline()
		if not line:
			print()
			return
		display(session.run_text(line))
		if report.sick():
			report.complain_to_console()
			report.reset()
