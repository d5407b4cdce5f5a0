"""
Gathering and presenting problems.

Parse diagnostics arrive as plain message strings with the offending token;
here they become illustrated pictures of the source line. Run-time errors
are ordinary values, and the executive hands the final one over for display.
"""
import sys, random
from pathlib import Path
from typing import Any, Optional
from boozetools.support.failureprone import SourceText, illustration

from .lexicon import Token

class TooManyIssues(Exception):
	pass

def _outburst():
	particle = ["Oh, ", "Well, ", "Aw, ", "", ""]

	minced_oaths = [
		'Ack', 'Blargh', 'Crud', 'Curses', 'Drat', 'Fiddlesticks',
		'Good Grief', 'Great Scott', 'Jeepers', 'Nuts', 'Rats',
	]

	resignations = [
		'I cannot continue.',
		'We ran into some monkey business here.',
		'I have no idea what the right answer is.',
	]

	return "%s%s! %s"%tuple(map(random.choice, (particle, minced_oaths, resignations)))

class Report:
	_issues : list["Pic"]

	def __init__(self, *, verbose:int=0, max_issues:Optional[int]=None):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []
		self._max_issues = max_issues

	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)

	@property
	def issues(self): return tuple(self._issues)

	def issue(self, it:Any):
		self._issues.append(it)
		if len(self._issues) == self._max_issues:
			raise TooManyIssues(self)

	def reset(self):
		self._issues.clear()

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		_bemoan(self._issues)

	def assert_no_issues(self, message):
		""" Does what it says on the tin """
		if self._issues:
			self.complain_to_console()
			raise AssertionError(_outburst()+" "+message)

	# Methods the front-end is likely to call:
	def parse_error(self, source:SourceText, path:Optional[Path], token:Token, message:str):
		problem = [Annotation(source, path, token.offset, token.width(), "got confused here")]
		self.issue(Pic(message, problem))

	def no_such_file(self, path:Path):
		self.issue(Pic("I see no file called " + str(path), []))

	# Methods the executive is likely to call:
	def runtime_error(self, message:str):
		self.issue(Pic("ERROR: " + message, []))

	def stack_exhausted(self):
		intro = "The program recursed too deeply and exhausted the call stack."
		footer = ["Deep recursion is a resource limit of this interpreter, not a language error."]
		self.issue(Pic(intro, [], footer))

class Annotation:
	def __init__(self, source:SourceText, path:Optional[Path], offset:int, width:int, caption:str=""):
		self.source = source
		self.path = path
		self.offset = offset
		self.width = width
		self.caption = caption
	def illustrate(self):
		row, col = self.source.find_row_col(self.offset)
		single_line = self.source.line_of_text(row)
		return illustration(single_line, col, self.width, prefix='% 6d |' % row, caption=self.caption)

class Pic:
	def __init__(self, intro:str, anns:list[Annotation], footer=()):
		self._intro, self._anns, self._footer = intro, anns, footer
	@property
	def intro(self): return self._intro
	def as_text(self):
		lines = [self._intro]
		path = None
		for ann in self._anns:
			if ann.path != path:
				path = ann.path
				lines.append(str(path))
			lines.append(ann.illustrate())
		lines.extend(self._footer)
		return '\n'.join(lines)

def _bemoan(issues):
	""" Emit all the issues to the console. """
	if issues:
		print("*"*60, file=sys.stderr)
		print(_outburst(), file=sys.stderr)
	for i in issues:
		print("  -"*20, file=sys.stderr)
		print(i.as_text(), file=sys.stderr)
	sys.stderr.flush()
