"""
Text in, syntax tree out, with diagnostics routed to a Report.

A program with any parse diagnostic does not come back at all:
the partial tree is not fit for evaluation.
"""
from pathlib import Path
from typing import Optional
from boozetools.support.failureprone import SourceText

from . import syntax
from .diagnostics import Report
from .parser import Parser
from .scanner import Scanner

def parse_text(text:str, report:Report, path:Optional[Path]=None) -> Optional[syntax.Program]:
	""" Submit text to parser; report whatever goes wrong """
	parser = Parser(Scanner(text))
	program = parser.parse_program()
	if parser.issues:
		source = SourceText(text, filename=str(path) if path else None)
		for message, token in parser.issues:
			report.parse_error(source, path, token, message)
		return None
	report.info("Parsed %d statement(s)" % len(program.statements))
	return program

def parse_file(path:Path, report:Report) -> Optional[syntax.Program]:
	try:
		with open(path, "r", encoding="utf-8") as fh:
			text = fh.read()
	except FileNotFoundError:
		report.no_such_file(path)
		return None
	return parse_text(text, report, path)
