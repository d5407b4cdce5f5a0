"""
This is an interpreter for the Marmoset programming language.

{0}

For example:

    marmoset program.mk

will run program.mk if possible, or else try to explain why not.

    marmoset

with no program starts an interactive session.

    marmoset -h

will explain all the arguments.
"""
import sys, argparse
from pathlib import Path

parser = argparse.ArgumentParser(
	prog="marmoset",
	description="Interpreter for the Marmoset programming language.",
)
parser.add_argument("program", nargs="?", help="try examples/closures.mk for example.")
parser.add_argument('-c', "--check", action="store_true", help="Parse the program and report problems, but do not actually run it.")
parser.add_argument('-v', "--verbose", action="count", help="Say more about what is going on. Repeat for more still.")

def run(args):
	from .diagnostics import Report, TooManyIssues
	from .executive import repl, run_file, display
	from .front_end import parse_file
	report = Report(verbose=args.verbose)
	if args.program is None:
		repl(report)
		return 0
	path = Path.cwd() / args.program
	try:
		if args.check:
			parse_file(path, report)
			if report.ok():
				print("Looks plausible to me.", file=sys.stderr)
		else:
			display(run_file(path, report))
	except TooManyIssues:
		pass
	if report.sick():
		report.complain_to_console()
		return 1
	return 0

def main():
	args = parser.parse_args()
	if args.program is None and sys.stdin.isatty():
		print(__doc__.strip().format(parser.format_usage()))
	exit(run(args))
