"""
Turns source text into tokens, one at a time, on demand.

The scanner never fails. Anything it does not recognize comes out
as a single ILLEGAL token, and the parser decides what to make of it.
After the text runs out, every further request yields EOF.
"""
import sys
from boozetools.scanning import miniscan
from boozetools.scanning.engine import IterableScanner
from . import lexicon
from .lexicon import Token

def _emit(yy:IterableScanner, kind:str, literal:str):
	yy.token(kind, Token(kind, literal, yy.slice().start))

DEFINITION = miniscan.Definition("Marmoset")

DEFINITION.ignore(r"[{SP}\t\r\n]+")

@DEFINITION.on(r"[A-Za-z_]+")
def scan_word(yy:IterableScanner):
	word = sys.intern(yy.match())
	_emit(yy, lexicon.lookup_ident(word), word)

@DEFINITION.on(r"\d+")
def scan_integer(yy:IterableScanner):
	_emit(yy, lexicon.INT, yy.match())

@DEFINITION.on(r'"[^"]*"?')
def scan_string(yy:IterableScanner):
	# No escapes. An unterminated string runs to the end.
	body = yy.match()[1:]
	if body.endswith('"'): body = body[:-1]
	_emit(yy, lexicon.STRING, body)

@DEFINITION.on(r"==|!=|[\=\!\+\-\*\/\<\>\,\;\:\(\)\{\}\[\]]")
def scan_punctuation(yy:IterableScanner):
	glyph = sys.intern(yy.match())
	_emit(yy, glyph, glyph)

# Last, so that every rule above wins a tie.
@DEFINITION.on(r"{ANY}")
def scan_illegal(yy:IterableScanner):
	_emit(yy, lexicon.ILLEGAL, yy.match())

class Scanner:
	def __init__(self, text:str):
		self._tokens = (token for kind, token in DEFINITION.scan(text))
		self._eof = Token(lexicon.EOF, "", len(text))

	def next_token(self) -> Token:
		return next(self._tokens, self._eof)
