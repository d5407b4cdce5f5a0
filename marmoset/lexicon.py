"""
The vocabulary shared between the scanner and the parser.

Token kinds are plain interned strings. For punctuation the kind is
the glyph itself, which keeps parse diagnostics readable.
"""
from typing import NamedTuple

ILLEGAL = "ILLEGAL"
EOF = "EOF"

IDENT = "IDENT"
INT = "INT"
STRING = "STRING"

ASSIGN = "="
PLUS = "+"
MINUS = "-"
BANG = "!"
ASTERISK = "*"
SLASH = "/"
LT = "<"
GT = ">"
EQ = "=="
NOT_EQ = "!="

COMMA = ","
SEMICOLON = ";"
COLON = ":"
LPAREN = "("
RPAREN = ")"
LBRACE = "{"
RBRACE = "}"
LBRACKET = "["
RBRACKET = "]"

FUNCTION = "FUNCTION"
LET = "LET"
TRUE = "TRUE"
FALSE = "FALSE"
IF = "IF"
ELSE = "ELSE"
RETURN = "RETURN"

KEYWORDS = {
	"fn": FUNCTION,
	"let": LET,
	"true": TRUE,
	"false": FALSE,
	"if": IF,
	"else": ELSE,
	"return": RETURN,
}

class Token(NamedTuple):
	kind: str
	literal: str
	offset: int = 0  # Where the token begins in the source text

	def width(self) -> int:
		return max(1, len(self.literal))

def lookup_ident(word:str) -> str:
	return KEYWORDS.get(word, IDENT)
