"""Parser for polynomials written like "7x^3 + x^2 -9x + 30".

The important functions are:
 - parse_term:       (str, int) -> (Term, int)
 - parse_polynomial: str -> Chain or None

A term is an optional sign, an optional decimal coefficient, and an optional
"x" marker with an optional "^N" exponent.  Spaces may follow the sign, but
the coefficient, the marker, the caret and the exponent must be written
together ("2x^3", not "2 x ^ 3").  A term that ends without an exponent must
be followed by a space or the end of the text, so "2xy" and "2+3" are
rejected instead of being split at a strange place.
"""

# builtin
import math
import re

# 3rd party
from ply import lex

# ours
from polychain import chains
from polychain.errors import InputError
from polychain.logging import task, event
from polychain.terms import make_term, MAX_DEGREE

# Lexer ########################################################################

tokens = ("SIGN", "NUM", "VAR", "CARET", "ILLEGAL")

def make_lexer():

    def t_NUM(t):
        r"\d+(\.\d*)?([eE][+-]?\d+)?"
        return t

    def t_VAR(t):
        r"x"
        return t

    def t_CARET(t):
        r"\^"
        return t

    def t_SIGN(t):
        r"[+-]"
        return t

    t_ignore = " "

    # Any other character becomes a one-character ILLEGAL token; the term
    # parser decides whether reaching it is an error.
    def t_error(t):
        t.type = "ILLEGAL"
        t.value = t.value[0]
        t.lexer.skip(1)
        return t

    return lex.lex()

_lexer = make_lexer()
def tokenize(s, start=0):
    lexer = _lexer.clone() # Because lexer objects are stateful
    lexer.input(s)
    lexer.lexpos = start
    while True:
        tok = lexer.token()
        if not tok:
            break
        yield tok

_INTEGER_PREFIX = re.compile(r"\d+")

def _end(tok):
    return tok.lexpos + len(tok.value)

def _adjacent(tok, pos):
    """Does tok start exactly at pos (with no space before it)?"""
    return tok is not None and tok.lexpos == pos

# Parser #######################################################################

class _Lookahead(object):
    """A token stream with one token of lookahead."""
    def __init__(self, text, start):
        self.it = tokenize(text, start)
        self.tok = next(self.it, None)
    def peek(self):
        return self.tok
    def advance(self):
        tok = self.tok
        self.tok = next(self.it, None)
        return tok

def parse_term(text, cursor=0):
    """Read one term from text, starting at offset cursor.

    Returns (term, new_cursor) where new_cursor is the offset just past the
    term.  Leading spaces are skipped; trailing ones are not consumed.

    Raises InputError, with `position` equal to `cursor`, if no valid term
    starts there.
    """

    def fail(reason):
        raise InputError(reason, text=text, position=cursor)

    toks = _Lookahead(text, cursor)

    sign = 1.0
    if toks.peek() is not None and toks.peek().type == "SIGN":
        if toks.advance().value == "-":
            sign = -1.0

    coefficient = None
    end = None
    if toks.peek() is not None and toks.peek().type == "NUM":
        num = toks.advance()
        coefficient = float(num.value)
        if math.isinf(coefficient):
            fail("coefficient {} is out of range".format(num.value))
        end = _end(num)

    tok = toks.peek()
    if tok is not None and tok.type == "VAR" and (end is None or _adjacent(tok, end)):
        toks.advance()
        end = _end(tok)
        if coefficient is None:
            coefficient = 1.0
        tok = toks.peek()
        if _adjacent(tok, end) and tok.type == "CARET":
            toks.advance()
            end = _end(tok)
            num = toks.peek()
            if not (_adjacent(num, end) and num.type == "NUM"):
                fail("'^' must be followed by a non-negative integer exponent")
            digits = _INTEGER_PREFIX.match(num.value).group()
            degree = int(digits)
            if degree > MAX_DEGREE:
                fail("exponent {} is out of range (at most {})".format(digits, MAX_DEGREE))
            end += len(digits)
        elif _adjacent(tok, end):
            fail("unexpected {!r} after 'x'".format(tok.value))
        else:
            degree = 1
    elif coefficient is None:
        fail("input could not form a valid term")
    elif _adjacent(tok, end):
        fail("unexpected {!r} after coefficient".format(tok.value))
    else:
        degree = 0

    return make_term(sign * coefficient, degree), end

def parse_polynomial(line):
    """Read a whole polynomial from one line of text.

    Terms may repeat a degree ("2x - 6x"); the result is normalized.  Returns
    None if the line is the zero polynomial.

    Raises InputError if any term in the line is malformed.
    """
    line = line.rstrip("\r\n")
    with task("parsing polynomial", text=repr(line)):
        read = []
        cursor = 0
        while cursor < len(line):
            term, cursor = parse_term(line, cursor)
            read.append(term)
            while cursor < len(line) and line[cursor] == " ":
                cursor += 1
        event("read {} terms".format(len(read)))

        chain = chains.strip_null_terms(chains.Chain(read))
        if not chain:
            event("zero polynomial")
            return None

        chain = chains.reduce(chain)
        assert chain.is_normalized()
        if not chain:
            event("zero polynomial after reduction")
            return None
        event("reduced to {}".format(chain))
        return chain
