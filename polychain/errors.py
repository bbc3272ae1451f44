"""Exceptions raised by polychain.

Arithmetic failures that still have a meaningful approximate answer
(overflow, summing terms of different degrees) carry that answer in the
`result` attribute, so callers that only want a warning can recover it.
"""

class PolynomialError(Exception):
    """Base class for every error raised by polychain."""
    pass

class MathDomainError(PolynomialError):
    """A floating-point operation overflowed or left its domain."""
    def __init__(self, message, result=None):
        super().__init__(message)
        self.result = result

class IllegalOperation(PolynomialError):
    """An operation was invoked outside of its contract."""
    def __init__(self, message, result=None):
        super().__init__(message)
        self.result = result

class InputError(PolynomialError):
    """Text could not be read as a term or polynomial.

    `position` is the offset in `text` where the failed read started; the
    caller's cursor should stay there.  `line` is set when the text came from
    a numbered line of a file.
    """
    def __init__(self, message, text=None, position=0, line=None):
        super().__init__(message)
        self.text = text
        self.position = position
        self.line = line

    def __str__(self):
        s = super().__str__()
        if self.line is not None:
            s = "on line {}: {}".format(self.line, s)
        if self.text is not None:
            s += " (in {!r} at column {})".format(self.text, self.position)
        return s

class OutputError(PolynomialError):
    """Polynomials could not be written out."""
    pass
