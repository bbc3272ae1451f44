"""Monomial terms: coefficient * x^degree.

A Term is an immutable value.  The functions in this module are the term-level
arithmetic used by the chain engine in `polychain.chains`; they never modify
their arguments.
"""

import math

from polychain.common import ADT, declare_case
from polychain.errors import MathDomainError, IllegalOperation

# Coefficients strictly inside (-NULL_TOLERANCE, NULL_TOLERANCE) count as zero.
NULL_TOLERANCE = 0.0001

# Largest exponent the parser accepts.  Dense arithmetic allocates one slot
# per degree, so larger exponents are refused as input.
MAX_DEGREE = 100000

class Monomial(ADT):
    __slots__ = ()

    def __str__(self):
        return "({:.2f}, {})".format(self.coefficient, self.degree)

Term = declare_case(Monomial, "Term", ["coefficient", "degree"])

ZERO = Term(0.0, 0)

def is_null(coefficient):
    return -NULL_TOLERANCE < coefficient < NULL_TOLERANCE

def make_term(coefficient, degree):
    """Build a Term, checking that the degree is a non-negative integer."""
    if isinstance(degree, bool) or not isinstance(degree, int):
        raise IllegalOperation("degree must be an integer, not {!r}".format(degree))
    if degree < 0:
        raise IllegalOperation("degree must be non-negative, not {}".format(degree))
    return Term(float(coefficient), degree)

def evaluate(term, x):
    """Compute coefficient * x^degree."""
    try:
        result = term.coefficient * (float(x) ** term.degree)
    except OverflowError as e:
        raise MathDomainError("{} overflows at x={}".format(term, x)) from e
    if math.isinf(result) or math.isnan(result):
        raise MathDomainError("{} overflows at x={}".format(term, x))
    return result

def derivative(term):
    degree = term.degree - 1
    if degree < 0:
        return ZERO
    return Term(term.coefficient * term.degree, degree)

def product(a, b):
    """The product of two terms.

    Raises MathDomainError if the coefficient overflows; the overflowed term
    is still available as the exception's `result`.
    """
    res = Term(a.coefficient * b.coefficient, a.degree + b.degree)
    if math.isinf(res.coefficient) and not (math.isinf(a.coefficient) or math.isinf(b.coefficient)):
        raise MathDomainError("{} * {} overflows".format(a, b), result=res)
    return res

def sum(a, b):
    """The sum of two terms of the same degree.

    Terms of different degrees cannot be summed into one term.  In that case
    IllegalOperation is raised with `result` set to the coefficient sum at
    a's degree.
    """
    res = Term(a.coefficient + b.coefficient, a.degree)
    if a.degree != b.degree:
        raise IllegalOperation("cannot sum terms of degrees {} and {}".format(a.degree, b.degree), result=res)
    if math.isinf(res.coefficient) and not (math.isinf(a.coefficient) or math.isinf(b.coefficient)):
        raise MathDomainError("{} + {} overflows".format(a, b), result=res)
    return res

def negate(term):
    return Term(-term.coefficient, term.degree)
