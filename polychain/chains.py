"""Polynomials of one variable, represented as chains of terms.

A Chain is an immutable, ordered tuple of `Term`s.  The order is the order in
which the terms were parsed or built; it carries no meaning beyond that.  A
chain is *normalized* when it holds at most one term per degree and no term
whose coefficient is null (see `terms.is_null`).  The empty chain is the zero
polynomial.

Every operation here returns a fresh chain.  Sum, product and reduction work
on dense coefficient lists indexed by degree; those lists never leave the
function that builds them.

Important functions:
 - parse:        see `polychain.parse.parse_polynomial`
 - sum, product, power, derivative: arithmetic, results normalized
 - evaluate:     Horner evaluation at a point
 - reduce:       normalize an arbitrary chain
 - render:       the text form read back by the parser and by file storage
"""

import math

from polychain import terms
from polychain.common import typechecked, OrderedSet, FrozenDict
from polychain.errors import MathDomainError, IllegalOperation
from polychain.terms import Term

class Chain(object):
    __slots__ = ("terms", "degree")

    def __init__(self, terms=()):
        terms = tuple(terms)
        for t in terms:
            assert isinstance(t, Term), "{!r} is not a Term".format(t)
        self.terms = terms
        self.degree = max((t.degree for t in terms), default=0)

    def __hash__(self):
        return hash(self.terms)

    def __eq__(self, other):
        return isinstance(other, Chain) and self.terms == other.terms

    def __ne__(self, other):
        return not self.__eq__(other)

    def __len__(self):
        return len(self.terms)

    def __iter__(self):
        return iter(self.terms)

    def __bool__(self):
        return bool(self.terms)

    def __str__(self):
        return "(" + ", ".join(str(t) for t in self.terms) + ")"

    def __repr__(self):
        return "Chain({!r})".format(self.terms)

    def __add__(self, other):
        return sum(self, other)

    def __sub__(self, other):
        return sum(self, negate(other))

    def __neg__(self):
        return negate(self)

    def __mul__(self, other):
        return product(self, other)

    def __pow__(self, n):
        return power(self, n)

    def __call__(self, x):
        return evaluate(self, x)

    def get_coefficient(self, degree):
        """The total coefficient of all terms of the given degree."""
        c = 0.0
        for t in self.terms:
            if t.degree == degree:
                c += t.coefficient
        return c

    def degrees(self):
        """The distinct degrees present, in chain order."""
        return OrderedSet(t.degree for t in self.terms)

    def as_mapping(self):
        """A hashable degree -> coefficient map, independent of term order."""
        return FrozenDict([(d, self.get_coefficient(d)) for d in self.degrees()])

    def is_normalized(self):
        return (len(self.degrees()) == len(self.terms)
            and not any(terms.is_null(t.coefficient) for t in self.terms))

Chain.ZERO = Chain()

def from_coefficients(coefficients):
    """Build a chain with one term per entry, where entry i has degree i.

    Zero entries are kept, so the result is not necessarily normalized:
    from_coefficients([2, -4, 0, 3]) is 2 - 4x + 0x^2 + 3x^3.
    """
    return Chain(Term(float(c), i) for i, c in enumerate(coefficients))

def _dense(chain, length):
    coefficients = [0.0] * length
    for t in chain.terms:
        coefficients[t.degree] += t.coefficient
    return coefficients

@typechecked
def strip_null_terms(chain : Chain) -> Chain:
    """Drop every term whose coefficient is null, preserving order."""
    return Chain(t for t in chain.terms if not terms.is_null(t.coefficient))

@typechecked
def reduce(chain : Chain) -> Chain:
    """Collapse terms of equal degree and drop null terms.

    The result lists its terms by ascending degree.
    """
    if not chain.terms:
        return Chain.ZERO
    return strip_null_terms(from_coefficients(_dense(chain, chain.degree + 1)))

normalize = reduce

@typechecked
def copy(chain : Chain) -> Chain:
    # Terms are immutable, so sharing them does not alias any mutable state.
    return Chain(chain.terms)

@typechecked
def negate(chain : Chain) -> Chain:
    return Chain(terms.negate(t) for t in chain.terms)

@typechecked
def evaluate(chain : Chain, x) -> float:
    """Evaluate the polynomial at x using Horner's method.

    The zero polynomial evaluates to 0.  Raises MathDomainError if the value
    overflows.
    """
    if not chain.terms:
        return 0.0
    coefficients = _dense(chain, chain.degree + 1)
    result = coefficients[-1]
    try:
        for c in reversed(coefficients[:-1]):
            result = result * x + c
    except OverflowError as e:
        raise MathDomainError("{} overflows at x={}".format(chain, x)) from e
    if math.isinf(result) or math.isnan(result):
        raise MathDomainError("{} overflows at x={}".format(chain, x))
    return float(result)

@typechecked
def sum(a : Chain, b : Chain) -> Chain:
    n = max(a.degree, b.degree) + 1
    coefficients = [x + y for x, y in zip(_dense(a, n), _dense(b, n))]
    res = strip_null_terms(from_coefficients(coefficients))
    if any(math.isinf(c) for c in coefficients):
        raise MathDomainError("{} + {} overflows".format(a, b), result=res)
    return res

@typechecked
def product(a : Chain, b : Chain) -> Chain:
    """The product of two polynomials, by dense convolution of their terms.

    If a coefficient overflows, MathDomainError is raised once the whole
    product has been accumulated; its `result` is the overflowed chain.
    """
    coefficients = [0.0] * (a.degree + b.degree + 1)
    overflow = None
    for ta in a.terms:
        for tb in b.terms:
            try:
                p = terms.product(ta, tb)
            except MathDomainError as e:
                overflow = overflow or e
                p = e.result
            coefficients[p.degree] += p.coefficient
    res = strip_null_terms(from_coefficients(coefficients))
    if overflow is not None:
        raise MathDomainError(str(overflow), result=res) from overflow
    return res

@typechecked
def power(chain : Chain, n : int) -> Chain:
    """Raise the polynomial to the n-th power, for n >= 1."""
    if n < 1:
        raise IllegalOperation("power must be at least 1, not {}".format(n))
    res = copy(chain)
    for i in range(n - 1):
        res = product(res, chain)
    return res

@typechecked
def derivative(chain : Chain) -> Chain:
    if not chain.terms or chain.degree == 0:
        return Chain((terms.ZERO,))
    return strip_null_terms(Chain(terms.derivative(t) for t in chain.terms))

@typechecked
def render(chain : Chain) -> str:
    """Text form of a chain, one "%.2fx^%d " group per term in chain order.

    Terms after the first get a "+ " in front unless they are negative (the
    minus sign is part of the number).  The output is accepted by
    `polychain.parse.parse_polynomial`.
    """
    s = ""
    for i, t in enumerate(chain.terms):
        if i > 0 and t.coefficient >= 0:
            s += "+ "
        s += "{:.2f}x^{} ".format(t.coefficient, t.degree)
    return s
