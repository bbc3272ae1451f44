#!/usr/bin/env python

"""
Main entry point for polychain. Run with --help for options.
"""

import sys
import argparse

from polychain import chains
from polychain import opts
from polychain import storage
from polychain.errors import PolynomialError
from polychain.parse import parse_polynomial

def _show(name, chain):
    print("{} = {}".format(name, chains.render(chain) if chain else "0"))

def run(argv=None):
    """Entry point for the polychain executable.

    This procedure reads sys.argv (or argv) and executes the requested
    operations.  Returns the process exit status.
    """

    parser = argparse.ArgumentParser(description='Single-variable polynomial calculator.')
    parser.add_argument("polynomials", metavar="POLY", nargs="*", help="Polynomials such as '7x^3 + x^2 -9x + 30'")
    parser.add_argument("-f", "--file", metavar="FILE", default=None, help="Read polynomials from a file, one per line; use '-' for stdin")
    parser.add_argument("-S", "--save", metavar="FILE", default=None, help="Save the results to a file, use '-' for stdout")

    ops = parser.add_argument_group("Operations")
    ops.add_argument("--distinct", action="store_true", help="Drop polynomials equal to an earlier one, ignoring term order")
    ops.add_argument("-e", "--eval", metavar="X", type=int, default=None, help="Evaluate each polynomial at X")
    ops.add_argument("-d", "--derive", action="store_true", help="Differentiate each polynomial")
    ops.add_argument("-p", "--power", metavar="N", type=int, default=None, help="Raise each polynomial to the N-th power")
    ops.add_argument("--sum", action="store_true", help="Add all the polynomials together")
    ops.add_argument("--product", action="store_true", help="Multiply all the polynomials together")

    internal_opts = parser.add_argument_group("Internal parameters")
    opts.setup(internal_opts)

    args = parser.parse_args(argv)
    opts.read(args)

    try:
        if args.file is not None:
            polys = storage.read_polynomials(args.file)
        elif args.polynomials:
            polys = [parse_polynomial(p) or chains.Chain.ZERO for p in args.polynomials]
        else:
            p = storage.read_polynomial(sys.stdin, prompt="Please input a polynomial: ", err=sys.stderr)
            polys = [p or chains.Chain.ZERO]

        results = list(polys)
        if args.distinct:
            results = _distinct(results)
        if args.sum:
            results = [_fold(chains.sum, results)]
        if args.product:
            results = [_fold(chains.product, results)]
        if args.power is not None:
            results = [chains.power(p, args.power) for p in results]
        if args.derive:
            results = [chains.derivative(p) for p in results]

        for i, p in enumerate(results):
            name = "P{}".format(i)
            _show(name, p)
            if args.eval is not None:
                print("{}({}) = {:f}".format(name, args.eval, chains.evaluate(p, args.eval)))

        if args.save is not None:
            storage.write_polynomials(results, args.save)
    except PolynomialError as e:
        print("Error: {}".format(e), file=sys.stderr)
        return 1

    return 0

def _distinct(polys):
    seen = set()
    res = []
    for p in polys:
        key = p.as_mapping()
        if key not in seen:
            seen.add(key)
            res.append(p)
    return res

def _fold(op, polys):
    if not polys:
        return chains.Chain.ZERO
    res = polys[0]
    for p in polys[1:]:
        res = op(res, p)
    return res

if __name__ == "__main__":
    sys.exit(run())
