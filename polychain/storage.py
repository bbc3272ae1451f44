"""Reading and writing lists of polynomials as text.

A polynomial file holds one polynomial per line, in the form produced by
`chains.render`.  Any line that `parse_polynomial` accepts is valid, so files
can also be written by hand.

Reading a file is tolerant by default: a line that does not parse is logged
and left out, as is a line holding the zero polynomial.  Pass
skip_bad_lines=False (or run with --strict-files) to make a bad line an
error instead.  Parsing a single string with `parse_polynomial` is always
strict.
"""

from polychain import chains
from polychain.common import open_maybe_stdin, open_maybe_stdout
from polychain.errors import InputError, OutputError
from polychain.logging import task, event
from polychain.opts import Option
from polychain.parse import parse_polynomial

strict_files = Option("strict-files", bool, False,
    description="Fail on a malformed line in a polynomial file instead of skipping it")

# Lines longer than this are refused by read_polynomial.
MAX_LINE_LENGTH = 1000

def _decode(raw):
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InputError("line is not valid UTF-8", position=e.start) from e

def read_polynomials(path, skip_bad_lines=None):
    """Read the polynomials in a file, one per line ("-" for stdin).

    Returns a list of chains, in file order, without the lines that were left
    out.  Raises InputError if the file cannot be opened, or if a line is
    malformed and skip_bad_lines is false.
    """
    if skip_bad_lines is None:
        skip_bad_lines = not strict_files.value
    try:
        f = open_maybe_stdin(path, "rb")
    except OSError as e:
        raise InputError("cannot read {}: {}".format(path, e.strerror or e)) from e
    res = []
    with task("reading polynomials", path=path), f:
        for lineno, raw in enumerate(f, start=1):
            try:
                chain = parse_polynomial(_decode(raw))
            except InputError as e:
                if not skip_bad_lines:
                    e.line = lineno
                    raise
                event("skipping line {}: {}".format(lineno, e))
                continue
            if chain is None:
                event("skipping line {}: zero polynomial".format(lineno))
                continue
            res.append(chain)
        event("read {} polynomials".format(len(res)))
    return res

def write_polynomials(polynomials, path):
    """Write polynomials to a file, one rendered chain per line.

    None entries (zero polynomials) are skipped.  The file is only replaced
    once everything has been written; "-" writes to stdout.  Raises
    OutputError if the file cannot be written.
    """
    with task("writing polynomials", path=path):
        try:
            with open_maybe_stdout(path) as out:
                for chain in polynomials:
                    if chain is None:
                        continue
                    out.write(chains.render(chain))
                    out.write("\n")
        except OSError as e:
            raise OutputError("cannot write {}: {}".format(path, e.strerror or e)) from e

def read_polynomial(stream, prompt=None, err=None):
    """Read one polynomial from an interactive stream.

    Empty lines and lines over MAX_LINE_LENGTH characters are refused with a
    message on `err` and the user is asked again.  Returns the parsed chain,
    or None for the zero polynomial.  Raises InputError at end of stream or
    if the line is malformed.
    """
    while True:
        if prompt is not None and err is not None:
            err.write(prompt)
            err.flush()
        line = stream.readline()
        if not line:
            raise InputError("no polynomial given (end of input)")
        line = line.rstrip("\r\n")
        if not line.strip():
            if err is not None:
                err.write("Error: please input something!\n")
            continue
        if len(line) > MAX_LINE_LENGTH:
            if err is not None:
                err.write("Error: your input is too long! Please shorten it up.\n")
            continue
        return parse_polynomial(line)
