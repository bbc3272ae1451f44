"""Indented, timed log messages for polychain.

Important functions:
 - task: a context manager to wrap a self-contained step (parsing a line,
   reading a file); nested tasks indent their messages
 - event: print a log message (indented based on active tasks)

Nothing is printed unless the `verbose` option is set.  Messages go to
standard error so they never mix with rendered polynomials on stdout.
"""

from contextlib import contextmanager
import datetime
import sys

from polychain.opts import Option

verbose = Option("verbose", bool, False, description="Log parsing and file steps to stderr")

# (name, start time) for every task that has begun but not finished
_task_stack = []

def log(string):
    if verbose.value:
        print(string, file=sys.stderr)

def _indent(depth):
    return "  " * depth

def _describe(name, kwargs):
    if not kwargs:
        return name
    return "{} [{}]".format(name, ", ".join("{}={}".format(k, v) for k, v in kwargs.items()))

@contextmanager
def task(name, **kwargs):
    _task_stack.append((name, datetime.datetime.now()))
    log("{}{}...".format(_indent(len(_task_stack) - 1), _describe(name, kwargs)))
    try:
        yield
    finally:
        name, start = _task_stack.pop()
        duration = (datetime.datetime.now() - start).total_seconds()
        log("{}Finished {} [duration={:.3}s]".format(_indent(len(_task_stack)), name, duration))

def event(name):
    if not verbose.value:
        return
    log("{}{}".format(_indent(len(_task_stack)), name))
