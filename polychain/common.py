"""Utility functions and classes not found in the standard libraries.

Important functions and classes:
 - @typechecked: decorator to perform runtime typechecking
 - ADT: top-level class for immutable value types
 - declare_case: create a new subclass of an ADT

File helpers:
 - AtomicWriteableFile: a writeable handle that only lands on close
 - open_maybe_stdin / open_maybe_stdout: treat "-" as the standard streams

Extra collection types:
 - OrderedSet: complements Python's OrderedDict
 - FrozenDict: a hashable immutable dictionary
"""

# builtins
from contextlib import contextmanager
from functools import total_ordering, wraps
import sys
import os
import inspect
import tempfile
import shutil

# 3rd party
from ordered_set import OrderedSet
from dictionaries import FrozenDict as _FrozenDict

def check_type(value, ty, value_name="value"):
    """
    Verify that the given value has the given type.
        value      - the value to check
        ty         - the type to check for, or None to do no checking
                     (for example, if types come from Python type annotations, and
                     the Python formal variable does not have a type annotation)
        value_name - the variable or expression that evaluates to `value`;
                     printed in diagnostic messages

    The type ty can be:
        str, int, float, or a class - value must have this type
        (t1, t2, ...)               - value must be a tuple of exactly these types
        [ty]                        - value must be a list of ty
        {k:v}                       - value must be a dict with keys of type k and values of type v
    """

    if ty is None:
        pass
    elif type(ty) is tuple:
        assert isinstance(value, tuple), "{} has type {}, not {}".format(value_name, type(value).__name__, "tuple")
        assert len(value) == len(ty), "{} has {} entries, not {}".format(value_name, len(value), len(ty))
        for v, t, i in zip(value, ty, range(len(value))):
            check_type(v, t, "{}[{}]".format(value_name, i))
    elif type(ty) is list:
        assert isinstance(value, list), "{} has type {}, not {}".format(value_name, type(value).__name__, "list")
        for i in range(len(value)):
            check_type(value[i], ty[0], "{}[{}]".format(value_name, i))
    elif type(ty) is dict:
        assert isinstance(value, dict), "{} has type {}, not {}".format(value_name, type(value).__name__, "dict")
        ((kt, vt),) = ty.items()
        for k, v in value.items():
            check_type(k, kt, value_name)
            check_type(v, vt, "{}[{}]".format(value_name, k))
    elif ty is float:
        # ints are acceptable wherever a float is expected
        assert isinstance(value, (int, float)) and not isinstance(value, bool), "{} has type {}, not float".format(value_name, type(value).__name__)
    else:
        assert isinstance(value, ty), "{} has type {}, not {}".format(value_name, type(value).__name__, ty.__name__)

def typechecked(f):
    """
    Use the @typechecked decorator on a function to perform run-time typechecking.
    The docstring for `check_type` describes how type annotations should look.
    """
    argspec = inspect.getfullargspec(f)
    annotations = f.__annotations__
    @wraps(f)
    def g(*args, **kwargs):
        for argname, argval in zip(argspec.args, args):
            check_type(argval, annotations.get(argname), argname)
        for argname, argval in kwargs.items():
            check_type(argval, annotations.get(argname), argname)
        ret = f(*args, **kwargs)
        check_type(ret, annotations.get("return"), "return")
        return ret
    return g

@total_ordering
class ADT(object):
    """An algebraic data type (ADT).

    This class is not abstract, but it is not useful on its own; it is a parent
    for value types such as polynomial terms.

    ADTs are comparable (==, <, etc.), hashable (assuming they do not have
    lists or dictionaries as children), and pickle-able.
    """

    __slots__ = ()

    def children(self):
        return ()
    def __str__(self):
        return repr(self)
    def __repr__(self):
        return "{}({})".format(type(self).__name__, ", ".join(repr(child) for child in self.children()))
    def __hash__(self):
        return hash(self.children())
    def __getstate__(self):
        return { a : getattr(self, a) for a in self.__slots__ }
    def __setstate__(self, d):
        for k, v in d.items():
            object.__setattr__(self, k, v)
    def __setattr__(self, name, value):
        raise AttributeError("{} is immutable".format(type(self).__name__))
    def __eq__(self, other):
        if self is other: return True
        return type(self) is type(other) and self.children() == other.children()
    def __ne__(self, other):
        return not self.__eq__(other)
    def __lt__(self, other):
        if self is other: return False
        return (self.children() < other.children()) if (type(self) is type(other)) else (type(self).__name__ < type(other).__name__)

def declare_case(supertype, name, attrs=()):
    """Create a new case for an ADT type.

    Usage:
        CaseName = declare_case(SuperType, "CaseName", ["member1", ...])

    Creates a new class (CaseName) that is a subclass of SuperType and has all
    the given members.  Instances are immutable once constructed.  The new
    class claims SuperType's module, so CaseName must be bound at the top
    level of that module for pickling to find it.
    """
    if not isinstance(attrs, tuple):
        attrs = tuple(attrs)
    def __init__(self, *args):
        assert len(args) == len(attrs), "{} expects {} args, was given {}".format(name, len(attrs), len(args))
        supertype.__init__(self)
        for attr, val in zip(attrs, args):
            object.__setattr__(self, attr, val)
    def children(self):
        return tuple(getattr(self, a) for a in attrs)
    t = type(name, (supertype,), {
        "__module__": supertype.__module__,
        "__init__": __init__,
        "__slots__": attrs,
        "children": children })
    return t

@total_ordering
class FrozenDict(_FrozenDict):
    """
    Immutable dictionary that is hashable (suitable for use in sets/maps)
    and orderable (supports <, >, etc).
    """

    def __lt__(self, other):
        return tuple(sorted(self.items())) < tuple(sorted(other.items()))

    def __repr__(self):
        return "FrozenDict({!r})".format(list(self.items()))

@contextmanager
def AtomicWriteableFile(dst, mode="w"):
    """A writeable file handle that does not overwrite until it is closed.

    Usage:

        with AtomicWriteableFile(path) as f:
            ... f.write(...) ...

    This protects against errors that might happen while writing the file. If
    this object is closed due to an exception, it does not write any output to
    the destination path.
    """
    tmp_fd, tmp_path = tempfile.mkstemp(text=True)
    try:
        with os.fdopen(tmp_fd, mode) as f:
            yield f
            f.flush()
            os.fsync(tmp_fd)
    except BaseException:
        os.unlink(tmp_path)
        raise
    shutil.move(src=tmp_path, dst=dst)

def open_maybe_stdin(f : str, mode="r"):
    """Open file f, or open standard input if f is "-".

    In any case, the caller is responsible for closing the returned handle.
    The safest usage of this function is

        with open_maybe_stdin(path) as f:
            ...
    """
    if f == "-":
        return os.fdopen(os.dup(sys.stdin.fileno()), mode)
    return open(f, mode)

def open_maybe_stdout(f : str, mode="w"):
    """Open file f, or open standard output if f is "-".

    If this function would open a regular file for writing, it returns an
    AtomicWriteableFile for safety.

    In any case, the caller is responsible for closing the returned handle.
    The safest usage of this function is

        with open_maybe_stdout(path) as f:
            ...
    """
    if f == "-":
        return os.fdopen(os.dup(sys.stdout.fileno()), mode)
    return AtomicWriteableFile(f, mode)
