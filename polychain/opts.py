"""Module-level settings that can be flipped from the command line.

A module that has a tunable behavior (how verbose logging is, whether a bad
line in a polynomial file is fatal, ...) declares an Option next to the code
that reads it.  The command line front end calls `setup` to register every
declared Option with argparse and `read` to copy the parsed values back.

Options are process-wide.  Tests that change one should take a `snapshot`
first and `restore` it afterwards.
"""

# All Option objects that have ever been created, by name.
_OPTS = {}

# Default values for options.  The `restore` procedure needs this to override
# values for options in modules that have not been imported yet.
_DEFAULT_VALUE_OVERRIDES = {}

class Option(object):
    def __init__(self, name, type, default, description="", metavar=None):
        assert type in (bool, str, int)
        assert name not in _OPTS, "duplicate option {!r}".format(name)
        self.name = name
        self.description = description
        self.type = type
        self.default = default
        self.value = _DEFAULT_VALUE_OVERRIDES.get(name, default)
        self.metavar = metavar
        _OPTS[name] = self

    def __bool__(self):
        raise Exception(
            "An attempt was made to convert an Option to a boolean. " +
            "If you intended to read the value of this Option, use `_.value`. " +
            "If you intended to check whether this object is None, use `_ is None`.")

    def __repr__(self):
        return "Option({!r}, value={!r})".format(self.name, self.value)

def _argname(o):
    if o.type is bool:
        return ("no-" + o.name) if o.default else o.name
    return o.name

def setup(parser):
    for o in _OPTS.values():
        n = _argname(o)
        if o.type is bool:
            parser.add_argument("--" + n, action="store_true", default=False, help=o.description)
        elif o.type in (str, int):
            parser.add_argument("--" + n, metavar=o.metavar, default=o.default, help=(o.description + " (default={})".format(repr(o.default))) if o.description else "default={}".format(repr(o.default)))

def read(args):
    for o in _OPTS.values():
        o.value = getattr(args, _argname(o).replace("-", "_"))
        if o.type is bool and o.default:
            o.value = not o.value
        if o.type is int:
            o.value = int(o.value)

def snapshot():
    """Produce a snapshot of current option values."""
    return { name : o.value for name, o in _OPTS.items() }

def restore(snap):
    """Restore a snapshot of option values."""
    global _DEFAULT_VALUE_OVERRIDES

    # Set the values for options that have already been imported.
    for name, o in _OPTS.items():
        o.value = snap.get(name, o.value)

    # Set the overrides for options that have not yet been imported.
    _DEFAULT_VALUE_OVERRIDES = dict(snap)
