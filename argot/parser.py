r"""
Argot argument parser.

Overview
- Registry
  • add_flag(*aliases): presence-only parameters ("-v", "--verbose").
  • add_opt(short, long, default): value-bearing options ("-s 4", "-s4", "--size=4").
  • add_setting(name, default): dd-style settings ("if=/path/file").
  All aliases of one parameter share its value cell (and found cell); each
  alias keeps its own occurrence counter.

- Parsing
  • parse(args): one left-to-right pass over the full argument vector
    (program name first, always skipped). Tokens are classified as:
      --             stop marker, everything after it is positional
      --name[=value] long flag/option
      -abc           short cluster (flags; an option ends the cluster)
      name=value     setting
      anything else  positional
  • Unknown names never stop the pass; they are recorded and reported
    together by found_invalid().

- Accessors
  • count(key), found(key), flag(key), opt(key), get_opt(key), get_setting(key)
  • args (positional tokens), invalid (unknown keys), params (registry view)
  Keys are Param instances or strings ("s" -> Short("s"), "size" -> Long("size")).

Quick example:
    >>> parser = (
    ...     ArgParser(4)
    ...     .add_flag("h", "help")
    ...     .add_opt("s", "size", "512")
    ...     .add_setting("if")
    ... )
    >>> parser.parse(["dd", "-s", "1024", "if=/dev/zero", "out.img"])
    >>> parser.get_opt("size"), parser.get_setting("if"), parser.args
    ('1024', '/dev/zero', ['out.img'])
"""
import shlex
import sys
from collections import deque
from collections.abc import Iterable
from types import MappingProxyType

from .cells import *
from .faults import *
from .params import *
from .utils import *


def _aliases(aliases):
    # add_flag("a", "all") and add_flag(["a", "all"]) are both accepted
    if len(aliases) == 1 and not isinstance(aliases[0], str) and isinstance(aliases[0], Iterable):
        aliases = tuple(aliases[0])
    for alias in aliases:
        if not isinstance(alias, str):
            raise TypeError("add_flag() aliases must be strings")
    return aliases


def _summary(invalid):
    """
    Render the invalid-parameter summary.

    One key:  "Invalid parameter '-z'\n"
    Many:     "Invalid parameters '-z' and '--bogus' and ... '--last'\n"
    """
    head = "Invalid parameter" if len(invalid) == 1 else "Invalid parameters"
    return head + " " + " and ".join("'%s'" % param for param in invalid) + "\n"


class ArgParser:
    """
    Registry of flags, options and settings plus the single-pass parser over them.

    Lifecycle
    - build: add_flag/add_opt/add_setting (chainable, each returns the parser).
    - parse: parse(args) exactly once; the registry is frozen from then on.
    - query: count/found/flag/opt/get_opt/get_setting, args, invalid, found_invalid().
    """
    args = mirror("args")
    invalid = mirror("invalid")

    def __init__(self, capacity=0, /):
        if not isinstance(capacity, int) or isinstance(capacity, bool):
            raise TypeError("ArgParser() capacity must be an integer")
        elif capacity < 0:
            raise ValueError("ArgParser() capacity cannot be negative")
        self._params = {}
        self._invalid = []
        self._args = []
        # scratch cells handed out by flag()/opt() for keys of the wrong kind
        self._garbage = (Cell(False), Cell(""))
        self._parsed = False

    @property
    def params(self):
        """Read-only view of the registry (Param -> Flag | Opt | Setting)."""
        return MappingProxyType(self._params)

    @property
    def parsed(self):
        """True once parse() has run; registration is closed from then on."""
        return self._parsed

    def __repr__(self):
        return "arg-parser(params=%r, args=%r, invalid=%r)" % (
            list(self._params), self._args, self._invalid
        )

    def __rich_repr__(self):
        yield "params", dict(self._params)
        yield "args", list(self._args)
        yield "invalid", list(self._invalid)

    # --- registry -----------------------------------------------------------

    def _insert(self, param, value):
        if self._parsed:
            raise RuntimeError("cannot register parameters after parsing")
        if param in self._params:
            trigger(DuplicateParameterWarning(
                "parameter %r registered more than once, the last registration wins" % str(param),
                title="duplicated parameter",
                code=FaultCode.DUPLICATED_PARAMETER,
                hint="register each short and long name only once",
                params=(param,),
            ))
        self._params[param] = value

    def add_flag(self, *aliases):
        """
        Register a flag under one or more aliases.

        A one-character alias becomes a short key ("-v"), a longer one a long
        key ("--verbose"); empty aliases are ignored. All aliases share one
        boolean cell that starts False.
        """
        value = Cell(False)
        for alias in _aliases(aliases):
            if len(alias) == 1:
                self._insert(Short(alias), Flag(Rhs(value)))
            elif alias:
                self._insert(Long(alias), Flag(Rhs(value)))
        return self

    def _add_parametric(self, kind, short, long, default):
        if not isinstance(default, str | Unset):
            raise TypeError("%s default must be a string" % kind.__typename__)
        value = Cell(coalesce(default, ""))
        # a supplied default (even "") counts as found so get_opt()/get_setting() can see it
        found = Cell(default is not Unset)
        if short:
            self._insert(Short(short[0]), kind(Rhs(value), found))
        if long:
            self._insert(Long(long), kind(Rhs(value), found))
        return self

    def add_opt(self, short="", long="", default=Unset):
        """
        Register an option under a short name, a long name, or both.

        Only the first character of `short` is used. The value starts as
        `default` (or "" without one).
        """
        if not isinstance(short, str) or not isinstance(long, str):
            raise TypeError("add_opt() names must be strings")
        return self._add_parametric(Opt, short, long, default)

    def add_setting(self, name, default=Unset):
        """Register a dd-style 'name=value' setting (long key only)."""
        if not isinstance(name, str):
            raise TypeError("add_setting() name must be a string")
        return self._add_parametric(Setting, "", name, default)

    # --- parsing ------------------------------------------------------------

    def _lookup(self, param):
        return self._params.get(param)

    def _parse_long(self, arg):
        # arg is the token without its leading "--"
        name, equals, value = arg.partition("=")
        argument = self._lookup(Long(name))
        if equals:
            if isinstance(argument, Opt):
                argument.assign(value)
            else:
                self._invalid.append(Long(name))
        elif isinstance(argument, Flag):
            argument.enable()
        elif isinstance(argument, Opt):
            argument.mention()
        else:
            self._invalid.append(Long(name))

    def _parse_short(self, arg, tokens):
        # arg is the cluster without its leading "-"; tokens is the shared stream
        for index, char in enumerate(arg):
            argument = self._lookup(Short(char))
            if isinstance(argument, Flag):
                argument.enable()
            elif isinstance(argument, Opt):
                if rest := arg[index + 1:]:
                    argument.store(rest)
                else:
                    argument.store(tokens.popleft() if tokens else "")
                break
            else:
                self._invalid.append(Short(char))

    def _parse_setting(self, arg):
        name, _, value = arg.partition("=")
        argument = self._lookup(Long(name))
        if isinstance(argument, Setting):
            argument.assign(value)
        else:
            self._invalid.append(Long(name))

    def parse(self, args=Unset, /):
        """
        Walk the argument vector once, updating the registered parameters.

        Parameters
        - args: Iterable[str] including the program name at index 0;
          Unset reads sys.argv.

        Behavior
        - unknown names are recorded (see found_invalid()); parsing never stops
          early except at a lone "--".
        - a short option without an attached value takes the next token from
          the same stream (or "" when the stream is exhausted).
        """
        if self._parsed:
            raise RuntimeError("parse() can only be called once per parser")
        if args is Unset:
            args = sys.argv
        elif isinstance(args, str) or not isinstance(args, Iterable):
            raise TypeError("parse() argument must be an iterable of strings")

        tokens = deque(args)
        for token in tokens:
            if not isinstance(token, str):
                raise TypeError("parse() argument must be an iterable of strings")
        self._parsed = True

        if tokens:
            tokens.popleft()  # program name

        while tokens:
            arg = tokens.popleft()

            if arg == "--":
                # all remaining tokens are positional, verbatim
                self._args.extend(tokens)
                tokens.clear()
            elif arg.startswith("--"):
                self._parse_long(arg[2:])
            elif arg.startswith("-") and arg != "-":
                self._parse_short(arg[1:], tokens)
            elif "=" in arg:
                self._parse_setting(arg)
            else:
                self._args.append(arg)

    # --- accessors ----------------------------------------------------------

    def count(self, key, /):
        """Occurrences of this exact spelling; 0 for unknown keys and settings."""
        argument = self._lookup(resolve(key))
        if isinstance(argument, Flag | Opt):
            return argument.occurrences
        return 0

    def found(self, key, /):
        """True when a flag is set, or an option/setting was supplied or has a default."""
        argument = self._lookup(resolve(key))
        if isinstance(argument, Flag | Parametric):
            return argument.is_found()
        return False

    def flag(self, key, /):
        """
        Handle on a flag's shared boolean cell.

        Keys that are unknown or not flags get a private scratch cell that no
        parameter reads.
        """
        argument = self._lookup(resolve(key))
        if isinstance(argument, Flag):
            return argument.cell
        return self._garbage[0]

    def opt(self, key, /):
        """Handle on an option's shared string cell (scratch cell for other keys)."""
        argument = self._lookup(resolve(key))
        if isinstance(argument, Opt):
            return argument.cell
        return self._garbage[1]

    def get_opt(self, key, /):
        """The option's value when found (a default counts), else None."""
        argument = self._lookup(resolve(key))
        if isinstance(argument, Opt) and argument.is_found():
            return argument.cell.value
        return None

    def get_setting(self, key, /):
        """The setting's value when found (a default counts), else None."""
        argument = self._lookup(resolve(key))
        if isinstance(argument, Setting) and argument.is_found():
            return argument.cell.value
        return None

    # --- diagnostics --------------------------------------------------------

    def found_invalid(self):
        """
        Report the invalid parameters seen during parsing.

        Returns None when there were none; otherwise raises
        InvalidParameterError whose message is the summary line, e.g.
        "Invalid parameters '-z' and '--bogus'\\n".
        """
        if not self._invalid:
            return
        raise InvalidParameterError(
            _summary(self._invalid),
            title="invalid parameter" if len(self._invalid) == 1 else "invalid parameters",
            code=FaultCode.INVALID_PARAMETER,
            hint="check the spelling; short names take one dash, long names two, settings none",
            params=tuple(self._invalid),
        )

    # --- invocation ---------------------------------------------------------

    def __invoke__(self, prompt=Unset, /, **options):
        """
        Parse a prompt and surface invalid parameters.

        Parameters
        - prompt:
          • Unset: sys.argv.
          • str: shell-like command line (program name first), split via shlex.split.
          • Iterable[str]: the argument vector as-is.
        - options: shell/fancy/colorful and any other rendering options.
        """
        if prompt is Unset:
            tokens = list(sys.argv)
        elif isinstance(prompt, str):
            tokens = shlex.split(prompt)
        elif isinstance(prompt, Iterable):
            tokens = list(prompt)
        else:
            raise TypeError("__invoke__() argument must be a string or an iterable of strings")

        self.parse(tokens)

        try:
            self.found_invalid()
        except InvalidParameterError as fault:
            if tokens and "prog" not in options:
                options["prog"] = tokens[0]
            trigger(fault, **options)


def invoke(parser, prompt=Unset, /, *, shell=True, fancy=False, colorful=True):
    """
    Convenience runner: parse a prompt with `parser` and report problems.

    In shell mode invalid parameters are printed on the stderr console and the
    process exits with status 1; otherwise InvalidParameterError is raised.
    Returns the parser so results can be queried in one expression.
    """
    if not hasattr(parser, "__invoke__") or not callable(parser.__invoke__):
        target = "argument" if prompt is Unset else "first argument"
        raise TypeError(f"invoke() {target} must implement __invoke__ method")
    parser.__invoke__(prompt, shell=shell, fancy=fancy, colorful=colorful)
    return parser


__all__ = (
    "ArgParser",
    "invoke",
)
